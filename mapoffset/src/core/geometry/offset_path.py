from __future__ import annotations

"""mapoffset.src.core.geometry.offset_path

Mitered parallel offset of a single path.

Every interior vertex of the output is the intersection of the two adjacent
segments translated sideways by *offset* (a *join*).  Open paths get a plain
perpendicular offset at both ends (the *caps*); closed rings are processed
cyclically and re-closed at the end.

The intersection is solved from the slope/intercept form of the two offset
lines, with a closed-form branch when one of the segments is vertical.
Numerically parallel neighbours have no stable intersection, so their join
is skipped and the output simply loses that vertex.
"""

import logging
import math
from collections.abc import Sequence
from typing import List, Optional

from ..errors import DegenerateInputError
from .path_primitives import (
    Coordinate,
    all_finite,
    has_zero_length_segment,
    is_closed,
)

__all__ = ["PARALLEL_EPSILON", "offset_path", "validate_path"]

logger = logging.getLogger(__name__)

# Slope difference at or below which two segments are treated as parallel.
PARALLEL_EPSILON = 1e-10


def validate_path(path: Sequence[Coordinate]) -> List[Coordinate]:
    """Return a fresh list copy of *path* or raise :class:`DegenerateInputError`.

    A usable path has at least two finite coordinates, no zero-length
    segment, and (for rings) at least three distinct vertices.
    """
    coords = [(float(p[0]), float(p[1])) for p in path]

    if len(coords) < 2:
        raise DegenerateInputError(f"Path needs at least 2 coordinates, got {len(coords)}.")
    if not all_finite(coords):
        raise DegenerateInputError("Path contains non-finite coordinates.")
    if has_zero_length_segment(coords):
        raise DegenerateInputError("Path contains a zero-length segment.")
    if is_closed(coords) and len(coords) < 4:
        raise DegenerateInputError("Closed ring needs at least 3 distinct vertices.")
    return coords


def _cap(p0: Coordinate, p1: Coordinate, offset: float) -> Coordinate:
    """Perpendicular offset of *p0* relative to the direction p0 -> p1."""
    seg_len = math.hypot(p1[0] - p0[0], p1[1] - p0[1])
    return (
        p0[0] + ((p1[1] - p0[1]) / seg_len) * offset,
        p0[1] - ((p1[0] - p0[0]) / seg_len) * offset,
    )


def _join(
        p0: Coordinate,
        p1: Coordinate,
        p2: Coordinate,
        offset: float,
        parallel_epsilon: float,
) -> Optional[Coordinate]:
    """Mitered offset vertex at *p1*, or ``None`` for parallel segments."""
    dx0, dy0 = p1[0] - p0[0], p1[1] - p0[1]
    dx1, dy1 = p2[0] - p1[0], p2[1] - p1[1]
    vertical0 = dx0 == 0
    vertical1 = dx1 == 0

    if vertical0 and vertical1:
        return None

    mi = math.inf if vertical0 else dy0 / dx0
    mi1 = math.inf if vertical1 else dy1 / dx1
    if not (vertical0 or vertical1) and abs(mi - mi1) <= parallel_epsilon:
        return None

    li = math.hypot(dx0, dy0)
    li1 = math.hypot(dx1, dy1)

    # (ri, si) and (ri1, si1) are the translated segment start points.
    ri = p0[0] + offset * dy0 / li
    si = p0[1] - offset * dx0 / li
    ri1 = p1[0] + offset * dy1 / li1
    si1 = p1[1] - offset * dx1 / li1

    if vertical0:
        x = p1[0] + offset * dy0 / abs(dy0)
        return x, mi1 * (x - ri1) + si1
    if vertical1:
        x = p2[0] + offset * dy1 / abs(dy1)
        return x, mi * (x - ri) + si

    x = (mi1 * ri1 - mi * ri + si - si1) / (mi1 - mi)
    y = (mi * mi1 * (ri1 - ri) + mi1 * si - mi * si1) / (mi1 - mi)
    return x, y


def offset_path(
        path: Sequence[Coordinate],
        offset: float,
        parallel_epsilon: float = PARALLEL_EPSILON,
) -> List[Coordinate]:
    """Return a new path offset sideways by *offset*.

    Args:
        path (Sequence[Coordinate]): Open polyline or closed ring (first ==
            last).  The sequence is **not** modified.
        offset (float): Signed distance in projected units.  Positive offsets
            go to the right-hand side when walking from the first to the last
            coordinate, negative ones to the left.
        parallel_epsilon (float, optional): Slope difference below which a
            join is skipped.  Defaults to :data:`PARALLEL_EPSILON`.

    Returns:
        List[Coordinate]: A new list with the same open/closed character as
        *path*.  It has one vertex per input vertex, minus one for every
        skipped parallel join.

    Raises:
        DegenerateInputError: If *path* fails :func:`validate_path`, if every
            join of a ring is parallel, or if the result is not finite.
    """
    coords = validate_path(path)
    out: List[Coordinate] = []
    closed = is_closed(coords)

    if closed:
        ring = coords[:-1]
        n = len(ring)
        triples = [(ring[i - 1], ring[i], ring[(i + 1) % n]) for i in range(n)]
    else:
        out.append(_cap(coords[0], coords[1], offset))
        triples = list(zip(coords, coords[1:], coords[2:]))

    skipped = 0
    for p0, p1, p2 in triples:
        vertex = _join(p0, p1, p2, offset, parallel_epsilon)
        if vertex is None:
            skipped += 1
            continue
        out.append(vertex)

    if skipped:
        logger.debug("Skipped %d parallel join(s) out of %d", skipped, len(triples))

    if closed:
        if not out:
            raise DegenerateInputError("All ring segments are parallel; nothing to join.")
        out.append(out[0])
    else:
        # Mirrored sign: the last segment is walked backwards.
        out.append(_cap(coords[-1], coords[-2], -offset))

    if not all_finite(out):
        raise DegenerateInputError("Offset produced non-finite coordinates.")
    return out
