from __future__ import annotations

"""Coordinate and path helpers shared by the offset algorithm.

All functions are pure and operate on sequences of ``(x, y)`` tuples in the
working projection's linear unit.
"""

import math
from collections.abc import Sequence
from typing import Optional, Tuple

import numpy as np

Coordinate = Tuple[float, float]
Segment = Tuple[Coordinate, Coordinate]

# Unit-vector cross product below this counts as "on the segment".
COLLINEAR_TOLERANCE = 1e-10

__all__ = [
    "Coordinate",
    "Segment",
    "distance",
    "coords_equal",
    "is_closed",
    "has_zero_length_segment",
    "all_finite",
    "find_segment_at_point",
]


def distance(p1: Coordinate, p2: Coordinate) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p1[0] - p2[0], p1[1] - p2[1])


def coords_equal(p1: Coordinate, p2: Coordinate) -> bool:
    """Exact value equality; only used to detect ring closure."""
    return p1[0] == p2[0] and p1[1] == p2[1]


def is_closed(path: Sequence[Coordinate]) -> bool:
    """Return ``True`` when *path* is a ring (first == last)."""
    return len(path) > 1 and coords_equal(path[0], path[-1])


def has_zero_length_segment(path: Sequence[Coordinate]) -> bool:
    """Return ``True`` if any two consecutive coordinates coincide."""
    if len(path) < 2:
        return False
    arr = np.asarray(path, dtype=float)[:, :2]
    seglens = np.hypot(*np.diff(arr, axis=0).T)
    return bool(np.any(seglens == 0.0))


def all_finite(path: Sequence[Coordinate]) -> bool:
    """Return ``True`` when no coordinate is NaN or infinite."""
    if len(path) == 0:
        return True
    return bool(np.all(np.isfinite(np.asarray(path, dtype=float))))


def find_segment_at_point(
        pt: Coordinate,
        path: Sequence[Coordinate],
) -> Tuple[int, Optional[Segment]]:
    """Locate the segment of *path* that carries *pt*.

    A segment matches when *pt* equals one of its endpoints or lies on the
    segment's supporting line (unit-vector cross product within
    :data:`COLLINEAR_TOLERANCE`).  The first match wins.

    Returns:
        tuple: ``(index, (p0, p1))`` of the matching segment, or
        ``(-1, None)`` when nothing matches.
    """
    for i in range(len(path) - 1):
        p0 = path[i]
        p1 = path[i + 1]

        if coords_equal(pt, p0) or coords_equal(pt, p1):
            return i, (p0, p1)

        d0 = distance(p0, p1)
        d1 = distance(p0, pt)
        if d0 == 0:
            continue  # zero-length segment carries nothing
        v0 = ((p1[0] - p0[0]) / d0, (p1[1] - p0[1]) / d0)
        v1 = ((pt[0] - p0[0]) / d1, (pt[1] - p0[1]) / d1)

        if abs(v0[0] * v1[1] - v0[1] * v1[0]) < COLLINEAR_TOLERANCE:
            return i, (p0, p1)

    return -1, None
