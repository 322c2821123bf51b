from __future__ import annotations

"""Per-variant wrappers around :func:`offset_path`.

Each adapter maps a :class:`Side` onto signed offsets, runs the path
algorithm on every path of the geometry and wraps the result.  Errors come
back as :class:`OffsetFailure` values rather than exceptions.
"""

import logging
from typing import Union

import shapely.geometry as sg

from ...models.geometry import (
    LINE_SIDES,
    POLYGON_SIDES,
    LineGeometry,
    OffsetResult,
    PolygonGeometry,
    Side,
)
from ..errors import (
    DegenerateInputError,
    InvalidSideError,
    OffsetError,
    OffsetFailure,
    UnsupportedGeometryError,
)
from .offset_path import PARALLEL_EPSILON, offset_path, validate_path
from .path_primitives import is_closed

__all__ = ["offset_line", "offset_polygon", "offset_geometry", "ring_sign"]

logger = logging.getLogger(__name__)

OffsetOutcome = Union[OffsetResult, OffsetFailure]


def _coerce_side(side) -> Side:
    try:
        return Side(side)
    except ValueError:
        raise InvalidSideError(f"Unknown offset side: {side!r}.") from None


def ring_sign(ring, side: Side, is_exterior: bool) -> int:
    """Return ``+1``/``-1`` so that *side* moves *ring* the right way.

    Walking a counter-clockwise ring, the right-hand side faces away from the
    area it encloses, so a positive offset grows it.  The exterior grows for
    ``OUTWARD``; a hole shrinks for ``OUTWARD`` because the polygon around
    it grows.  Clockwise rings flip the sign.
    """
    grow = (side is Side.OUTWARD) == is_exterior
    sign = 1 if grow else -1
    if not sg.LinearRing(ring).is_ccw:
        sign = -sign
    return sign


def offset_line(
        geometry: LineGeometry,
        distance_projected: float,
        side: Side,
        parallel_epsilon: float = PARALLEL_EPSILON,
) -> OffsetOutcome:
    """Offset a line to its left (negative) or right (positive)."""
    try:
        side = _coerce_side(side)
        if side not in LINE_SIDES:
            raise InvalidSideError(f"Line offset requires 'left' or 'right', got {side!r}.")
        offset = -distance_projected if side is Side.LEFT else distance_projected
        coords = offset_path(geometry.coords, offset, parallel_epsilon)
    except OffsetError as exc:
        return exc.to_failure()
    return OffsetResult(LineGeometry(coords), abs(distance_projected))


def offset_polygon(
        geometry: PolygonGeometry,
        distance_projected: float,
        side: Side,
        parallel_epsilon: float = PARALLEL_EPSILON,
) -> OffsetOutcome:
    """Offset every ring of a polygon independently.

    The resulting rings are not checked for containment or
    self-intersection.
    """
    try:
        side = _coerce_side(side)
        if side not in POLYGON_SIDES:
            raise InvalidSideError(f"Polygon offset requires 'inward' or 'outward', got {side!r}.")
        if not geometry.rings:
            raise DegenerateInputError("Polygon has no rings.")

        rings = []
        for i, ring in enumerate(geometry.rings):
            coords = validate_path(ring)
            if not is_closed(coords):
                raise DegenerateInputError(f"Polygon ring {i} is not closed.")
            sign = ring_sign(coords, side, is_exterior=(i == 0))
            rings.append(offset_path(coords, sign * distance_projected, parallel_epsilon))
    except OffsetError as exc:
        return exc.to_failure()
    return OffsetResult(PolygonGeometry(rings), abs(distance_projected))


def offset_geometry(
        geometry,
        distance_projected: float,
        side: Side,
        parallel_epsilon: float = PARALLEL_EPSILON,
) -> OffsetOutcome:
    """Dispatch on the geometry variant."""
    if isinstance(geometry, LineGeometry):
        return offset_line(geometry, distance_projected, side, parallel_epsilon)
    if isinstance(geometry, PolygonGeometry):
        return offset_polygon(geometry, distance_projected, side, parallel_epsilon)

    kind = getattr(geometry, "geom_type", type(geometry).__name__)
    logger.debug("Rejecting offset of unsupported geometry %s", kind)
    return UnsupportedGeometryError(f"Unsupported geometry type for offset: {kind}").to_failure()
