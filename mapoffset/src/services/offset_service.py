from __future__ import annotations

"""offset_service.py
Builds offset copies of editor features.

:func:`create_offset_feature` is the one entry point the editor calls, both
for the final "Offset…" command and for every pointer move of a drag
preview.  It never raises for bad input and never touches the source
feature; on failure it returns an :class:`OffsetFailure` describing why.

Example
-------
>>> line = Feature(LineGeometry([(0.0, 0.0), (100.0, 0.0)]), {"name": "Fence"})
>>> new = create_offset_feature(line, 10.0, Side.RIGHT)
>>> new.geometry.coords
[(0.0, -10.0), (100.0, -10.0)]
>>> new.get("name")
'Fence (offset)'
"""

import logging
import math
from typing import List, Optional, Tuple, Union

from pydantic import ValidationError

from ..core.errors import (
    DegenerateInputError,
    InvalidDistanceError,
    InvalidSideError,
    OffsetError,
    OffsetFailure,
    UnsupportedGeometryError,
)
from ..core.geometry.adapters import offset_geometry
from ..core.geometry.offset_path import validate_path
from ..core.geometry.projection import geodesic_length, meters_to_projected_units
from ..models.feature import Feature
from ..models.geometry import (
    LINE_SIDES,
    POLYGON_SIDES,
    Geometry,
    LineGeometry,
    PolygonGeometry,
    Side,
)
from ..models.offset_config import OffsetConfig, OffsetRequest

__all__ = [
    "create_offset_feature",
    "offset_side_options",
    "is_offsettable",
]

logger = logging.getLogger(__name__)

_SIDE_LABELS = {
    Side.LEFT: "Left",
    Side.RIGHT: "Right",
    Side.OUTWARD: "Outward",
    Side.INWARD: "Inward",
}


def is_offsettable(feature: Feature, config: Optional[OffsetConfig] = None) -> bool:
    """Return ``True`` if the offset tool should accept *feature*.

    Lines qualify unless they are drawn as arrows.  Polygons qualify only
    when they are one of the editor's box or circle shapes.
    """
    cfg = config or OffsetConfig()
    if isinstance(feature.geometry, LineGeometry):
        return not feature.get(cfg.arrow_flag_key)
    if isinstance(feature.geometry, PolygonGeometry):
        return any(feature.get(key) for key in cfg.offsettable_shape_keys)
    return False


def offset_side_options(geometry: Geometry) -> List[Tuple[Side, str]]:
    """Return the ``(side, label)`` choices the offset dialog should offer."""
    sides = LINE_SIDES if isinstance(geometry, LineGeometry) else POLYGON_SIDES
    return [(side, _SIDE_LABELS[side]) for side in sides]


def _build_request(geometry, distance_m, side) -> OffsetRequest:
    try:
        return OffsetRequest(geometry=geometry, distance_m=distance_m, side=side)
    except ValidationError as exc:
        fields = {err["loc"][0] for err in exc.errors() if err.get("loc")}
        if "side" in fields:
            raise InvalidSideError(f"Unknown offset side: {side!r}.") from None
        raise InvalidDistanceError(f"Offset distance must be a positive number, got {distance_m!r}.") from None


def _check_geometry(geometry, side: Side) -> None:
    """Fail before any projection work if the request cannot succeed."""
    if isinstance(geometry, LineGeometry):
        allowed = LINE_SIDES
    elif isinstance(geometry, PolygonGeometry):
        allowed = POLYGON_SIDES
        if not geometry.rings:
            raise DegenerateInputError("Polygon has no rings.")
    else:
        kind = getattr(geometry, "geom_type", type(geometry).__name__)
        raise UnsupportedGeometryError(f"Unsupported geometry type for offset: {kind}")

    if side not in allowed:
        names = " or ".join(f"'{s.value}'" for s in allowed)
        raise InvalidSideError(f"{geometry.geom_type} offset requires {names}, got '{side.value}'.")

    for path in geometry.paths:
        validate_path(path)


def create_offset_feature(
        feature: Feature,
        distance_m: float,
        side: Union[Side, str],
        config: Optional[OffsetConfig] = None,
) -> Union[Feature, OffsetFailure]:
    """Return a new feature offset from *feature* by *distance_m* meters.

    Args:
        feature (Feature): Source feature; never modified.
        distance_m (float): Positive real-world distance in meters.
        side (Side | str): ``left``/``right`` for lines,
            ``inward``/``outward`` for polygons.
        config (OffsetConfig, optional): Projection and attribute settings.
            Defaults to :class:`OffsetConfig()`.

    Returns:
        Feature | OffsetFailure: The new feature, with every source property
        copied, ``name`` suffixed, the measured length recomputed for
        measurement features and ``offset_result`` holding the projected
        distance; or a failure value (falsy) explaining the rejection.
    """
    cfg = config or OffsetConfig()
    geometry = feature.geometry

    try:
        request = _build_request(geometry, distance_m, side)
        _check_geometry(geometry, request.side)

        distance_projected = meters_to_projected_units(geometry, request.distance_m, cfg.working_crs)
        if not math.isfinite(distance_projected):
            raise DegenerateInputError("Geometry is too close to a pole to scale the distance.")
    except OffsetError as exc:
        failure = exc.to_failure()
        logger.warning("Offset rejected (%s): %s", failure.kind.value, failure.message)
        return failure

    result = offset_geometry(geometry, distance_projected, request.side, cfg.parallel_epsilon)
    if isinstance(result, OffsetFailure):
        logger.warning("Offset rejected (%s): %s", result.kind.value, result.message)
        return result

    logger.debug(
        "Offset %s by %.3f m (%.3f projected units) to the %s",
        geometry.geom_type, request.distance_m, distance_projected, request.side.value,
    )

    properties = dict(feature.properties)
    properties.pop("geometry", None)
    original_name = feature.get(cfg.name_key)
    if original_name:
        properties[cfg.name_key] = f"{original_name}{cfg.name_suffix}"

    if feature.get(cfg.measure_flag_key):
        properties[cfg.measure_flag_key] = True
        properties[cfg.length_key] = geodesic_length(result.geometry, cfg.working_crs)

    new_feature = Feature(geometry=result.geometry, properties=properties)
    new_feature.offset_result = result
    return new_feature

