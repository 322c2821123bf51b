from __future__ import annotations

"""mapoffset.src.core.geometry.projection

Conversions between real-world meters and the working projection.

The editor works in a conformal, Mercator-like projection (EPSG:3857 by
default) where one projected unit is one meter only at the equator.  A
distance typed in meters is converted with the scale factor
``1 / cos(latitude)`` evaluated at the centre of the geometry's extent.
That is a single-point approximation: geometries spanning a wide latitude
range get the scale of their centre everywhere.
"""

import logging
import math
from functools import lru_cache
from typing import Tuple

import shapely.geometry as sg
from pyproj import Geod, Transformer

from ...models.geometry import Geometry, LineGeometry, PolygonGeometry
from ..errors import UnsupportedGeometryError

__all__ = [
    "DEFAULT_WORKING_CRS",
    "GEOGRAPHIC_CRS",
    "EARTH_RADIUS_M",
    "to_geographic",
    "scale_factor_at_latitude",
    "geometry_center",
    "meters_to_projected_units",
    "geodesic_length",
]

logger = logging.getLogger(__name__)

DEFAULT_WORKING_CRS = "EPSG:3857"
GEOGRAPHIC_CRS = "EPSG:4326"
# Mean earth radius used by web-map length measurements.
EARTH_RADIUS_M = 6371008.8

_SPHERE = Geod(a=EARTH_RADIUS_M, b=EARTH_RADIUS_M)


@lru_cache(maxsize=8)
def _inverse_transformer(crs: str) -> Transformer:
    return Transformer.from_crs(crs, GEOGRAPHIC_CRS, always_xy=True)


def to_geographic(x: float, y: float, crs: str = DEFAULT_WORKING_CRS) -> Tuple[float, float]:
    """Inverse-project ``(x, y)`` to ``(lon, lat)`` in degrees."""
    lon, lat = _inverse_transformer(crs).transform(x, y)
    return float(lon), float(lat)


def scale_factor_at_latitude(latitude_deg: float) -> float:
    """Return projected units per meter at *latitude_deg*.

    1.0 on the equator, growing without bound towards the poles (infinite
    at exactly +/-90 degrees).
    """
    cos_lat = math.cos(math.radians(latitude_deg))
    if abs(latitude_deg) >= 90.0 or cos_lat <= 0.0:
        return math.inf
    return 1.0 / cos_lat


def _outline(geometry: Geometry):
    if isinstance(geometry, LineGeometry):
        return sg.LineString(geometry.coords)
    if isinstance(geometry, PolygonGeometry):
        return sg.LineString(geometry.exterior)
    raise UnsupportedGeometryError(f"Unsupported geometry type: {type(geometry).__name__}")


def geometry_center(geometry: Geometry) -> Tuple[float, float]:
    """Centre of the geometry's bounding extent, in projected units."""
    minx, miny, maxx, maxy = _outline(geometry).bounds
    return (minx + maxx) / 2.0, (miny + maxy) / 2.0


def meters_to_projected_units(
        geometry: Geometry,
        distance_m: float,
        crs: str = DEFAULT_WORKING_CRS,
) -> float:
    """Convert *distance_m* to projected units at the geometry's location."""
    cx, cy = geometry_center(geometry)
    _lon, lat = to_geographic(cx, cy, crs)
    factor = scale_factor_at_latitude(lat)
    logger.debug("Scale factor %.6f at latitude %.4f", factor, lat)
    return distance_m * factor


def geodesic_length(geometry: Geometry, crs: str = DEFAULT_WORKING_CRS) -> float:
    """Great-circle length in meters of every path of *geometry*.

    Polygons contribute the perimeter of every ring.
    """
    transformer = _inverse_transformer(crs)
    total = 0.0
    for path in geometry.paths:
        if len(path) < 2:
            continue
        xs, ys = zip(*path)
        lons, lats = transformer.transform(xs, ys)
        total += _SPHERE.line_length(list(lons), list(lats))
    return total
