from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Union

Coordinate = Tuple[float, float]
Path = List[Coordinate]


class Side(str, Enum):
    """Offset direction.

    ``LEFT``/``RIGHT`` are relative to a line's direction of travel and only
    apply to lines; ``INWARD``/``OUTWARD`` are relative to a polygon's
    boundary and only apply to polygons.
    """

    LEFT = "left"
    RIGHT = "right"
    INWARD = "inward"
    OUTWARD = "outward"


LINE_SIDES = (Side.LEFT, Side.RIGHT)
POLYGON_SIDES = (Side.OUTWARD, Side.INWARD)


@dataclass(slots=True)
class LineGeometry:
    """Single open path."""

    coords: Path = field(default_factory=list)

    geom_type = "LineString"

    @property
    def paths(self) -> List[Path]:
        return [self.coords]

    # --- (de)serialization ---
    def to_dict(self) -> dict:
        return {"type": self.geom_type, "coordinates": [list(pt) for pt in self.coords]}

    @classmethod
    def from_coords(cls, coords) -> "LineGeometry":
        return cls(coords=[(float(pt[0]), float(pt[1])) for pt in coords])


@dataclass(slots=True)
class PolygonGeometry:
    """Exterior ring followed by zero or more holes, all closed."""

    rings: List[Path] = field(default_factory=list)

    geom_type = "Polygon"

    @property
    def exterior(self) -> Path:
        return self.rings[0]

    @property
    def holes(self) -> List[Path]:
        return self.rings[1:]

    @property
    def paths(self) -> List[Path]:
        return self.rings

    # --- (de)serialization ---
    def to_dict(self) -> dict:
        return {
            "type": self.geom_type,
            "coordinates": [[list(pt) for pt in ring] for ring in self.rings],
        }

    @classmethod
    def from_coords(cls, rings) -> "PolygonGeometry":
        return cls(rings=[[(float(pt[0]), float(pt[1])) for pt in ring] for ring in rings])


Geometry = Union[LineGeometry, PolygonGeometry]

_GEOMETRY_TYPES = {
    LineGeometry.geom_type: LineGeometry,
    PolygonGeometry.geom_type: PolygonGeometry,
}


def geometry_from_dict(d: dict) -> Geometry:
    """Build a geometry from ``{"type": ..., "coordinates": ...}``.

    Raises:
        ValueError: If the type is not ``LineString`` or ``Polygon``.
    """
    geom_type = d.get("type")
    try:
        cls = _GEOMETRY_TYPES[geom_type]
    except KeyError:
        raise ValueError(f"Unsupported geometry type: {geom_type!r}") from None
    return cls.from_coords(d["coordinates"])


@dataclass(frozen=True, slots=True)
class OffsetResult:
    """Offset geometry plus the projected distance that produced it.

    Args:
        geometry (Geometry): Freshly allocated geometry of the source's
            variant.
        applied_projected_distance (float): The unsigned distance actually
            used, in projected units.
    """

    geometry: Geometry
    applied_projected_distance: float

    def __bool__(self) -> bool:
        return True
