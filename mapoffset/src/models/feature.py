from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional
from uuid import uuid4

from .geometry import Geometry, OffsetResult, geometry_from_dict


@dataclass(slots=True)
class Feature:
    """A geometry plus named attributes, as owned by the editor.

    ``properties`` never contains the geometry itself.  ``offset_result`` is
    only set on features produced by the offset service so callers can read
    the distance that was applied.
    """

    geometry: Optional[Geometry] = None
    properties: dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid4()))
    offset_result: Optional[OffsetResult] = field(default=None, repr=False, compare=False)

    def get(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)

    # --- (de)serialization ---
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "geometry": self.geometry.to_dict() if self.geometry is not None else None,
            "properties": dict(self.properties),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Feature":
        geom = d.get("geometry")
        return cls(
            id=d.get("id") or str(uuid4()),
            geometry=geometry_from_dict(geom) if geom else None,
            properties=dict(d.get("properties") or {}),
        )
