from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .geometry import Side


class OffsetConfig(BaseModel):
    """Tunables for one offset call.

    The engine never reads global settings; callers build one of these
    (usually via ``SettingsService.offset_config()``) and pass it in.
    """

    # Projection the editor's coordinates live in.
    working_crs: str = "EPSG:3857"
    parallel_epsilon: float = Field(1e-10, ge=0)

    # Attribute derivation
    name_key: str = "name"
    name_suffix: str = " (offset)"
    measure_flag_key: str = "isMeasure"
    length_key: str = "distance"

    # Which features the offset tool may pick
    arrow_flag_key: str = "isArrow"
    offsettable_shape_keys: tuple[str, ...] = ("isBox", "isCircle")

    model_config = ConfigDict(frozen=True)


class OffsetRequest(BaseModel):
    """Validated input to the offset service.

    ``geometry`` is left unchecked here; the variant dispatch reports
    unsupported geometries with its own failure kind.
    """

    geometry: Any
    distance_m: float = Field(..., gt=0)
    side: Side

    @field_validator("distance_m")
    @classmethod
    def _finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("distance_m must be finite")
        return v

    model_config = ConfigDict(frozen=True)
