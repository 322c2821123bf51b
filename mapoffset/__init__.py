"""mapoffset package

Parallel-offset geometry engine for a map editor.  The code lives under
:pymod:`mapoffset.src`; the most common entry points are re-exported here.
"""

from .src.models.feature import Feature
from .src.models.geometry import LineGeometry, OffsetResult, PolygonGeometry, Side
from .src.core.errors import FailureKind, OffsetFailure
from .src.services.offset_service import create_offset_feature

__all__ = [
    "Feature",
    "FailureKind",
    "LineGeometry",
    "OffsetFailure",
    "OffsetResult",
    "PolygonGeometry",
    "Side",
    "create_offset_feature",
]
