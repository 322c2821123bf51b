from __future__ import annotations

"""mapoffset.src.core.errors

Failure taxonomy for the offset engine.

Low-level helpers raise :class:`OffsetError` subclasses (they are
``ValueError``\\s, like the rest of the geometry code).  The public entry
points catch them and hand an :class:`OffsetFailure` value back to the
editor instead, so a speculative call during a drag preview never has to
wrap anything in ``try``.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "FailureKind",
    "OffsetFailure",
    "OffsetError",
    "UnsupportedGeometryError",
    "InvalidSideError",
    "DegenerateInputError",
    "InvalidDistanceError",
]


class FailureKind(str, Enum):
    """Reason an offset request produced no output."""

    UNSUPPORTED_GEOMETRY = "unsupported_geometry"
    INVALID_SIDE = "invalid_side"
    DEGENERATE_INPUT = "degenerate_input"
    INVALID_DISTANCE = "invalid_distance"


class OffsetError(ValueError):
    """Base class for offset errors; ``kind`` tells them apart."""

    kind: FailureKind = FailureKind.DEGENERATE_INPUT

    def to_failure(self) -> "OffsetFailure":
        return OffsetFailure(kind=self.kind, message=str(self))


class UnsupportedGeometryError(OffsetError):
    kind = FailureKind.UNSUPPORTED_GEOMETRY


class InvalidSideError(OffsetError):
    kind = FailureKind.INVALID_SIDE


class DegenerateInputError(OffsetError):
    """Zero-length segment, too few vertices or non-finite coordinates."""

    kind = FailureKind.DEGENERATE_INPUT


class InvalidDistanceError(OffsetError):
    kind = FailureKind.INVALID_DISTANCE


@dataclass(frozen=True, slots=True)
class OffsetFailure:
    """Explicit failure value returned by the engine's entry points.

    Args:
        kind (FailureKind): Which rule the request broke.
        message (str): Human-readable detail; the caller decides whether to
            show it.
    """

    kind: FailureKind
    message: str = ""

    def __bool__(self) -> bool:
        # Lets callers write ``if result:`` for the success path.
        return False
