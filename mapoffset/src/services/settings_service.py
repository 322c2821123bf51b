from __future__ import annotations

"""settings_service.py
Persisted offset preferences in ``~/.mapoffset/settings.json``.  Access via
the *singleton* :class:`SettingsService`.

Example
-------
>>> settings = SettingsService()
>>> settings.last_offset()
(10.0, 'right')
>>> settings.set_last_offset(2.5, "outward")
>>> settings.offset_config().working_crs
'EPSG:3857'
"""

import json
import logging
import math
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..models.geometry import Side
from ..models.offset_config import OffsetConfig
from ..utils.singleton import Singleton

__all__ = ["SettingsService"]

logger = logging.getLogger(__name__)


class SettingsService(Singleton):
    """Load/save user settings to *~/.mapoffset/settings.json* (singleton)."""

    _path: Path = Path.home() / ".mapoffset" / "settings.json"

    _defaults: dict[str, Any] = {
        # Projection of the editor's working coordinates
        "working_crs": "EPSG:3857",
        # Slope difference under which a join counts as parallel
        "parallel_epsilon": 1e-10,
        "name_suffix": " (offset)",
        # Values pre-filled in the offset dialog
        "last_offset_m": 10.0,
        "last_offset_side": "right",
    }

    # ------------------------------------------------------------------
    def __init__(self) -> None:  # noqa: D401
        if getattr(self, "_initialized", False):  # type: ignore[attr-defined]
            return

        self._data: dict[str, Any] = {**self._defaults, **self._load()}
        self._initialized = True  # type: ignore[attr-defined]

    # ------------------------------------------------------------------
    def _load(self) -> dict[str, Any]:
        """Read JSON file if it exists; return dict or empty on failure."""
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as fp:
                data = json.load(fp)
            # Only keep keys we recognise
            return {k: data[k] for k in self._defaults.keys() if k in data}
        except (OSError, ValueError) as exc:
            logger.error("Failed to load settings file %s: %s", self._path, exc)
            return {}

    # ------------------------------------------------------------------
    def get(self, key: str, default: Any | None = None) -> Any | None:  # noqa: D401
        """Return setting *key* or *default* if missing."""
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:  # noqa: D401
        """Update setting value in memory. Call :pymeth:`save` to persist."""
        self._data[key] = value

    def save(self) -> None:
        """Write current settings to JSON file, creating directories as needed."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as fp:
                json.dump(self._data, fp, indent=2)
            logger.info("Settings saved to %s", self._path)
        except OSError as exc:
            logger.error("Failed to save settings to %s: %s", self._path, exc)

    # ==================================================================
    #  Offset dialog - remember the most recent request
    # ==================================================================
    def last_offset(self) -> tuple[float, str]:  # noqa: D401
        """
        Return the distance and side the user last confirmed.

        Returns
        -------
        (distance_m, side)
            ``distance_m`` – meters, always positive
            ``side`` – one of ``left``, ``right``, ``inward``, ``outward``

        Invalid stored values fall back to the defaults.
        """
        dist = self.get("last_offset_m", self._defaults["last_offset_m"])
        try:
            dist = float(dist)
        except (TypeError, ValueError):
            dist = math.nan
        if not (math.isfinite(dist) and dist > 0):
            logger.warning("Ignoring invalid stored offset distance %r", self.get("last_offset_m"))
            dist = float(self._defaults["last_offset_m"])

        side = self.get("last_offset_side", self._defaults["last_offset_side"])
        if not isinstance(side, str) or side not in {s.value for s in Side}:
            logger.warning("Ignoring invalid stored offset side %r", side)
            side = self._defaults["last_offset_side"]
        return dist, str(side)

    def set_last_offset(self, distance_m: float, side: Side | str) -> None:  # noqa: D401
        """Persist the most recently confirmed offset distance and side."""
        if distance_m <= 0:
            raise ValueError("distance_m must be positive")
        side_value = Side(side).value
        self.set("last_offset_m", float(distance_m))
        self.set("last_offset_side", side_value)
        self.save()

    # ------------------------------------------------------------------
    def offset_config(self) -> OffsetConfig:
        """Build an :class:`OffsetConfig` from the stored preferences.

        Invalid stored values fall back to the defaults.
        """
        values = {
            "working_crs": self.get("working_crs", self._defaults["working_crs"]),
            "parallel_epsilon": self.get("parallel_epsilon", self._defaults["parallel_epsilon"]),
            "name_suffix": self.get("name_suffix", self._defaults["name_suffix"]),
        }
        try:
            return OffsetConfig(**values)
        except ValidationError as exc:
            logger.warning("Ignoring invalid offset settings: %s", exc)
            return OffsetConfig()
