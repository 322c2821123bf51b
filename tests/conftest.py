"""Shared fixtures for the mapoffset test suite."""
import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Ensure the repository root is on sys.path so that `import mapoffset` resolves
# when tests are run from any working directory without an editable install.
# ---------------------------------------------------------------------------
_repo_root = Path(__file__).resolve().parent.parent
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))


@pytest.fixture
def settings(tmp_path, monkeypatch):
    """A fresh :class:`SettingsService` backed by a file under *tmp_path*."""
    from mapoffset.src.services.settings_service import SettingsService

    monkeypatch.setattr(SettingsService, "_path", tmp_path / "settings.json")
    SettingsService.reset_instance()
    yield SettingsService()
    SettingsService.reset_instance()


@pytest.fixture
def square_ccw():
    """10×10 square ring, counter-clockwise, at the origin."""
    return [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0), (0.0, 0.0)]
