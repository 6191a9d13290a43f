"""
Pytest Configuration and Shared Fixtures

Provides a Qt core application, temporary configuration directories,
in-memory fake mods and on-disk mod folders.
"""

from pathlib import Path

import pytest
from PySide6.QtCore import QCoreApplication

from icy_mod_manager.core.paths.profile_paths import CONFIG_DIR_ENV


# =============================================================================
# Qt Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def qapp():
    """Single QCoreApplication for tests that create QObjects."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the platform config directory at a temp folder for every test."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv(CONFIG_DIR_ENV, str(config_dir))
    return config_dir


# =============================================================================
# Mod Fixtures
# =============================================================================

class FakeMod:
    """In-memory mod with optional failure on set_enabled."""

    def __init__(self, mod_id, enabled=True, name=None, fail=False):
        self.mod_id = mod_id
        self.name = name or f"Mod {mod_id}"
        self.enabled = enabled
        self.fail = fail
        self.set_calls = 0

    def is_enabled(self):
        return self.enabled

    def set_enabled(self, enabled):
        self.set_calls += 1
        if self.fail:
            raise PermissionError(13, "Permission denied", self.name)
        self.enabled = enabled


@pytest.fixture
def fake_mod():
    return FakeMod


def write_mod(mods_dir: Path, folder: str, mod_id, name: str, enabled=True) -> Path:
    """Create a mod folder with metadata.xml, disabled via sentinel if asked."""
    mod_path = mods_dir / folder
    mod_path.mkdir(parents=True)
    (mod_path / "metadata.xml").write_text(
        "<metadata>"
        f"<name>{name}</name>"
        f"<directory>{folder}</directory>"
        f"<id>{mod_id}</id>"
        "<description>test mod</description>"
        "<version>1.0</version>"
        "<visibility>Public</visibility>"
        '<tag id="Items"/>'
        "</metadata>",
        encoding="utf-8",
    )
    if not enabled:
        (mod_path / "disable.it").touch()
    return mod_path


@pytest.fixture
def mods_dir(tmp_path):
    """Mods folder holding three mods: 10 (on), 20 (off), 30 (on)."""
    path = tmp_path / "mods"
    path.mkdir()
    write_mod(path, "alpha_10", 10, "Alpha")
    write_mod(path, "bravo_20", 20, "Bravo", enabled=False)
    write_mod(path, "charlie_30", 30, "Charlie")
    return path


@pytest.fixture
def make_mod():
    return write_mod
