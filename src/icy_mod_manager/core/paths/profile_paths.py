"""
Shared path utilities for the manager's configuration files.
Provides the per-platform configuration directory used by profiles and settings.
"""

import os
import sys
from pathlib import Path

APP_DIR_NAME = "IcyIsaacModManager"
PROFILES_FILE_NAME = "profiles.json"
SETTINGS_FILE_NAME = "config.json"
CONFIG_DIR_ENV = "ICY_MOD_MANAGER_CONFIG_DIR"


def _home() -> Path | None:
    try:
        return Path.home()
    except RuntimeError:
        return None


def get_config_dir() -> Path | None:
    """Get the application configuration directory based on platform.

    Returns:
        Path to the config directory (e.g., ~/.config/IcyIsaacModManager),
        or None when the host has no discoverable home directory.
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)

    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / APP_DIR_NAME
        home = _home()
        return home / "AppData" / "Roaming" / APP_DIR_NAME if home else None

    if sys.platform == "darwin":
        home = _home()
        if home is None:
            return None
        return home / "Library" / "Application Support" / APP_DIR_NAME

    # Linux and other XDG platforms
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_DIR_NAME
    home = _home()
    return home / ".config" / APP_DIR_NAME if home else None


def get_profiles_file(config_dir: Path | None = None) -> Path | None:
    config_dir = config_dir or get_config_dir()
    return config_dir / PROFILES_FILE_NAME if config_dir else None


def get_settings_file(config_dir: Path | None = None) -> Path | None:
    config_dir = config_dir or get_config_dir()
    return config_dir / SETTINGS_FILE_NAME if config_dir else None
