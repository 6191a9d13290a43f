"""
Settings manager for handling persistent application settings.
Manages JSON-based configuration storage.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

log = logging.getLogger(__name__)


class SettingsManager:
    """Manages loading and saving of application settings to JSON file."""

    def __init__(self, settings_file: Optional[Path]):
        """
        Initialize the settings manager.

        Args:
            settings_file: Path to the JSON settings file, or None to keep
                settings in memory only (no configuration directory available)
        """
        self.settings_file = settings_file
        self._settings_cache: Dict[str, Any] = self._get_default_settings()
        self.load_settings()

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings from the JSON file.

        Returns:
            Dictionary containing all settings
        """
        if self.settings_file is None or not self.settings_file.exists():
            self._settings_cache = self._get_default_settings()
            return self._settings_cache

        try:
            with open(self.settings_file, "r", encoding="utf-8") as f:
                loaded = json.load(f)
            if not isinstance(loaded, dict):
                raise ValueError("settings root is not an object")
            self._settings_cache = {**self._get_default_settings(), **loaded}
        except (json.JSONDecodeError, ValueError, OSError) as e:
            log.error("Error loading settings from %s: %s", self.settings_file, e)
            self._settings_cache = self._get_default_settings()

        return self._settings_cache

    def save_settings(self) -> bool:
        """
        Save current settings to the JSON file.

        Returns:
            True if successful, False otherwise
        """
        if self.settings_file is None:
            log.error("Cannot save settings: configuration directory is missing")
            return False
        try:
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, "w", encoding="utf-8") as f:
                json.dump(self._settings_cache, f, indent=4)
            return True
        except OSError as e:
            log.error("Error saving settings to %s: %s", self.settings_file, e)
            return False

    def get(self, key: str, default: Any = None) -> Any:
        return self._settings_cache.get(key, default)

    def set(self, key: str, value: Any, auto_save: bool = True) -> bool:
        """
        Set a setting value.

        Args:
            key: Setting key
            value: Setting value
            auto_save: Whether to automatically save to file

        Returns:
            False only when auto_save was requested and saving failed
        """
        self._settings_cache[key] = value
        if auto_save:
            return self.save_settings()
        return True

    def get_mods_path(self) -> Path:
        return Path(self.get("mods_path", "") or "")

    def set_mods_path(self, path: Path, auto_save: bool = True) -> bool:
        return self.set("mods_path", str(path), auto_save=auto_save)

    def _get_default_settings(self) -> Dict[str, Any]:
        return {"mods_path": ""}

    def get_all_settings(self) -> Dict[str, Any]:
        """Get a copy of all current settings."""
        return self._settings_cache.copy()
