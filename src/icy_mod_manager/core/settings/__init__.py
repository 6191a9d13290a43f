"""Settings management module for Icy Isaac Mod Manager."""

from .settings_manager import SettingsManager

__all__ = ["SettingsManager"]
