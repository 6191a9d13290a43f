"""Path management module for Icy Isaac Mod Manager."""

from .profile_paths import get_config_dir, get_profiles_file, get_settings_file

__all__ = ["get_config_dir", "get_profiles_file", "get_settings_file"]
