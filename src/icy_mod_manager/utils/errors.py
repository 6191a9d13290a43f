"""
Exception types raised by the profile store and the mod layer.
"""


class ModManagerError(Exception):
    """Base class for every error raised by the application."""


class ProfileError(ModManagerError):
    pass


class LoadError(ProfileError):
    """Persisted profiles could not be read."""


class SaveError(ProfileError):
    """Profiles could not be written to disk."""


class MalformedPersistedData(LoadError):
    """The profile file exists but its contents cannot be decoded."""


class ConfigLocationUnavailable(LoadError, SaveError):
    """The host has no discoverable configuration directory."""


class InvalidModsPath(ModManagerError):
    """The configured mods directory is empty, relative or unreadable."""


class PerModIoFailure(ModManagerError):
    """
    A single mod could not be enabled or disabled.

    These are collected into lists by batch operations rather than raised,
    so one bad mod never aborts the rest of the batch.
    """

    def __init__(self, mod_id: int, mod_name: str, cause: OSError):
        super().__init__(f"{mod_name} ({mod_id}): {cause}")
        self.mod_id = mod_id
        self.mod_name = mod_name
        self.cause = cause
