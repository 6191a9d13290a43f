"""
Profile store: the durable mapping of profile ids to named sets of enabled mods.

Id 0 is reserved for the synthetic "<default>" entry and is never stored or
persisted. New profiles always get the smallest unused positive id, so ids
freed by deletion are reused before new ones are issued.
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Iterable

from icy_mod_manager.core.paths.profile_paths import get_profiles_file
from icy_mod_manager.core.profiles.profile_selection import ProfileSelection
from icy_mod_manager.domain.models import (
    DEFAULT_PROFILE_ID,
    MAX_MOD_ID,
    MAX_PROFILE_ID,
    Profile,
    ProfileSummary,
    normalize_mod_ids,
)
from icy_mod_manager.utils.errors import (
    ConfigLocationUnavailable,
    LoadError,
    MalformedPersistedData,
    SaveError,
)

log = logging.getLogger(__name__)


def _target_mode(profiles_file: Path) -> int:
    """Permissions for a rewritten profiles file: keep the old mode, else follow the umask."""
    try:
        return stat.S_IMODE(profiles_file.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class ProfileStore:
    def __init__(self, profiles: dict[int, Profile] | None = None):
        self._profiles: dict[int, Profile] = dict(profiles or {})
        self._selection = ProfileSelection()
        self._selection.rebuild(self._profiles)

    # ---- selection views -------------------------------------------------

    @property
    def current_profile_id(self) -> int:
        return self._selection.current_profile_id

    @property
    def profile_summaries(self) -> list[ProfileSummary]:
        return list(self._selection.summaries)

    @property
    def current_summary(self) -> ProfileSummary:
        return self._selection.current

    @property
    def profiles(self) -> dict[int, Profile]:
        """Shallow copy of the id -> profile mapping."""
        return dict(self._profiles)

    def get_profile(self, profile_id: int) -> Profile | None:
        return self._profiles.get(profile_id)

    def __len__(self) -> int:
        return len(self._profiles)

    def __contains__(self, profile_id: object) -> bool:
        return profile_id in self._profiles

    # ---- mutations -------------------------------------------------------

    def create_profile(self, name: str) -> int:
        """Insert an empty profile under the next free id and select it."""
        profile_id = self._next_free_id()
        self._profiles[profile_id] = Profile(name=name)
        self._selection.current_profile_id = profile_id
        self._selection.rebuild(self._profiles)
        log.debug("Created profile %d (%r)", profile_id, name)
        return profile_id

    def delete_current_profile(self) -> Profile | None:
        """Remove the selected profile and fall back to the default entry."""
        removed = None
        if self.current_profile_id != DEFAULT_PROFILE_ID:
            removed = self._profiles.pop(self.current_profile_id, None)
        if removed is not None:
            log.debug("Deleted profile %d (%r)", self.current_profile_id, removed.name)
        self._selection.current_profile_id = DEFAULT_PROFILE_ID
        self._selection.rebuild(self._profiles)
        return removed

    def get_current_profile(self) -> Profile | None:
        if self.current_profile_id == DEFAULT_PROFILE_ID:
            return None
        return self._profiles.get(self.current_profile_id)

    def update_current_profile(self, enabled_ids: Iterable[int]) -> None:
        """
        Replace the enabled set of the selected profile.

        Writes with the default entry selected are dropped.

        Raises:
            ValueError: an id is outside the unsigned 64-bit range; the
                profile is left unchanged
        """
        profile = self.get_current_profile()
        if profile is not None:
            profile.enabled_mods = normalize_mod_ids(enabled_ids)

    def rename_current_profile(self, name: str) -> None:
        profile = self.get_current_profile()
        if profile is None:
            return
        profile.name = name
        self._selection.rebuild(self._profiles)

    def select(self, profile_id: int) -> bool:
        """
        Select a profile by id.

        Only 0 or an existing id is accepted; anything else keeps the
        previous selection.

        Returns:
            True if the selection was accepted
        """
        if profile_id != DEFAULT_PROFILE_ID and profile_id not in self._profiles:
            log.debug("Rejected selection of unknown profile %r", profile_id)
            return False
        self._selection.current_profile_id = profile_id
        self._selection.refresh_current()
        return True

    def _next_free_id(self) -> int:
        for candidate in range(1, MAX_PROFILE_ID):
            if candidate not in self._profiles:
                return candidate
        return 1

    # ---- persistence -----------------------------------------------------

    @classmethod
    def load(cls, config_dir: Path | None = None) -> "ProfileStore":
        """
        Read persisted profiles into a new store.

        Args:
            config_dir: Directory holding profiles.json; defaults to the
                platform configuration directory

        Raises:
            ConfigLocationUnavailable: no configuration directory exists
            MalformedPersistedData: the file cannot be decoded
            LoadError: the file cannot be read
        """
        profiles_file = get_profiles_file(config_dir)
        if profiles_file is None:
            raise ConfigLocationUnavailable(
                "Cannot load mod profiles: configuration directory is missing"
            )

        try:
            with open(profiles_file, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise MalformedPersistedData(f"{profiles_file}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(f"Cannot read {profiles_file}: {e}") from e
        except (ValueError, RecursionError) as e:
            # Oversized integer literals or pathologically deep nesting
            raise MalformedPersistedData(f"{profiles_file}: {e}") from e

        store = cls(cls._decode(raw, profiles_file))
        log.debug("Loaded %d profiles from %s", len(store), profiles_file)
        return store

    @classmethod
    def load_or_default(cls, config_dir: Path | None = None) -> "ProfileStore":
        """Load persisted profiles, starting with an empty store on any failure."""
        try:
            return cls.load(config_dir)
        except LoadError as e:
            log.warning("Profiles failed to load, starting fresh: %s", e)
            return cls()

    def save(self, config_dir: Path | None = None) -> None:
        """
        Write all profiles (never the default entry) to profiles.json.

        The file is written to a temporary sibling and then moved into place.

        Raises:
            ConfigLocationUnavailable: no configuration directory exists
            SaveError: the directory or file cannot be written
        """
        profiles_file = get_profiles_file(config_dir)
        if profiles_file is None:
            raise ConfigLocationUnavailable(
                "Cannot save mod profiles: configuration directory is missing"
            )

        for profile_id, profile in self._profiles.items():
            if any(not 0 <= m <= MAX_MOD_ID for m in profile.enabled_mods):
                raise SaveError(
                    f"Cannot save profile {profile_id}: mod ids out of range"
                )

        try:
            contents = json.dumps(self._encode(), indent=4)
        except (TypeError, ValueError) as e:
            raise SaveError(f"Cannot encode profiles: {e}") from e

        tmp_path = None
        try:
            profiles_file.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=profiles_file.parent,
                prefix=".profiles-",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(contents)
            os.chmod(tmp_path, _target_mode(profiles_file))
            os.replace(tmp_path, profiles_file)
        except OSError as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise SaveError(f"Cannot write {profiles_file}: {e}") from e

        log.debug("Saved %d profiles to %s", len(self._profiles), profiles_file)

    def _encode(self) -> dict[str, Any]:
        return {
            str(profile_id): {
                "name": self._profiles[profile_id].name,
                "enabled_mods": self._profiles[profile_id].sorted_mods(),
            }
            for profile_id in sorted(self._profiles)
        }

    @staticmethod
    def _decode(raw: Any, source: Path) -> dict[int, Profile]:
        if not isinstance(raw, dict):
            raise MalformedPersistedData(f"{source}: expected an object of profiles")

        profiles: dict[int, Profile] = {}
        for key, entry in raw.items():
            if not (
                isinstance(key, str)
                and key.isascii()
                and key.isdigit()
                and len(key) <= len(str(MAX_PROFILE_ID))
            ):
                raise MalformedPersistedData(f"{source}: invalid profile id {key!r}")
            profile_id = int(key)
            if not 1 <= profile_id <= MAX_PROFILE_ID:
                raise MalformedPersistedData(
                    f"{source}: profile id {profile_id} out of range"
                )
            if profile_id in profiles:
                raise MalformedPersistedData(
                    f"{source}: duplicate profile id {profile_id}"
                )
            if not isinstance(entry, dict):
                raise MalformedPersistedData(f"{source}: profile {key} is not an object")

            name = entry.get("name")
            enabled_mods = entry.get("enabled_mods")
            if not isinstance(name, str):
                raise MalformedPersistedData(f"{source}: profile {key} has no name")
            if not isinstance(enabled_mods, list) or not all(
                isinstance(m, int) and not isinstance(m, bool) and 0 <= m <= MAX_MOD_ID
                for m in enabled_mods
            ):
                raise MalformedPersistedData(
                    f"{source}: profile {key} has invalid enabled_mods"
                )
            profiles[profile_id] = Profile(name=name, enabled_mods=set(enabled_mods))
        return profiles
