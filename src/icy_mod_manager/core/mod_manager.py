"""
Mod discovery and per-mod enable/disable handling.

A mod is a directory under the configured mods path containing a
``metadata.xml``. It is disabled when a ``disable.it`` sentinel file is
present in its directory and enabled otherwise.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

from icy_mod_manager.domain.models import MAX_MOD_ID
from icy_mod_manager.utils.errors import InvalidModsPath, PerModIoFailure
from icy_mod_manager.utils.path_utils import PathUtils

log = logging.getLogger(__name__)

METADATA_FILE = "metadata.xml"
DISABLE_SENTINEL = "disable.it"


@dataclass
class ModRecord:
    """A discovered mod directory"""

    mod_id: int
    name: str
    path: Path
    directory: str = ""
    version: str = ""

    @property
    def disable_path(self) -> Path:
        return self.path / DISABLE_SENTINEL

    def is_enabled(self) -> bool:
        return not PathUtils.exists(self.disable_path)

    def set_enabled(self, enabled: bool) -> None:
        """Remove or create the sentinel file. Raises OSError on failure."""
        if enabled:
            self.disable_path.unlink(missing_ok=True)
        else:
            self.disable_path.touch(exist_ok=True)

    @classmethod
    def from_path(cls, path: Path) -> "ModRecord":
        """
        Build a record from a mod directory's metadata.xml.

        Raises:
            OSError: metadata file missing or unreadable
            ValueError: metadata is not valid XML or lacks a name/id
        """
        metadata_path = path / METADATA_FILE
        with open(metadata_path, "rb") as f:
            try:
                root = ET.parse(f).getroot()
            except ET.ParseError as e:
                raise ValueError(f"invalid XML in {metadata_path}: {e}") from e

        name = (root.findtext("name") or "").strip()
        raw_id = (root.findtext("id") or "").strip()
        if not name or not raw_id:
            raise ValueError(f"{metadata_path} is missing <name> or <id>")
        mod_id = int(raw_id)
        if not 0 <= mod_id <= MAX_MOD_ID:
            raise ValueError(f"mod id {mod_id} out of range in {metadata_path}")

        return cls(
            mod_id=mod_id,
            name=name,
            path=path,
            directory=(root.findtext("directory") or "").strip(),
            version=(root.findtext("version") or "").strip(),
        )


class ModManager:
    """Scans the mods directory and toggles mods on disk."""

    def __init__(self):
        self.mods: list[ModRecord] = []

    def scan(self, mods_path: Path) -> list[ModRecord]:
        """
        Rescan the mods directory, replacing the current mod list.

        Directories whose metadata cannot be read are logged and skipped.

        Raises:
            InvalidModsPath: path is empty, relative or not a directory
        """
        if not mods_path.is_absolute():
            raise InvalidModsPath(f"Invalid mod path set: '{mods_path}'")
        if not PathUtils.is_dir(mods_path):
            raise InvalidModsPath(f"Mods path is not a directory: {mods_path}")

        mods = []
        try:
            entries = sorted(mods_path.iterdir())
        except OSError as e:
            raise InvalidModsPath(f"Cannot read mods path {mods_path}: {e}") from e

        for entry in entries:
            if not entry.is_dir():
                continue
            try:
                mods.append(ModRecord.from_path(entry))
            except (OSError, ValueError) as e:
                log.warning("Error loading mod from %s: %s", entry, e)

        mods.sort(key=lambda m: (m.name.lower(), m.mod_id))
        self.mods = mods
        log.debug("Discovered %d mods in %s", len(mods), mods_path)
        return self.mods

    def set_mod_enabled(self, index: int, enabled: bool) -> list[PerModIoFailure]:
        """Toggle a single mod by list index. Unknown indexes are ignored."""
        if not 0 <= index < len(self.mods):
            log.debug("Ignoring toggle for unknown mod index %d", index)
            return []
        return self._set_many([self.mods[index]], enabled)

    def enable_all(self) -> list[PerModIoFailure]:
        return self._set_many(self.mods, True)

    def disable_all(self) -> list[PerModIoFailure]:
        return self._set_many(self.mods, False)

    def _set_many(self, mods: list[ModRecord], enabled: bool) -> list[PerModIoFailure]:
        failures = []
        for mod in mods:
            try:
                mod.set_enabled(enabled)
            except OSError as e:
                log.error("Failed to set %s enabled=%s: %s", mod.name, enabled, e)
                failures.append(PerModIoFailure(mod.mod_id, mod.name, e))
        return failures
