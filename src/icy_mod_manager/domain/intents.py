"""
Discrete user intents forwarded by the presentation layer to AppController.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CreateProfile:
    name: str


@dataclass(frozen=True)
class DeleteCurrentProfile:
    pass


@dataclass(frozen=True)
class SelectProfile:
    profile_id: int


@dataclass(frozen=True)
class RenameCurrentProfile:
    name: str


@dataclass(frozen=True)
class LoadProfile:
    """Apply the selected profile to the live mods."""


@dataclass(frozen=True)
class SaveProfile:
    """Capture the live mods into the selected profile and persist."""


@dataclass(frozen=True)
class RefreshMods:
    pass


@dataclass(frozen=True)
class ToggleMod:
    index: int
    enabled: bool


@dataclass(frozen=True)
class EnableAll:
    pass


@dataclass(frozen=True)
class DisableAll:
    pass


@dataclass(frozen=True)
class SetModsPath:
    path: Path
