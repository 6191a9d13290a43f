from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Protocol

DEFAULT_PROFILE_ID = 0
DEFAULT_PROFILE_NAME = "<default>"

# Profile ids are signed 32-bit, mod ids unsigned 64-bit
MAX_PROFILE_ID = 2**31 - 1
MAX_MOD_ID = 2**64 - 1


@dataclass
class Profile:
    name: str
    enabled_mods: set[int] = field(default_factory=set)

    def sorted_mods(self) -> list[int]:
        return sorted(self.enabled_mods)


@dataclass(frozen=True)
class ProfileSummary:
    """Selectable (id, name) pair shown by the presentation layer."""

    id: int
    name: str

    def __str__(self) -> str:
        return self.name


DEFAULT_SUMMARY = ProfileSummary(DEFAULT_PROFILE_ID, DEFAULT_PROFILE_NAME)


class ModLike(Protocol):
    """What the reconciler needs from a discovered mod."""

    mod_id: int
    name: str

    def is_enabled(self) -> bool: ...

    def set_enabled(self, enabled: bool) -> None: ...


def normalize_mod_ids(ids: Iterable[int]) -> set[int]:
    """
    Collapse ids into a set of ints.

    Raises:
        ValueError: an id is outside the unsigned 64-bit range
    """
    normalized = {int(i) for i in ids}
    out_of_range = sorted(i for i in normalized if not 0 <= i <= MAX_MOD_ID)
    if out_of_range:
        raise ValueError(f"mod ids out of range: {out_of_range}")
    return normalized
