"""
Reconciles a profile's recorded enabled set with the live mods on disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from icy_mod_manager.domain.models import ModLike, Profile
from icy_mod_manager.utils.errors import PerModIoFailure

log = logging.getLogger(__name__)


@dataclass
class ReconcileReport:
    enabled: list[int] = field(default_factory=list)
    disabled: list[int] = field(default_factory=list)
    unchanged: int = 0
    failures: list[PerModIoFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class ModStateReconciler:
    """
    Stateless load/save between profiles and live mods.
    Neither operation touches the profile store.
    """

    @staticmethod
    def apply_profile_to_live_mods(
        profile: Profile, mods: Iterable[ModLike]
    ) -> ReconcileReport:
        """
        Enable exactly the mods listed in the profile and disable the rest.

        A mod whose flag cannot be changed is recorded in the report's
        failures and the remaining mods are still processed.
        """
        report = ReconcileReport()
        for mod in mods:
            wanted = mod.mod_id in profile.enabled_mods
            try:
                if mod.is_enabled() == wanted:
                    report.unchanged += 1
                    continue
                mod.set_enabled(wanted)
            except OSError as e:
                log.error("Failed to set %s enabled=%s: %s", mod.name, wanted, e)
                report.failures.append(PerModIoFailure(mod.mod_id, mod.name, e))
                continue
            (report.enabled if wanted else report.disabled).append(mod.mod_id)

        log.info(
            "Applied profile %r: %d enabled, %d disabled, %d unchanged, %d failed",
            profile.name,
            len(report.enabled),
            len(report.disabled),
            report.unchanged,
            len(report.failures),
        )
        return report

    @staticmethod
    def capture_live_mods_into_profile(mods: Iterable[ModLike]) -> set[int]:
        """Ids of all mods currently enabled on disk."""
        return {mod.mod_id for mod in mods if mod.is_enabled()}
