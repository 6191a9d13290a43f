from __future__ import annotations

from typing import Mapping

from icy_mod_manager.domain.models import (
    DEFAULT_PROFILE_ID,
    DEFAULT_SUMMARY,
    Profile,
    ProfileSummary,
)


class ProfileSelection:
    """
    Current selection plus the list of selectable profile summaries.

    Holds no profile content; ``rebuild`` derives everything from the
    store's mapping, which stays the source of truth.
    """

    def __init__(self):
        self.current_profile_id: int = DEFAULT_PROFILE_ID
        self.summaries: list[ProfileSummary] = [DEFAULT_SUMMARY]
        self.current: ProfileSummary = DEFAULT_SUMMARY

    def rebuild(self, profiles: Mapping[int, Profile]) -> None:
        """Recompute summaries (default entry first, then ascending id)."""
        self.summaries = [DEFAULT_SUMMARY] + [
            ProfileSummary(profile_id, profiles[profile_id].name)
            for profile_id in sorted(profiles)
        ]
        self.refresh_current()

    def refresh_current(self) -> None:
        for summary in self.summaries:
            if summary.id == self.current_profile_id:
                self.current = summary
                return
        self.current = DEFAULT_SUMMARY
