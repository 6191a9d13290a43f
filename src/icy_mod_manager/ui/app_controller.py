from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QObject, Signal

from icy_mod_manager.core.mod_manager import ModManager
from icy_mod_manager.core.profiles import ModStateReconciler, ProfileStore
from icy_mod_manager.core.settings import SettingsManager
from icy_mod_manager.domain import intents
from icy_mod_manager.utils.errors import InvalidModsPath, PerModIoFailure, SaveError

log = logging.getLogger(__name__)


class AppController(QObject):
    """
    Single entry point for user intents coming from a front end.

    Owns no globals: the profile store, settings and mod manager are handed
    in and mutated only through the handlers below. After every intent the
    current profile summaries and selection are emitted for rendering.
    """

    profilesChanged = Signal(object, object)  # summaries, current summary
    modsChanged = Signal(object)
    failuresReported = Signal(object)  # list[PerModIoFailure]
    saveFailed = Signal(str)
    modsPathInvalid = Signal(str)

    def __init__(
        self,
        store: ProfileStore,
        settings_manager: SettingsManager,
        mod_manager: ModManager,
        config_dir: Path | None = None,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self.store = store
        self.settings_manager = settings_manager
        self.mod_manager = mod_manager
        self.config_dir = config_dir
        self._handlers = {
            intents.CreateProfile: self._on_create_profile,
            intents.DeleteCurrentProfile: self._on_delete_current_profile,
            intents.SelectProfile: self._on_select_profile,
            intents.RenameCurrentProfile: self._on_rename_current_profile,
            intents.LoadProfile: self._on_load_profile,
            intents.SaveProfile: self._on_save_profile,
            intents.RefreshMods: self._on_refresh_mods,
            intents.ToggleMod: self._on_toggle_mod,
            intents.EnableAll: self._on_enable_all,
            intents.DisableAll: self._on_disable_all,
            intents.SetModsPath: self._on_set_mods_path,
        }

    def dispatch(self, intent) -> bool:
        """
        Route an intent to its handler.

        Returns:
            False if the intent reported any failure, True otherwise
        """
        handler = self._handlers.get(type(intent))
        if handler is None:
            raise TypeError(f"Unsupported intent: {intent!r}")
        ok = handler(intent)
        self.profilesChanged.emit(self.store.profile_summaries, self.store.current_summary)
        return ok

    # ---- profile intents -------------------------------------------------

    def _on_create_profile(self, intent: intents.CreateProfile) -> bool:
        self.store.create_profile(intent.name)
        return self._persist()

    def _on_delete_current_profile(self, intent: intents.DeleteCurrentProfile) -> bool:
        if self.store.delete_current_profile() is None:
            return True
        return self._persist()

    def _on_select_profile(self, intent: intents.SelectProfile) -> bool:
        return self.store.select(intent.profile_id)

    def _on_rename_current_profile(self, intent: intents.RenameCurrentProfile) -> bool:
        if self.store.get_current_profile() is None:
            return False
        self.store.rename_current_profile(intent.name)
        return self._persist()

    def _on_load_profile(self, intent: intents.LoadProfile) -> bool:
        profile = self.store.get_current_profile()
        if profile is None:
            log.debug("No profile selected, leaving mods untouched")
            return True
        report = ModStateReconciler.apply_profile_to_live_mods(
            profile, self.mod_manager.mods
        )
        self.modsChanged.emit(self.mod_manager.mods)
        return self._report_failures(report.failures)

    def _on_save_profile(self, intent: intents.SaveProfile) -> bool:
        if self.store.get_current_profile() is None:
            log.debug("No profile selected, nothing to save")
            return True
        enabled = ModStateReconciler.capture_live_mods_into_profile(self.mod_manager.mods)
        self.store.update_current_profile(enabled)
        return self._persist()

    # ---- mod intents -----------------------------------------------------

    def _on_refresh_mods(self, intent: intents.RefreshMods) -> bool:
        try:
            self.mod_manager.scan(self.settings_manager.get_mods_path())
        except InvalidModsPath as e:
            log.error("%s", e)
            self.mod_manager.mods = []
            self.modsChanged.emit(self.mod_manager.mods)
            self.modsPathInvalid.emit(str(e))
            return False
        self.modsChanged.emit(self.mod_manager.mods)
        return True

    def _on_toggle_mod(self, intent: intents.ToggleMod) -> bool:
        failures = self.mod_manager.set_mod_enabled(intent.index, intent.enabled)
        self.modsChanged.emit(self.mod_manager.mods)
        return self._report_failures(failures)

    def _on_enable_all(self, intent: intents.EnableAll) -> bool:
        failures = self.mod_manager.enable_all()
        self.modsChanged.emit(self.mod_manager.mods)
        return self._report_failures(failures)

    def _on_disable_all(self, intent: intents.DisableAll) -> bool:
        failures = self.mod_manager.disable_all()
        self.modsChanged.emit(self.mod_manager.mods)
        return self._report_failures(failures)

    def _on_set_mods_path(self, intent: intents.SetModsPath) -> bool:
        if not self.settings_manager.set_mods_path(intent.path):
            self.saveFailed.emit("Could not save settings")
            return False
        return self._on_refresh_mods(intents.RefreshMods())

    # ---- helpers ---------------------------------------------------------

    def _persist(self) -> bool:
        try:
            self.store.save(self.config_dir)
        except SaveError as e:
            log.error("Failed to save profiles: %s", e)
            self.saveFailed.emit(str(e))
            return False
        return True

    def _report_failures(self, failures: list[PerModIoFailure]) -> bool:
        if failures:
            self.failuresReported.emit(failures)
            return False
        return True
