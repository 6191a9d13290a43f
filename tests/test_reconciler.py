"""
Unit Tests: ModStateReconciler
"""

import pytest

from icy_mod_manager.core.mod_manager import ModManager
from icy_mod_manager.core.profiles import ModStateReconciler
from icy_mod_manager.domain.models import Profile
from icy_mod_manager.utils.errors import PerModIoFailure

pytestmark = pytest.mark.unit


class TestApplyProfile:
    @pytest.mark.parametrize("initial", [True, False])
    def test_live_state_matches_profile(self, fake_mod, initial):
        mods = [fake_mod(10, initial), fake_mod(20, initial), fake_mod(30, initial)]

        report = ModStateReconciler.apply_profile_to_live_mods(
            Profile("Boss Rush", {10, 30}), mods
        )

        assert {m.mod_id: m.is_enabled() for m in mods} == {10: True, 20: False, 30: True}
        assert report.ok

    def test_unchanged_mods_are_not_touched(self, fake_mod):
        mods = [fake_mod(10, True), fake_mod(20, False)]
        report = ModStateReconciler.apply_profile_to_live_mods(Profile("p", {10}), mods)

        assert [m.set_calls for m in mods] == [0, 0]
        assert report.unchanged == 2

    def test_report_lists_changes(self, fake_mod):
        mods = [fake_mod(10, False), fake_mod(20, True)]
        report = ModStateReconciler.apply_profile_to_live_mods(Profile("p", {10}), mods)
        assert report.enabled == [10]
        assert report.disabled == [20]

    def test_failure_does_not_abort_batch(self, fake_mod):
        mods = [fake_mod(10, False, fail=True), fake_mod(20, True), fake_mod(30, False)]

        report = ModStateReconciler.apply_profile_to_live_mods(Profile("p", {10, 30}), mods)

        assert not report.ok
        assert len(report.failures) == 1
        failure = report.failures[0]
        assert isinstance(failure, PerModIoFailure)
        assert failure.mod_id == 10
        assert isinstance(failure.cause, PermissionError)
        assert mods[1].is_enabled() is False
        assert mods[2].is_enabled() is True

    def test_empty_profile_disables_everything(self, fake_mod):
        mods = [fake_mod(1), fake_mod(2)]
        ModStateReconciler.apply_profile_to_live_mods(Profile("none"), mods)
        assert not any(m.is_enabled() for m in mods)

    def test_duplicate_ids_follow_the_same_flag(self, fake_mod):
        mods = [fake_mod(7, False), fake_mod(7, False)]
        ModStateReconciler.apply_profile_to_live_mods(Profile("p", {7}), mods)
        assert all(m.is_enabled() for m in mods)

    def test_apply_on_disk(self, mods_dir):
        mods = ModManager().scan(mods_dir)
        ModStateReconciler.apply_profile_to_live_mods(Profile("p", {20}), mods)

        assert not (mods_dir / "bravo_20" / "disable.it").exists()
        assert (mods_dir / "alpha_10" / "disable.it").exists()
        assert (mods_dir / "charlie_30" / "disable.it").exists()


class TestCaptureLiveMods:
    def test_capture_returns_enabled_ids(self, fake_mod):
        mods = [fake_mod(10, True), fake_mod(20, False), fake_mod(30, True)]
        assert ModStateReconciler.capture_live_mods_into_profile(mods) == {10, 30}

    def test_capture_performs_no_writes(self, fake_mod):
        mods = [fake_mod(10, True), fake_mod(20, False)]
        ModStateReconciler.capture_live_mods_into_profile(mods)
        assert [m.set_calls for m in mods] == [0, 0]

    def test_capture_on_disk(self, mods_dir):
        mods = ModManager().scan(mods_dir)
        assert ModStateReconciler.capture_live_mods_into_profile(mods) == {10, 30}

    def test_capture_empty(self):
        assert ModStateReconciler.capture_live_mods_into_profile([]) == set()
