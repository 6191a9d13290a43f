"""
Integration Tests: Mod discovery and sentinel toggling
"""

from pathlib import Path

import pytest

from icy_mod_manager.core.mod_manager import ModManager, ModRecord
from icy_mod_manager.utils.errors import InvalidModsPath

pytestmark = pytest.mark.integration


class TestModRecord:
    def test_sentinel_controls_enabled_flag(self, mods_dir):
        record = ModRecord.from_path(mods_dir / "alpha_10")
        assert record.is_enabled()

        record.set_enabled(False)
        assert (mods_dir / "alpha_10" / "disable.it").is_file()
        assert not record.is_enabled()

        record.set_enabled(True)
        assert not (mods_dir / "alpha_10" / "disable.it").exists()
        assert record.is_enabled()

    def test_set_enabled_is_idempotent(self, mods_dir):
        record = ModRecord.from_path(mods_dir / "alpha_10")
        record.set_enabled(True)
        record.set_enabled(True)
        record.set_enabled(False)
        record.set_enabled(False)
        assert not record.is_enabled()

    def test_metadata_fields(self, mods_dir):
        record = ModRecord.from_path(mods_dir / "bravo_20")
        assert record.mod_id == 20
        assert record.name == "Bravo"
        assert record.directory == "bravo_20"
        assert record.version == "1.0"

    def test_missing_id_rejected(self, tmp_path):
        (tmp_path / "metadata.xml").write_text(
            "<metadata><name>No Id</name></metadata>", encoding="utf-8"
        )
        with pytest.raises(ValueError):
            ModRecord.from_path(tmp_path)

    def test_invalid_xml_rejected(self, tmp_path):
        (tmp_path / "metadata.xml").write_text("<metadata><name>", encoding="utf-8")
        with pytest.raises(ValueError):
            ModRecord.from_path(tmp_path)


class TestScan:
    def test_scan_finds_mods_sorted_by_name(self, mods_dir):
        mods = ModManager().scan(mods_dir)
        assert [(m.mod_id, m.is_enabled()) for m in mods] == [
            (10, True),
            (20, False),
            (30, True),
        ]

    def test_broken_mods_are_skipped(self, mods_dir, make_mod):
        (mods_dir / "no_metadata").mkdir()
        broken = mods_dir / "broken"
        broken.mkdir()
        (broken / "metadata.xml").write_text("<metadata>", encoding="utf-8")
        (mods_dir / "loose_file.txt").write_text("ignored", encoding="utf-8")
        make_mod(mods_dir, "delta", 40, "Delta")

        mods = ModManager().scan(mods_dir)
        assert [m.mod_id for m in mods] == [10, 20, 30, 40]

    @pytest.mark.parametrize("path", [Path(""), Path("relative/mods")])
    def test_relative_path_rejected(self, path):
        with pytest.raises(InvalidModsPath):
            ModManager().scan(path)

    def test_missing_directory_rejected(self, tmp_path):
        with pytest.raises(InvalidModsPath):
            ModManager().scan(tmp_path / "nope")


class TestBatchToggles:
    def test_enable_all_and_disable_all(self, mods_dir):
        manager = ModManager()
        manager.scan(mods_dir)

        assert manager.enable_all() == []
        assert all(m.is_enabled() for m in manager.mods)

        assert manager.disable_all() == []
        assert not any(m.is_enabled() for m in manager.mods)

    def test_toggle_by_index(self, mods_dir):
        manager = ModManager()
        manager.scan(mods_dir)

        manager.set_mod_enabled(1, True)
        assert manager.mods[1].is_enabled()

    def test_unknown_index_ignored(self, mods_dir):
        manager = ModManager()
        manager.scan(mods_dir)
        assert manager.set_mod_enabled(42, False) == []

    def test_failures_are_collected(self, mods_dir, monkeypatch):
        manager = ModManager()
        manager.scan(mods_dir)
        victim = manager.mods[0]

        original = ModRecord.set_enabled

        def flaky(self, enabled):
            if self is victim:
                raise PermissionError(13, "Permission denied")
            original(self, enabled)

        monkeypatch.setattr(ModRecord, "set_enabled", flaky)
        failures = manager.disable_all()

        assert [f.mod_id for f in failures] == [victim.mod_id]
        assert not manager.mods[2].is_enabled()
