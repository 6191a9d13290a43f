import argparse
import logging
from pathlib import Path

from icy_mod_manager import APP_NAME
from icy_mod_manager.core.mod_manager import ModManager
from icy_mod_manager.core.paths import get_config_dir, get_settings_file
from icy_mod_manager.core.profiles import ProfileStore
from icy_mod_manager.core.settings import SettingsManager
from icy_mod_manager.domain import intents
from icy_mod_manager.domain.models import DEFAULT_PROFILE_ID
from icy_mod_manager.ui.app_controller import AppController

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="icy-mod-manager", description=APP_NAME)
    parser.add_argument(
        "--config-dir", type=Path, help="Override the configuration directory"
    )
    sections = parser.add_subparsers(dest="section", required=True)

    profiles = sections.add_parser("profiles", help="Manage mod profiles")
    profile_cmds = profiles.add_subparsers(dest="command", required=True)
    profile_cmds.add_parser("list", help="List saved profiles")
    create = profile_cmds.add_parser("create", help="Create an empty profile")
    create.add_argument("name")
    delete = profile_cmds.add_parser("delete", help="Delete a profile")
    delete.add_argument("profile_id", type=int)
    rename = profile_cmds.add_parser("rename", help="Rename a profile")
    rename.add_argument("profile_id", type=int)
    rename.add_argument("name")
    apply = profile_cmds.add_parser("apply", help="Enable exactly a profile's mods")
    apply.add_argument("profile_id", type=int)
    capture = profile_cmds.add_parser(
        "capture", help="Store the currently enabled mods in a profile"
    )
    capture.add_argument("profile_id", type=int)

    mods = sections.add_parser("mods", help="Inspect and toggle mods")
    mod_cmds = mods.add_subparsers(dest="command", required=True)
    mod_cmds.add_parser("list", help="List discovered mods")
    enable = mod_cmds.add_parser("enable", help="Enable a mod by id")
    enable.add_argument("mod_id", type=int)
    disable = mod_cmds.add_parser("disable", help="Disable a mod by id")
    disable.add_argument("mod_id", type=int)
    mod_cmds.add_parser("enable-all", help="Enable every mod")
    mod_cmds.add_parser("disable-all", help="Disable every mod")

    config = sections.add_parser("config", help="Application settings")
    config_cmds = config.add_subparsers(dest="command", required=True)
    config_cmds.add_parser("show", help="Show current settings")
    set_path = config_cmds.add_parser("set-mods-path", help="Set the game mods folder")
    set_path.add_argument("path", type=Path)

    return parser


def build_controller(config_dir: Path | None) -> AppController:
    """Wire up the store, settings and mod manager for one CLI run."""
    config_dir = config_dir or get_config_dir()
    if config_dir is None:
        log.warning("No configuration directory found; changes will not persist")
    settings_manager = SettingsManager(get_settings_file(config_dir) if config_dir else None)
    store = ProfileStore.load_or_default(config_dir)
    controller = AppController(store, settings_manager, ModManager(), config_dir)
    controller.failuresReported.connect(_print_failures)
    controller.saveFailed.connect(lambda msg: print(f"Save failed: {msg}"))
    controller.modsPathInvalid.connect(lambda msg: print(f"Error: {msg}"))
    return controller


def run_cli(argv: list[str] | None = None) -> int:
    """
    Parse arguments and run a single command.

    Returns:
        Process exit code, 0 on success
    """
    args = build_parser().parse_args(argv)
    controller = build_controller(args.config_dir)
    handler = _COMMANDS[(args.section, args.command)]
    return 0 if handler(controller, args) else 1


def _print_failures(failures) -> None:
    for failure in failures:
        print(f"Failed to toggle {failure}")


def _select(controller: AppController, profile_id: int) -> bool:
    if profile_id == DEFAULT_PROFILE_ID or profile_id not in controller.store:
        print(f"No profile with id {profile_id}")
        return False
    return controller.dispatch(intents.SelectProfile(profile_id))


def _profiles_list(controller: AppController, args) -> bool:
    for summary in controller.store.profile_summaries:
        if summary.id == DEFAULT_PROFILE_ID:
            continue
        profile = controller.store.get_profile(summary.id)
        print(f"{summary.id}\t{summary.name}\t{len(profile.enabled_mods)} mods")
    return True


def _profiles_create(controller: AppController, args) -> bool:
    ok = controller.dispatch(intents.CreateProfile(args.name))
    print(f"Created profile {controller.store.current_profile_id}: {args.name}")
    return ok


def _profiles_delete(controller: AppController, args) -> bool:
    if not _select(controller, args.profile_id):
        return False
    return controller.dispatch(intents.DeleteCurrentProfile())


def _profiles_rename(controller: AppController, args) -> bool:
    if not _select(controller, args.profile_id):
        return False
    return controller.dispatch(intents.RenameCurrentProfile(args.name))


def _profiles_apply(controller: AppController, args) -> bool:
    if not _select(controller, args.profile_id):
        return False
    if not controller.dispatch(intents.RefreshMods()):
        return False
    return controller.dispatch(intents.LoadProfile())


def _profiles_capture(controller: AppController, args) -> bool:
    if not _select(controller, args.profile_id):
        return False
    if not controller.dispatch(intents.RefreshMods()):
        return False
    return controller.dispatch(intents.SaveProfile())


def _mods_list(controller: AppController, args) -> bool:
    if not controller.dispatch(intents.RefreshMods()):
        return False
    for mod in controller.mod_manager.mods:
        mark = "x" if mod.is_enabled() else " "
        print(f"[{mark}] {mod.mod_id}\t{mod.name}")
    return True


def _set_mod(controller: AppController, mod_id: int, enabled: bool) -> bool:
    if not controller.dispatch(intents.RefreshMods()):
        return False
    indexes = [
        i for i, mod in enumerate(controller.mod_manager.mods) if mod.mod_id == mod_id
    ]
    if not indexes:
        print(f"No mod with id {mod_id}")
        return False
    ok = True
    for index in indexes:
        ok = controller.dispatch(intents.ToggleMod(index, enabled)) and ok
    return ok


def _mods_enable(controller: AppController, args) -> bool:
    return _set_mod(controller, args.mod_id, True)


def _mods_disable(controller: AppController, args) -> bool:
    return _set_mod(controller, args.mod_id, False)


def _mods_enable_all(controller: AppController, args) -> bool:
    if not controller.dispatch(intents.RefreshMods()):
        return False
    return controller.dispatch(intents.EnableAll())


def _mods_disable_all(controller: AppController, args) -> bool:
    if not controller.dispatch(intents.RefreshMods()):
        return False
    return controller.dispatch(intents.DisableAll())


def _config_show(controller: AppController, args) -> bool:
    settings_file = controller.settings_manager.settings_file
    print(f"config file: {settings_file if settings_file else '<unavailable>'}")
    for key, value in controller.settings_manager.get_all_settings().items():
        print(f"{key}: {value}")
    return True


def _config_set_mods_path(controller: AppController, args) -> bool:
    return controller.dispatch(intents.SetModsPath(args.path.expanduser()))


_COMMANDS = {
    ("profiles", "list"): _profiles_list,
    ("profiles", "create"): _profiles_create,
    ("profiles", "delete"): _profiles_delete,
    ("profiles", "rename"): _profiles_rename,
    ("profiles", "apply"): _profiles_apply,
    ("profiles", "capture"): _profiles_capture,
    ("mods", "list"): _mods_list,
    ("mods", "enable"): _mods_enable,
    ("mods", "disable"): _mods_disable,
    ("mods", "enable-all"): _mods_enable_all,
    ("mods", "disable-all"): _mods_disable_all,
    ("config", "show"): _config_show,
    ("config", "set-mods-path"): _config_set_mods_path,
}
