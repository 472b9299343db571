"""
Melon Client command-line front-end.

Commands:
    info     Show detected memory, game directory and versions
    login    Obtain a (placeholder) Microsoft profile
    launch   Start the game
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, get_args

from melon_client import __version__
from melon_client.launching import (
    PlaceholderAuthenticator,
    VersionRegistry,
    launch,
    load_profile,
    prepare_launch,
    save_profile,
)
from melon_client.launching.launcher import resolve_install_root
from melon_client.launching.auth import DEFAULT_PROFILE_PATH
from melon_client.utils import config_store as keys
from melon_client.utils.config_store import DEFAULT_CONFIG_PATH, ConfigStore
from melon_client.utils.data_model import GameType, LaunchRequest, LoginMode
from melon_client.utils.exceptions import LauncherError
from melon_client.utils.monitoring import DEFAULT_LOG_FILE, get_logger, setup_logging
from melon_client.utils.resources import get_resource_budget

logger = get_logger(__name__)

DEFAULT_VERSIONS_FILE = Path("versions.json")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="melon-client", description="Melon Client launcher")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="preferences file")
    parser.add_argument("--versions", type=Path, default=DEFAULT_VERSIONS_FILE,
                        help="version overrides file")
    parser.add_argument("--log-file", type=Path, default=DEFAULT_LOG_FILE)
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("info", help="show detected memory, game directory and versions")

    login_p = sub.add_parser("login", help="log in with Microsoft (placeholder)")
    login_p.add_argument("--profile", type=Path, default=DEFAULT_PROFILE_PATH)

    launch_p = sub.add_parser("launch", help="start the game")
    launch_p.add_argument("--mode", choices=get_args(LoginMode))
    launch_p.add_argument("--username")
    launch_p.add_argument("--game-type", choices=get_args(GameType))
    launch_p.add_argument("--ram", type=int, help="memory in GiB")
    launch_p.add_argument("--profile", type=Path, default=DEFAULT_PROFILE_PATH)
    launch_p.add_argument("--game-dir", type=Path)
    launch_p.add_argument("--dry-run", action="store_true", help="print the command without starting it")
    return parser


def _configured_ram(config: ConfigStore, max_ram: int) -> int:
    raw = config.get(keys.KEY_RAM, "")
    try:
        return int(raw)
    except ValueError:
        if raw:
            logger.warning(f"Ignoring invalid stored RAM value: {raw!r}")
        return min(4, max_ram)


def _cmd_info(config: ConfigStore, registry: VersionRegistry) -> int:
    print(f"Maximum RAM: {get_resource_budget()} GiB")
    print(f"Game directory: {resolve_install_root(config)}")
    for game_type, version_id in registry.list_versions().items():
        print(f"  {game_type:<8} {version_id}")
    return 0


def _cmd_login(args, config: ConfigStore) -> int:
    profile = PlaceholderAuthenticator().login()
    try:
        save_profile(args.profile, profile)
    except OSError as e:
        logger.error(f"Could not save profile to {args.profile}: {e}")
        print(f"Login failed: could not write {args.profile}", file=sys.stderr)
        return 1
    config.set(keys.KEY_LOGIN_TYPE, 'authenticated')
    config.flush()
    print(f"Logged in as {profile.name} (placeholder profile)")
    return 0


def _cmd_launch(args, config: ConfigStore, registry: VersionRegistry) -> int:
    max_ram = get_resource_budget()
    login_mode = args.mode or config.get(keys.KEY_LOGIN_TYPE, 'offline')
    if login_mode not in get_args(LoginMode):
        logger.warning(f"Unknown stored login type {login_mode!r}, using offline")
        login_mode = 'offline'
    game_type = args.game_type or config.get(keys.KEY_GAME_TYPE, 'vanilla')
    if game_type not in get_args(GameType):
        game_type = 'vanilla'
    ram = args.ram if args.ram is not None else _configured_ram(config, max_ram)

    request = LaunchRequest(
        login_mode=login_mode,
        username=args.username if args.username is not None else config.get(keys.KEY_OFFLINE_USERNAME, ""),
        game_type=game_type,
        memory_gb=ram,
    )
    profile = load_profile(args.profile) if login_mode == 'authenticated' else None
    options = dict(
        config=config,
        registry=registry,
        max_memory_gb=max_ram,
        authenticated_profile=profile,
        install_root=args.game_dir,
    )

    if args.dry_run:
        plan = prepare_launch(request, **options)
        print(" ".join(plan.command))
        return 0

    result = launch(request, **options)
    print(f"Launching Minecraft ({game_type.capitalize()})... PID {result.pid}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(
        log_level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
        console=True,
    )
    logger.info("Melon Launcher starting up.")

    config = ConfigStore(args.config)
    config.load()
    registry = VersionRegistry(args.versions)

    try:
        if args.command == "info":
            return _cmd_info(config, registry)
        if args.command == "login":
            return _cmd_login(args, config)
        return _cmd_launch(args, config, registry)
    except LauncherError as e:
        logger.error(f"Launch aborted: {e}")
        print(str(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
