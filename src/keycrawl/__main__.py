from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .app import run_gui, run_headless
from .config import Settings
from .exceptions import ConfigError
from .logging_config import configure_logging, level_for_verbosity

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="keycrawl",
        description="Keycrawl - explore a procedurally generated dungeon, collect keys, reach the end",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--gui", action="store_true", help="Play in an Arcade window (default)")
    mode.add_argument("--headless", action="store_true", help="Play in the console (reads commands from stdin)")
    parser.add_argument("--config", type=Path, default=None, help="YAML settings file merged over the defaults")
    parser.add_argument("--seed", default=None, help="Master seed; the same seed gives the same dungeons")
    parser.add_argument("--debug", action="store_true", help="Reveal every room, connection and room id")
    parser.add_argument("--width", type=int, default=None, help="Dungeon width in rooms")
    parser.add_argument("--height", type=int, default=None, help="Dungeon height in rooms")
    parser.add_argument("--critical-path-length", type=int, default=None, help="Rooms from start to end")
    parser.add_argument("--bonus-keys", type=int, default=None, help="Extra key/lock pairs on bonus branches")
    parser.add_argument("--no-bonus-paths", action="store_true", help="Only generate the critical path")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    return parser


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> None:
    # Honor CLI over file and env settings
    if args.seed is not None:
        settings.seed = args.seed
    if args.debug:
        settings.display.debug = True
    dungeon = settings.dungeon
    if args.width is not None:
        dungeon.width = args.width
    if args.height is not None:
        dungeon.height = args.height
    if args.critical_path_length is not None:
        dungeon.critical_path_length = args.critical_path_length
    if args.bonus_keys is not None:
        dungeon.num_bonus_keys = args.bonus_keys
    if args.no_bonus_paths:
        dungeon.bonus_paths = False
    dungeon.validate()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level_for_verbosity(args.verbose))

    try:
        settings = Settings.load(args.config)
        _apply_overrides(settings, args)
    except ConfigError as exc:
        logger.error("%s", exc)
        print(f"keycrawl: {exc}", file=sys.stderr)
        return 2

    if args.headless:
        return run_headless(settings, sys.stdin, sys.stdout)
    return run_gui(settings)


if __name__ == "__main__":
    sys.exit(main())
