"""Command-line interface."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Sequence

from librarian import logger
from librarian.core import Librarian
from librarian.options import LibOptions
from librarian.utils import path_exists

_CONFIG_SUBDIR = os.path.join(".config", "golibrarian")


def _add_common_flags(parser: argparse.ArgumentParser, *, suppress: bool) -> None:
    def default(value: object) -> object:
        return argparse.SUPPRESS if suppress else value

    parser.add_argument("-s", "--dbstore", action="store_true", default=default(False),
                        help="Store data in database")
    parser.add_argument("-v", "--cout", action="store_true", default=default(False),
                        help="Enable console output")
    parser.add_argument("--hwaccel", action="store_true", default=default(False),
                        help="Enable hardware acceleration")
    parser.add_argument("-f", "--format", default=default("table"),
                        help="Summary format")
    parser.add_argument("-d", "--dryrun", action="store_true", default=default(False),
                        help="Print actions that would be taken")


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``librarian`` command."""
    parser = argparse.ArgumentParser(
        prog="librarian",
        description="CLI tool to help you manage your library",
        epilog="This will help move and keep the integrity of many files",
    )
    _add_common_flags(parser, suppress=False)

    common = argparse.ArgumentParser(add_help=False)
    _add_common_flags(common, suppress=True)

    commands = parser.add_subparsers(dest="command")
    shelf = commands.add_parser("shelf", parents=[common],
                                help="verify and copy files into a directory")
    shelf.add_argument("paths", nargs="+", metavar="path",
                       help="source files followed by the destination directory")
    validate = commands.add_parser("validate", parents=[common],
                                   help="verify the integrity of files")
    validate.add_argument("paths", nargs="+", metavar="path", help="source files")
    return parser


def load_options(args: argparse.Namespace) -> LibOptions:
    """Build library options from parsed command-line flags."""
    return LibOptions(
        console_output=args.cout,
        use_hw_accel=args.hwaccel,
        format=args.format,
        dry_run=args.dryrun,
        db_store=args.dbstore,
    )


def ensure_config_dir(home: str | os.PathLike[str]) -> str:
    """Create the configuration directory under *home* if needed and return it.

    The parent ``.config`` directory must already exist.
    """
    config_dir = os.path.join(os.fspath(home), _CONFIG_SUBDIR)
    if not path_exists(config_dir):
        os.mkdir(config_dir)
    return config_dir


def main(argv: Sequence[str] | None = None) -> int:
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as exc:
        print(f"Failed to get user home dir: {exc}")
        return 1

    try:
        config_dir = ensure_config_dir(home)
    except OSError as exc:
        print(f"Failed to create config dir: {os.path.join(home, _CONFIG_SUBDIR)}\n{exc}")
        return 1

    logger.set_logpath(config_dir)

    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return 0 if exc.code in (0, None) else 1

    if args.command == "shelf" and len(args.paths) < 2:
        print("Error: requires at least two arguments: [source file] and dest", file=sys.stderr)
        return 1

    if args.command is None:
        parser.print_help()
        return 0

    options = load_options(args)
    try:
        librarian = Librarian(options)
    except OSError as exc:
        logger.log(logging.CRITICAL, f"Failed to create librarian: {exc}")
        return 1

    if args.command == "shelf":
        *sources, dest = args.paths
        librarian.move_files(sources, dest)
    else:
        librarian.validate_files(args.paths)
    return 0


if __name__ == "__main__":
    sys.exit(main())