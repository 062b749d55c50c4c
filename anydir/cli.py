"""Command-line front door for anydir.

``ls`` and ``cat`` inspect an embedded (``--ct``) or runtime directory,
``freeze`` writes a frozen snapshot module, ``config`` edits persisted
settings.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .constructors import anydir_rt
from .dirs import AnyDir, CtDir
from .embed import embed_dir
from .errors import EmbedError, InvalidDataError
from .freeze import freeze_dir
from .highlight import render_text


def _open_dir(path: str, compile_time: bool) -> AnyDir:
    """Open ``path`` as an embedded snapshot or a runtime directory."""
    if not compile_time:
        return anydir_rt(path)
    try:
        return AnyDir(CtDir(embed_dir(path, package_root=Path.cwd())))
    except EmbedError as exc:
        raise SystemExit(str(exc)) from exc


def _cmd_ls(args: argparse.Namespace) -> None:
    for entry in _open_dir(args.path, args.ct).file_entries():
        sys.stdout.write(f"{entry}\n")


def _cmd_cat(args: argparse.Namespace) -> None:
    target = Path(args.file)
    directory = _open_dir(args.path, args.ct)
    entry = next((item for item in directory.file_entries() if item.path() == target), None)
    if entry is None:
        raise SystemExit(f"File not found in {args.path}: {target}")

    try:
        text = entry.read_string()
    except InvalidDataError as exc:
        raise SystemExit(f"{target}: invalid data (not UTF-8)") from exc
    except OSError as exc:
        raise SystemExit(f"{target}: {exc}") from exc

    style = args.style or config.load_style()
    color = not args.no_color and sys.stdout.isatty()
    sys.stdout.write(render_text(text, target, style=style, color=color))


def _cmd_freeze(args: argparse.Namespace) -> None:
    package_root = Path(args.package_root) if args.package_root else Path.cwd()
    try:
        output = freeze_dir(args.literal, Path(args.output), package_root=package_root)
    except EmbedError as exc:
        raise SystemExit(str(exc)) from exc
    sys.stdout.write(f"{output}\n")


def _cmd_config(args: argparse.Namespace) -> None:
    if args.action == "set-style":
        config.save_style(args.value)
    elif args.action == "set-token":
        if args.token is None:
            raise SystemExit("set-token requires NAME and VALUE.")
        config.save_token(args.value, args.token)
    else:
        sys.stdout.write(f"style: {config.load_style()}\n")
        for name, replacement in sorted(config.load_tokens().items()):
            sys.stdout.write(f"token {name}: {replacement}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="anydir",
        description="Inspect embedded or runtime directories and freeze directory snapshots.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    ls_parser = subparsers.add_parser("ls", help="List the files of a directory.")
    ls_parser.add_argument("path", help="Directory path (embed literal with --ct).")
    ls_parser.add_argument("--ct", action="store_true", help="Embed PATH instead of reading it at run time.")
    ls_parser.set_defaults(handler=_cmd_ls)

    cat_parser = subparsers.add_parser("cat", help="Print one file of a directory.")
    cat_parser.add_argument("path", help="Directory path (embed literal with --ct).")
    cat_parser.add_argument("file", help="File path relative to the directory.")
    cat_parser.add_argument("--ct", action="store_true", help="Embed PATH instead of reading it at run time.")
    cat_parser.add_argument("--style", default=None, help="Pygments style name (default from config).")
    cat_parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    cat_parser.set_defaults(handler=_cmd_cat)

    freeze_parser = subparsers.add_parser("freeze", help="Write a frozen snapshot module for a literal.")
    freeze_parser.add_argument("literal", help="Directory literal; $PACKAGE_ROOT and $ENV tokens allowed.")
    freeze_parser.add_argument("-o", "--output", required=True, help="Path of the module to write.")
    freeze_parser.add_argument(
        "--package-root",
        default=None,
        help="Directory substituted for $PACKAGE_ROOT (default: current directory).",
    )
    freeze_parser.set_defaults(handler=_cmd_freeze)

    config_parser = subparsers.add_parser("config", help="Show or edit persisted settings.")
    config_parser.add_argument("action", nargs="?", choices=("show", "set-style", "set-token"), default="show")
    config_parser.add_argument("value", nargs="?", default=None, help="Style name, or token name for set-token.")
    config_parser.add_argument("token", nargs="?", default=None, help="Token replacement for set-token.")
    config_parser.set_defaults(handler=_cmd_config)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the selected subcommand."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command == "config" and args.action != "show" and not args.value:
        raise SystemExit(f"{args.action} requires a value.")
    args.handler(args)
