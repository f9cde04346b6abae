"""Command-line front door for lazyls.

Parses ``ls``-style flags, resolves persisted defaults, terminal width, and
the color environment, then renders every path argument in one buffered
pass before writing to stdout.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from collections.abc import Sequence

from . import config
from .colors import color_map_from_environment
from .errors import ListingError
from .fs import FilesystemSource
from .options import Options
from .pipeline import RenderContext, render_paths
from .principals import load_group_table, load_owner_table

PROG = "lazyls"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _default_terminal_width() -> int:
    """Resolve listing width from the current terminal size."""
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def build_parser() -> argparse.ArgumentParser:
    # -h is human-readable sizes, so argparse's own help flag is disabled.
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="List directory contents in ls-style grid, single-column, or long layouts.",
        add_help=False,
    )
    parser.add_argument("paths", nargs="*", metavar="PATH", help="Files or directories to list. Defaults to '.'.")
    parser.add_argument("-a", dest="show_all", action="store_true", help="Include dotfiles plus '.' and '..'.")
    parser.add_argument("-l", dest="long_format", action="store_true", help="Use the long listing format.")
    parser.add_argument("-1", dest="single_column", action="store_true", help="List one entry per line.")
    parser.add_argument("-h", dest="human_sizes", action="store_true", help="Human-readable sizes (with -l).")
    parser.add_argument(
        "-d",
        dest="treat_dirs_as_files",
        action="store_true",
        help="List directory arguments themselves, not their contents.",
    )
    parser.add_argument("-r", dest="reverse_sort", action="store_true", help="Reverse the sort order.")
    parser.add_argument("-t", dest="sort_by_time", action="store_true", help="Sort by modification time, newest first.")
    parser.add_argument("-S", dest="sort_by_size", action="store_true", help="Sort by size, largest first.")
    parser.add_argument(
        "--dirs-first",
        dest="dirs_first",
        action="store_const",
        const=True,
        default=None,
        help="Group directories before files.",
    )
    parser.add_argument("--color", dest="color", action="store_const", const=True, default=None, help="Force color output.")
    parser.add_argument("--nocolor", dest="color", action="store_const", const=False, help="Disable color output.")
    parser.add_argument("-w", "--width", type=_positive_int, default=None, help="Output width in columns.")
    parser.add_argument("--debug", action="store_true", help="Log diagnostics to stderr.")
    parser.add_argument("--help", dest="help", action="store_true", help="Show this help and exit.")
    return parser


def options_from_args(args: argparse.Namespace) -> Options:
    """Merge parsed flags over persisted config defaults.

    Color is on unless ``--nocolor`` or the config turns it off; explicit
    flags always win over config values.
    """
    color = args.color
    if color is None:
        color = config.load_color_default()
    dirs_first = args.dirs_first
    if dirs_first is None:
        dirs_first = config.load_dirs_first_default()
    width = args.width if args.width is not None else config.load_width_default()
    return Options(
        show_all=args.show_all,
        long_format=args.long_format,
        single_column=args.single_column,
        human_sizes=args.human_sizes,
        treat_dirs_as_files=args.treat_dirs_as_files,
        use_color=True if color is None else color,
        reverse_sort=args.reverse_sort,
        sort_by_time=args.sort_by_time,
        sort_by_size=args.sort_by_size,
        dirs_first=dirs_first,
        help=args.help,
        width=width,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments and print the listing.

    Fatal listing errors exit with status 1 and a single message on stderr;
    no listing text is written in that case.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(name)s: %(message)s",
    )
    options = options_from_args(args)
    if options.help:
        sys.stdout.write(parser.format_help())
        return

    context = RenderContext(
        options=options,
        source=FilesystemSource(),
        terminal_width=options.width or _default_terminal_width(),
        color_map=color_map_from_environment() if options.use_color else None,
        owner_table=load_owner_table(),
        group_table=load_group_table(),
    )
    try:
        output = render_paths(context, args.paths)
    except ListingError as exc:
        raise SystemExit(f"{PROG}: {exc}") from exc
    if output:
        sys.stdout.write(output + "\n")


if __name__ == "__main__":
    main()
