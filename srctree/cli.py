"""Command-line front door for srctree.

Parses CLI options on top of persisted config defaults, builds the tree, and
writes the rendered report to stdout. Fatal errors exit with a message;
per-entry problems are reported on stderr after the report.
"""

from __future__ import annotations

import argparse
import sys

from .config import load_defaults
from .errors import SrcTreeError
from .options import DEFAULT_DEPTH, build_tree_options
from .render import OUTPUT_FORMATS, render_tree
from .render.syntax import DEFAULT_STYLE
from .search.content import DEFAULT_MAX_SIZE

DESCRIPTION = "Maps and displays the source tree with filtering, sorting, and content matching."

EPILOG = """\
Type Filters:
  File Types:
    ext:EXTENSION   Show files with a specific extension (e.g., ext:py)
    group:GROUP     Show files from a specific group (e.g., group:web)
                    Groups: web, docs, images, code, config, data, script

  Special Types:
    binary          Show binary files
    text            Show text files
    dir             Show directories
    socket          Show sockets
    pipe            Show pipes
    executable      Show executable files
    symlink         Show symbolic links
    device          Show device files
    hidden          Show hidden files and directories
    empty           Show empty files and directories
    archive         Show archive files
    all             Show everything

Examples:
  srctree ./src
      Show top-level entries in ./src
  srctree -d 3 -t ext:py -c
      Show Python files 3 levels deep and include file contents
  srctree --sort date -t group:code
      Show code files sorted by modification date
  srctree -c -p "TODO" --highlight
      Show files containing "TODO" and highlight the matches
  srctree -t ext:py -t group:web ./src
      Python files OR files in the web group (repeat -t, no delimiter)
"""


def _non_negative_int(value: str) -> int:
    """argparse type for integers >= 0."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    parsed = _non_negative_int(value)
    if parsed == 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser(defaults: dict[str, object] | None = None) -> argparse.ArgumentParser:
    """Create the argument parser, seeding defaults from persisted config."""
    defaults = defaults or {}
    parser = argparse.ArgumentParser(
        prog="srctree",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("directory", nargs="?", default=".", help="Directory to start mapping from.")
    parser.add_argument(
        "-d",
        "--depth",
        type=_non_negative_int,
        default=defaults.get("depth", DEFAULT_DEPTH),
        help="Maximum directory depth (0 = unlimited).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        default=defaults.get("format", "markdown"),
        help="Output format: markdown or text.",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        action="append",
        default=[],
        metavar="NAME",
        help="Exclude directories or files by exact name (repeatable).",
    )
    parser.add_argument("-c", "--content", action="store_true", help="Show file contents in the tree.")
    parser.add_argument(
        "-s",
        "--max-size",
        type=_positive_int,
        default=defaults.get("max_size", DEFAULT_MAX_SIZE),
        help="Maximum file size in bytes for content display.",
    )
    parser.add_argument(
        "-t",
        "--type",
        dest="types",
        action="append",
        default=[],
        metavar="TYPE",
        help="Filter results by type (repeatable; filters are OR-ed).",
    )
    parser.add_argument("-p", "--pattern", default=None, help="Show only content matching a regular expression.")
    parser.add_argument(
        "--context",
        type=_non_negative_int,
        default=defaults.get("context", 0),
        help="Show N lines of context around matches.",
    )
    parser.add_argument("--whole-file", action="store_true", help="Show the entire file if any line matches.")
    parser.add_argument("--highlight", action="store_true", help="Highlight matching content.")
    parser.add_argument(
        "--sort",
        default=defaults.get("sort", "name"),
        metavar="KEY",
        help="Sort by: name, date, size, type, ext.",
    )
    parser.add_argument(
        "--direction",
        default=defaults.get("direction", "asc"),
        metavar="DIR",
        help="Sort direction: asc or desc.",
    )
    dirs_group = parser.add_mutually_exclusive_group()
    dirs_group.add_argument(
        "--dirs-first",
        dest="dirs_first",
        action="store_const",
        const=True,
        help="Show directories before other entries (default).",
    )
    dirs_group.add_argument(
        "--no-dirs-first",
        dest="dirs_first",
        action="store_const",
        const=False,
        help="Sort directories together with other entries.",
    )
    parser.set_defaults(dirs_first=defaults.get("dirs_first", True))
    parser.add_argument(
        "--style",
        default=defaults.get("style", DEFAULT_STYLE),
        help="Pygments style name for coloured text output.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, build the tree, and print the report.

    ``SrcTreeError`` (bad options, missing or unreadable root) exits with a
    message and status 1. Diagnostics never change the exit status.
    """
    defaults = load_defaults()
    parser = build_parser(defaults)
    args = parser.parse_args(argv)

    exclude = [*defaults.get("exclude", []), *args.exclude]
    try:
        options = build_tree_options(
            args.directory,
            depth=args.depth,
            exclude=exclude,
            types=args.types,
            show_content=args.content,
            max_size=args.max_size,
            pattern=args.pattern,
            context=args.context,
            whole_file=args.whole_file,
            highlight=args.highlight,
            sort=args.sort,
            direction=args.direction,
            dirs_first=args.dirs_first,
        )
        tree = options.build()
    except SrcTreeError as exc:
        raise SystemExit(f"Error: {exc}") from exc

    color = not args.no_color and sys.stdout.isatty()
    sys.stdout.write(
        render_tree(
            tree,
            output_format=args.format,
            color=color,
            style=args.style,
            options=options,
        )
    )
    sys.stdout.flush()
    for diagnostic in tree.diagnostics:
        sys.stderr.write(f"warning: {diagnostic}\n")


if __name__ == "__main__":
    main()
