"""ansiform CLI entry point.

Wraps text read from a file (or standard input) to the terminal. Allows
running via `python -m ansiform` and provides the console script defined in
`pyproject.toml`.
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from importlib import metadata
from typing import Any, Dict, List, Optional

from . import columns
from .codes import STYLE_CODES
from .config import ConfigurationError
from .layout import transform, wrap_to_string


def _version() -> str:
    try:
        return metadata.version("ansiform")
    except metadata.PackageNotFoundError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ansiform",
        description="Wrap, justify and lay out (optionally ANSI-styled) text.",
    )
    parser.add_argument("file", nargs="?", help="file to read; standard input when omitted or '-'")
    parser.add_argument("-w", "--width", type=int, help="output width (default: terminal width)")
    parser.add_argument("-j", "--justify", action="store_true", help="justify wrapped lines")
    parser.add_argument("--indent", dest="first_line_indent", help="first line indent")
    parser.add_argument("--hanging-indent", help="indent for every line after the first")
    parser.add_argument("--padding-left", help="text inserted at the start of every line")
    parser.add_argument("--padding-right", help="text appended to every line")
    parser.add_argument("--filler", help="text repeated to pad lines to full width")
    parser.add_argument("--hard-break", help="marker appended where a long word is split")
    parser.add_argument(
        "--color",
        dest="styling",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="keep or strip styling (default: keep when writing to a terminal)",
    )
    parser.add_argument(
        "--columns",
        type=int,
        default=1,
        metavar="N",
        help="spread paragraphs (separated by blank lines) over N columns",
    )
    parser.add_argument("--list-codes", action="store_true", help="list the known style codes and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug information")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {_version()}")
    return parser


def list_codes() -> List[str]:
    """One line per registered style code: the code and its dotted name."""
    rows = []
    for group, names in STYLE_CODES.items():
        for name, code in names.items():
            rows.append(f"{code:>4}  {group}.{name}")
    return rows


def layout_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Collect the layout options given on the command line."""
    values = {
        "width": args.width,
        "justify": True if args.justify else None,
        "first_line_indent": args.first_line_indent,
        "hanging_indent": args.hanging_indent,
        "padding_left": args.padding_left,
        "padding_right": args.padding_right,
        "filler": args.filler,
        "hard_break": args.hard_break,
        "styling": args.styling,
    }
    return {name: value for name, value in values.items() if value is not None}


def split_paragraphs(text: str, count: int) -> List[str]:
    """Deal paragraphs round-robin into ``count`` column texts."""
    paragraphs = [p for p in re.split(r"\n[ \t]*\n", text.strip("\n")) if p.strip()]
    buckets: List[List[str]] = [[] for _ in range(count)]
    for index, paragraph in enumerate(paragraphs):
        buckets[index % count].append(paragraph)
    return ["\n\n".join(bucket) for bucket in buckets]


def _read_input(path: Optional[str]) -> str:
    if path is None or path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.columns < 1:
        parser.error("--columns must be at least 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    if args.list_codes:
        print("\n".join(list_codes()))
        return 0

    try:
        text = _read_input(args.file)
    except (OSError, UnicodeDecodeError) as e:
        print(f"ansiform: cannot read {args.file}: {e}", file=sys.stderr)
        return 1

    text = transform(text)
    overrides = layout_overrides(args)
    try:
        if args.columns > 1:
            output = columns.wrap(split_paragraphs(text, args.columns), **overrides)
        else:
            output = wrap_to_string(text, **overrides)
    except ConfigurationError as e:
        print(f"ansiform: {e}", file=sys.stderr)
        return 2

    print(output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
