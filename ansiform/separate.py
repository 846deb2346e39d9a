"""Separate SGR directives from the text they style.

The result is the plain text plus a list of style changes, each giving the
full set of active codes from a plain-text offset onwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, NamedTuple, Tuple

from .ansi import SGR_RE, adjust, clear_defaults, parse_params


@dataclass(frozen=True)
class StyleChange:
    """The active codes from ``position`` in the plain text onwards."""
    position: int
    codes: Tuple[int, ...]


class SeparatedText(NamedTuple):
    value: str
    changes: List[StyleChange]


def split_styles(text: str) -> SeparatedText:
    """Strip SGR directives from ``text`` and record where styles change.

    Directives that follow each other with no text in between collapse into
    one change. A directive that follows text starts from the previous
    active codes minus their default (off) codes, so an old "bold off" does
    not linger in the new set.
    """
    pieces: List[str] = []
    # [position, codes] pairs, frozen into StyleChange once complete
    pending: List[list] = []
    active: List[int] = []
    cursor = 0
    last_end = 0

    for match in SGR_RE.finditer(text):
        before = text[last_end:match.start()]
        pieces.append(before)
        cursor += len(before)
        incoming = parse_params(match.group(1))

        if pending and pending[-1][0] == cursor:
            pending[-1][1] = adjust(pending[-1][1], incoming)
        else:
            pending.append([cursor, adjust(clear_defaults(active), incoming)])

        active = pending[-1][1]
        last_end = match.end()

    pieces.append(text[last_end:])
    changes = [StyleChange(position, tuple(codes)) for position, codes in pending]
    return SeparatedText("".join(pieces), changes)


def strip_styles(text: str) -> str:
    """Return ``text`` without its SGR directives."""
    return SGR_RE.sub("", text)
