"""Display width measurement for styled text.

Widths come from wcwidth, so wide (CJK) characters take two columns and
combining or zero-width characters take none. SGR directives take no
columns at all.
"""

from typing import Mapping, Optional

import wcwidth

from .ansi import SGR_RE
from .constants import LayoutConstants


def char_width(ch: str, widths: Optional[Mapping[str, int]] = None) -> int:
    """Return the number of terminal columns one character occupies.

    Args:
        ch: A single character
        widths: Per-character overrides; defaults to
            ``LayoutConstants.CHARACTER_WIDTHS``

    Returns:
        Column count. Non-printable characters (newline, tab) count as 0.
    """
    if widths is None:
        widths = LayoutConstants.CHARACTER_WIDTHS
    if ch in widths:
        return widths[ch]
    return max(wcwidth.wcwidth(ch), 0)


def display_width(text: str, widths: Optional[Mapping[str, int]] = None) -> int:
    """Return the display width of ``text``, ignoring SGR directives."""
    if not text:
        return 0
    plain = SGR_RE.sub("", text)
    return sum(char_width(ch, widths) for ch in plain)
