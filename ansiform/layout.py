"""Word wrapping, justification, indentation and padding of styled text.

Layout runs on the plain text produced by ``split_styles``. Wrapping can
drop a trailing space or insert a hard-break marker, which moves characters
relative to the source. Those moves go into a ``ShiftLog``, and the log is
replayed onto a copy of the style changes before styling is re-applied line
by line.
"""

from __future__ import annotations

import re
from collections import deque
from typing import Deque, List, Mapping, Optional, Sequence, Set, Tuple, Union

from .ansi import RESET, SGR_TEMPLATE, clean, encode
from .config import ConfigurationError, LayoutConfig, TrimSetting, resolve_config
from .constants import LayoutConstants
from .separate import SeparatedText, StyleChange, split_styles
from .width import char_width, display_width

_TRIM_START_RE = re.compile(f"^({SGR_TEMPLATE})? ")
_TRIM_END_RE = re.compile(f" ({SGR_TEMPLATE})?\\Z")


def justify(text: str, width: int, limit: Optional[int] = None) -> str:
    """Stretch ``text`` to ``width`` columns by widening the gaps between words.

    Extra spaces are shared evenly; the leftmost gaps take one more when the
    share does not divide. Text that is already wide enough, or has no gaps,
    comes back unchanged. So does text whose widest gap would exceed
    ``limit`` spaces, when a positive ``limit`` is given.
    """
    words = text.split(" ")
    gaps = len(words) - 1
    extra = width - display_width(text)
    if extra <= 0 or gaps == 0:
        return text

    share, remainder = divmod(extra, gaps)
    widest = 1 + share + (1 if remainder else 0)
    if limit is not None and limit > 0 and widest > limit:
        return text

    pieces = []
    for index, word in enumerate(words[:-1]):
        pieces.append(word + " " * (1 + share + (1 if index < remainder else 0)))
    pieces.append(words[-1])
    return "".join(pieces)


def _trim_budget(setting: TrimSetting) -> Optional[int]:
    """Number of spaces a trim setting allows; None means no limit."""
    if setting is True:
        return None
    if not setting:
        return 0
    return max(int(setting), 0)


def _trim_side(text: str, pattern: re.Pattern, budget: Optional[int]) -> str:
    while budget is None or budget > 0:
        trimmed = pattern.sub(r"\1", text, count=1)
        if trimmed == text:
            break
        text = trimmed
        if budget is not None:
            budget -= 1
    return text


def trim(text: str, start: TrimSetting, end: TrimSetting) -> str:
    """Trim spaces off the ends of ``text`` but keep its SGR directives.

    Args:
        text: Text to trim, possibly styled
        start: True trims every leading space, an int at most that many
        end: True trims every trailing space, an int at most that many

    Returns:
        The trimmed text. A directive directly before a leading space (or
        directly after a trailing one) stays in place.
    """
    text = _trim_side(text, _TRIM_START_RE, _trim_budget(start))
    return _trim_side(text, _TRIM_END_RE, _trim_budget(end))


def split_words(text: str, keep_styles: bool = False) -> List[str]:
    """Split text into words, each keeping the break character that ends it.

    Joining the result gives back the (plain, unless ``keep_styles``) text.
    """
    if not keep_styles:
        text = split_styles(text).value

    words: List[str] = []
    word: List[str] = []
    for ch in text:
        word.append(ch)
        if ch in LayoutConstants.BREAK_CHARS:
            words.append("".join(word))
            word = []
    if word:
        words.append("".join(word))
    return words


def transform(text: str, replacements: Optional[Mapping[str, str]] = None) -> str:
    """Apply literal replacements on top of the default ones (CRLF, tab)."""
    table = dict(LayoutConstants.DEFAULT_TRANSFORMS)
    if replacements:
        table.update(replacements)
    for old, new in table.items():
        text = text.replace(old, new)
    return text


def _fill(count: int, filler: str) -> str:
    """Repeat ``filler`` to exactly ``count`` columns (or as close as it gets)."""
    if count <= 0 or not filler:
        return ""
    filler_width = display_width(filler)
    if filler_width <= 0:
        return ""
    result = filler * -(-count // filler_width)
    while display_width(result) > count:
        result = result[:-1]
    return result


def _split_long_word(word: str, marker: str, max_width: int) -> Tuple[str, str]:
    """Take as much of ``word`` as fits in ``max_width`` along with ``marker``.

    Returns:
        (piece, rest). ``piece`` excludes the marker and may be empty.
    """
    room = max_width - display_width(marker)
    count = 0
    for ch in word:
        w = char_width(ch)
        if w > room:
            break
        room -= w
        count += 1
    return word[:count], word[count:]


class ShiftLog:
    """Append-only record of how wrapping moved text relative to the source.

    Each entry says: every position at or after ``at`` moved by ``offset``.
    Entries are expressed in the coordinates current when they were made, so
    they must be replayed in order.
    """

    def __init__(self):
        self._entries: List[Tuple[int, int]] = []

    def record(self, at: int, offset: int) -> None:
        if offset:
            self._entries.append((at, offset))

    def apply(self, changes: Sequence[StyleChange]) -> List[StyleChange]:
        """Return copies of ``changes`` with every recorded shift applied."""
        positions = [change.position for change in changes]
        for at, offset in self._entries:
            positions = [p + offset if p >= at else p for p in positions]
        return [
            StyleChange(position, change.codes)
            for position, change in zip(positions, changes)
        ]


class _LineBuilder:
    """Greedy packing of words into lines of a fixed width.

    ``index`` tracks the offset, in the wrapped output, just past the text
    consumed so far. It differs from the source offset by the stripped
    spaces and inserted hard-break markers recorded in ``shifts``.
    """

    def __init__(self, width: int, first_indent_width: int, hanging_indent_width: int,
                 hard_break: str):
        self.width = width
        self.hanging_indent_width = hanging_indent_width
        self.indent_width = first_indent_width
        self.hard_break = hard_break
        self.lines: List[str] = []
        # Lines that end a paragraph: forced by a newline, or the last one
        self.natural_ends: Set[int] = set()
        self.shifts = ShiftLog()
        self.index = 0
        self.line = ""
        self.line_width = 0

    def build(self, words: Sequence[str]) -> List[str]:
        queue: Deque[str] = deque(words)
        while queue:
            self._place(queue.popleft(), queue)
        if self.line:
            self.lines.append(self.line)
        if self.lines:
            self.natural_ends.add(len(self.lines) - 1)
        return self.lines

    def _close(self, text: str, natural: bool = False) -> None:
        self.lines.append(text)
        if natural:
            self.natural_ends.add(len(self.lines) - 1)
        self.line = ""
        self.line_width = 0
        self.indent_width = self.hanging_indent_width

    def _strip_space(self) -> None:
        # The space before self.index is dropped from the output
        self.index -= 1
        self.shifts.record(self.index, -1)

    def _place(self, word: str, queue: Deque[str]) -> None:
        available = self.width - self.line_width - self.indent_width
        newline = word.endswith("\n")
        trimmed = word[:-1] if word.endswith(" ") else word
        word_width = display_width(word)
        trimmed_width = display_width(trimmed)

        if word_width <= available:
            self.index += len(word)
            self.line += word
            self.line_width += word_width
        elif trimmed_width <= available:
            self.index += len(word)
            self._strip_space()
            self._close(self.line + trimmed)
        elif trimmed_width > self.width - self.indent_width:
            self._hard_break(word, available, queue)
            return
        else:
            self.index += len(word)
            self._close(self.line)
            if trimmed_width == self.width - self.indent_width:
                if trimmed != word:
                    self._strip_space()
                self._close(trimmed, natural=newline)
                return
            self.line = word
            self.line_width = word_width

        if newline:
            self._close(self.line, natural=True)

    def _hard_break(self, word: str, available: int, queue: Deque[str]) -> None:
        """Split a word that is wider than a whole line.

        The first piece goes on the current line when there is room for it,
        otherwise on a line of its own. The rest is queued as a new word.

        Raises:
            ConfigurationError: If the marker is as wide as a whole line or
                wider, leaving no column for the word itself
        """
        marker = self.hard_break
        piece = rest = ""
        if available > LayoutConstants.HARD_BREAK_MIN_ROOM:
            piece, rest = _split_long_word(word, marker, available)

        if piece:
            head = self.line + piece
        else:
            if self.line:
                self._close(self.line)
            line_width = self.width - self.indent_width
            if line_width - display_width(marker) <= 0:
                raise ConfigurationError(
                    f"Hard break {marker!r} leaves no room for text in {line_width} column(s)"
                )
            piece, rest = _split_long_word(word, marker, line_width)
            if not piece:
                # Always make progress, even if a wide character overflows
                piece, rest = word[:1], word[1:]
            head = piece

        self.index += len(piece)
        self.shifts.record(self.index, len(marker))
        self.index += len(marker)
        self._close(head + marker)
        if rest:
            queue.appendleft(rest)


def _apply_styles(lines: Sequence[str], changes: Sequence[StyleChange]) -> List[str]:
    """Re-insert SGR directives so every line carries its own styling.

    Each line starts by resetting and re-asserting the active codes, and ends
    with a reset, so lines stay correct when printed on their own.
    """
    pending: Deque[StyleChange] = deque(changes)
    active: Tuple[int, ...] = (RESET,)
    cursor = 0
    styled = []

    for line in lines:
        out = []
        last = len(line) - 1
        for col, ch in enumerate(line):
            codes: Optional[Tuple[int, ...]] = None
            while pending and pending[0].position <= cursor:
                active = pending.popleft().codes
                codes = active
            if col == 0:
                codes = (RESET, *active)
            if codes is not None:
                out.append(encode(clean(codes)))
            out.append(ch)
            if col == last:
                out.append(encode([RESET]))
            cursor += 1
        styled.append("".join(out))

    return styled


def wrap_to_lines(
    text: Union[str, SeparatedText],
    config: Optional[LayoutConfig] = None,
    **overrides,
) -> List[str]:
    """Wrap text into lines of exactly the configured width.

    Args:
        text: Raw (possibly styled) text, or the output of ``split_styles``
        config: Base configuration; the process defaults when omitted
        **overrides: LayoutConfig options for this call only

    Returns:
        One string per output line, padded to full width when a filler is
        configured.

    Raises:
        ConfigurationError: If the configuration leaves no room for text
    """
    config = resolve_config(config, overrides)
    separated = text if isinstance(text, SeparatedText) else split_styles(text)

    width = (
        config.width
        - display_width(config.padding_left)
        - display_width(config.padding_right)
    )
    if width <= 0:
        raise ConfigurationError(
            f"Padding leaves no room for text in a width of {config.width}"
        )
    first_indent_width = display_width(config.first_line_indent)
    hanging_indent_width = display_width(config.hanging_indent)

    builder = _LineBuilder(width, first_indent_width, hanging_indent_width, config.hard_break)
    lines = builder.build(split_words(separated.value, keep_styles=True))

    if config.styling:
        lines = _apply_styles(lines, builder.shifts.apply(separated.changes))
        reset = encode([RESET])
    else:
        reset = ""

    result = []
    for index, line in enumerate(lines):
        if index == 0:
            indent, indent_width = config.first_line_indent, first_indent_width
        else:
            indent, indent_width = config.hanging_indent, hanging_indent_width

        # Newlines were accounted for while building lines
        line = line.replace("\n", "")
        line = trim(line, config.trim_start, config.trim_end or config.justify)
        if config.justify and index not in builder.natural_ends:
            line = justify(line, width - indent_width, config.justify_limit)

        prefix = config.padding_left + indent
        suffix = (
            _fill(width - display_width(line) - indent_width, config.filler)
            + config.padding_right
        )
        if prefix:
            prefix = reset + prefix
        if suffix:
            suffix += reset
        result.append(prefix + line + suffix)

    return result


def wrap_to_string(
    text: Union[str, SeparatedText],
    config: Optional[LayoutConfig] = None,
    **overrides,
) -> str:
    """Wrap text and join the lines with newlines.

    The configured width is reduced by one column before wrapping.
    """
    config = resolve_config(config, overrides)
    config = config.merged(width=config.width - 1)
    return "\n".join(wrap_to_lines(text, config))


lines = wrap_to_lines
wrap = wrap_to_string
