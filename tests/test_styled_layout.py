"""Tests for keeping SGR styling intact across wrapped lines."""

from ansiform import LayoutConfig
from ansiform.layout import ShiftLog, wrap_to_lines
from ansiform.separate import StyleChange, split_styles

BOLD = "\x1b[1m"
BOLD_OFF = "\x1b[22m"
ITALIC = "\x1b[3m"
ITALIC_OFF = "\x1b[23m"
UNDERLINE = "\x1b[4m"
UNDERLINE_OFF = "\x1b[24m"

STYLED = LayoutConfig(styling=True, width=20, filler="", trim_end=False)


def _bold(text):
    return BOLD + text + BOLD_OFF


def styles_per_line(lines):
    """Map each line's style changes to {position: codes}."""
    return [
        {change.position: list(change.codes) for change in split_styles(line).changes}
        for line in lines
    ]


def test_style_ends_at_line_length():
    lines = wrap_to_lines("0123456789 " + _bold("123456789") + " 1", STYLED)
    assert styles_per_line(lines) == [
        {0: [0], 11: [1], 19: [22], 20: [0]},
        {0: [0], 1: [0]},
    ]


def test_style_ends_before_line_length():
    lines = wrap_to_lines("0123456789 " + _bold("12345") + "6789 1", STYLED)
    assert styles_per_line(lines) == [
        {0: [0], 11: [1], 16: [22], 20: [0]},
        {0: [0], 1: [0]},
    ]


def test_style_traverses_multiple_lines():
    lines = wrap_to_lines("0123456789 " + _bold("1234567 012345") + " 789", STYLED)
    assert styles_per_line(lines) == [
        {0: [0], 11: [1], 19: [0]},
        {0: [0, 1], 6: [22], 10: [0]},
    ]


def test_style_traverses_new_line():
    lines = wrap_to_lines("012 " + _bold("45\n0123") + " 567", STYLED)
    assert styles_per_line(lines) == [
        {0: [0], 4: [1], 6: [0]},
        {0: [0, 1], 4: [22], 8: [0]},
    ]


def test_new_style_per_line():
    text = (
        "01\n"
        + _bold("23\n")
        + ITALIC + "45" + ITALIC_OFF
        + "\n"
        + UNDERLINE + "67" + UNDERLINE_OFF
    )
    lines = wrap_to_lines(text, STYLED)
    assert styles_per_line(lines) == [
        {0: [0], 2: [0]},
        {0: [0, 1], 2: [0]},
        {0: [0, 3], 2: [0]},
        {0: [0, 4], 2: [0]},
    ]


def test_style_follows_text_past_a_hard_break():
    lines = wrap_to_lines(_bold("abcdefghijkl") + " xy", STYLED, width=10)
    assert [split_styles(line).value for line in lines] == ["abcdefghi-", "jkl xy"]
    assert styles_per_line(lines) == [
        {0: [0, 1], 10: [0]},
        {0: [0, 1], 3: [22], 6: [0]},
    ]


def test_style_follows_a_word_split_after_other_text():
    lines = wrap_to_lines("0123 " + _bold("5678901234567890123456789") + " 1234", STYLED)
    assert [split_styles(line).value for line in lines] == [
        "0123 56789012345678-",
        "90123456789 1234",
    ]
    assert styles_per_line(lines) == [
        {0: [0], 5: [1], 20: [0]},
        {0: [0, 1], 11: [22], 16: [0]},
    ]


def test_every_line_is_self_contained():
    lines =wrap_to_lines(_bold("one two three four five six"), STYLED, width=10)
    for line in lines:
        assert line.startswith("\x1b[0;1m")
        assert line.endswith("\x1b[0m")


def test_padding_is_wrapped_in_resets():
    lines = wrap_to_lines("ab", STYLED, width=6, padding_left="[", padding_right="]", filler=".")
    assert lines == ["\x1b[0m[\x1b[0mab\x1b[0m..]\x1b[0m"]


def test_styling_off_strips_directives():
    lines = wrap_to_lines("0123456789 " + _bold("123456789") + " 1", STYLED, styling=False)
    assert lines == ["0123456789 123456789", "1"]


def test_already_separated_text_is_accepted():
    separated = split_styles(_bold("bold") + " plain")
    lines = wrap_to_lines(separated, STYLED)
    assert split_styles(lines[0]).value == "bold plain"


class TestShiftLog:
    def test_shifts_are_replayed_in_order(self):
        log = ShiftLog()
        log.record(5, -1)
        log.record(3, 2)
        changes = [StyleChange(2, (1,)), StyleChange(5, (22,)), StyleChange(6, (3,))]

        shifted = log.apply(changes)

        assert [c.position for c in shifted] == [2, 6, 7]
        assert [c.codes for c in shifted] == [(1,), (22,), (3,)]

    def test_originals_are_untouched(self):
        log = ShiftLog()
        log.record(0, 4)
        changes = [StyleChange(1, (1,))]
        log.apply(changes)
        assert changes == [StyleChange(1, (1,))]

    def test_zero_offset_is_not_recorded(self):
        log = ShiftLog()
        log.record(0, 0)
        assert log.apply([StyleChange(3, (1,))]) == [StyleChange(3, (1,))]
