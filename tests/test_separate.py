"""Tests for separating SGR directives from text."""

from ansiform.ansi import encode
from ansiform.separate import StyleChange, split_styles, strip_styles

BOLD = "\x1b[1m"
BOLD_OFF = "\x1b[22m"
ITALIC = "\x1b[3m"
ITALIC_OFF = "\x1b[23m"


def _bold(text):
    return BOLD + text + BOLD_OFF


def _italic(text):
    return ITALIC + text + ITALIC_OFF


def test_plain_text_has_no_changes():
    separated = split_styles("nothing to see")
    assert separated.value == "nothing to see"
    assert separated.changes == []


def test_bold_then_bold_italic_then_italic():
    text = "01" + _bold("23") + BOLD + _italic("45") + BOLD_OFF + _italic("67") + "89"
    separated = split_styles(text)

    assert separated.value == "0123456789"
    assert separated.changes == [
        StyleChange(2, (1,)),
        StyleChange(4, (1, 3)),
        StyleChange(6, (22, 3)),
        StyleChange(8, (23,)),
    ]


def test_back_to_back_directives_merge():
    separated = split_styles("a\x1b[31m\x1b[1m\x1b[44mb")
    assert separated.value == "ab"
    assert separated.changes == [StyleChange(1, (31, 1, 44))]


def test_csi_introducer_is_recognized():
    separated = split_styles("a\x9b[4mb\x9b[24m")
    assert separated.value == "ab"
    assert [c.position for c in separated.changes] == [1, 2]


def test_directive_at_start_and_end():
    separated = split_styles("\x1b[32mgreen\x1b[39m")
    assert separated.value == "green"
    assert separated.changes == [StyleChange(0, (32,)), StyleChange(5, (39,))]


def test_reset_clears_previous_styles():
    separated = split_styles("\x1b[1;31mab\x1b[0mcd")
    assert separated.changes[-1] == StyleChange(2, (0,))


def test_other_escape_sequences_are_left_alone():
    separated = split_styles("a\x1b[2Jb")
    assert separated.value == "a\x1b[2Jb"
    assert separated.changes == []


def test_positions_are_non_decreasing_offsets_into_plain_text():
    text = "x" + _bold("yy") + "\x1b[31mz" + _italic("w") + "\x1b[0m"
    separated = split_styles(text)
    positions = [c.position for c in separated.changes]
    assert positions == sorted(positions)
    assert all(0 <= p <= len(separated.value) for p in positions)


def test_strip_styles():
    assert strip_styles("a" + _bold("b") + "c") == "abc"


def test_reapplying_changes_keeps_visible_text():
    text = "plain \x1b[1;31mbold red\x1b[0m then \x9b[4munder\x9b[24m."
    separated = split_styles(text)

    pieces = []
    last = 0
    for change in separated.changes:
        pieces.append(separated.value[last:change.position])
        pieces.append(encode(change.codes))
        last = change.position
    pieces.append(separated.value[last:])
    rebuilt = "".join(pieces)

    assert strip_styles(rebuilt) == strip_styles(text)
    assert split_styles(rebuilt).changes == separated.changes
