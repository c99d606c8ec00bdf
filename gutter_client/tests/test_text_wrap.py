from __future__ import annotations

import pytest

from gutter_client.text_wrap import BREAK, Word, tokenize, visual_width, wrap


def test_tokenize_keeps_trailing_space_on_each_word() -> None:
    assert tokenize("a  b") == [Word("a "), Word(" "), Word("b")]
    assert tokenize("ab ") == [Word("ab ")]


def test_tokenize_turns_newlines_into_breaks() -> None:
    assert tokenize("one two\nthree") == [Word("one "), Word("two"), BREAK, Word("three")]


def test_visual_width_counts_display_cells() -> None:
    assert visual_width("abc") == 3
    assert visual_width("日本") == 4
    assert visual_width("e\u0301") == 1
    assert visual_width("a\u200bb") == 2


def test_short_text_stays_on_one_line() -> None:
    block = wrap("unexpected token", 40)

    assert block.lines == ("unexpected token",)
    assert block.width == 16
    assert block.height == 1


def test_wrap_breaks_before_word_that_would_touch_right_edge() -> None:
    # Usable width is max_width - 1 = 8 cells; "aaa bbb " fills it exactly.
    block = wrap("aaa bbb ccc", 9)

    assert block.lines == ("aaa bbb", "ccc    ")
    assert block.width == 7
    assert block.height == 2


def test_hard_breaks_force_new_lines_and_are_not_emitted() -> None:
    block = wrap("[ERROR] lint\nunexpected token", 40)

    assert block.lines == ("[ERROR] lint    ", "unexpected token")


def test_accepts_pre_tokenized_input() -> None:
    block = wrap([Word("left "), BREAK, Word("right")], 20)

    assert block.lines == ("left ", "right")


def test_over_width_word_gets_its_own_line_and_widens_block() -> None:
    block = wrap("a supercalifragilistic b", 8)

    assert block.lines == (
        "a                   ",
        "supercalifragilistic",
        "b                   ",
    )
    assert block.width == 20
    assert block.height == 3


def test_empty_paragraphs_are_kept() -> None:
    block = wrap("top\n\nbottom", 20)

    assert block.lines == ("top   ", "      ", "bottom")


def test_padding_uses_visual_width_for_wide_characters() -> None:
    block = wrap("日本語\nab", 20)

    assert [visual_width(line) for line in block.lines] == [6, 6]
    assert block.lines[1] == "ab    "


@pytest.mark.parametrize("max_width", [0, -3])
def test_rejects_non_positive_width(max_width) -> None:
    with pytest.raises(ValueError):
        wrap("text", max_width)


SAMPLE = (
    "the quick brown fox jumps over the lazy dog while the linter complains "
    "about an unused import and a line that is much too long for comfort"
)


@pytest.mark.parametrize("max_width", [5, 12, 17, 30, 80])
def test_block_is_rectangular(max_width) -> None:
    block = wrap(SAMPLE, max_width)
    widths = {visual_width(line) for line in block.lines}

    assert widths == {block.width}
    assert block.width == max(visual_width(line.rstrip(" ")) for line in block.lines)
    assert block.height == len(block.lines)


@pytest.mark.parametrize("max_width", [5, 12, 17, 30, 80])
def test_rewrapping_joined_output_reproduces_the_same_lines(max_width) -> None:
    first = wrap(SAMPLE, max_width)
    rejoined = " ".join(line.rstrip(" ") for line in first.lines)

    assert wrap(rejoined, max_width).lines == first.lines


@pytest.mark.parametrize("max_width", [12, 17, 30])
def test_lines_fit_usable_width_when_no_word_is_over_width(max_width) -> None:
    block = wrap(SAMPLE, max_width)

    assert block.width <= max_width - 1
