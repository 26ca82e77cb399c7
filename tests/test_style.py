import pytest

from dbtui.ui.style import (
    box,
    join_horizontal,
    pad_right,
    place,
    truncate,
    visible_width,
)


def test_visible_width_ignores_ansi():
    assert visible_width("\x1b[1;38;5;6mhi\x1b[0m") == visible_width("hi")


def test_visible_width_uses_widest_line():
    assert visible_width("a\nabcd\nab") == visible_width("abcd")


def test_pad_right_reaches_width():
    result = pad_right("ab", 6)
    assert visible_width(result) == 6
    assert result.startswith("ab")


def test_pad_right_leaves_long_text():
    assert pad_right("abcdef", 3) == "abcdef"


@pytest.mark.parametrize("width", [4, 8, 12])
def test_truncate_fits_and_marks(width):
    text = "this is a rather long value"
    result = truncate(text, width)
    assert len(result) <= width
    assert result.endswith("...")
    assert text.startswith(result[:-3])


def test_truncate_short_text_unchanged():
    assert truncate("short", 20) == "short"


def test_truncate_tiny_width_is_prefix():
    assert truncate("abcdef", 2) == "ab"


def test_box_lines_share_width():
    lines = box("ab\ncdef", width=10, height=3, padding=(1, 2)).split("\n")
    widths = {visible_width(line) for line in lines}
    assert len(widths) == 1
    assert lines[0].startswith("╭") and lines[0].endswith("╮")
    assert lines[-1].startswith("╰") and lines[-1].endswith("╯")
    assert "ab" in lines[2]


def test_box_grows_for_wide_content():
    result = box("x" * 20, width=5)
    assert "x" * 20 in result
    assert len({visible_width(line) for line in result.split("\n")}) == 1


def test_box_respects_minimum_height():
    lines = box("a", height=4).split("\n")
    assert len(lines) == 4 + 2


def test_place_fills_area():
    lines = place(10, 5, "ab").split("\n")
    assert len(lines) == 5
    assert all(visible_width(line) == 10 for line in lines)
    assert sum("ab" in line for line in lines) == 1


def test_join_horizontal_aligns_top():
    lines = join_horizontal("a\nb\nc", "xy").split("\n")
    assert len(lines) == 3
    assert lines[0].startswith("a")
    assert lines[0].endswith("xy")
    assert len({visible_width(line) for line in lines}) == 1