"""Tests for overlay text measurement and wrapping."""

import pytest

from core.text_layout import TextMeasurer, load_font, wrap_text


@pytest.fixture
def measurer():
    return TextMeasurer()


class TestWrapText:
    def test_short_text_single_line(self):
        font = load_font(30)
        assert wrap_text("Hi there", 1000, font) == ["Hi there"]

    def test_wraps_on_words(self):
        font = load_font(20)
        text = "one two three four five six seven eight nine ten"
        max_width = font.getlength("one two three")

        lines = wrap_text(text, max_width, font)

        assert len(lines) > 1
        assert " ".join(lines) == text
        assert all(font.getlength(line) <= max_width for line in lines)

    def test_keeps_explicit_breaks_and_blank_lines(self):
        font = load_font(20)
        assert wrap_text("a\n\nb", 500, font) == ["a", "", "b"]

    def test_breaks_overlong_word(self):
        font = load_font(20)
        word = "x" * 120

        lines = wrap_text(word, 100, font)

        assert len(lines) > 1
        assert "".join(lines) == word
        assert all(font.getlength(line) <= 100 for line in lines)


class TestTextMeasurer:
    """Shrink-to-fit, wrapping and bounding box"""

    def test_fits_at_base_size(self, measurer):
        layout = measurer.measure("Hi", 300, 600)
        font = measurer.font(30)

        assert layout.font_size == 30
        assert layout.lines == ("Hi",)
        assert layout.size.height == measurer.line_height(font)
        assert layout.size.width <= 300
        assert layout.size.width >= font.getlength("Hi")

    def test_shrinks_before_wrapping(self, measurer):
        text = "Shrink me a little"
        max_width = measurer.font(30).getlength(text) * 0.8

        layout = measurer.measure(text, max_width)

        assert measurer.min_font_size <= layout.font_size < 30
        assert layout.lines == (text,)
        assert layout.size.width <= max_width

    def test_wraps_at_minimum_size(self, measurer):
        text = "a fairly long caption that cannot possibly fit on one line of this box"

        layout = measurer.measure(text, 120)

        assert layout.font_size == measurer.min_font_size == 15
        assert len(layout.lines) > 1
        assert layout.size.width <= 120
        assert layout.size.height == layout.line_height * len(layout.lines)

    def test_multiline_text(self, measurer):
        layout = measurer.measure("top\nbottom", 300)

        assert layout.lines == ("top", "bottom")
        assert layout.size.height == 2 * layout.line_height

    def test_truncates_to_max_height(self, measurer):
        text = "\n".join(f"line {i}" for i in range(20))
        line_h = measurer.line_height(measurer.font(30))

        layout = measurer.measure(text, 300, line_h * 3 + 1)

        assert len(layout.lines) == 3
        assert layout.size.height <= line_h * 3 + 1

    def test_single_line_taller_than_box_is_capped(self, measurer):
        layout = measurer.measure("Hi", 300, 10)

        assert len(layout.lines) == 1
        assert layout.size.height == 10

    def test_empty_text(self, measurer):
        layout = measurer.measure("", 300, 600)

        assert layout.lines == ("",)
        assert layout.size.width == 0

    def test_custom_scale(self):
        m = TextMeasurer(font_size=40, min_scale=0.25)
        assert m.min_font_size == 10

    @pytest.mark.parametrize("kwargs", [{"font_size": 0}, {"min_scale": 0}, {"min_scale": 1.5}])
    def test_rejects_bad_settings(self, kwargs):
        with pytest.raises(ValueError):
            TextMeasurer(**kwargs)

    def test_rejects_empty_width(self, measurer):
        with pytest.raises(ValueError):
            measurer.measure("Hi", 0)

    def test_missing_font_path_falls_back(self):
        m = TextMeasurer(font_path="/nonexistent/font.ttf")
        layout = m.measure("Hi", 300)
        assert layout.size.width > 0
