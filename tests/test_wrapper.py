"""Tests for greedy line wrapping."""

import pytest

from cv_renderer.export.text_layout import wrap_ranges, wrap_text

PARAGRAPHS = [
    "Led productization of 9 analytical models cutting deployment time from two quarters to one",
    "short",
    "a " * 40,
    "Supercalifragilisticexpialidocious is a word that will not fit on any narrow line at all",
    "one two three four five six seven eight nine ten eleven twelve thirteen fourteen",
]


class TestWrapText:
    @pytest.mark.parametrize("text", PARAGRAPHS)
    @pytest.mark.parametrize("max_width", [10.0, 25.0, 60.0])
    def test_multi_word_lines_fit(self, measurer, text, max_width):
        for line in wrap_text(text, max_width, 10, measurer):
            if len(line.split()) > 1:
                assert measurer.width(line, 10) <= max_width

    @pytest.mark.parametrize("text", PARAGRAPHS)
    def test_words_preserved_in_order(self, measurer, text):
        lines = wrap_text(text, 20.0, 10, measurer)
        assert " ".join(lines).split() == text.split()

    def test_long_word_alone_on_its_line(self, measurer):
        lines = wrap_text("tiny Supercalifragilisticexpialidocious tiny", 15.0, 10, measurer)
        assert lines == ["tiny", "Supercalifragilisticexpialidocious", "tiny"]

    def test_fits_on_one_line(self, measurer):
        assert wrap_text("hello world", 100.0, 10, measurer) == ["hello world"]

    def test_greedy_break(self, measurer):
        # 1.8 mm per character at 10 pt: "aaa bbb" is about 12.6 mm wide
        assert wrap_text("aaa bbb ccc", 13.0, 10, measurer) == ["aaa bbb", "ccc"]

    def test_empty_input(self, measurer):
        assert wrap_text("", 50.0, 10, measurer) == []
        assert wrap_text("   ", 50.0, 10, measurer) == []

    def test_non_empty_input_gives_lines(self, measurer):
        assert wrap_text("x", 0.1, 10, measurer) == ["x"]

    def test_deterministic(self, measurer):
        text = PARAGRAPHS[0]
        assert wrap_text(text, 30.0, 9, measurer) == wrap_text(text, 30.0, 9, measurer)


class TestWrapRanges:
    def test_offsets_match_wrap_text_for_single_spaced_text(self, measurer):
        text = PARAGRAPHS[0]
        ranges = wrap_ranges(text, 40.0, lambda s, e: measurer.width(text[s:e], 10))
        assert [text[s:e] for s, e in ranges] == wrap_text(text, 40.0, 10, measurer)

    def test_measured_by_range(self):
        # Characters from index 5 on count double.
        text = "aaaa bbbb cccc"

        def width(start, end):
            return sum(2 if i >= 5 else 1 for i in range(start, end))

        assert wrap_ranges(text, 9, width) == [(0, 4), (5, 9), (10, 14)]
        assert wrap_ranges(text, 13, width) == [(0, 9), (10, 14)]

    def test_blank_input(self):
        assert wrap_ranges("   ", 10, lambda s, e: 0.0) == []
