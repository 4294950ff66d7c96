"""
Unit tests for tokenizing, counting and formatting
"""

import re

from wordcounter.app.counter import read_lines, split_line, count_words, format_counts


class TestSplitLine:
    """Tests for delimiter splitting and normalization"""

    def test_splits_on_all_delimiters(self):
        assert split_line("a b,c.d;e:f!g?h") == list("abcdefgh")

    def test_consecutive_delimiters_produce_no_empty_tokens(self):
        assert split_line("hello,, world!!  ok?") == ["hello", "world", "ok"]

    def test_apostrophes_and_hyphens_stay_in_token(self):
        assert split_line("don't well-known") == ["don't", "well-known"]

    def test_tabs_are_trimmed_not_split(self):
        assert split_line("\tDo\t") == ["do"]
        assert split_line("\t") == []


class TestCountWords:
    """Tests for the word-frequency mapping"""

    def test_reference_scenario(self):
        counts = count_words(["do the things, you do so well"])
        assert counts == {"do": 2, "the": 1, "things": 1, "you": 1, "so": 1, "well": 1}

    def test_case_and_whitespace_collapse(self):
        counts = count_words(["Do", "do", " DO "])
        assert counts == {"do": 3}

    def test_sum_of_counts_equals_token_count(self, sample_text):
        lines = list(read_lines(sample_text))
        counts = count_words(lines)
        tokens = [t for line in lines for t in re.split(r"[ ,.;:!?]", line) if t.strip()]
        assert sum(counts.values()) == len(tokens)
        assert counts["the"] == 4
        assert counts["lazy"] == 3

    def test_empty_input_yields_empty_mapping(self):
        assert count_words([]) == {}
        assert count_words(read_lines("   \n \r\n")) == {}

    def test_accepts_generator(self):
        counts = count_words(line for line in ["a a", "b"])
        assert counts == {"a": 2, "b": 1}


class TestReadLines:
    """Tests for line splitting of decoded uploads"""

    def test_mixed_line_terminators(self):
        assert list(read_lines("a\r\nb\nc\rd")) == ["a", "b", "c", "d"]

    def test_trailing_terminator_does_not_add_line(self):
        assert list(read_lines("a\nb\n")) == ["a", "b"]

    def test_empty_text(self):
        assert list(read_lines("")) == []


class TestFormatCounts:
    """Tests for result serialization"""

    def test_reference_output_in_insertion_order(self):
        counts = count_words(["do the things, you do so well"])
        expected = "do: 2\r\nthe: 1\r\nthings: 1\r\nyou: 1\r\nso: 1\r\nwell: 1\r\n"
        assert format_counts(counts) == expected

    def test_every_line_is_word_colon_count(self):
        counts = {"b": 2, "a": 1}
        lines = format_counts(counts).split("\r\n")
        assert lines[-1] == ""
        pairs = {tuple(line.split(": ")) for line in lines[:-1]}
        assert pairs == {("b", "2"), ("a", "1")}

    def test_sorted_output(self):
        assert format_counts({"b": 2, "a": 1}, sort=True) == "a: 1\r\nb: 2\r\n"

    def test_custom_line_terminator(self):
        assert format_counts({"x": 1}, line_terminator="\n") == "x: 1\n"

    def test_empty_mapping_formats_to_empty_string(self):
        assert format_counts({}) == ""
