"""Tests for message text normalization."""

import pytest

from converters.text_normalizer import (
    collapse_blank_lines,
    escape_code_fences,
    normalize_text,
    unify_line_endings,
)


class TestLineEndings:
    """Test CRLF/CR unification."""

    def test_crlf_and_cr(self):
        assert unify_line_endings("a\r\nb\rc\n") == "a\nb\nc\n"


class TestBlankLines:
    """Test vertical whitespace capping."""

    def test_three_newlines_collapse_to_two(self):
        assert collapse_blank_lines("a\n\n\nb") == "a\n\nb"

    def test_whitespace_only_lines_count_as_blank(self):
        assert collapse_blank_lines("a\n  \n\t\n \nb") == "a\n\nb"

    def test_indentation_on_content_lines_kept(self):
        assert collapse_blank_lines("def f():\n    return 1") == "def f():\n    return 1"


class TestCodeFenceEscape:
    """Test triple-backtick neutralization."""

    def test_single_fence(self):
        assert escape_code_fences("a```b") == "a`` `b"

    @pytest.mark.parametrize("run_length", [3, 4, 5, 6, 7, 9, 12])
    def test_long_backtick_runs_leave_no_fence(self, run_length):
        result = escape_code_fences("x" + "`" * run_length + "y")
        assert "```" not in result

    def test_double_backticks_untouched(self):
        assert escape_code_fences("use ``code`` here") == "use ``code`` here"


class TestNormalizeText:
    """Test the full normalization sequence."""

    def test_trims_outer_whitespace(self):
        assert normalize_text("\n\n  hello  \n\n") == "hello"

    def test_whitespace_only_becomes_empty(self):
        assert normalize_text(" \r\n\t \n ") == ""

    def test_none_becomes_empty(self):
        assert normalize_text(None) == ""

    def test_mixed_input(self):
        raw = "Question:\r\n\r\n\r\n\r\n```python\r\nprint(1)\r\n```\r\n"
        assert normalize_text(raw) == "Question:\n\n`` `python\nprint(1)\n`` `"

    @pytest.mark.parametrize("raw", [
        "plain",
        "a\r\n\r\n\r\nb",
        "  ``````  ",
        "x\n \n \n \ny",
        "```\n\n\n```",
        "\t lead and trail \t",
    ])
    def test_idempotent(self, raw):
        once = normalize_text(raw)
        assert normalize_text(once) == once

    @pytest.mark.parametrize("raw", [
        "a\n\n\n\n\nb",
        "a\r\n\r\n\r\nb",
        "a\n  \n\t\n\nb",
        "a\r\r\r\rb",
    ])
    def test_never_three_consecutive_newlines(self, raw):
        assert "\n\n\n" not in normalize_text(raw)
