"""Unit tests for sectionrag.utils.text_normalizer."""

from __future__ import annotations

from sectionrag.utils.text_normalizer import (
    PARAGRAPH_SEPARATOR,
    build_canonical_text,
    normalize_text,
    split_paragraphs,
)


class TestNormalizeText:
    def test_empty_input(self) -> None:
        assert normalize_text("") == ""

    def test_whitespace_only_input(self) -> None:
        assert normalize_text(" \n\t \r\n ") == ""

    def test_line_endings_unified(self) -> None:
        assert normalize_text("a\r\nb\rc\nd") == "a\nb\nc\nd"

    def test_control_characters_become_spaces(self) -> None:
        assert normalize_text("a\tb") == "a b"
        assert normalize_text("bell\x07here") == "bell here"

    def test_runs_of_three_whitespace_collapse(self) -> None:
        assert normalize_text("a   b") == "a b"
        assert normalize_text("a\t\t\tb") == "a b"

    def test_double_space_preserved(self) -> None:
        assert normalize_text("a  b") == "a  b"

    def test_lines_trimmed(self) -> None:
        assert normalize_text("  hello  \n   world ") == "hello\nworld"

    def test_nfkc_folding(self) -> None:
        assert normalize_text("ｆｕｌｌ ｗｉｄｔｈ") == "full width"
        assert normalize_text("ﬁne") == "fine"

    def test_idempotent(self) -> None:
        raw = "  Title\r\n\r\n\tBody   text\x0bwith\x00junk  \n\n\n  End ｆｉｎ  "
        once = normalize_text(raw)
        assert normalize_text(once) == once


class TestSplitParagraphs:
    def test_splits_on_blank_lines(self) -> None:
        assert split_paragraphs("a\n\n\nb\n\nc") == ["a", "b", "c"]

    def test_single_newline_kept_inside_paragraph(self) -> None:
        assert split_paragraphs("line one\nline two") == ["line one\nline two"]

    def test_empty_text(self) -> None:
        assert split_paragraphs("") == []


class TestBuildCanonicalText:
    def test_paragraphs_joined_with_fixed_separator(self) -> None:
        canonical, paragraphs = build_canonical_text("A\r\n\r\n\r\n\r\nB")
        assert paragraphs == ["A", "B"]
        assert canonical == "A" + PARAGRAPH_SEPARATOR + "B"

    def test_whitespace_only_line_separates_paragraphs(self) -> None:
        canonical, paragraphs = build_canonical_text("First\n   \nSecond")
        assert paragraphs == ["First", "Second"]
        assert canonical == "First\n\nSecond"

    def test_paragraph_offsets_match_canonical_text(self) -> None:
        canonical, paragraphs = build_canonical_text("One para.\n\n\nTwo para.\n\nThree.")
        offset = 0
        for paragraph in paragraphs:
            assert canonical[offset : offset + len(paragraph)] == paragraph
            offset += len(paragraph) + 2

    def test_blank_input(self) -> None:
        assert build_canonical_text("   ") == ("", [])
