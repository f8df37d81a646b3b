"""
StrayLink Backend — Article Content Parser Tests
==================================================

What:  Block and inline parsing of article bodies.
"""

import pytest

from app.schemas.article import (
    DividerBlock,
    HeadingBlock,
    ListBlock,
    ParagraphBlock,
    QuoteBlock,
)
from app.services.article_content import parse_article_content, parse_inline


class TestParseInline:

    def test_plain_text(self):
        segments = parse_inline("Just words")
        assert [(s.type, s.text) for s in segments] == [("text", "Just words")]

    def test_mixed_markup_in_order(self):
        segments = parse_inline("Use **gloves** and *care*, see [guide](https://example.org/g).")
        assert [(s.type, s.text) for s in segments] == [
            ("text", "Use "),
            ("strong", "gloves"),
            ("text", " and "),
            ("em", "care"),
            ("text", ", see "),
            ("link", "guide"),
            ("text", "."),
        ]
        assert segments[5].href == "https://example.org/g"

    def test_unbalanced_marker_stays_text(self):
        segments = parse_inline("2 * 3 equals six")
        assert all(s.type == "text" for s in segments)
        assert "".join(s.text for s in segments) == "2 * 3 equals six"

    def test_empty_string(self):
        assert parse_inline("") == []


class TestParseArticleContent:

    @pytest.mark.parametrize("raw", [None, ""])
    def test_empty_content(self, raw):
        assert parse_article_content(raw) == []

    def test_markdown_headings(self):
        blocks = parse_article_content("## Two\n### Three\n#### Four")
        assert [(b.level, b.text) for b in blocks] == [(2, "Two"), (3, "Three"), (4, "Four")]

    def test_single_and_five_hashes_are_paragraphs(self):
        blocks = parse_article_content("# Title\n##### Deep")
        assert all(isinstance(b, ParagraphBlock) for b in blocks)

    def test_labelled_headings_case_insensitive(self):
        blocks = parse_article_content("H2: Feeding\nh3:  Water bowls")
        assert blocks == [
            HeadingBlock(level=2, text="Feeding"),
            HeadingBlock(level=3, text="Water bowls"),
        ]

    def test_quote(self):
        (block,) = parse_article_content(">   Be **patient**")
        assert isinstance(block, QuoteBlock)
        assert block.text == "Be **patient**"
        assert block.segments[1].type == "strong"

    def test_unordered_list_groups_items(self):
        (block,) = parse_article_content("- food\n• water\n- shade")
        assert block == ListBlock(
            ordered=False,
            items=["food", "water", "shade"],
            item_segments=block.item_segments,
        )
        assert len(block.item_segments) == 3

    def test_ordered_list_both_styles(self):
        (block,) = parse_article_content("1. Call the clinic\n2) Bring a carrier")
        assert block.ordered
        assert block.items == ["Call the clinic", "Bring a carrier"]

    def test_switching_list_kind_starts_new_list(self):
        blocks = parse_article_content("- a\n- b\n1. one\n- c")
        assert [(b.ordered, b.items) for b in blocks] == [
            (False, ["a", "b"]),
            (True, ["one"]),
            (False, ["c"]),
        ]

    def test_blank_line_ends_list(self):
        blocks = parse_article_content("- a\n\n- b")
        assert len(blocks) == 2

    def test_divider_and_paragraph_end_list(self):
        blocks = parse_article_content("- a\n---\nAfter\n- b\nText")
        assert [type(b) for b in blocks] == [
            ListBlock,
            DividerBlock,
            ParagraphBlock,
            ListBlock,
            ParagraphBlock,
        ]

    def test_each_line_is_its_own_paragraph(self):
        blocks = parse_article_content("  First line  \nSecond line")
        assert [b.text for b in blocks] == ["First line", "Second line"]

    def test_full_article(self):
        raw = (
            "H2: Before you start\n"
            "Cats need **routine**.\n"
            "\n"
            "### Checklist\n"
            "- Bowl\n"
            "- Fresh water\n"
            "> Never feed milk\n"
            "---\n"
            "Read the [vet guide](https://example.org/vet)."
        )
        blocks = parse_article_content(raw)
        assert [b.type for b in blocks] == [
            "heading", "paragraph", "heading", "list", "quote", "divider", "paragraph",
        ]
        assert blocks[-1].segments[1].href == "https://example.org/vet"

    def test_blocks_serialize_with_type(self):
        (block,) = parse_article_content("---")
        assert block.model_dump() == {"type": "divider"}
