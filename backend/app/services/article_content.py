"""
StrayLink Backend — Article Content Parser
============================================

What:  Turns the markdown-like body of a knowledge article into typed blocks.
Why:   Articles are written by volunteers in a plain textarea. They use a
       small, forgiving subset of markdown plus "H2: Title" style headings
       pasted from document editors. Full markdown rendering would accept
       raw HTML and far more syntax than the reader page supports.
How:   Line-oriented scan. Each trimmed line is matched against the block
       patterns in order; consecutive list items are grouped.

Block syntax:
    ## Title / ### Title / #### Title   heading level 2-4
    H2: Title ... H4: Title             heading level 2-4 (case-insensitive)
    > text                              quote
    - item / • item                     unordered list item
    1. item / 1) item                   ordered list item
    ---                                 divider
    (blank line)                        ends the current list
    anything else                       paragraph (one per line)

Inline syntax (paragraphs, list items, quotes):
    **strong**   *em*   [label](https://example.org)
"""

import re
from typing import List, Optional

from app.schemas.article import (
    ContentBlock,
    DividerBlock,
    HeadingBlock,
    InlineSegment,
    ListBlock,
    ParagraphBlock,
    QuoteBlock,
)

_MARKDOWN_HEADING = re.compile(r"^(#{2,4})\s+(.*)$")
_SEMANTIC_HEADING = re.compile(r"^H([2-4]):\s*(.*)$", re.IGNORECASE)
_HEADING_LABEL = re.compile(r"^H[1-6]:\s*", re.IGNORECASE)
_QUOTE_MARKER = re.compile(r"^>\s*")
_UNORDERED_ITEM = re.compile(r"^[-•]\s+(.*)$")
_ORDERED_ITEM = re.compile(r"^(\d+)[.)]\s+(.*)$")

# Split keeps the delimiters (capturing group); order matters: ** before *
_INLINE_TOKENS = re.compile(r"(\*\*.*?\*\*|\*.*?\*|\[.*?\]\(.*?\))")
_INLINE_LINK = re.compile(r"\[(.*?)\]\((.*?)\)")


def parse_inline(text: str) -> List[InlineSegment]:
    """
    Split a line of text into strong / em / link / plain segments.

    Unbalanced markers are left as plain text. Empty pieces produced by the
    split are dropped.
    """
    segments: List[InlineSegment] = []
    for part in _INLINE_TOKENS.split(text):
        if not part:
            continue
        if len(part) >= 4 and part.startswith("**") and part.endswith("**"):
            segments.append(InlineSegment(type="strong", text=part[2:-2]))
            continue
        if len(part) >= 2 and part.startswith("*") and part.endswith("*"):
            segments.append(InlineSegment(type="em", text=part[1:-1]))
            continue
        link = _INLINE_LINK.fullmatch(part)
        if link:
            segments.append(InlineSegment(type="link", text=link.group(1), href=link.group(2)))
            continue
        segments.append(InlineSegment(type="text", text=part))
    return segments


class _ListBuffer:
    """Collects consecutive list items of one kind."""

    def __init__(self, ordered: bool):
        self.ordered = ordered
        self.items: List[str] = []

    def to_block(self) -> ListBlock:
        return ListBlock(
            ordered=self.ordered,
            items=list(self.items),
            item_segments=[parse_inline(item) for item in self.items],
        )


def parse_article_content(raw_content: Optional[str]) -> List[ContentBlock]:
    """Parse an article body into content blocks. None or empty gives []."""
    if not raw_content:
        return []

    blocks: List[ContentBlock] = []
    current_list: Optional[_ListBuffer] = None

    def flush_list() -> None:
        nonlocal current_list
        if current_list is not None and current_list.items:
            blocks.append(current_list.to_block())
        current_list = None

    for line in raw_content.split("\n"):
        trimmed = line.strip()
        if not trimmed:
            flush_list()
            continue

        heading = _MARKDOWN_HEADING.match(trimmed)
        if heading:
            flush_list()
            blocks.append(HeadingBlock(level=len(heading.group(1)), text=heading.group(2).strip()))
            continue

        heading = _SEMANTIC_HEADING.match(trimmed)
        if heading:
            flush_list()
            blocks.append(
                HeadingBlock(
                    level=int(heading.group(1)),
                    text=_HEADING_LABEL.sub("", trimmed).strip(),
                )
            )
            continue

        if trimmed.startswith(">"):
            flush_list()
            text = _QUOTE_MARKER.sub("", trimmed).strip()
            blocks.append(QuoteBlock(text=text, segments=parse_inline(text)))
            continue

        item = _UNORDERED_ITEM.match(trimmed)
        if item:
            if current_list is None or current_list.ordered:
                flush_list()
                current_list = _ListBuffer(ordered=False)
            current_list.items.append(item.group(1).strip())
            continue

        item = _ORDERED_ITEM.match(trimmed)
        if item:
            if current_list is None or not current_list.ordered:
                flush_list()
                current_list = _ListBuffer(ordered=True)
            current_list.items.append(item.group(2).strip())
            continue

        if trimmed == "---":
            flush_list()
            blocks.append(DividerBlock())
            continue

        flush_list()
        blocks.append(ParagraphBlock(text=trimmed, segments=parse_inline(trimmed)))

    flush_list()
    return blocks
