"""
StrayLink Backend — Knowledge Article Schemas
===============================================

What:  API contract for the article reader: parsed content blocks, inline
       segments, summaries for related articles and the detail response.

Content blocks:
    Article bodies are stored as markdown-like text. The parser
    (app.services.article_content) turns them into a flat list of typed
    blocks discriminated by `type`, so the client renders each block with a
    plain switch and never sees raw markup.

        heading    level 2-4
        paragraph  one per source line, with inline segments
        list       ordered or unordered, with per-item inline segments
        quote      with inline segments
        divider
"""

import uuid
from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Inline Segments
# ══════════════════════════════════════════════════════════════════════════


class InlineSegment(BaseModel):
    """A run of text inside a paragraph, list item or quote."""
    type: Literal["text", "strong", "em", "link"] = "text"
    text: str
    href: Optional[str] = Field(default=None, description="Target URL, links only")


# ══════════════════════════════════════════════════════════════════════════
# Content Blocks
# ══════════════════════════════════════════════════════════════════════════


class HeadingBlock(BaseModel):
    type: Literal["heading"] = "heading"
    level: int = Field(ge=2, le=4)
    text: str


class ParagraphBlock(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    text: str
    segments: List[InlineSegment] = Field(default_factory=list)


class ListBlock(BaseModel):
    type: Literal["list"] = "list"
    ordered: bool
    items: List[str]
    item_segments: List[List[InlineSegment]] = Field(default_factory=list)


class QuoteBlock(BaseModel):
    type: Literal["quote"] = "quote"
    text: str
    segments: List[InlineSegment] = Field(default_factory=list)


class DividerBlock(BaseModel):
    type: Literal["divider"] = "divider"


ContentBlock = Annotated[
    Union[HeadingBlock, ParagraphBlock, ListBlock, QuoteBlock, DividerBlock],
    Field(discriminator="type"),
]


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ArticleSummary(BaseModel):
    """Compact article card used for the "related articles" rail."""
    id: uuid.UUID
    slug: Optional[str] = None
    title: str
    category: Optional[str] = None
    image_url: Optional[str] = Field(default=None, description="First usable image")
    views: int = 0


class ArticleDetailResponse(BaseModel):
    """
    What:  Full article for the reader page.
    Who:   Returned by GET /api/articles/{slug_or_id}.

    share_url points at the social-preview responder so that links pasted
    into chat apps show a rich card.
    """
    id: uuid.UUID
    slug: Optional[str] = None
    title: str
    category: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    image_url: Optional[str] = None
    image_alt: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    views: int = 0
    created_at: datetime
    updated_at: datetime
    blocks: List[ContentBlock] = Field(default_factory=list)
    related: List[ArticleSummary] = Field(default_factory=list)
    share_url: str
