"""
StrayLink Backend — Knowledge Article SQLAlchemy Model
========================================================

What:  ORM model for the `knowledge_articles` table in the hosted database.
Why:   Type-safe reads for the article reader and the share responder.
Who:   Used by ArticleService; Alembic reads it for local schemas.

Table Notes:
    - slug: Human-readable lookup key; unique when present, nullable for
      drafts imported before slugs existed
    - meta_* / og_*: SEO and Open Graph overrides; the share responder falls
      back from og_* → meta_* → title
    - image_url: List of image URLs (first non-blank one is used for previews)
    - published: Only published rows are visible to readers
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import Boolean, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import ARRAY, UUID, TIMESTAMP

from app.database import Base


class Article(Base):
    """A knowledge-base article written by the community."""

    __tablename__ = "knowledge_articles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        server_default=text("gen_random_uuid()"),
    )
    slug: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, unique=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Markdown-like body; parsed into blocks by app.services.article_content
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # ── SEO / Open Graph ──────────────────────────────────────────────────
    meta_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    meta_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    og_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    og_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    og_image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[List[str]]] = mapped_column(ARRAY(Text), nullable=True)
    image_alt: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    keywords: Mapped[Optional[List[str]]] = mapped_column(ARRAY(Text), nullable=True)

    published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    views: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # Related-article query: published + category, newest first
    __table_args__ = (
        Index("idx_articles_category_created_at", "category", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, slug='{self.slug}', published={self.published})>"
