"""
StrayLink Backend — Article Service
=====================================

What:  Reads published knowledge articles for the reader page and the share
       responder.
Why:   Articles are addressed by slug in public URLs, but older share links
       and admin tools use the UUID. Both must resolve to the same article.
How:   Identifier lookup with a fallback column, plus related articles and a
       best-effort view counter.

Lookup order (get_published_article):
    identifier is a UUID  → id, then slug
    anything else         → slug only (an id lookup could never match and
                            PostgreSQL rejects the cast)
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import DatabaseError, NotFoundError
from app.models.article import Article
from app.schemas.article import ArticleDetailResponse, ArticleSummary
from app.services.article_content import parse_article_content
from app.services.links import encode_path_segment, normalize_site_url, pick_image

logger = logging.getLogger(__name__)


def parse_uuid(value: str) -> Optional[uuid.UUID]:
    """Return the UUID for a canonical UUID string, else None."""
    try:
        return uuid.UUID(value)
    except ValueError:
        return None


class ArticleService:
    """
    Business logic layer for knowledge articles.

    Stateless; receives the session per call like the other services.
    """

    async def get_published_article(
        self, db: AsyncSession, identifier: str
    ) -> Optional[Article]:
        """
        Find a published article by id or slug.

        Returns:
            The Article, or None when nothing published matches.

        Raises:
            DatabaseError: A query failed.
        """
        identifier = (identifier or "").strip()
        if not identifier:
            return None

        article_id = parse_uuid(identifier)
        try:
            if article_id is not None:
                article = await self._fetch_one(db, Article.id == article_id)
                if article is not None:
                    return article
            return await self._fetch_one(db, Article.slug == identifier)
        except Exception as e:
            logger.error("Database error fetching article %s: %s", identifier, str(e))
            raise DatabaseError(
                message="Could not retrieve the article. Please try again.",
                context={"identifier": identifier, "error_type": type(e).__name__},
            )

    async def get_related_articles(
        self,
        db: AsyncSession,
        category: Optional[str],
        exclude_id: uuid.UUID,
        limit: int = 3,
    ) -> List[ArticleSummary]:
        """Published articles of the same category, newest first."""
        if not category:
            return []

        try:
            result = await db.execute(
                select(Article)
                .where(Article.published.is_(True))
                .where(Article.category == category)
                .where(Article.id != exclude_id)
                .order_by(desc(Article.created_at))
                .limit(limit)
            )
            articles = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error fetching related articles: %s", str(e))
            raise DatabaseError(
                message="Could not retrieve related articles. Please try again.",
                context={"category": category},
            )

        return [
            ArticleSummary(
                id=article.id,
                slug=article.slug,
                title=article.title,
                category=article.category,
                image_url=pick_image(article.image_url),
                views=article.views or 0,
            )
            for article in articles
        ]

    async def increment_views(self, db: AsyncSession, article_id: uuid.UUID) -> None:
        """
        Bump the view counter. Best effort: a failed counter must never break
        reading the article, so errors are logged and swallowed here.

        Runs in a savepoint; a failed UPDATE rolls back only the savepoint and
        leaves the request transaction usable.
        """
        try:
            async with db.begin_nested():
                await db.execute(
                    update(Article)
                    .where(Article.id == article_id)
                    .values(views=Article.views + 1)
                )
        except Exception as e:
            logger.warning("Could not increment views for article %s: %s", article_id, str(e))

    async def get_article_detail(
        self, db: AsyncSession, identifier: str
    ) -> ArticleDetailResponse:
        """
        Full reader payload: article, parsed blocks, related articles.

        Raises:
            NotFoundError: No published article matches (→ 404)
            DatabaseError: A query failed (→ 500)
        """
        article = await self.get_published_article(db, identifier)
        if article is None:
            raise NotFoundError(resource="article", resource_id=identifier.strip() or None)

        related = await self.get_related_articles(db, article.category, article.id)
        await self.increment_views(db, article.id)

        site = normalize_site_url(settings.site_url) or settings.fallback_site_url
        return ArticleDetailResponse(
            id=article.id,
            slug=article.slug,
            title=article.title,
            category=article.category,
            meta_title=article.meta_title,
            meta_description=article.meta_description,
            image_url=pick_image(article.og_image) or pick_image(article.image_url),
            image_alt=article.image_alt,
            keywords=article.keywords or [],
            views=(article.views or 0) + 1,
            created_at=article.created_at,
            updated_at=article.updated_at,
            blocks=parse_article_content(article.content),
            related=related,
            share_url=f"{site}/share/article/{encode_path_segment(article.slug or str(article.id))}",
        )

    async def _fetch_one(self, db: AsyncSession, condition) -> Optional[Article]:
        result = await db.execute(
            select(Article).where(condition).where(Article.published.is_(True))
        )
        return result.scalar_one_or_none()


# ── Singleton Instance ────────────────────────────────────────────────────
article_service = ArticleService()
