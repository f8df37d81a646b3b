"""
StrayLink Backend — Article Route Handlers
============================================

What:  GET /api/articles/{slug_or_id} for the knowledge reader page.
How:   Delegates to ArticleService; NotFoundError becomes 404 in the global
       handler.

Caching Strategy:
    Short cache (60s). Views are counted per request, and editors expect
    corrections to show up quickly.
"""

import logging

from fastapi import APIRouter, Depends, Path, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.article import ArticleDetailResponse
from app.schemas.common import ErrorResponse
from app.services.article_service import article_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Articles"])


@router.get(
    "/articles/{slug_or_id}",
    response_model=ArticleDetailResponse,
    responses={
        200: {"description": "Article with parsed content", "model": ArticleDetailResponse},
        404: {"description": "No published article matches", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a published article by slug or ID",
    description=(
        "Looks the article up by UUID (then slug) or by slug, parses its body into "
        "content blocks, and lists up to three related articles of the same category."
    ),
)
async def get_article(
    response: Response,
    slug_or_id: str = Path(description="Article slug or UUID"),
    db: AsyncSession = Depends(get_db_session),
) -> ArticleDetailResponse:
    result = await article_service.get_article_detail(db, slug_or_id)
    response.headers["Cache-Control"] = "public, max-age=60"
    return result
