"""
StrayLink Backend — Share Link Routes
=======================================

What:  HTML pages for shared article and pet links.
Who:   Fetched by link-preview crawlers (chat apps, social networks) and
       by people clicking a shared link, who get redirected right away.

Endpoints:
    GET /share/article/{id}    GET /share/article?id=...
    GET /share/pet/{id}        GET /share/pet?id=...

Both forms exist because older links were generated with the query string.
A missing id is the only client error (400, plain text); every other case
answers 200 with a preview page (see services/share_service.py).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db_session
from app.schemas.share import SharePreview
from app.services.share_service import share_service
from app.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/share", tags=["Share"])


def render_preview(request: Request, preview: SharePreview) -> Response:
    return templates.TemplateResponse(
        request,
        "share_preview.html",
        preview.template_context(settings.site_language),
        headers={"Cache-Control": f"public, max-age={settings.share_cache_max_age}"},
        media_type="text/html; charset=utf-8",
    )


async def _article_page(request: Request, db: AsyncSession, identifier: Optional[str]) -> Response:
    if not identifier or not identifier.strip():
        return PlainTextResponse("Missing article id", status_code=400)
    preview = await share_service.article_preview(db, identifier, request.headers)
    logger.info("Share preview article=%s found=%s", identifier, preview.found)
    return render_preview(request, preview)


async def _pet_page(request: Request, db: AsyncSession, identifier: Optional[str]) -> Response:
    if not identifier or not identifier.strip():
        return PlainTextResponse("Missing pet id", status_code=400)
    preview = await share_service.pet_preview(db, identifier, request.headers)
    logger.info("Share preview pet=%s found=%s", identifier, preview.found)
    return render_preview(request, preview)


@router.get("/article", response_class=HTMLResponse, summary="Article share page (query form)")
async def share_article_by_query(
    request: Request,
    id: Optional[str] = Query(default=None, description="Article slug or UUID"),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    return await _article_page(request, db, id)


@router.get("/article/{article_id}", response_class=HTMLResponse, summary="Article share page")
async def share_article(
    request: Request,
    article_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    return await _article_page(request, db, article_id)


@router.get("/pet", response_class=HTMLResponse, summary="Pet share page (query form)")
async def share_pet_by_query(
    request: Request,
    id: Optional[str] = Query(default=None, description="Pet UUID"),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    return await _pet_page(request, db, id)


@router.get("/pet/{pet_id}", response_class=HTMLResponse, summary="Pet share page")
async def share_pet(
    request: Request,
    pet_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    return await _pet_page(request, db, pet_id)
