"""
StrayLink Backend — Report Map Route
======================================

What:  GET /api/reports/map, the markers and viewport for the report map.
Who:   Home page overview map and the full report map page.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.map import ReportMapResponse
from app.services.map_service import build_report_map
from app.services.report_service import report_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Reports"])


@router.get(
    "/reports/map",
    response_model=ReportMapResponse,
    responses={
        200: {"description": "Markers and initial viewport", "model": ReportMapResponse},
        400: {"description": "Unknown status filter", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Sighting reports as map markers",
    description=(
        "Returns the newest reports that have coordinates, each with escaped popup "
        "HTML and a Google Maps link, plus the map center and zoom to start from."
    ),
)
async def get_report_map(
    limit: int = Query(default=200, ge=1, le=500, description="Maximum markers to return"),
    status: Optional[str] = Query(
        default=None,
        description="Only reports in this state: pending, in_progress or resolved",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> ReportMapResponse:
    reports = await report_service.list_mappable_reports(db, status=status, limit=limit)
    result = build_report_map(reports, limit=limit)
    logger.debug("Report map: %d markers (status=%s)", result.total, status)
    return result
