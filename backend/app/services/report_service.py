"""
StrayLink Backend — Report Service
====================================

What:  Reads stray-animal sighting reports.
Who:   GET /api/reports/map (through map_service).
"""

import logging
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, ValidationError
from app.models.report import REPORT_STATUSES, Report

logger = logging.getLogger(__name__)


class ReportService:
    """Read access to the `reports` table."""

    async def list_mappable_reports(
        self,
        db: AsyncSession,
        status: Optional[str] = None,
        limit: int = 200,
    ) -> List[Report]:
        """
        Newest reports that have both coordinates.

        Args:
            status: Only reports in this lifecycle state (see REPORT_STATUSES).
            limit:  Applied after the coordinate filter.

        Raises:
            ValidationError: Unknown status.
            DatabaseError:   The query failed.
        """
        if status is not None and status not in REPORT_STATUSES:
            raise ValidationError(
                message=f"Unknown report status '{status}'. Use one of: {', '.join(REPORT_STATUSES)}.",
                field="status",
            )

        query = (
            select(Report)
            .where(Report.latitude.is_not(None))
            .where(Report.longitude.is_not(None))
        )
        if status is not None:
            query = query.where(Report.status == status)
        query = query.order_by(desc(Report.created_at)).limit(limit)

        try:
            result = await db.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing reports: %s", str(e))
            raise DatabaseError(
                message="Could not retrieve reports. Please try again.",
                context={"status": status, "limit": limit},
            )


# ── Singleton Instance ────────────────────────────────────────────────────
report_service = ReportService()
