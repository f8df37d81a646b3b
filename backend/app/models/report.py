"""
StrayLink Backend — Stray Sighting Report SQLAlchemy Model
============================================================

What:  ORM model for the `reports` table: geotagged stray-animal sightings.
Who:   Read by ReportService to build the report map.

Lifecycle (status):
    pending → in_progress → resolved

Coordinates are nullable: reporters may describe the place in words only.
Such reports are listed but never placed on the map.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import Float, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import ARRAY, UUID, TIMESTAMP

from app.database import Base

REPORT_STATUSES = ("pending", "in_progress", "resolved")


class Report(Base):
    """A stray-animal sighting submitted by a volunteer."""

    __tablename__ = "reports"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        server_default=text("gen_random_uuid()"),
    )
    province: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    district: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    photo_urls: Mapped[Optional[List[str]]] = mapped_column(ARRAY(Text), nullable=True)

    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    animal_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1, server_default=text("1")
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="pending",
        server_default=text("'pending'"),
        comment="pending, in_progress, resolved",
    )
    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(UUID(as_uuid=True), nullable=True)

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

    __table_args__ = (
        Index("idx_reports_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Report(id={self.id}, status='{self.status}', location='{self.location}')>"
