"""
StrayLink Backend — Report Map Schemas
========================================

What:  The payload a map view needs to render sighting reports as markers.
Who:   Returned by GET /api/reports/map; MapMarker is also what the
       MarkerRegistry places on a map canvas.
"""

import uuid
from typing import List, Optional

from pydantic import BaseModel, Field


class LatLng(BaseModel):
    """A WGS84 coordinate pair, named the way the mapping library names it."""
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class MapMarker(BaseModel):
    """
    What:  One sighting report placed on the map.

    popup_html is pre-rendered and escaped server-side so the client can bind
    it to the marker as-is.
    """
    id: uuid.UUID = Field(description="Report identifier; also the marker id")
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    popup_html: str = Field(description="Escaped HTML for the marker popup")
    location: Optional[str] = None
    province: Optional[str] = None
    district: Optional[str] = None
    status: str = Field(default="pending")
    maps_url: Optional[str] = Field(default=None, description="Google Maps link for the point")


class ReportMapResponse(BaseModel):
    """
    What:  Markers plus the initial viewport.

    Viewport rules:
        center: first marker's coordinates, or the configured default center
        zoom:   11 when more than 5 markers are shown (city view), else 14
    """
    markers: List[MapMarker] = Field(description="Markers with valid coordinates")
    center: LatLng
    zoom: int = Field(ge=1, le=20)
    total: int = Field(description="Number of markers returned")
