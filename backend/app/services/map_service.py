"""
StrayLink Backend — Report Map Builder
========================================

What:  Turns sighting reports into map markers plus an initial viewport.
Why:   The map view is a thin client: it places the markers it receives,
       binds the popup HTML as-is and hands them to a MarkerRegistry.
How:   Pure function over report-like objects; no database access here.

Viewport:
    ┌────────────────────┬──────────────────────────────┐
    │ markers            │ center / zoom                │
    ├────────────────────┼──────────────────────────────┤
    │ none               │ configured default / 14      │
    │ 1..5               │ first marker / 14            │
    │ more than 5        │ first marker / 11            │
    └────────────────────┴──────────────────────────────┘
"""

import math
from typing import Any, Iterable, List, Optional
from urllib.parse import quote

from app.config import settings
from app.schemas.map import LatLng, MapMarker, ReportMapResponse
from app.templating import templates

CITY_ZOOM = 11
STREET_ZOOM = 14
CITY_ZOOM_THRESHOLD = 5

UNKNOWN_LOCATION = "Unknown location"
UNKNOWN_PROVINCE = "Unknown province"
UNKNOWN_DISTRICT = "Unknown district"


def _is_coordinate(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def has_coordinates(report: Any) -> bool:
    """Both coordinates numeric and inside the WGS84 range."""
    lat, lng = report.latitude, report.longitude
    return (
        _is_coordinate(lat)
        and _is_coordinate(lng)
        and -90 <= lat <= 90
        and -180 <= lng <= 180
    )


def build_google_maps_url(report: Any) -> Optional[str]:
    """Point link when coordinates exist, else a text search, else None."""
    if has_coordinates(report):
        return f"https://www.google.com/maps?q={report.latitude},{report.longitude}"

    if report.location:
        query = f"{report.location} {report.district or ''} {report.province or ''}".strip()
        return f"https://www.google.com/maps/search/?api=1&query={quote(query, safe='')}"

    return None


def render_popup_html(report: Any) -> str:
    def fixed(value: Any) -> str:
        return f"{value:.3f}" if _is_coordinate(value) else "-"

    template = templates.get_template("marker_popup.html")
    return template.render(
        location=report.location or UNKNOWN_LOCATION,
        province=report.province or UNKNOWN_PROVINCE,
        district=report.district or UNKNOWN_DISTRICT,
        lat=fixed(report.latitude),
        lng=fixed(report.longitude),
        maps_url=build_google_maps_url(report),
    ).strip()


def to_marker(report: Any) -> MapMarker:
    return MapMarker(
        id=report.id,
        latitude=report.latitude,
        longitude=report.longitude,
        popup_html=render_popup_html(report),
        location=report.location,
        province=report.province,
        district=report.district,
        status=report.status or "pending",
        maps_url=build_google_maps_url(report),
    )


def build_report_map(reports: Iterable[Any], limit: Optional[int] = None) -> ReportMapResponse:
    """
    Build the map payload.

    Reports without numeric coordinates are skipped; `limit` applies to what
    is left, keeping the input order.
    """
    points = [report for report in reports if has_coordinates(report)]
    if limit is not None:
        points = points[:limit]

    markers: List[MapMarker] = [to_marker(report) for report in points]

    if markers:
        center = LatLng(lat=markers[0].latitude, lng=markers[0].longitude)
    else:
        center = LatLng(lat=settings.map_default_lat, lng=settings.map_default_lng)

    zoom = CITY_ZOOM if len(markers) > CITY_ZOOM_THRESHOLD else STREET_ZOOM

    return ReportMapResponse(markers=markers, center=center, zoom=zoom, total=len(markers))
