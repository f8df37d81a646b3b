"""
StrayLink Backend — Report Map Tests
======================================

What:  Marker building, viewport rules, popup escaping and the map route.
"""

from unittest.mock import AsyncMock, patch

import pytest

from app.config import settings
from app.exceptions import ValidationError
from app.services.map_service import (
    build_google_maps_url,
    build_report_map,
    render_popup_html,
)
from app.services.report_service import ReportService


class TestBuildReportMap:

    def test_no_reports_uses_default_center(self):
        result = build_report_map([])
        assert result.markers == []
        assert result.total == 0
        assert (result.center.lat, result.center.lng) == (settings.map_default_lat, settings.map_default_lng)
        assert result.zoom == 14

    def test_center_is_first_point(self, make_report):
        reports = [make_report(latitude=18.79, longitude=98.98), make_report()]
        result = build_report_map(reports)
        assert (result.center.lat, result.center.lng) == (18.79, 98.98)
        assert result.zoom == 14

    def test_more_than_five_points_zooms_out(self, make_report):
        assert build_report_map([make_report() for _ in range(5)]).zoom == 14
        assert build_report_map([make_report() for _ in range(6)]).zoom == 11

    def test_reports_without_coordinates_are_skipped(self, make_report):
        reports = [
            make_report(latitude=None),
            make_report(longitude=None),
            make_report(latitude=float("nan")),
            make_report(location="kept"),
        ]
        result = build_report_map(reports)
        assert [m.location for m in result.markers] == ["kept"]

    def test_out_of_range_coordinates_are_skipped(self, make_report):
        reports = [
            make_report(location="first"),
            make_report(latitude=123.4, longitude=100.5),
            make_report(latitude=13.7, longitude=-200.0),
            make_report(location="last"),
        ]
        result = build_report_map(reports)
        assert [m.location for m in result.markers] == ["first", "last"]
        assert result.total == 2

    def test_limit_applies_after_filtering(self, make_report):
        reports = [make_report(latitude=None)] + [make_report(location=str(i)) for i in range(4)]
        result = build_report_map(reports, limit=2)
        assert [m.location for m in result.markers] == ["0", "1"]
        assert result.total == 2

    def test_marker_fields(self, make_report):
        report = make_report(status="in_progress")
        (marker,) = build_report_map([report]).markers
        assert marker.id == report.id
        assert marker.status == "in_progress"
        assert marker.maps_url == "https://www.google.com/maps?q=13.7262,100.5234"


class TestPopupHtml:

    def test_contents(self, make_report):
        html = render_popup_html(make_report())
        assert "Soi 5 market" in html
        assert "Bangkok · Bang Rak" in html
        assert "lat 13.726, lng 100.523" in html
        assert 'href="https://www.google.com/maps?q=13.7262,100.5234"' in html
        assert "Open in Google Maps" in html

    def test_placeholders_and_escaping(self, make_report):
        html = render_popup_html(
            make_report(location="<script>alert(1)</script>", province=None, district=None)
        )
        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "Unknown province · Unknown district" in html

    def test_search_link_without_coordinates(self, make_report):
        report = make_report(latitude=None, longitude=None, location="Wat Pho", province=None)
        assert build_google_maps_url(report) == (
            "https://www.google.com/maps/search/?api=1&query=Wat%20Pho%20Bang%20Rak"
        )
        html = render_popup_html(report)
        assert "lat -, lng -" in html
        assert "query=Wat%20Pho%20Bang%20Rak" in html

    def test_no_link_without_coordinates_or_location(self, make_report):
        report = make_report(latitude=None, longitude=None, location=None)
        assert build_google_maps_url(report) is None
        html = render_popup_html(report)
        assert "Unknown location" in html
        assert "Open in Google Maps" not in html


class TestReportService:

    @pytest.mark.asyncio
    async def test_unknown_status_rejected(self, mock_db_session):
        with pytest.raises(ValidationError):
            await ReportService().list_mappable_reports(mock_db_session, status="closed")
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_returns_rows(self, mock_db_session, db_result, make_report):
        reports = [make_report(), make_report()]
        mock_db_session.execute.return_value = db_result(reports)
        assert await ReportService().list_mappable_reports(mock_db_session, status="pending") == reports


class TestReportMapRoute:

    @pytest.mark.asyncio
    async def test_map_payload(self, test_client, make_report):
        reports = [make_report() for _ in range(6)]
        with patch(
            "app.routes.reports.report_service.list_mappable_reports",
            AsyncMock(return_value=reports),
        ) as lookup:
            response = await test_client.get("/api/reports/map", params={"limit": 10, "status": "pending"})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 6
        assert data["zoom"] == 11
        assert data["center"] == {"lat": 13.7262, "lng": 100.5234}
        assert data["markers"][0]["popup_html"].startswith("<div")
        assert lookup.await_args.kwargs == {"status": "pending", "limit": 10}

    @pytest.mark.asyncio
    async def test_bad_row_does_not_break_feed(self, test_client, make_report):
        reports = [make_report(), make_report(latitude=123.4, longitude=100.5)]
        with patch(
            "app.routes.reports.report_service.list_mappable_reports",
            AsyncMock(return_value=reports),
        ):
            response = await test_client.get("/api/reports/map")

        assert response.status_code == 200
        assert response.json()["total"] == 1

    @pytest.mark.asyncio
    async def test_limit_bounds(self, test_client):
        response = await test_client.get("/api/reports/map", params={"limit": 501})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_status_is_400(self, test_client):
        response = await test_client.get("/api/reports/map", params={"status": "closed"})
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
