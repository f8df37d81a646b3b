"""
StrayLink Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── map_canvas: In-memory stand-in for the mapping library
    ├── make_article / make_pet / make_report: ORM instances, never persisted
    └── test_client: HTTPX AsyncClient with the DB dependency overridden
"""

import os
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Override settings BEFORE any app import: app.config builds its singleton
# at import time.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "1000"
os.environ["SITE_URL"] = ""
os.environ["STORAGE_PUBLIC_BASE_URL"] = ""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.models.article import Article
from app.models.pet import Pet
from app.models.report import Report


# ══════════════════════════════════════════════════════════════════════════
# Fake Map Canvas
# ══════════════════════════════════════════════════════════════════════════

class FakeMapCanvas:
    """
    Records what the registry and controllers do to the map.

    Behaves like Leaflet where it matters: closing a popup fires the marker's
    `popupclose` listeners synchronously, and popups of different markers are
    independent.
    """

    def __init__(self):
        self._next_handle = 1
        self.markers: Dict[int, dict] = {}
        self.listeners: Dict[int, Dict[str, List[Callable]]] = defaultdict(lambda: defaultdict(list))
        self.open_popups: set = set()
        self.calls: List[tuple] = []
        # listener count still registered when each marker was removed
        self.listeners_at_removal: Dict[int, int] = {}

    def add_marker(self, latitude: float, longitude: float, popup_html: str) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self.markers[handle] = {"lat": latitude, "lng": longitude, "popup_html": popup_html}
        self.calls.append(("add_marker", handle))
        return handle

    def remove_marker(self, handle: int) -> None:
        self.listeners_at_removal[handle] = self.listener_count(handle)
        self.markers.pop(handle, None)
        self.open_popups.discard(handle)
        self.calls.append(("remove_marker", handle))

    def on(self, handle: int, event_name: str, callback: Callable) -> None:
        self.listeners[handle][event_name].append(callback)

    def off(self, handle: int, event_name: str, callback: Callable) -> None:
        self.listeners[handle][event_name].remove(callback)

    def open_popup(self, handle: int) -> None:
        self.calls.append(("open_popup", handle))
        self.open_popups.add(handle)

    def close_popup(self, handle: int) -> None:
        self.calls.append(("close_popup", handle))
        if handle in self.open_popups:
            self.open_popups.discard(handle)
            self.fire(handle, "popupclose")

    # ── Test helpers ──────────────────────────────────────────────────────

    def fire(self, handle: int, event_name: str) -> None:
        for callback in list(self.listeners[handle][event_name]):
            callback({"type": event_name})

    def dismiss(self, handle: int) -> None:
        """User closes the popup (close button, click on the map)."""
        self.close_popup(handle)

    def is_open(self, handle: int) -> bool:
        return handle in self.open_popups

    def listener_count(self, handle: int) -> int:
        return sum(len(callbacks) for callbacks in self.listeners[handle].values())


@pytest.fixture
def map_canvas():
    return FakeMapCanvas()


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

def _result_returning(value: Any) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    result.scalars.return_value.all.return_value = value if isinstance(value, list) else []
    return result


@pytest.fixture
def db_result():
    """Builds a mocked SQLAlchemy Result for scalar_one_or_none() / scalars().all()."""
    return _result_returning


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value = db_result(article)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    # AsyncSession.begin_nested() is used as "async with", not awaited
    session.begin_nested = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Model Factories
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_article():
    def factory(**overrides) -> Article:
        now = datetime.now(timezone.utc)
        fields = {
            "id": uuid4(),
            "slug": "feeding-street-cats",
            "title": "Feeding street cats safely",
            "category": "care",
            "content": "## Basics\nFeed at the same place every day.",
            "meta_title": None,
            "meta_description": None,
            "og_title": None,
            "og_description": None,
            "og_image": None,
            "image_url": ["https://cdn.example.org/cat.jpg"],
            "image_alt": None,
            "keywords": ["cats", "feeding"],
            "published": True,
            "views": 10,
            "created_at": now,
            "updated_at": now,
        }
        fields.update(overrides)
        return Article(**fields)

    return factory


@pytest.fixture
def make_pet():
    def factory(**overrides) -> Pet:
        fields = {
            "id": uuid4(),
            "name": "Mali",
            "age": "2 years",
            "gender": "female",
            "province": "Chiang Mai",
            "district": "Mueang",
            "story": None,
            "health_status": "Vaccinated",
            "is_adopted": False,
            "image_url": ["https://cdn.example.org/mali.jpg"],
            "created_at": datetime.now(timezone.utc),
        }
        fields.update(overrides)
        return Pet(**fields)

    return factory


@pytest.fixture
def make_report():
    def factory(**overrides) -> Report:
        now = datetime.now(timezone.utc)
        fields = {
            "id": uuid4(),
            "province": "Bangkok",
            "district": "Bang Rak",
            "location": "Soi 5 market",
            "description": "Three kittens near the market entrance",
            "photo_urls": [],
            "latitude": 13.7262,
            "longitude": 100.5234,
            "animal_count": 3,
            "status": "pending",
            "user_id": None,
            "created_at": now,
            "updated_at": now,
        }
        fields.update(overrides)
        return Report(**fields)

    return factory


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(mock_db_session):
    """
    HTTPX AsyncClient talking to the FastAPI app in-process.

    get_db_session is overridden with mock_db_session, so route tests only
    need to patch the service they exercise.
    """
    from app.database import get_db_session
    from app.main import app

    async def override_session():
        yield mock_db_session

    app.dependency_overrides[get_db_session] = override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
