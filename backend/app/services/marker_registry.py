"""
StrayLink Backend — Marker Registry
=====================================

What:  Owns every marker placed on one shared map canvas.
Why:   The map object is long-lived mutable state shared by all markers.
       Routing every add/remove through one registry keeps that ownership in
       a single place; popup controllers never touch the map directly except
       through the handle they were given.
How:   Each marker id maps to (handle, MarkerPopupController). Refreshing the
       report list replaces every marker, which resets every popup state.

Teardown Discipline:
    A marker's listeners are detached BEFORE the marker is removed from the
    canvas. Removing first would leave callbacks registered on an element the
    map no longer knows about.
"""

import logging
import uuid
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Tuple

from app.schemas.map import MapMarker
from app.services.marker_popup import MarkerPopupController, MarkerState

logger = logging.getLogger(__name__)


class MapCanvas(Protocol):
    """
    What the mapping library has to provide.

    `handle` is whatever the library uses to identify a marker (a Leaflet
    marker object, an integer id, ...). The registry treats it as opaque.
    """

    def add_marker(self, latitude: float, longitude: float, popup_html: str) -> Any: ...

    def remove_marker(self, handle: Any) -> None: ...

    def on(self, handle: Any, event_name: str, callback: Callable[..., None]) -> None: ...

    def off(self, handle: Any, event_name: str, callback: Callable[..., None]) -> None: ...

    def open_popup(self, handle: Any) -> None: ...

    def close_popup(self, handle: Any) -> None: ...


class MarkerRegistry:
    """
    Add / remove / update markers on a MapCanvas.

    Every marker gets its own MarkerPopupController starting from Idle.
    """

    def __init__(self, canvas: MapCanvas):
        self.canvas = canvas
        self._entries: Dict[uuid.UUID, Tuple[Any, MarkerPopupController]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, marker_id: object) -> bool:
        return marker_id in self._entries

    @property
    def marker_ids(self) -> List[uuid.UUID]:
        return list(self._entries)

    def add(self, marker: MapMarker) -> MarkerPopupController:
        """Place a marker and attach a fresh controller. Replaces an existing id."""
        if marker.id in self._entries:
            self.remove(marker.id)

        handle = self.canvas.add_marker(marker.latitude, marker.longitude, marker.popup_html)
        controller = MarkerPopupController(self.canvas, handle)
        controller.attach()
        self._entries[marker.id] = (handle, controller)
        return controller

    def remove(self, marker_id: uuid.UUID) -> None:
        entry = self._entries.pop(marker_id, None)
        if entry is None:
            return
        handle, controller = entry
        controller.detach()
        self.canvas.remove_marker(handle)

    def update(self, marker: MapMarker) -> MarkerPopupController:
        """Replace a marker's position/popup. Its popup state resets to Idle."""
        return self.add(marker)

    def replace_all(self, markers: Iterable[MapMarker]) -> None:
        """Data refresh: drop every marker, then place the new list."""
        self.clear()
        count = 0
        for marker in markers:
            self.add(marker)
            count += 1
        logger.debug("Marker registry refreshed with %d markers", count)

    def clear(self) -> None:
        for marker_id in list(self._entries):
            self.remove(marker_id)

    def controller_for(self, marker_id: uuid.UUID) -> Optional[MarkerPopupController]:
        entry = self._entries.get(marker_id)
        return entry[1] if entry else None

    def state_of(self, marker_id: uuid.UUID) -> Optional[MarkerState]:
        controller = self.controller_for(marker_id)
        return controller.state if controller else None
