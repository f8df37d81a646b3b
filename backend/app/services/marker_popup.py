"""
StrayLink Backend — Marker Popup Lifecycle
============================================

What:  Decides when a map marker's popup is shown, kept open, or dismissed.
Why:   Hover gives a quick preview, but a pointer moving across the popup
       would flicker it closed while the user reads it or reaches for the
       "Open in Google Maps" link. Clicking pins the popup open until it is
       explicitly dismissed.
How:   An immutable MarkerState, a pure transition function, and a small
       controller that applies transitions to one marker on a MapCanvas.
Who:   MarkerRegistry creates one controller per marker.

State Machine (per marker):

    State      hovered   pinned   popup visible
    ─────────  ────────  ───────  ─────────────
    Idle       false     false    no
    Hovering   true      false    yes
    Pinned     any       true     yes

    mouseover   → hovered = true
    mouseout    → hovered = false   (popup stays open while pinned)
    click       → pinned = true     (idempotent)
    popupclose  → hovered = false, pinned = false   (only way out of Pinned)

Invariant:
    popup visible  ⇔  hovered or pinned

Concurrency:
    Everything here runs synchronously inside one UI event turn. Controllers
    own their state; no two markers share anything, so no locking is needed.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict

logger = logging.getLogger(__name__)


class MarkerEvent(str, Enum):
    """
    The four marker events consumed from the mapping library.

    Values are the library's own event names so they can be passed straight
    to `canvas.on()` / `canvas.off()`.
    """

    POINTER_ENTER = "mouseover"
    POINTER_LEAVE = "mouseout"
    CLICK = "click"
    POPUP_CLOSE = "popupclose"


@dataclass(frozen=True)
class MarkerState:
    """Interaction state of one marker. Ephemeral; never persisted."""

    hovered: bool = False
    pinned: bool = False

    @property
    def popup_visible(self) -> bool:
        return self.hovered or self.pinned


IDLE = MarkerState()


def transition(state: MarkerState, event: MarkerEvent) -> MarkerState:
    """
    Apply one event to a marker state.

    Pure and total: every event is valid in every state. Combinations that
    change nothing visible (mouseover while pinned, click while pinned) still
    return a well-defined state.

    Note:
        hovered keeps being tracked while pinned. It has no visible effect
        then, but it keeps the state truthful if pinning is ever released by
        something other than popupclose.
    """
    if event is MarkerEvent.POINTER_ENTER:
        return replace(state, hovered=True)
    if event is MarkerEvent.POINTER_LEAVE:
        return replace(state, hovered=False)
    if event is MarkerEvent.CLICK:
        return replace(state, pinned=True)
    if event is MarkerEvent.POPUP_CLOSE:
        return IDLE
    raise ValueError(f"Unknown marker event: {event!r}")


class MarkerPopupController:
    """
    Binds the state machine to one marker on a map canvas.

    Contract outward:
        attach()  : register a listener for each MarkerEvent on the marker
        detach()  : remove exactly those listeners (safe to call twice)

    Side effects:
        dispatch() stores the new state first, then opens or closes the
        popup only when visibility actually changed. Storing first matters:
        closing a popup makes the mapping library fire `popupclose`
        synchronously, which re-enters dispatch() and must see the
        already-updated state.
    """

    def __init__(self, canvas: Any, handle: Any):
        self.canvas = canvas
        self.handle = handle
        self.state: MarkerState = IDLE
        self._listeners: Dict[MarkerEvent, Callable[..., None]] = {}

    @property
    def attached(self) -> bool:
        return bool(self._listeners)

    def attach(self) -> None:
        if self._listeners:
            return
        for event in MarkerEvent:
            listener = self._make_listener(event)
            self._listeners[event] = listener
            self.canvas.on(self.handle, event.value, listener)

    def detach(self) -> None:
        for event, listener in self._listeners.items():
            self.canvas.off(self.handle, event.value, listener)
        self._listeners.clear()

    def dispatch(self, event: MarkerEvent) -> MarkerState:
        previous = self.state
        self.state = transition(previous, event)

        if self.state.popup_visible and not previous.popup_visible:
            self.canvas.open_popup(self.handle)
        elif previous.popup_visible and not self.state.popup_visible:
            self.canvas.close_popup(self.handle)

        logger.debug(
            "Marker %s: %s → hovered=%s pinned=%s",
            self.handle,
            event.value,
            self.state.hovered,
            self.state.pinned,
        )
        return self.state

    def _make_listener(self, event: MarkerEvent) -> Callable[..., None]:
        # Mapping libraries pass an event object we have no use for
        def listener(*_args: Any, **_kwargs: Any) -> None:
            self.dispatch(event)

        return listener
