# pointer.py
"""
Pointer and scroll notifications shared by every effect on the page.

The page host pushes raw pointer positions (page coordinates) and the current
vertical scroll offset into a ScrollService. Engines subscribe to it and
translate the values into their own surface-local coordinates.
"""
import logging
from typing import Any, Callable, List, Optional, Tuple

from geometry import Surface

# --- Data Contracts ---
#
# class Observable:
#   - subscribe(self, callback: Callable[[Any], None]) -> Callable[[], None]:
#     - Side Effects: calls callback immediately with the current value,
#       then on every emit(). The returned function unsubscribes; calling
#       it more than once is harmless.
#
# to_local(raw: (x, y), surface: Surface, scroll_y: float) -> (x, y):
#   - localPointer.x = raw.x - offset_x
#   - localPointer.y = raw.y - offset_y + scroll_y

Point = Tuple[float, float]


class Observable:
    """A value holder that notifies subscribers when the value changes."""

    def __init__(self, value: Any = None):
        self.value = value
        self._subscribers: List[Callable[[Any], None]] = []

    def subscribe(self, callback: Callable[[Any], None]) -> Callable[[], None]:
        self._subscribers.append(callback)
        callback(self.value)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def emit(self, value: Any) -> None:
        self.value = value
        # Copy so callbacks may unsubscribe while being notified
        for callback in list(self._subscribers):
            callback(value)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)


class ScrollService:
    """
    Page-level pointer position and vertical scroll offset.
    """
    def __init__(self, scroll_y: float = 0.0):
        self.scroll_y = Observable(float(scroll_y))
        self.pointer: Observable = Observable(None)

    def set_scroll_y(self, value: float) -> None:
        self.scroll_y.emit(float(value))

    def move_pointer(self, x: float, y: float) -> None:
        self.pointer.emit((float(x), float(y)))


def to_local(raw: Point, surface: Surface, scroll_y: float) -> Point:
    """Maps a page-coordinate pointer position into surface-local space."""
    return raw[0] - surface.offset_x, raw[1] - surface.offset_y + scroll_y


class PointerTracker:
    """
    Keeps one engine's surface-local pointer up to date.

    The tracker remembers the last raw position and scroll offset so the
    local pointer can be recomputed when either of them, or the surface
    offset, changes.
    """
    def __init__(self, service: ScrollService, initial: Point):
        self.local: Point = initial
        self._raw: Optional[Point] = None
        self._scroll_y = 0.0
        self._surface: Optional[Surface] = None
        self._unsubscribers = [
            service.scroll_y.subscribe(self._on_scroll),
            service.pointer.subscribe(self._on_pointer),
        ]

    def attach(self, surface: Surface) -> None:
        self._surface = surface
        self._update()

    def _on_scroll(self, value: float) -> None:
        self._scroll_y = value
        self._update()

    def _on_pointer(self, raw: Optional[Point]) -> None:
        self._raw = raw
        self._update()

    def _update(self) -> None:
        if self._raw is None or self._surface is None:
            return
        self.local = to_local(self._raw, self._surface, self._scroll_y)

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        logging.debug("Pointer tracker unsubscribed from scroll service.")
