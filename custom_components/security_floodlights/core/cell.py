"""Observable state cells and edge signals.

A ``Cell`` holds one value, replays it to every new subscriber and notifies
subscribers synchronously whenever the value changes. Writing a value equal
to the current one is a no-op. A ``Signal`` is a value-less notification used
for edge streams ("turned on", "armed", ...).
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

_LOGGER = logging.getLogger(__name__)

V = TypeVar("V")
W = TypeVar("W")

Unsubscribe = Callable[[], None]


class Cell(Generic[V]):
    """Mutable value slot with replay-of-one and change deduplication."""

    def __init__(self, initial: V, name: str | None = None) -> None:
        """Initialize the cell.

        Args:
            initial: Initial value
            name: Optional name for debugging
        """
        self._value = initial
        self._version = 0
        self.name = name or "cell"
        self._subscribers: list[Callable[[V], None]] = []

    @property
    def value(self) -> V:
        """Return the current value."""
        return self._value

    def get(self) -> V:
        """Return the current value."""
        return self._value

    def set(self, value: V) -> bool:
        """Set a new value and notify subscribers.

        Returns:
            True if the value changed, False if it was equal to the current one
        """
        if value == self._value:
            return False

        self._value = value
        self._version += 1
        version = self._version
        for callback in list(self._subscribers):
            # A subscriber wrote a newer value; it has already been delivered.
            if self._version != version:
                break
            if callback not in self._subscribers:
                continue
            self._invoke(callback, value)
        return True

    def subscribe(self, callback: Callable[[V], None]) -> Unsubscribe:
        """Subscribe to value changes.

        The callback is invoked immediately with the current value, then on
        every change until the returned function is called.
        """
        self._subscribers.append(callback)
        self._invoke(callback, self._value)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def map(self, transform: Callable[[V], W], name: str | None = None) -> Cell[W]:
        """Return a derived cell holding ``transform(value)``.

        The derived cell deduplicates on its own value, so it only notifies
        when the transformed value changes.
        """
        derived: Cell[W] = Cell(transform(self._value), name or f"{self.name}.map")
        self.subscribe(lambda value: derived.set(transform(value)))
        return derived

    @property
    def subscriber_count(self) -> int:
        """Return the number of active subscribers."""
        return len(self._subscribers)

    def _invoke(self, callback: Callable[[V], None], value: V) -> None:
        try:
            callback(value)
        except Exception:
            _LOGGER.exception("Error in subscriber of cell '%s'", self.name)

    def __repr__(self) -> str:
        return f"Cell({self.name}={self._value!r})"


class Signal:
    """Value-less notification with an explicit subscriber list."""

    def __init__(self, name: str | None = None) -> None:
        self.name = name or "signal"
        self._callbacks: list[Callable[[], None]] = []

    def connect(self, callback: Callable[[], None]) -> Unsubscribe:
        """Register a callback and return a function that removes it."""
        self._callbacks.append(callback)

        def disconnect() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return disconnect

    def fire(self) -> None:
        """Invoke every connected callback in registration order."""
        for callback in list(self._callbacks):
            try:
                callback()
            except Exception:
                _LOGGER.exception("Error in callback of signal '%s'", self.name)


def edge_signals(cell: Cell[bool], name: str) -> tuple[Signal, Signal]:
    """Build rising and falling edge signals for a boolean cell.

    The replayed initial value is not an edge; every later notification from
    the cell is a transition because the cell deduplicates writes.

    Returns:
        Tuple of (rising, falling) signals
    """
    rising = Signal(f"{name}.rising")
    falling = Signal(f"{name}.falling")
    replaying = True

    def on_change(value: bool) -> None:
        if replaying:
            return
        if value:
            rising.fire()
        else:
            falling.fire()

    cell.subscribe(on_change)
    replaying = False
    return rising, falling
