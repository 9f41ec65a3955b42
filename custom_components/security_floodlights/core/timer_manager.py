"""Named one-shot timers shared by the floodlight core.

The debouncer and the wind override rule schedule their delayed work here.
Concrete managers decide where the clock comes from: the Home Assistant
event loop in production, a virtual clock in tests.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Callable

_LOGGER = logging.getLogger(__name__)

TimerCallback = Callable[[str], None]


class TimerType(Enum):
    """What a timer is waiting for."""

    OCCUPANCY = "occupancy"
    WIND_OVERRIDE = "wind_override"


class BaseTimer(ABC):
    """A single delayed callback.

    Subclasses schedule ``_expire`` on their clock in ``start`` and drop it
    in ``cancel``; the bookkeeping lives in ``_do_start`` and ``_do_cancel``.
    """

    def __init__(
        self,
        timer_type: TimerType,
        duration: float,
        callback: TimerCallback,
        name: str,
    ):
        """Initialize a timer.

        Args:
            timer_type: What the timer is waiting for
            duration: Delay in seconds
            callback: Called with the timer name on expiry
            name: Registry key, also used in log messages
        """
        self.timer_type = timer_type
        self.duration = duration
        self.callback = callback
        self.name = name

        self._started_at: datetime | None = None
        self._due_at: datetime | None = None

    @abstractmethod
    def start(self) -> None:
        """Schedule the callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Drop the callback. Does nothing if it already ran or was dropped."""

    @abstractmethod
    def _get_current_time(self) -> datetime:
        """Return now on this timer's clock."""

    def _do_start(self) -> None:
        if self.is_active:
            self.cancel()
        self._started_at = self._get_current_time()
        self._due_at = self._started_at + timedelta(seconds=self.duration)
        _LOGGER.debug(
            "Timer '%s' (%s) due in %.1fs at %s",
            self.name,
            self.timer_type.value,
            self.duration,
            self._due_at.strftime("%H:%M:%S"),
        )

    def _do_cancel(self) -> None:
        if not self.is_active:
            return
        _LOGGER.debug("Timer '%s' cancelled", self.name)
        self._started_at = None
        self._due_at = None

    def _expire(self) -> None:
        """Run the callback once, unless the timer was cancelled."""
        if not self.is_active:
            return
        self._started_at = None
        self._due_at = None
        _LOGGER.debug("Timer '%s' (%s) expired", self.name, self.timer_type.value)
        try:
            self.callback(self.name)
        except Exception:
            _LOGGER.exception("Error in timer callback for '%s'", self.name)

    @property
    def is_active(self) -> bool:
        """Return True while the callback is pending."""
        return self._due_at is not None

    @property
    def end_time(self) -> datetime | None:
        """Return when the callback is due, or None when idle."""
        return self._due_at

    @property
    def remaining_seconds(self) -> float:
        """Return seconds until expiry (0 when idle)."""
        if self._due_at is None:
            return 0
        return max(0.0, (self._due_at - self._get_current_time()).total_seconds())

    def get_info(self) -> dict[str, Any]:
        """Get timer diagnostic info."""
        return {
            "type": self.timer_type.value,
            "duration": self.duration,
            "is_active": self.is_active,
            "remaining_seconds": self.remaining_seconds,
            "end_time": self._due_at.isoformat() if self._due_at else None,
        }


class BaseTimerManager(ABC):
    """Registry of timers keyed by name.

    A name holds at most one timer: starting another under the same name
    cancels the first, so a debounce source never has two callbacks pending.
    """

    def __init__(self):
        self._timers: dict[str, BaseTimer] = {}

    @abstractmethod
    def create_timer(
        self,
        timer_type: TimerType,
        callback: TimerCallback,
        duration: float,
        name: str | None = None,
    ) -> BaseTimer:
        """Return an unstarted timer on this manager's clock."""

    def start_timer(
        self,
        name: str,
        timer_type: TimerType,
        callback: TimerCallback,
        duration: float,
    ) -> BaseTimer:
        """Start a timer under ``name``, replacing any pending one."""
        previous = self._timers.pop(name, None)
        if previous is not None:
            previous.cancel()
        timer = self.create_timer(timer_type, callback, duration, name)
        self._timers[name] = timer
        timer.start()
        return timer

    def cancel_timer(self, name: str) -> bool:
        """Cancel the timer registered under ``name``.

        Returns:
            True if a pending timer was cancelled
        """
        timer = self._timers.pop(name, None)
        if timer is None or not timer.is_active:
            return False
        timer.cancel()
        return True

    def cancel_all_timers(self) -> int:
        """Cancel every pending timer and clear the registry.

        Returns:
            Number of timers that were pending
        """
        pending = self.get_active_timers()
        for timer in pending:
            timer.cancel()
        self._timers.clear()
        if pending:
            _LOGGER.debug("Cancelled %d pending timer(s)", len(pending))
        return len(pending)

    def has_active_timer(self, name: str | None = None) -> bool:
        """Return True if ``name`` (or, without a name, any timer) is pending."""
        if name is None:
            return bool(self.get_active_timers())
        timer = self._timers.get(name)
        return timer is not None and timer.is_active

    def get_active_timers(self) -> list[BaseTimer]:
        """Return the pending timers."""
        return [timer for timer in self._timers.values() if timer.is_active]

    def get_info(self) -> dict[str, Any]:
        """Get diagnostic info for the pending timers."""
        active = self.get_active_timers()
        return {
            "active_timers": len(active),
            "timers": {timer.name: timer.get_info() for timer in active},
        }
