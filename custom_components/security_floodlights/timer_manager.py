"""Event loop timers for the floodlight occupancy timeouts and wind override."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from homeassistant.core import HomeAssistant
from homeassistant.util import dt as dt_util

from .core.timer_manager import BaseTimer, BaseTimerManager, TimerCallback, TimerType

_LOGGER = logging.getLogger(__name__)


class Timer(BaseTimer):
    """One-shot timer backed by ``loop.call_later``.

    Expiry runs on the event loop, so the core's cells are only ever written
    from the loop thread.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        timer_type: TimerType,
        duration: float,
        callback: TimerCallback,
        name: str,
    ):
        super().__init__(timer_type, duration, callback, name)
        self.hass = hass
        self._handle: asyncio.TimerHandle | None = None

    def _get_current_time(self) -> datetime:
        return dt_util.now()

    def start(self) -> None:
        """Schedule expiry ``duration`` seconds from now."""
        self._do_start()
        self._handle = self.hass.loop.call_later(self.duration, self._expire)

    def cancel(self) -> None:
        """Drop the scheduled expiry."""
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.cancel()
        self._do_cancel()


class TimerManager(BaseTimerManager):
    """Creates loop-backed timers for one config entry."""

    def __init__(self, hass: HomeAssistant):
        super().__init__()
        self.hass = hass

    def create_timer(
        self,
        timer_type: TimerType,
        callback: TimerCallback,
        duration: float,
        name: str | None = None,
    ) -> Timer:
        """Return an unstarted timer named after its type unless given a name."""
        return Timer(self.hass, timer_type, duration, callback, name or timer_type.value)
