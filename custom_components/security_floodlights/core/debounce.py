"""Debounced aggregation of motion switch activity.

Turns the count of active motion switches into a single occupancy boolean:
the output goes true as soon as any switch is active and goes false only
after the delay has elapsed with no switch active.
"""

from __future__ import annotations

import logging

from .cell import Cell
from .errors import InvalidCommandError
from .timer_manager import BaseTimerManager, TimerType

_LOGGER = logging.getLogger(__name__)


class DebouncedAggregator:
    """Any-active aggregator with a trailing delay before going inactive."""

    def __init__(
        self,
        timer_manager: BaseTimerManager,
        name: str,
        delay_seconds: float,
        initial: bool = False,
    ) -> None:
        """Initialize the aggregator.

        Args:
            timer_manager: Scheduler used for the inactivity timer
            name: Name used for the timer and in log messages
            delay_seconds: Seconds of continuous inactivity before emitting False
            initial: Initial output value
        """
        if delay_seconds < 0:
            raise InvalidCommandError(f"Delay must be non-negative, got {delay_seconds}")

        self._timer_manager = timer_manager
        self.name = name
        self.delay_seconds = delay_seconds
        self._timer_name = f"{name}_inactivity"
        self._pending_active = False
        self.output: Cell[bool] = Cell(initial, f"{name}.debounced")

    @property
    def is_active(self) -> bool:
        """Return the debounced output."""
        return self.output.value

    @property
    def is_timing_out(self) -> bool:
        """Return True while the inactivity timer is pending."""
        return self._timer_manager.has_active_timer(self._timer_name)

    def update(self, count: int) -> None:
        """Feed a new count of active contributors."""
        if count < 0:
            raise InvalidCommandError(f"Active count must be non-negative, got {count}")

        _LOGGER.debug("%s active motion switches: %d", self.name, count)
        pending_active = count > 0

        if pending_active:
            self._pending_active = True
            self._timer_manager.cancel_timer(self._timer_name)
            if self.output.set(True):
                _LOGGER.debug("%s motion switches active", self.name)
            return

        if self._pending_active or (self.output.value and not self.is_timing_out):
            self._pending_active = False
            self._begin_timeout()

    def _begin_timeout(self) -> None:
        if not self.output.value:
            return
        if self.delay_seconds == 0:
            self._on_timeout(self._timer_name)
            return
        self._timer_manager.start_timer(
            self._timer_name,
            TimerType.OCCUPANCY,
            self._on_timeout,
            self.delay_seconds,
        )

    def _on_timeout(self, timer_name: str) -> None:
        if self._pending_active:
            return
        if self.output.set(False):
            _LOGGER.debug("%s motion switch inactivity timeout reached", self.name)

    def cleanup(self) -> None:
        """Cancel the pending inactivity timer."""
        self._timer_manager.cancel_timer(self._timer_name)
