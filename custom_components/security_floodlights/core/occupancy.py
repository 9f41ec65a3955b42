"""Occupancy sensor driven by a light group's motion switches.

Each light group owns one ``OccupancySensor``. Its motion switches feed a
``DebouncedAggregator`` that drives ``occupancy_detected``; ``tampered`` and
``active`` are independent cells written by the automation rules.
"""

from __future__ import annotations

import logging
from typing import Any

from .cell import Cell
from .debounce import DebouncedAggregator
from .entity import FloodlightEntity, yes_no
from .errors import InvalidCommandError
from .sink import StateSink
from .timer_manager import BaseTimerManager

_LOGGER = logging.getLogger(__name__)

CELL_OCCUPANCY = "occupancy"
CELL_TAMPERED = "tampered"
CELL_ACTIVE = "active"


class OccupancySensor(FloodlightEntity):
    """Debounced occupancy for one light group."""

    def __init__(
        self,
        entity_id: str,
        display_name: str,
        sink: StateSink,
        timer_manager: BaseTimerManager,
        motion_sensor_count: int,
        occupancy_timeout_seconds: float,
        occupancy_detected: bool = False,
        tampered: bool = False,
        active: bool = False,
    ) -> None:
        """Initialize the occupancy sensor.

        Args:
            entity_id: Stable identifier of the sensor
            display_name: Human-readable name of the light group
            sink: Persistence and telemetry sink
            timer_manager: Scheduler for the occupancy timeout
            motion_sensor_count: Number of motion switches feeding occupancy
            occupancy_timeout_seconds: Inactivity delay before occupancy clears
            occupancy_detected: Restored occupancy value
            tampered: Restored tampered value
            active: Restored active value
        """
        if isinstance(motion_sensor_count, bool) or not isinstance(motion_sensor_count, int):
            raise InvalidCommandError(
                f"Motion sensor count must be an integer, got {motion_sensor_count!r}"
            )
        if motion_sensor_count < 1:
            raise InvalidCommandError(
                f"Motion sensor count must be positive, got {motion_sensor_count}"
            )
        if occupancy_timeout_seconds < 0:
            raise InvalidCommandError(
                f"Occupancy timeout must be non-negative, got {occupancy_timeout_seconds}"
            )

        super().__init__(entity_id, display_name, sink)
        self.motion_sensor_count = motion_sensor_count
        self.occupancy_timeout_seconds = occupancy_timeout_seconds
        self._motion_switch_states: dict[int, bool] = dict.fromkeys(
            range(motion_sensor_count), False
        )

        self.occupancy_detected_cell: Cell[bool] = Cell(
            bool(occupancy_detected), f"{entity_id}.{CELL_OCCUPANCY}"
        )
        self.tampered_cell: Cell[bool] = Cell(bool(tampered), f"{entity_id}.{CELL_TAMPERED}")
        self.active_cell: Cell[bool] = Cell(bool(active), f"{entity_id}.{CELL_ACTIVE}")
        self.active_count_cell: Cell[int] = Cell(0, f"{entity_id}.active_count")

        self._track(CELL_OCCUPANCY, self.occupancy_detected_cell, yes_no)
        self._track(CELL_TAMPERED, self.tampered_cell, yes_no)
        self._track(CELL_ACTIVE, self.active_cell, yes_no)

        self.should_illuminate: Cell[bool] = Cell(
            self._compute_should_illuminate(), f"{entity_id}.should_illuminate"
        )
        for cell in (self.occupancy_detected_cell, self.tampered_cell, self.active_cell):
            cell.subscribe(
                lambda _value: self.should_illuminate.set(
                    self._compute_should_illuminate()
                )
            )

        self._aggregator = DebouncedAggregator(
            timer_manager,
            entity_id,
            occupancy_timeout_seconds,
            initial=bool(occupancy_detected),
        )
        self._unsubscribers.append(
            self._aggregator.output.subscribe(self._on_debounced_change)
        )
        self._aggregator.update(0)

    # ========================================================================
    # Motion switches
    # ========================================================================

    @property
    def motion_switch_states(self) -> dict[int, bool]:
        """Return a copy of the motion switch states by index."""
        return dict(self._motion_switch_states)

    @property
    def active_count(self) -> int:
        """Return the number of motion switches currently on."""
        return self.active_count_cell.value

    def get_motion_switch(self, index: int) -> bool:
        """Return the state of one motion switch."""
        self._check_index(index)
        return self._motion_switch_states[index]

    def set_motion_switch(self, index: int, on: bool) -> None:
        """Set one motion switch and feed the recomputed count to the debouncer."""
        self._check_index(index)
        if not isinstance(on, bool):
            raise InvalidCommandError(
                f"Motion switch {index} of {self.entity_id} accepts only booleans, got {on!r}"
            )

        previous = self.active_count
        self._motion_switch_states[index] = on
        count = sum(self._motion_switch_states.values())
        self.active_count_cell.set(count)
        self._aggregator.update(count)
        # Occupancy may have been cleared directly while the debouncer held on.
        if count and not previous:
            self.occupancy_detected = True

    def _check_index(self, index: int) -> None:
        if (
            isinstance(index, bool)
            or not isinstance(index, int)
            or not 0 <= index < self.motion_sensor_count
        ):
            raise InvalidCommandError(
                f"Motion switch index {index!r} out of range for {self.entity_id} "
                f"(0..{self.motion_sensor_count - 1})"
            )

    def _on_debounced_change(self, detected: bool) -> None:
        self.occupancy_detected = detected

    def _require_bool(self, cell_name: str, value: bool) -> bool:
        if not isinstance(value, bool):
            raise InvalidCommandError(
                f"{cell_name} of {self.entity_id} accepts only booleans, got {value!r}"
            )
        return value

    # ========================================================================
    # State cells
    # ========================================================================

    @property
    def occupancy_detected(self) -> bool:
        """Return True if occupancy is detected."""
        return self.occupancy_detected_cell.value

    @occupancy_detected.setter
    def occupancy_detected(self, value: bool) -> None:
        self.occupancy_detected_cell.set(self._require_bool(CELL_OCCUPANCY, value))

    @property
    def tampered(self) -> bool:
        """Return True while the group override is on."""
        return self.tampered_cell.value

    @tampered.setter
    def tampered(self, value: bool) -> None:
        self.tampered_cell.set(self._require_bool(CELL_TAMPERED, value))

    @property
    def active(self) -> bool:
        """Return True while occupancy should drive the lights."""
        return self.active_cell.value

    @active.setter
    def active(self, value: bool) -> None:
        self.active_cell.set(self._require_bool(CELL_ACTIVE, value))

    @property
    def is_timing_out(self) -> bool:
        """Return True while the occupancy timeout is pending."""
        return self._aggregator.is_timing_out

    def reevaluate_occupancy(self) -> None:
        """Set occupancy directly from the current motion switch count."""
        self.occupancy_detected = self.active_count > 0

    def _compute_should_illuminate(self) -> bool:
        return self.occupancy_detected and self.active and not self.tampered

    def get_info(self) -> dict[str, Any]:
        """Get occupancy diagnostic info."""
        return {
            "occupancy_detected": self.occupancy_detected,
            "tampered": self.tampered,
            "active": self.active,
            "active_count": self.active_count,
            "motion_switches": self.motion_switch_states,
            "occupancy_timeout": self.occupancy_timeout_seconds,
            "timing_out": self.is_timing_out,
        }

    def cleanup(self) -> None:
        """Cancel the occupancy timeout and stop reporting."""
        self._aggregator.cleanup()
        super().cleanup()
