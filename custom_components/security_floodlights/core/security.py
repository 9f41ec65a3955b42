"""Armable security system state."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from .cell import Cell, Unsubscribe, edge_signals
from .entity import FloodlightEntity
from .errors import InvalidCommandError
from .sink import StateSink

_LOGGER = logging.getLogger(__name__)

CELL_STATE = "state"


class SecurityState(Enum):
    """Target and current states of the security system."""

    DISARMED = "disarmed"
    STAY_ARMED = "stay"
    NIGHT_ARMED = "night"

    @classmethod
    def parse(cls, value: Any) -> SecurityState:
        """Convert a state or its name into a ``SecurityState``.

        Raises:
            InvalidCommandError: If the value is not one of the three states
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
            try:
                return cls[value.upper()]
            except KeyError:
                pass
        raise InvalidCommandError(f"Invalid security state: {value!r}")


class SecuritySystem(FloodlightEntity):
    """Security system cycling between disarmed, stay-armed and night-armed.

    ``armed`` fires when leaving DISARMED and ``disarmed`` when returning to
    it. Switching between the two armed states fires neither.
    """

    def __init__(
        self,
        entity_id: str,
        display_name: str,
        sink: StateSink,
        initial: SecurityState | str | None = None,
    ) -> None:
        """Initialize the security system.

        Args:
            entity_id: Stable identifier of the system
            display_name: Human-readable name
            sink: Persistence and telemetry sink
            initial: Restored state (defaults to DISARMED)
        """
        super().__init__(entity_id, display_name, sink)
        state = SecurityState.parse(initial) if initial is not None else SecurityState.DISARMED
        self.state_cell: Cell[SecurityState] = Cell(state, f"{entity_id}.{CELL_STATE}")
        self._track(
            CELL_STATE,
            self.state_cell,
            lambda value: value.value,
            persisted=lambda value: value.value,
        )
        self.armed_cell: Cell[bool] = self.state_cell.map(
            lambda value: value is not SecurityState.DISARMED, f"{entity_id}.armed"
        )
        self.armed, self.disarmed = edge_signals(self.armed_cell, entity_id)

    @property
    def state(self) -> SecurityState:
        """Return the current state."""
        return self.state_cell.value

    @property
    def state_name(self) -> str:
        """Return the human-readable state name."""
        return self.state_cell.value.value

    @property
    def is_armed(self) -> bool:
        """Return True in either armed state."""
        return self.armed_cell.value

    @property
    def is_disarmed(self) -> bool:
        """Return True when disarmed."""
        return not self.armed_cell.value

    def set_target_state(self, state: SecurityState | str) -> bool:
        """Move the system to a new state.

        Returns:
            True if the state changed
        """
        return self.state_cell.set(SecurityState.parse(state))

    def subscribe(self, callback) -> Unsubscribe:
        """Subscribe to the state (replays the current state)."""
        return self.state_cell.subscribe(callback)
