"""On/off switch with edge notifications."""

from __future__ import annotations

import logging

from .cell import Cell, Unsubscribe, edge_signals
from .entity import FloodlightEntity, on_off
from .errors import InvalidCommandError
from .sink import StateSink

_LOGGER = logging.getLogger(__name__)

CELL_ON = "on"


class FloodlightSwitch(FloodlightEntity):
    """A boolean switch such as a light group override or the wind override.

    ``turned_on`` and ``turned_off`` fire once per transition; writing the
    current value again fires nothing.
    """

    def __init__(
        self,
        entity_id: str,
        display_name: str,
        sink: StateSink,
        initial: bool = False,
    ) -> None:
        """Initialize the switch.

        Args:
            entity_id: Stable identifier of the switch
            display_name: Human-readable name
            sink: Persistence and telemetry sink
            initial: Restored on/off value
        """
        super().__init__(entity_id, display_name, sink)
        self.on: Cell[bool] = Cell(bool(initial), f"{entity_id}.{CELL_ON}")
        self._track(CELL_ON, self.on, on_off)
        self.turned_on, self.turned_off = edge_signals(self.on, entity_id)

    @property
    def is_on(self) -> bool:
        """Return True if the switch is on."""
        return self.on.value

    @is_on.setter
    def is_on(self, value: bool) -> None:
        self.set(value)

    @property
    def is_off(self) -> bool:
        """Return True if the switch is off."""
        return not self.on.value

    def set(self, value: bool) -> bool:
        """Turn the switch on or off.

        Returns:
            True if the state changed
        """
        if not isinstance(value, bool):
            raise InvalidCommandError(
                f"Switch {self.entity_id} accepts only booleans, got {value!r}"
            )
        return self.on.set(value)

    def toggle(self) -> None:
        """Invert the switch state."""
        self.set(not self.is_on)

    def subscribe(self, callback) -> Unsubscribe:
        """Subscribe to the on/off value (replays the current value)."""
        return self.on.subscribe(callback)
