"""Common base for floodlight entities."""

from __future__ import annotations

from typing import Any, Callable

from .cell import Cell, Unsubscribe
from .sink import StateSink


def yes_no(value: bool) -> str:
    """Describe a boolean as yes/no."""
    return "yes" if value else "no"


def on_off(value: bool) -> str:
    """Describe a boolean as on/off."""
    return "on" if value else "off"


class FloodlightEntity:
    """An entity owning one or more reported cells.

    Each tracked cell reports its initial value and every distinct change to
    the sink: the raw value to ``save`` and ``"<display name> <cell>: <label>"``
    to ``log``.
    """

    def __init__(self, entity_id: str, display_name: str, sink: StateSink) -> None:
        """Initialize the entity.

        Args:
            entity_id: Stable identifier used as the persistence key
            display_name: Human-readable name used in telemetry
            sink: Persistence and telemetry sink
        """
        self.entity_id = entity_id
        self.display_name = display_name
        self._sink = sink
        self._unsubscribers: list[Unsubscribe] = []

    def _track(
        self,
        cell_name: str,
        cell: Cell[Any],
        describe: Callable[[Any], str],
        persisted: Callable[[Any], Any] | None = None,
    ) -> None:
        """Report a cell's values to the sink.

        Args:
            cell_name: Name of the cell in persistence and telemetry
            cell: The cell to report
            describe: Converts a value into its human-readable label
            persisted: Optional conversion applied before saving
        """

        def report(value: Any) -> None:
            self._sink.save(
                self.entity_id, cell_name, persisted(value) if persisted else value
            )
            self._sink.log(f"{self.display_name} {cell_name}: {describe(value)}")

        self._unsubscribers.append(cell.subscribe(report))

    def cleanup(self) -> None:
        """Stop reporting to the sink."""
        for unsub in self._unsubscribers:
            unsub()
        self._unsubscribers.clear()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.entity_id!r})"
