"""Persistence and telemetry sinks.

Every entity cell reports its values to a ``StateSink``: ``save`` receives
the raw value for persistence and ``log`` receives a human-readable line.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

_LOGGER = logging.getLogger(__name__)


class StateSink(ABC):
    """Boundary receiving cell changes from the core."""

    @abstractmethod
    def save(self, entity_id: str, cell_name: str, value: Any) -> None:
        """Persist a cell value. Must be idempotent."""

    @abstractmethod
    def log(self, message: str) -> None:
        """Record a human-readable telemetry line."""


class MemoryStateSink(StateSink):
    """Sink keeping the latest value of every cell in memory."""

    def __init__(self, data: dict[str, dict[str, Any]] | None = None) -> None:
        """Initialize the sink.

        Args:
            data: Previously saved values keyed by entity id, then cell name
        """
        self.data: dict[str, dict[str, Any]] = {
            entity_id: dict(cells) for entity_id, cells in (data or {}).items()
        }

    def save(self, entity_id: str, cell_name: str, value: Any) -> None:
        """Store the latest value of a cell."""
        self.data.setdefault(entity_id, {})[cell_name] = value

    def log(self, message: str) -> None:
        """Write the telemetry line to the log."""
        _LOGGER.info(message)

    def prune(self, entity_ids: list[str]) -> list[str]:
        """Forget values of entities not in ``entity_ids``.

        Returns:
            The entity ids that were removed
        """
        keep = set(entity_ids)
        removed = [entity_id for entity_id in self.data if entity_id not in keep]
        for entity_id in removed:
            del self.data[entity_id]
        return removed

    def restored(self, entity_id: str, cell_name: str, default: Any = None) -> Any:
        """Return a previously saved value, or the default."""
        return self.data.get(entity_id, {}).get(cell_name, default)
