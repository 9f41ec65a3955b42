"""Persistence of floodlight state through Home Assistant storage."""

from __future__ import annotations

import logging
from typing import Any

from homeassistant.core import HomeAssistant
from homeassistant.helpers.storage import Store

from .const import STORAGE_KEY, STORAGE_SAVE_DELAY, STORAGE_VERSION
from .core.sink import MemoryStateSink

_LOGGER = logging.getLogger(__name__)


class FloodlightStore(MemoryStateSink):
    """State sink that writes every saved cell to ``.storage``.

    Saves are coalesced with ``Store.async_delay_save``; ``async_flush``
    writes pending data immediately.
    """

    def __init__(self, hass: HomeAssistant, entry_id: str) -> None:
        """Initialize the store."""
        super().__init__()
        self.hass = hass
        self._store: Store[dict[str, dict[str, Any]]] = Store(
            hass, STORAGE_VERSION, f"{STORAGE_KEY}.{entry_id}"
        )

    async def async_load(self) -> None:
        """Load previously saved cell values."""
        data = await self._store.async_load()
        if data:
            self.data = {entity_id: dict(cells) for entity_id, cells in data.items()}
            _LOGGER.debug("Restored state for %d floodlight entities", len(self.data))

    def save(self, entity_id: str, cell_name: str, value: Any) -> None:
        """Store the value and schedule a write to disk."""
        super().save(entity_id, cell_name, value)
        self._store.async_delay_save(self._data_to_save, STORAGE_SAVE_DELAY)

    def prune(self, entity_ids: list[str]) -> list[str]:
        """Forget unconfigured entities and schedule a write if any were dropped."""
        removed = super().prune(entity_ids)
        if removed:
            _LOGGER.debug("Dropping stored state of %s", ", ".join(removed))
            self._store.async_delay_save(self._data_to_save, STORAGE_SAVE_DELAY)
        return removed

    def _data_to_save(self) -> dict[str, dict[str, Any]]:
        return self.data

    async def async_flush(self) -> None:
        """Write the current state to disk now."""
        await self._store.async_save(self.data)

    async def async_remove(self) -> None:
        """Delete the stored state."""
        await self._store.async_remove()
