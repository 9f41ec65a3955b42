"""Base entity binding Home Assistant entities to floodlight core cells."""

from __future__ import annotations

from typing import Any, Callable

from homeassistant.core import callback
from homeassistant.exceptions import ServiceValidationError
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity import Entity

from .const import DOMAIN, MANUFACTURER
from .core import Cell, FloodlightController, InvalidCommandError, LightGroup


def system_device_info(entry_id: str, name: str) -> DeviceInfo:
    """Device holding the security system and the wind override."""
    return DeviceInfo(
        identifiers={(DOMAIN, f"{entry_id}_system")},
        name=name,
        manufacturer=MANUFACTURER,
        model="Security Floodlights",
    )


def group_device_info(entry_id: str, group: LightGroup) -> DeviceInfo:
    """Device holding one light group's sensor and switches."""
    return DeviceInfo(
        identifiers={(DOMAIN, f"{entry_id}_{group.id}")},
        name=group.occupancy_sensor.display_name,
        manufacturer=MANUFACTURER,
        model="Light Group",
        via_device=(DOMAIN, f"{entry_id}_system"),
    )


class FloodlightCellEntity(Entity):
    """Entity whose state is read from one or more core cells.

    The entity writes its state whenever any of its cells changes and holds
    no state of its own.
    """

    _attr_has_entity_name = True
    _attr_should_poll = False

    def __init__(
        self,
        controller: FloodlightController,
        unique_id: str,
        device_info: DeviceInfo,
        cells: list[Cell[Any]],
    ) -> None:
        """Initialize the entity."""
        self._controller = controller
        self._attr_unique_id = unique_id
        self._attr_device_info = device_info
        self._cells = cells
        self._unsubscribers: list[Callable[[], None]] = []

    async def async_added_to_hass(self) -> None:
        """Subscribe to the core cells."""
        await super().async_added_to_hass()
        for cell in self._cells:
            self._unsubscribers.append(cell.subscribe(self._handle_cell_update))

    async def async_will_remove_from_hass(self) -> None:
        """Unsubscribe from the core cells."""
        for unsub in self._unsubscribers:
            unsub()
        self._unsubscribers.clear()
        await super().async_will_remove_from_hass()

    @callback
    def _handle_cell_update(self, _value: Any) -> None:
        """Write state when a cell changes."""
        self.async_write_ha_state()

    @staticmethod
    def _run_command(command: Callable[..., Any], *args: Any) -> None:
        """Run a core command, reporting invalid commands to the caller."""
        try:
            command(*args)
        except InvalidCommandError as err:
            raise ServiceValidationError(str(err)) from err
