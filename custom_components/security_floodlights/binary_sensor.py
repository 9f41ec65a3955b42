"""Binary sensor platform exposing light group occupancy."""

from __future__ import annotations

from typing import Any

from homeassistant.components.binary_sensor import (
    BinarySensorDeviceClass,
    BinarySensorEntity,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .core import FloodlightController, LightGroup
from .entity import FloodlightCellEntity, group_device_info


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up one occupancy sensor per light group."""
    controller: FloodlightController = config_entry.runtime_data
    async_add_entities(
        FloodlightOccupancySensor(controller, config_entry, group)
        for group in controller.light_groups.values()
    )


class FloodlightOccupancySensor(FloodlightCellEntity, BinarySensorEntity):
    """Debounced occupancy of a light group.

    Downstream automations read ``active`` and ``tampered`` from the
    attributes to decide between dim, bright and off.
    """

    _attr_name = "Occupancy"
    _attr_device_class = BinarySensorDeviceClass.OCCUPANCY

    def __init__(
        self,
        controller: FloodlightController,
        config_entry: ConfigEntry,
        group: LightGroup,
    ) -> None:
        """Initialize the sensor."""
        sensor = group.occupancy_sensor
        super().__init__(
            controller,
            f"{config_entry.entry_id}_{sensor.entity_id}",
            group_device_info(config_entry.entry_id, group),
            [
                sensor.occupancy_detected_cell,
                sensor.tampered_cell,
                sensor.active_cell,
                sensor.active_count_cell,
            ],
        )
        self._sensor = sensor

    @property
    def is_on(self) -> bool:
        """Return True if occupancy is detected."""
        return self._sensor.occupancy_detected

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the tampered and active flags."""
        return {
            "tampered": self._sensor.tampered,
            "active": self._sensor.active,
            "active_motion_switches": self._sensor.active_count,
            "occupancy_timeout": self._sensor.occupancy_timeout_seconds,
        }
