"""Switch platform for override and motion switches."""

from __future__ import annotations

from typing import Any

from homeassistant.components.switch import SwitchEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import CONF_SHOW_WIND_OVERRIDE_SWITCH, DEFAULT_SHOW_WIND_OVERRIDE_SWITCH
from .core import FloodlightController, FloodlightSwitch, LightGroup, LightGroupConfig
from .entity import FloodlightCellEntity, group_device_info, system_device_info


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the wind override, group overrides and motion switches."""
    controller: FloodlightController = config_entry.runtime_data
    switches: list[SwitchEntity] = []

    if config_entry.data.get(
        CONF_SHOW_WIND_OVERRIDE_SWITCH, DEFAULT_SHOW_WIND_OVERRIDE_SWITCH
    ):
        switches.append(
            FloodlightOverrideSwitch(
                controller,
                controller.wind_override,
                f"{config_entry.entry_id}_{controller.wind_override.entity_id}",
                system_device_info(
                    config_entry.entry_id, controller.security.display_name
                ),
                "Wind override",
                "mdi:weather-windy",
            )
        )

    for group_config in controller.config.light_groups:
        group = controller.get_group(group_config.id)
        device_info = group_device_info(config_entry.entry_id, group)
        switches.append(
            FloodlightOverrideSwitch(
                controller,
                group.override_switch,
                f"{config_entry.entry_id}_{group.override_switch.entity_id}",
                device_info,
                "Floodlight override",
                "mdi:lightbulb-off-outline",
            )
        )
        switches.extend(
            MotionSwitch(controller, config_entry, group, group_config, index)
            for index in range(group_config.motion_sensor_count)
        )

    async_add_entities(switches)


class FloodlightOverrideSwitch(FloodlightCellEntity, SwitchEntity):
    """The wind override or a light group override."""

    def __init__(
        self,
        controller: FloodlightController,
        switch: FloodlightSwitch,
        unique_id: str,
        device_info: DeviceInfo,
        name: str,
        icon: str,
    ) -> None:
        """Initialize the switch."""
        super().__init__(controller, unique_id, device_info, [switch.on])
        self._switch = switch
        self._attr_name = name
        self._attr_icon = icon

    @property
    def is_on(self) -> bool:
        """Return True if the override is on."""
        return self._switch.is_on

    async def async_turn_on(self, **kwargs: Any) -> None:
        """Turn the override on."""
        self._run_command(self._controller.set_switch, self._switch.entity_id, True)

    async def async_turn_off(self, **kwargs: Any) -> None:
        """Turn the override off."""
        self._run_command(self._controller.set_switch, self._switch.entity_id, False)


class MotionSwitch(FloodlightCellEntity, SwitchEntity):
    """Switch toggled by a floodlight's motion sensor automation."""

    _attr_icon = "mdi:motion-sensor"

    def __init__(
        self,
        controller: FloodlightController,
        config_entry: ConfigEntry,
        group: LightGroup,
        group_config: LightGroupConfig,
        index: int,
    ) -> None:
        """Initialize the motion switch."""
        sensor = group.occupancy_sensor
        super().__init__(
            controller,
            f"{config_entry.entry_id}_{group_config.motion_switch_id(index)}",
            group_device_info(config_entry.entry_id, group),
            [sensor.active_count_cell],
        )
        self._group = group
        self._index = index
        self._attr_name = f"Floodlight motion {index + 1}"

    @property
    def is_on(self) -> bool:
        """Return True while this motion switch is on."""
        return self._group.occupancy_sensor.get_motion_switch(self._index)

    async def async_turn_on(self, **kwargs: Any) -> None:
        """Report motion."""
        self._run_command(
            self._controller.set_motion_switch, self._group.id, self._index, True
        )

    async def async_turn_off(self, **kwargs: Any) -> None:
        """Report motion cleared."""
        self._run_command(
            self._controller.set_motion_switch, self._group.id, self._index, False
        )
