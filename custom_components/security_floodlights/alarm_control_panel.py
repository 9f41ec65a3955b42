"""Alarm control panel platform for the floodlight security system."""

from __future__ import annotations

from homeassistant.components.alarm_control_panel import (
    AlarmControlPanelEntity,
    AlarmControlPanelEntityFeature,
    AlarmControlPanelState,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .core import SYSTEM_ID, FloodlightController, SecurityState
from .entity import FloodlightCellEntity, system_device_info

ALARM_STATES: dict[SecurityState, AlarmControlPanelState] = {
    SecurityState.DISARMED: AlarmControlPanelState.DISARMED,
    SecurityState.STAY_ARMED: AlarmControlPanelState.ARMED_HOME,
    SecurityState.NIGHT_ARMED: AlarmControlPanelState.ARMED_NIGHT,
}


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the security system panel."""
    controller: FloodlightController = config_entry.runtime_data
    async_add_entities([FloodlightSecurityPanel(controller, config_entry)])


class FloodlightSecurityPanel(FloodlightCellEntity, AlarmControlPanelEntity):
    """Security system arming the floodlight groups."""

    _attr_name = None
    _attr_code_arm_required = False
    _attr_supported_features = (
        AlarmControlPanelEntityFeature.ARM_HOME | AlarmControlPanelEntityFeature.ARM_NIGHT
    )

    def __init__(self, controller: FloodlightController, config_entry: ConfigEntry) -> None:
        """Initialize the panel."""
        super().__init__(
            controller,
            f"{config_entry.entry_id}_{SYSTEM_ID}",
            system_device_info(config_entry.entry_id, controller.security.display_name),
            [controller.security.state_cell],
        )

    @property
    def alarm_state(self) -> AlarmControlPanelState:
        """Return the current alarm state."""
        return ALARM_STATES[self._controller.security.state]

    async def async_alarm_disarm(self, code: str | None = None) -> None:
        """Disarm the system."""
        self._run_command(self._controller.set_security_target, SecurityState.DISARMED)

    async def async_alarm_arm_home(self, code: str | None = None) -> None:
        """Arm in stay mode."""
        self._run_command(self._controller.set_security_target, SecurityState.STAY_ARMED)

    async def async_alarm_arm_night(self, code: str | None = None) -> None:
        """Arm in night mode."""
        self._run_command(self._controller.set_security_target, SecurityState.NIGHT_ARMED)
