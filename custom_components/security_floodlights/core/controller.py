"""Floodlight controller: entity registry, inbound commands and diagnostics."""

from __future__ import annotations

import logging
from typing import Any

from .config import FloodlightConfig, LightGroupConfig
from .errors import InvalidCommandError
from .occupancy import CELL_ACTIVE, CELL_OCCUPANCY, CELL_TAMPERED, OccupancySensor
from .rules import AutomationRules, LightGroup
from .security import CELL_STATE, SecurityState, SecuritySystem
from .sink import MemoryStateSink, StateSink
from .switch import CELL_ON, FloodlightSwitch
from .timer_manager import BaseTimerManager

_LOGGER = logging.getLogger(__name__)

SYSTEM_ID = "system"
WIND_OVERRIDE_ID = "windOverride"


class FloodlightController:
    """Builds the entities for one installation and wires the automation rules.

    Restored values are read from the sink when it is a ``MemoryStateSink``
    holding previously saved data.
    """

    def __init__(
        self,
        config: FloodlightConfig,
        timer_manager: BaseTimerManager,
        sink: StateSink | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            config: Light groups and rule options
            timer_manager: Scheduler shared by all timers
            sink: Persistence and telemetry sink (in-memory if omitted)
        """
        self.config = config
        self.timer_manager = timer_manager
        self.sink = sink if sink is not None else MemoryStateSink()

        self.security = SecuritySystem(
            SYSTEM_ID,
            config.display_name,
            self.sink,
            initial=self._restored(SYSTEM_ID, CELL_STATE, SecurityState.DISARMED.value),
        )
        self.wind_override = FloodlightSwitch(
            WIND_OVERRIDE_ID,
            config.wind_override_name,
            self.sink,
            initial=bool(self._restored(WIND_OVERRIDE_ID, CELL_ON, False)),
        )

        self.light_groups: dict[str, LightGroup] = {}
        for group_config in config.light_groups:
            self.light_groups[group_config.id] = self._create_light_group(group_config)

        self.rules = AutomationRules(
            self.security,
            self.wind_override,
            list(self.light_groups.values()),
            timer_manager,
            wind_override_respects_group_override=config.wind_override_respects_group_override,
        )
        self.rules.bind()

        _LOGGER.info(
            "Security floodlights initialized: %d light group(s) | Security: %s | Wind override: %s",
            len(self.light_groups),
            self.security.state_name,
            "on" if self.wind_override.is_on else "off",
        )

    def _restored(self, entity_id: str, cell_name: str, default: Any) -> Any:
        if isinstance(self.sink, MemoryStateSink):
            return self.sink.restored(entity_id, cell_name, default)
        return default

    def _create_light_group(self, group_config: LightGroupConfig) -> LightGroup:
        occupancy_id = group_config.occupancy_id
        override_id = group_config.override_id
        sensor = OccupancySensor(
            occupancy_id,
            group_config.display_name,
            self.sink,
            self.timer_manager,
            group_config.motion_sensor_count,
            group_config.occupancy_timeout_seconds,
            occupancy_detected=bool(self._restored(occupancy_id, CELL_OCCUPANCY, False)),
            tampered=bool(self._restored(occupancy_id, CELL_TAMPERED, False)),
            active=bool(self._restored(occupancy_id, CELL_ACTIVE, False)),
        )
        override = FloodlightSwitch(
            override_id,
            group_config.override_name,
            self.sink,
            initial=bool(self._restored(override_id, CELL_ON, False)),
        )
        return LightGroup(group_config.id, sensor, override)

    # ========================================================================
    # Lookups
    # ========================================================================

    def get_group(self, group_id: str) -> LightGroup:
        """Return a light group by id.

        Raises:
            InvalidCommandError: If no group has that id
        """
        group = self.light_groups.get(group_id)
        if group is None:
            raise InvalidCommandError(f"Unknown light group: {group_id!r}")
        return group

    def get_switch(self, switch_id: str) -> FloodlightSwitch:
        """Return the wind override or a group override switch by entity id.

        Raises:
            InvalidCommandError: If no switch has that id
        """
        if switch_id == WIND_OVERRIDE_ID:
            return self.wind_override
        for group in self.light_groups.values():
            if group.override_switch.entity_id == switch_id:
                return group.override_switch
        raise InvalidCommandError(f"Unknown switch: {switch_id!r}")

    @property
    def entity_ids(self) -> list[str]:
        """Return the id of every entity built from the configuration."""
        ids = [SYSTEM_ID, WIND_OVERRIDE_ID]
        for group in self.light_groups.values():
            ids.extend([group.occupancy_sensor.entity_id, group.override_switch.entity_id])
        return ids

    @property
    def switches(self) -> list[FloodlightSwitch]:
        """Return the wind override followed by every group override."""
        return [self.wind_override] + [
            group.override_switch for group in self.light_groups.values()
        ]

    # ========================================================================
    # Inbound commands
    # ========================================================================

    def set_motion_switch(self, group_id: str, index: int, on: bool) -> None:
        """Set one motion switch of a light group."""
        self.get_group(group_id).occupancy_sensor.set_motion_switch(index, on)

    def set_security_target(self, state: SecurityState | str) -> None:
        """Arm or disarm the security system."""
        self.security.set_target_state(state)

    def set_switch(self, switch_id: str, on: bool) -> None:
        """Turn the wind override or a group override on or off."""
        self.get_switch(switch_id).set(on)

    # ========================================================================
    # Diagnostics and teardown
    # ========================================================================

    def get_info(self) -> dict[str, Any]:
        """Get controller diagnostic info."""
        return {
            "security_state": self.security.state_name,
            "armed": self.security.is_armed,
            "wind_override": self.wind_override.is_on,
            "light_groups": {
                group_id: group.get_info() for group_id, group in self.light_groups.items()
            },
            "timers": self.timer_manager.get_info(),
        }

    def cleanup(self) -> None:
        """Remove rule subscriptions and cancel every pending timer."""
        self.rules.cleanup()
        for group in self.light_groups.values():
            group.occupancy_sensor.cleanup()
            group.override_switch.cleanup()
        self.wind_override.cleanup()
        self.security.cleanup()
        self.timer_manager.cancel_all_timers()
        _LOGGER.debug("Security floodlights cleaned up")
