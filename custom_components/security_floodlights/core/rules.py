"""Automation rules wiring the security system, switches and light groups.

Rules are standing subscriptions registered once by ``AutomationRules.bind``:

1. armed: activate every group whose override and the wind override are off
2. disarmed: turn every group override off and deactivate every group
3. wind override on: deactivate every group, clear occupancy now and
   re-derive it from the motion switches after ``WIND_OVERRIDE_REEVALUATE_DELAY``
4. wind override off: reactivate every group while the system is armed
5. group override on: mark the group's occupancy sensor tampered
6. group override off: clear the tampered flag

Writes made by a rule can trigger further rules synchronously (rule 2 turning
an override off runs rule 6). No rule writes back to the cell that triggered
it, and every write goes through a deduplicating cell, so chains terminate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .cell import Unsubscribe
from .occupancy import OccupancySensor
from .security import SecuritySystem
from .switch import FloodlightSwitch
from .timer_manager import BaseTimerManager, TimerType

_LOGGER = logging.getLogger(__name__)

# Long enough for downstream "no occupancy" automations to turn lights off.
WIND_OVERRIDE_REEVALUATE_DELAY = 2.5


@dataclass
class LightGroup:
    """A light group's occupancy sensor and override switch."""

    id: str
    occupancy_sensor: OccupancySensor
    override_switch: FloodlightSwitch

    def get_info(self) -> dict[str, Any]:
        """Get light group diagnostic info."""
        return {
            **self.occupancy_sensor.get_info(),
            "override": self.override_switch.is_on,
        }


class AutomationRules:
    """Standing subscriptions connecting entities to each other."""

    def __init__(
        self,
        security: SecuritySystem,
        wind_override: FloodlightSwitch,
        light_groups: list[LightGroup],
        timer_manager: BaseTimerManager,
        wind_override_respects_group_override: bool = False,
        reevaluate_delay: float = WIND_OVERRIDE_REEVALUATE_DELAY,
    ) -> None:
        """Initialize the rules.

        Args:
            security: The security system
            wind_override: The global wind override switch
            light_groups: Light groups in configuration order
            timer_manager: Scheduler for the wind override re-evaluation
            wind_override_respects_group_override: When True, releasing the wind
                override leaves groups with their override on inactive
            reevaluate_delay: Seconds before occupancy is re-derived after the
                wind override turns on
        """
        self.security = security
        self.wind_override = wind_override
        self.light_groups = light_groups
        self._timer_manager = timer_manager
        self.wind_override_respects_group_override = wind_override_respects_group_override
        self.reevaluate_delay = reevaluate_delay
        self._unsubscribers: list[Unsubscribe] = []

    def bind(self) -> None:
        """Register every rule. Calling it again has no effect."""
        if self._unsubscribers:
            return

        self._unsubscribers.extend(
            [
                self.security.armed.connect(self._on_armed),
                self.security.disarmed.connect(self._on_disarmed),
                self.wind_override.turned_on.connect(self._on_wind_override_on),
                self.wind_override.turned_off.connect(self._on_wind_override_off),
            ]
        )
        for group in self.light_groups:
            self._bind_group(group)

        _LOGGER.debug("Bound automation rules for %d light group(s)", len(self.light_groups))

    def _bind_group(self, group: LightGroup) -> None:
        sensor = group.occupancy_sensor

        def on_override_on() -> None:
            sensor.tampered = True

        def on_override_off() -> None:
            sensor.tampered = False

        self._unsubscribers.append(group.override_switch.turned_on.connect(on_override_on))
        self._unsubscribers.append(group.override_switch.turned_off.connect(on_override_off))

    def _on_armed(self) -> None:
        _LOGGER.debug("System armed")
        for group in self.light_groups:
            if group.override_switch.is_off and self.wind_override.is_off:
                group.occupancy_sensor.active = True

    def _on_disarmed(self) -> None:
        _LOGGER.debug("System disarmed")
        for group in self.light_groups:
            group.override_switch.is_on = False
            group.occupancy_sensor.active = False

    def _on_wind_override_on(self) -> None:
        _LOGGER.debug("Wind override on, clearing occupancy")
        for group in self.light_groups:
            sensor = group.occupancy_sensor
            sensor.active = False
            sensor.occupancy_detected = False
            self._timer_manager.start_timer(
                self._reevaluate_timer_name(group),
                TimerType.WIND_OVERRIDE,
                lambda _name, sensor=sensor: sensor.reevaluate_occupancy(),
                self.reevaluate_delay,
            )

    def _on_wind_override_off(self) -> None:
        _LOGGER.debug("Wind override off")
        if not self.security.is_armed:
            return
        for group in self.light_groups:
            if self.wind_override_respects_group_override and group.override_switch.is_on:
                continue
            group.occupancy_sensor.active = True

    @staticmethod
    def _reevaluate_timer_name(group: LightGroup) -> str:
        return f"{group.id}_wind_override_reevaluate"

    def cleanup(self) -> None:
        """Remove every rule subscription and pending re-evaluation."""
        for unsub in self._unsubscribers:
            unsub()
        self._unsubscribers.clear()
        for group in self.light_groups:
            self._timer_manager.cancel_timer(self._reevaluate_timer_name(group))
