"""Fixtures for Security floodlights tests."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

import pytest

from custom_components.security_floodlights.core import (
    BaseTimer,
    BaseTimerManager,
    FloodlightConfig,
    FloodlightController,
    LightGroupConfig,
    MemoryStateSink,
    OccupancySensor,
    TimerType,
)
from custom_components.security_floodlights.core.timer_manager import TimerCallback


class ManualTimer(BaseTimer):
    """Timer driven by a ManualTimerManager's virtual clock."""

    def __init__(
        self,
        timer_type: TimerType,
        duration: float,
        callback: TimerCallback,
        manager: ManualTimerManager,
        name: str,
    ):
        super().__init__(timer_type, duration, callback, name)
        self.manager = manager

    def _get_current_time(self) -> datetime:
        return self.manager.now

    def start(self) -> None:
        self._do_start()
        self.manager.scheduled.append(self)

    def cancel(self) -> None:
        self._do_cancel()


class ManualTimerManager(BaseTimerManager):
    """Timer manager whose clock only moves when ``advance`` is called."""

    def __init__(self):
        super().__init__()
        self.now = datetime(2024, 1, 1, 22, 0, 0)
        self.scheduled: list[ManualTimer] = []

    def create_timer(
        self,
        timer_type: TimerType,
        callback: TimerCallback,
        duration: float,
        name: str | None = None,
    ) -> ManualTimer:
        return ManualTimer(timer_type, duration, callback, self, name or timer_type.value)

    def advance(self, seconds: float) -> None:
        """Move the clock forward, expiring due timers in end time order."""
        target = self.now + timedelta(seconds=seconds)
        while True:
            due = [
                timer
                for timer in self.scheduled
                if timer.is_active and timer.end_time is not None and timer.end_time <= target
            ]
            if not due:
                break
            timer = min(due, key=lambda t: t.end_time)
            self.scheduled.remove(timer)
            self.now = timer.end_time
            timer._expire()
        self.scheduled = [timer for timer in self.scheduled if timer.is_active]
        self.now = target


class RecordingSink(MemoryStateSink):
    """Memory sink that also records every save and log call."""

    def __init__(self, data: dict[str, dict[str, Any]] | None = None) -> None:
        super().__init__(data)
        self.saves: list[tuple[str, str, Any]] = []
        self.messages: list[str] = []

    def save(self, entity_id: str, cell_name: str, value: Any) -> None:
        super().save(entity_id, cell_name, value)
        self.saves.append((entity_id, cell_name, value))

    def log(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def timer_manager() -> ManualTimerManager:
    """Return a timer manager with a virtual clock."""
    return ManualTimerManager()


@pytest.fixture
def sink() -> RecordingSink:
    """Return a sink recording saves and telemetry."""
    return RecordingSink()


@pytest.fixture
def occupancy_sensor(timer_manager, sink) -> OccupancySensor:
    """Return a two-switch occupancy sensor with a 3 second timeout."""
    return OccupancySensor(
        "front:occupancy",
        "Front",
        sink,
        timer_manager,
        motion_sensor_count=2,
        occupancy_timeout_seconds=3,
    )


@pytest.fixture
def floodlight_config() -> FloodlightConfig:
    """Return a configuration with two light groups."""
    return FloodlightConfig(
        light_groups=(
            LightGroupConfig("front", "Front", motion_sensor_count=2, occupancy_timeout_seconds=3),
            LightGroupConfig("back", "Back", motion_sensor_count=1, occupancy_timeout_seconds=10),
        )
    )


@pytest.fixture
def controller(floodlight_config, timer_manager, sink):
    """Return a controller built on the virtual clock."""
    controller = FloodlightController(floodlight_config, timer_manager, sink)
    yield controller
    controller.cleanup()
