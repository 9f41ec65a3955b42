"""Reactive core of the security floodlights integration.

This package has no Home Assistant dependencies. The integration supplies a
timer manager and a persistence sink; tests supply a virtual clock.
"""

from .cell import Cell, Signal, edge_signals
from .config import FloodlightConfig, LightGroupConfig
from .controller import SYSTEM_ID, WIND_OVERRIDE_ID, FloodlightController
from .debounce import DebouncedAggregator
from .errors import FloodlightError, InvalidCommandError, InvalidConfigError
from .occupancy import OccupancySensor
from .rules import WIND_OVERRIDE_REEVALUATE_DELAY, AutomationRules, LightGroup
from .security import SecurityState, SecuritySystem
from .sink import MemoryStateSink, StateSink
from .switch import FloodlightSwitch
from .timer_manager import BaseTimer, BaseTimerManager, TimerType

__all__ = [
    "AutomationRules",
    "BaseTimer",
    "BaseTimerManager",
    "Cell",
    "DebouncedAggregator",
    "FloodlightConfig",
    "FloodlightController",
    "FloodlightError",
    "FloodlightSwitch",
    "InvalidCommandError",
    "InvalidConfigError",
    "LightGroup",
    "LightGroupConfig",
    "MemoryStateSink",
    "OccupancySensor",
    "SYSTEM_ID",
    "SecurityState",
    "SecuritySystem",
    "Signal",
    "StateSink",
    "TimerType",
    "WIND_OVERRIDE_ID",
    "WIND_OVERRIDE_REEVALUATE_DELAY",
    "edge_signals",
]
