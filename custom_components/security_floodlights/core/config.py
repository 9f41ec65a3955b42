"""Plain configuration values for the floodlight core."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import InvalidConfigError

DEFAULT_MOTION_SENSOR_COUNT = 1
DEFAULT_OCCUPANCY_TIMEOUT = 300


@dataclass(frozen=True)
class LightGroupConfig:
    """Configuration of one light group."""

    id: str
    display_name: str
    motion_sensor_count: int = DEFAULT_MOTION_SENSOR_COUNT
    occupancy_timeout_seconds: float = DEFAULT_OCCUPANCY_TIMEOUT

    def __post_init__(self) -> None:
        if not self.id or not isinstance(self.id, str):
            raise InvalidConfigError(f"Light group id must be a non-empty string, got {self.id!r}")
        if not self.display_name:
            raise InvalidConfigError(f"Light group {self.id} needs a display name")
        if (
            isinstance(self.motion_sensor_count, bool)
            or not isinstance(self.motion_sensor_count, int)
            or self.motion_sensor_count < 1
        ):
            raise InvalidConfigError(
                f"Light group {self.id}: motion_sensor_count must be a positive integer, "
                f"got {self.motion_sensor_count!r}"
            )
        if self.occupancy_timeout_seconds < 0:
            raise InvalidConfigError(
                f"Light group {self.id}: occupancy_timeout_seconds must be non-negative, "
                f"got {self.occupancy_timeout_seconds!r}"
            )

    @property
    def occupancy_id(self) -> str:
        """Entity id of the group's occupancy sensor."""
        return f"{self.id}:occupancy"

    @property
    def override_id(self) -> str:
        """Entity id of the group's override switch."""
        return f"{self.id}:override"

    @property
    def override_name(self) -> str:
        """Display name of the group's override switch."""
        return f"{self.display_name} Floodlight Override"

    def motion_switch_id(self, index: int) -> str:
        """Identifier of one of the group's motion switches."""
        return f"{self.id}-motion-{index}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LightGroupConfig:
        """Build a config from a plain mapping."""
        return cls(
            id=data["id"],
            display_name=data.get("display_name", data.get("name", "")),
            motion_sensor_count=data.get("motion_sensor_count", DEFAULT_MOTION_SENSOR_COUNT),
            occupancy_timeout_seconds=data.get(
                "occupancy_timeout_seconds",
                data.get("occupancy_timeout", DEFAULT_OCCUPANCY_TIMEOUT),
            ),
        )


@dataclass(frozen=True)
class FloodlightConfig:
    """Configuration of the whole controller."""

    light_groups: tuple[LightGroupConfig, ...] = field(default_factory=tuple)
    display_name: str = "Security Floodlights"
    wind_override_name: str = "Floodlight Wind Override"
    # Rule 4 variant: skip groups whose override switch is on.
    wind_override_respects_group_override: bool = False

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for group in self.light_groups:
            if group.id in seen:
                raise InvalidConfigError(f"Duplicate light group id: {group.id}")
            seen.add(group.id)
