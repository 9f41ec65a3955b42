"""The Security floodlights integration."""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol
from homeassistant.config_entries import SOURCE_IMPORT, ConfigEntry
from homeassistant.const import CONF_NAME, Platform
from homeassistant.core import HomeAssistant, callback
from homeassistant.exceptions import ConfigEntryError
from homeassistant.helpers import config_validation as cv
from homeassistant.helpers import device_registry as dr
from homeassistant.helpers import entity_registry as er

from .const import (
    CONF_GROUP_ID,
    CONF_LIGHT_GROUPS,
    CONF_MOTION_SENSOR_COUNT,
    CONF_OCCUPANCY_TIMEOUT,
    CONF_SHOW_WIND_OVERRIDE_SWITCH,
    CONF_WIND_OVERRIDE_RESPECTS_GROUP_OVERRIDE,
    DEFAULT_MOTION_SENSOR_COUNT,
    DEFAULT_NAME,
    DEFAULT_OCCUPANCY_TIMEOUT,
    DEFAULT_SHOW_WIND_OVERRIDE_SWITCH,
    DEFAULT_WIND_OVERRIDE_RESPECTS_GROUP_OVERRIDE,
    DOMAIN,
    MAX_MOTION_SENSOR_COUNT,
)
from .core import (
    SYSTEM_ID,
    WIND_OVERRIDE_ID,
    FloodlightConfig,
    FloodlightController,
    InvalidConfigError,
    LightGroupConfig,
)
from .store import FloodlightStore
from .timer_manager import TimerManager

_LOGGER = logging.getLogger(__name__)

_PLATFORMS: list[Platform] = [
    Platform.ALARM_CONTROL_PANEL,
    Platform.BINARY_SENSOR,
    Platform.SWITCH,
]


def _unique_group_ids(groups: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Reject light groups sharing an id."""
    ids = [group[CONF_GROUP_ID] for group in groups]
    duplicates = sorted({group_id for group_id in ids if ids.count(group_id) > 1})
    if duplicates:
        raise vol.Invalid(f"Duplicate light group id(s): {', '.join(duplicates)}")
    return groups


MOTION_SENSOR_COUNT_VALIDATOR = vol.All(
    vol.Coerce(int), vol.Range(min=1, max=MAX_MOTION_SENSOR_COUNT)
)
OCCUPANCY_TIMEOUT_VALIDATOR = vol.All(vol.Coerce(float), vol.Range(min=0))

# YAML configuration schema
LIGHT_GROUP_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_GROUP_ID): cv.string,
        vol.Required(CONF_NAME): cv.string,
        vol.Optional(
            CONF_MOTION_SENSOR_COUNT, default=DEFAULT_MOTION_SENSOR_COUNT
        ): MOTION_SENSOR_COUNT_VALIDATOR,
        vol.Optional(
            CONF_OCCUPANCY_TIMEOUT, default=DEFAULT_OCCUPANCY_TIMEOUT
        ): OCCUPANCY_TIMEOUT_VALIDATOR,
    }
)

FLOODLIGHTS_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_NAME, default=DEFAULT_NAME): cv.string,
        vol.Optional(
            CONF_SHOW_WIND_OVERRIDE_SWITCH, default=DEFAULT_SHOW_WIND_OVERRIDE_SWITCH
        ): cv.boolean,
        vol.Optional(
            CONF_WIND_OVERRIDE_RESPECTS_GROUP_OVERRIDE,
            default=DEFAULT_WIND_OVERRIDE_RESPECTS_GROUP_OVERRIDE,
        ): cv.boolean,
        vol.Required(CONF_LIGHT_GROUPS): vol.All(
            cv.ensure_list, vol.Length(min=1), [LIGHT_GROUP_SCHEMA], _unique_group_ids
        ),
    }
)

CONFIG_SCHEMA = vol.Schema({DOMAIN: FLOODLIGHTS_SCHEMA}, extra=vol.ALLOW_EXTRA)


def floodlight_config_from_data(data: dict[str, Any]) -> FloodlightConfig:
    """Convert config entry data into the core configuration.

    Raises:
        InvalidConfigError: If a light group is invalid or ids repeat
    """
    groups = tuple(
        LightGroupConfig.from_dict(group) for group in data.get(CONF_LIGHT_GROUPS, [])
    )
    return FloodlightConfig(
        light_groups=groups,
        display_name=data.get(CONF_NAME) or DEFAULT_NAME,
        wind_override_respects_group_override=data.get(
            CONF_WIND_OVERRIDE_RESPECTS_GROUP_OVERRIDE,
            DEFAULT_WIND_OVERRIDE_RESPECTS_GROUP_OVERRIDE,
        ),
    )


def entry_data_from_yaml(yaml_config: dict[str, Any]) -> dict[str, Any]:
    """Convert the validated YAML block into config entry data."""
    return {
        CONF_NAME: yaml_config[CONF_NAME],
        CONF_SHOW_WIND_OVERRIDE_SWITCH: yaml_config[CONF_SHOW_WIND_OVERRIDE_SWITCH],
        CONF_WIND_OVERRIDE_RESPECTS_GROUP_OVERRIDE: yaml_config[
            CONF_WIND_OVERRIDE_RESPECTS_GROUP_OVERRIDE
        ],
        CONF_LIGHT_GROUPS: [dict(group) for group in yaml_config[CONF_LIGHT_GROUPS]],
    }


async def async_setup(hass: HomeAssistant, config: dict) -> bool:
    """Set up the Security floodlights component from YAML.

    YAML is the source of truth when present: an existing entry whose data
    differs is updated before it is set up.
    """
    if DOMAIN not in config:
        return True

    entry_data = entry_data_from_yaml(config[DOMAIN])

    if entries := hass.config_entries.async_entries(DOMAIN):
        entry = entries[0]
        if dict(entry.data) != entry_data:
            _LOGGER.info(
                "Updating Security floodlights from YAML with %d light group(s)",
                len(entry_data[CONF_LIGHT_GROUPS]),
            )
            hass.config_entries.async_update_entry(
                entry, title=entry_data[CONF_NAME], data=entry_data
            )
        return True

    _LOGGER.info(
        "Importing Security floodlights with %d light group(s) from YAML",
        len(entry_data[CONF_LIGHT_GROUPS]),
    )
    hass.async_create_task(
        hass.config_entries.flow.async_init(
            DOMAIN,
            context={"source": SOURCE_IMPORT},
            data=entry_data,
        )
    )
    return True


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Security floodlights from a config entry."""
    try:
        config = floodlight_config_from_data(dict(entry.data))
    except InvalidConfigError as err:
        raise ConfigEntryError(str(err)) from err

    store = FloodlightStore(hass, entry.entry_id)
    await store.async_load()

    controller = FloodlightController(config, TimerManager(hass), store)
    entry.runtime_data = controller
    store.prune(controller.entity_ids)
    _async_remove_stale_registry_entries(hass, entry, controller)

    await hass.config_entries.async_forward_entry_setups(entry, _PLATFORMS)
    return True


@callback
def _async_remove_stale_registry_entries(
    hass: HomeAssistant, entry: ConfigEntry, controller: FloodlightController
) -> None:
    """Remove entities and devices of light groups that are no longer configured."""
    core_ids = [SYSTEM_ID]
    if entry.data.get(CONF_SHOW_WIND_OVERRIDE_SWITCH, DEFAULT_SHOW_WIND_OVERRIDE_SWITCH):
        core_ids.append(WIND_OVERRIDE_ID)
    for group_config in controller.config.light_groups:
        core_ids.extend([group_config.occupancy_id, group_config.override_id])
        core_ids.extend(
            group_config.motion_switch_id(index)
            for index in range(group_config.motion_sensor_count)
        )
    unique_ids = {f"{entry.entry_id}_{core_id}" for core_id in core_ids}

    entity_registry = er.async_get(hass)
    for entity_entry in er.async_entries_for_config_entry(entity_registry, entry.entry_id):
        if entity_entry.unique_id not in unique_ids:
            _LOGGER.info("Removing unconfigured entity %s", entity_entry.entity_id)
            entity_registry.async_remove(entity_entry.entity_id)

    device_ids = {f"{entry.entry_id}_{SYSTEM_ID}"} | {
        f"{entry.entry_id}_{group_id}" for group_id in controller.light_groups
    }
    device_registry = dr.async_get(hass)
    for device in dr.async_entries_for_config_entry(device_registry, entry.entry_id):
        if not any(
            domain == DOMAIN and identifier in device_ids
            for domain, identifier in device.identifiers
        ):
            _LOGGER.info("Removing unconfigured light group device %s", device.name)
            device_registry.async_remove_device(device.id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, _PLATFORMS)
    if unload_ok:
        controller = entry.runtime_data
        controller.cleanup()
        await controller.sink.async_flush()
    return unload_ok


async def async_remove_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Delete persisted state when the entry is removed."""
    await FloodlightStore(hass, entry.entry_id).async_remove()
