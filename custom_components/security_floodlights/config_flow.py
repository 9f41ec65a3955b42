"""Config flow for the Security floodlights integration."""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol
from homeassistant.config_entries import ConfigFlow, ConfigFlowResult
from homeassistant.const import CONF_NAME
from homeassistant.exceptions import HomeAssistantError

from . import (
    MOTION_SENSOR_COUNT_VALIDATOR,
    OCCUPANCY_TIMEOUT_VALIDATOR,
    floodlight_config_from_data,
)
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
)
from .core import InvalidConfigError

_LOGGER = logging.getLogger(__name__)

CONF_GROUP_NAME = "group_name"
CONF_REMOVE_GROUP = "remove_group"

STEP_USER_DATA_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_NAME, default=DEFAULT_NAME): str,
        vol.Optional(
            CONF_SHOW_WIND_OVERRIDE_SWITCH, default=DEFAULT_SHOW_WIND_OVERRIDE_SWITCH
        ): bool,
        vol.Optional(
            CONF_WIND_OVERRIDE_RESPECTS_GROUP_OVERRIDE,
            default=DEFAULT_WIND_OVERRIDE_RESPECTS_GROUP_OVERRIDE,
        ): bool,
        vol.Required(CONF_GROUP_ID): str,
        vol.Required(CONF_GROUP_NAME): str,
        vol.Optional(
            CONF_MOTION_SENSOR_COUNT, default=DEFAULT_MOTION_SENSOR_COUNT
        ): MOTION_SENSOR_COUNT_VALIDATOR,
        vol.Optional(
            CONF_OCCUPANCY_TIMEOUT, default=DEFAULT_OCCUPANCY_TIMEOUT
        ): OCCUPANCY_TIMEOUT_VALIDATOR,
    }
)

STEP_RECONFIGURE_DATA_SCHEMA = STEP_USER_DATA_SCHEMA.extend(
    {vol.Optional(CONF_REMOVE_GROUP, default=False): bool}
)


def validate_input(data: dict[str, Any]) -> dict[str, Any]:
    """Validate the configuration and return config entry data.

    Accepts either the flat user form (one light group) or imported YAML
    (a ``light_groups`` list).

    Raises:
        InvalidConfiguration: If the light groups are invalid
    """
    if CONF_LIGHT_GROUPS in data:
        groups = [dict(group) for group in data[CONF_LIGHT_GROUPS]]
    else:
        groups = [
            {
                CONF_GROUP_ID: data.get(CONF_GROUP_ID, "").strip(),
                CONF_NAME: data.get(CONF_GROUP_NAME, "").strip(),
                CONF_MOTION_SENSOR_COUNT: data.get(
                    CONF_MOTION_SENSOR_COUNT, DEFAULT_MOTION_SENSOR_COUNT
                ),
                CONF_OCCUPANCY_TIMEOUT: data.get(
                    CONF_OCCUPANCY_TIMEOUT, DEFAULT_OCCUPANCY_TIMEOUT
                ),
            }
        ]

    entry_data = {
        CONF_NAME: data.get(CONF_NAME) or DEFAULT_NAME,
        CONF_SHOW_WIND_OVERRIDE_SWITCH: data.get(
            CONF_SHOW_WIND_OVERRIDE_SWITCH, DEFAULT_SHOW_WIND_OVERRIDE_SWITCH
        ),
        CONF_WIND_OVERRIDE_RESPECTS_GROUP_OVERRIDE: data.get(
            CONF_WIND_OVERRIDE_RESPECTS_GROUP_OVERRIDE,
            DEFAULT_WIND_OVERRIDE_RESPECTS_GROUP_OVERRIDE,
        ),
        CONF_LIGHT_GROUPS: groups,
    }

    if not groups:
        raise InvalidConfiguration("At least one light group is required")

    try:
        floodlight_config_from_data(entry_data)
    except (InvalidConfigError, KeyError) as err:
        raise InvalidConfiguration(str(err)) from err

    return entry_data


def merge_light_group(
    current: dict[str, Any], user_input: dict[str, Any]
) -> dict[str, Any]:
    """Apply a reconfigure form to existing entry data.

    The light group named by the form's id is replaced in place, appended
    when new, or dropped when ``remove_group`` is set. The system-wide
    settings are taken from the form.

    Raises:
        UnknownLightGroup: If removal names a group that is not configured
    """
    group_id = user_input.get(CONF_GROUP_ID, "").strip()
    groups = [dict(group) for group in current.get(CONF_LIGHT_GROUPS, [])]
    index = next(
        (i for i, group in enumerate(groups) if group[CONF_GROUP_ID] == group_id),
        None,
    )

    if user_input.get(CONF_REMOVE_GROUP):
        if index is None:
            raise UnknownLightGroup(group_id)
        del groups[index]
    else:
        group = {
            CONF_GROUP_ID: group_id,
            CONF_NAME: user_input.get(CONF_GROUP_NAME, "").strip(),
            CONF_MOTION_SENSOR_COUNT: user_input.get(
                CONF_MOTION_SENSOR_COUNT, DEFAULT_MOTION_SENSOR_COUNT
            ),
            CONF_OCCUPANCY_TIMEOUT: user_input.get(
                CONF_OCCUPANCY_TIMEOUT, DEFAULT_OCCUPANCY_TIMEOUT
            ),
        }
        if index is None:
            groups.append(group)
        else:
            groups[index] = group

    return {
        CONF_NAME: user_input.get(CONF_NAME),
        CONF_SHOW_WIND_OVERRIDE_SWITCH: user_input.get(
            CONF_SHOW_WIND_OVERRIDE_SWITCH, DEFAULT_SHOW_WIND_OVERRIDE_SWITCH
        ),
        CONF_WIND_OVERRIDE_RESPECTS_GROUP_OVERRIDE: user_input.get(
            CONF_WIND_OVERRIDE_RESPECTS_GROUP_OVERRIDE,
            DEFAULT_WIND_OVERRIDE_RESPECTS_GROUP_OVERRIDE,
        ),
        CONF_LIGHT_GROUPS: groups,
    }


class SecurityFloodlightsConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Security floodlights."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Handle the initial step."""
        if self._async_current_entries():
            return self.async_abort(reason="single_instance_allowed")

        errors: dict[str, str] = {}
        if user_input is not None:
            try:
                entry_data = validate_input(user_input)
            except InvalidConfiguration:
                errors["base"] = "invalid_config"
            else:
                return self.async_create_entry(
                    title=entry_data[CONF_NAME], data=entry_data
                )

        return self.async_show_form(
            step_id="user",
            data_schema=STEP_USER_DATA_SCHEMA,
            errors=errors,
        )

    async def async_step_import(self, import_data: dict[str, Any]) -> ConfigFlowResult:
        """Create the entry from YAML configuration."""
        if self._async_current_entries():
            return self.async_abort(reason="single_instance_allowed")

        try:
            entry_data = validate_input(import_data)
        except InvalidConfiguration as err:
            _LOGGER.error("Invalid Security floodlights YAML configuration: %s", err)
            return self.async_abort(reason="invalid_config")

        return self.async_create_entry(title=entry_data[CONF_NAME], data=entry_data)

    async def async_step_reconfigure(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Add, change or remove one light group of the existing entry."""
        config_entry = self.hass.config_entries.async_get_entry(
            self.context["entry_id"]
        )
        assert config_entry is not None

        errors: dict[str, str] = {}
        if user_input is not None:
            try:
                entry_data = validate_input(
                    merge_light_group(dict(config_entry.data), user_input)
                )
            except UnknownLightGroup:
                errors["base"] = "unknown_group"
            except InvalidConfiguration:
                errors["base"] = "invalid_config"
            else:
                return self.async_update_reload_and_abort(
                    config_entry,
                    title=entry_data[CONF_NAME],
                    data=entry_data,
                    reason="reconfigure_successful",
                )

        # Show form with the current system settings as defaults
        suggested = {
            key: config_entry.data[key]
            for key in (
                CONF_NAME,
                CONF_SHOW_WIND_OVERRIDE_SWITCH,
                CONF_WIND_OVERRIDE_RESPECTS_GROUP_OVERRIDE,
            )
            if key in config_entry.data
        }
        return self.async_show_form(
            step_id="reconfigure",
            data_schema=self.add_suggested_values_to_schema(
                STEP_RECONFIGURE_DATA_SCHEMA, suggested
            ),
            errors=errors,
            description_placeholders={
                "groups": ", ".join(
                    group[CONF_GROUP_ID]
                    for group in config_entry.data.get(CONF_LIGHT_GROUPS, [])
                )
            },
        )


class InvalidConfiguration(HomeAssistantError):
    """Error to indicate there is invalid configuration."""


class UnknownLightGroup(HomeAssistantError):
    """Error to indicate a light group id that is not configured."""
