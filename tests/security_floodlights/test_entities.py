"""Tests for the alarm panel, occupancy sensor and switch entities."""

from __future__ import annotations

from datetime import timedelta

import pytest
from homeassistant.components.alarm_control_panel import AlarmControlPanelState
from homeassistant.const import ATTR_ENTITY_ID, CONF_NAME, STATE_OFF, STATE_ON
from homeassistant.core import HomeAssistant
from homeassistant.helpers import entity_registry as er
from homeassistant.util import dt as dt_util
from pytest_homeassistant_custom_component.common import (
    MockConfigEntry,
    async_fire_time_changed,
)

from custom_components.security_floodlights.const import (
    CONF_LIGHT_GROUPS,
    CONF_SHOW_WIND_OVERRIDE_SWITCH,
    DOMAIN,
)


@pytest.fixture
async def setup_entry(hass: HomeAssistant):
    """Set up one light group with two motion switches."""
    entry = MockConfigEntry(
        domain=DOMAIN,
        title="Security Floodlights",
        data={
            CONF_NAME: "Security Floodlights",
            CONF_SHOW_WIND_OVERRIDE_SWITCH: True,
            CONF_LIGHT_GROUPS: [
                {
                    "id": "front",
                    CONF_NAME: "Front",
                    "motion_sensor_count": 2,
                    "occupancy_timeout": 3,
                }
            ],
        },
    )
    entry.add_to_hass(hass)
    assert await hass.config_entries.async_setup(entry.entry_id)
    await hass.async_block_till_done()
    yield entry
    await hass.config_entries.async_unload(entry.entry_id)
    await hass.async_block_till_done()


def _entity_id(hass: HomeAssistant, platform: str, entry: MockConfigEntry, core_id: str) -> str:
    entity_id = er.async_get(hass).async_get_entity_id(
        platform, DOMAIN, f"{entry.entry_id}_{core_id}"
    )
    assert entity_id is not None
    return entity_id


async def _call(hass: HomeAssistant, domain: str, service: str, entity_id: str) -> None:
    await hass.services.async_call(
        domain, service, {ATTR_ENTITY_ID: entity_id}, blocking=True
    )
    await hass.async_block_till_done()


class TestAlarmControlPanel:
    """Test the security system panel."""

    async def test_arm_and_disarm(self, hass: HomeAssistant, setup_entry):
        """Test arming activates the group and disarming clears the override."""
        panel = _entity_id(hass, "alarm_control_panel", setup_entry, "system")
        override = _entity_id(hass, "switch", setup_entry, "front:override")
        occupancy = _entity_id(hass, "binary_sensor", setup_entry, "front:occupancy")

        assert hass.states.get(panel).state == AlarmControlPanelState.DISARMED

        await _call(hass, "alarm_control_panel", "alarm_arm_night", panel)
        assert hass.states.get(panel).state == AlarmControlPanelState.ARMED_NIGHT
        assert hass.states.get(occupancy).attributes["active"] is True

        await _call(hass, "switch", "turn_on", override)
        assert hass.states.get(occupancy).attributes["tampered"] is True

        await _call(hass, "alarm_control_panel", "alarm_disarm", panel)
        assert hass.states.get(panel).state == AlarmControlPanelState.DISARMED
        assert hass.states.get(override).state == STATE_OFF
        assert hass.states.get(occupancy).attributes["active"] is False
        assert hass.states.get(occupancy).attributes["tampered"] is False


class TestOccupancyEntities:
    """Test motion switches and the occupancy sensor."""

    async def test_motion_switch_drives_occupancy(self, hass: HomeAssistant, setup_entry):
        """Test occupancy follows motion with a trailing timeout."""
        motion = _entity_id(hass, "switch", setup_entry, "front-motion-1")
        occupancy = _entity_id(hass, "binary_sensor", setup_entry, "front:occupancy")

        assert hass.states.get(occupancy).state == STATE_OFF

        await _call(hass, "switch", "turn_on", motion)
        assert hass.states.get(motion).state == STATE_ON
        assert hass.states.get(occupancy).state == STATE_ON
        assert hass.states.get(occupancy).attributes["active_motion_switches"] == 1

        await _call(hass, "switch", "turn_off", motion)
        assert hass.states.get(occupancy).state == STATE_ON

        async_fire_time_changed(hass, dt_util.utcnow() + timedelta(seconds=4))
        await hass.async_block_till_done()

        assert hass.states.get(occupancy).state == STATE_OFF

    async def test_wind_override_switch(self, hass: HomeAssistant, setup_entry):
        """Test the wind override clears occupancy and re-derives it."""
        wind = _entity_id(hass, "switch", setup_entry, "windOverride")
        motion = _entity_id(hass, "switch", setup_entry, "front-motion-0")
        occupancy = _entity_id(hass, "binary_sensor", setup_entry, "front:occupancy")

        await _call(hass, "switch", "turn_on", motion)
        await _call(hass, "switch", "turn_on", wind)

        assert hass.states.get(wind).state == STATE_ON
        assert hass.states.get(occupancy).state == STATE_OFF

        async_fire_time_changed(hass, dt_util.utcnow() + timedelta(seconds=3))
        await hass.async_block_till_done()

        assert hass.states.get(occupancy).state == STATE_ON


async def test_wind_override_hidden(hass: HomeAssistant):
    """Test the wind override entity is omitted when not shown."""
    entry = MockConfigEntry(
        domain=DOMAIN,
        data={
            CONF_SHOW_WIND_OVERRIDE_SWITCH: False,
            CONF_LIGHT_GROUPS: [{"id": "front", CONF_NAME: "Front"}],
        },
    )
    entry.add_to_hass(hass)
    assert await hass.config_entries.async_setup(entry.entry_id)
    await hass.async_block_till_done()

    registry = er.async_get(hass)
    assert (
        registry.async_get_entity_id("switch", DOMAIN, f"{entry.entry_id}_windOverride")
        is None
    )
    assert (
        registry.async_get_entity_id("switch", DOMAIN, f"{entry.entry_id}_front:override")
        is not None
    )

    assert await hass.config_entries.async_unload(entry.entry_id)
