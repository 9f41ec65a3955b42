"""Tests for the occupancy sensor."""

from __future__ import annotations

import pytest

from custom_components.security_floodlights.core import (
    InvalidCommandError,
    OccupancySensor,
)


class TestOccupancySensorSetup:
    """Test OccupancySensor construction."""

    def test_defaults(self, occupancy_sensor):
        """Test a new sensor reports nothing detected."""
        assert occupancy_sensor.occupancy_detected is False
        assert occupancy_sensor.tampered is False
        assert occupancy_sensor.active is False
        assert occupancy_sensor.active_count == 0
        assert occupancy_sensor.motion_switch_states == {0: False, 1: False}

    def test_initial_values_reported(self, occupancy_sensor, sink):
        """Test each cell reports its initial value."""
        assert sink.saves == [
            ("front:occupancy", "occupancy", False),
            ("front:occupancy", "tampered", False),
            ("front:occupancy", "active", False),
        ]
        assert sink.messages == [
            "Front occupancy: no",
            "Front tampered: no",
            "Front active: no",
        ]

    @pytest.mark.parametrize("count", [0, -1, 1.5, True])
    def test_invalid_motion_sensor_count(self, timer_manager, sink, count):
        """Test the motion sensor count must be a positive integer."""
        with pytest.raises(InvalidCommandError):
            OccupancySensor("x", "X", sink, timer_manager, count, 10)

    def test_negative_timeout(self, timer_manager, sink):
        """Test the occupancy timeout must be non-negative."""
        with pytest.raises(InvalidCommandError):
            OccupancySensor("x", "X", sink, timer_manager, 1, -1)

    def test_restored_occupancy_decays(self, timer_manager, sink):
        """Test restored occupancy clears after the timeout without motion."""
        sensor = OccupancySensor(
            "x", "X", sink, timer_manager, 1, 5, occupancy_detected=True, active=True
        )

        assert sensor.occupancy_detected is True
        assert sensor.active is True

        timer_manager.advance(5)
        assert sensor.occupancy_detected is False


class TestMotionSwitches:
    """Test motion switch handling."""

    def test_motion_sets_occupancy_immediately(self, occupancy_sensor):
        """Test the first active switch sets occupancy at once."""
        occupancy_sensor.set_motion_switch(0, True)

        assert occupancy_sensor.occupancy_detected is True
        assert occupancy_sensor.active_count == 1

    def test_occupancy_clears_after_timeout(self, occupancy_sensor, timer_manager):
        """Test occupancy stays set until the timeout elapses."""
        occupancy_sensor.set_motion_switch(0, True)
        occupancy_sensor.set_motion_switch(0, False)

        timer_manager.advance(2.999)
        assert occupancy_sensor.occupancy_detected is True
        assert occupancy_sensor.is_timing_out is True

        timer_manager.advance(0.001)
        assert occupancy_sensor.occupancy_detected is False

    def test_any_switch_keeps_occupancy(self, occupancy_sensor, timer_manager):
        """Test occupancy holds while any switch is on."""
        occupancy_sensor.set_motion_switch(0, True)
        occupancy_sensor.set_motion_switch(1, True)
        occupancy_sensor.set_motion_switch(0, False)

        timer_manager.advance(60)

        assert occupancy_sensor.occupancy_detected is True
        assert occupancy_sensor.active_count == 1
        assert occupancy_sensor.get_motion_switch(1) is True

    @pytest.mark.parametrize("index", [-1, 2, True, "0"])
    def test_index_out_of_range(self, occupancy_sensor, index):
        """Test invalid indexes raise and leave state unchanged."""
        with pytest.raises(InvalidCommandError):
            occupancy_sensor.set_motion_switch(index, True)

        assert occupancy_sensor.active_count == 0

    def test_non_boolean_value(self, occupancy_sensor):
        """Test motion switches only accept booleans."""
        with pytest.raises(InvalidCommandError):
            occupancy_sensor.set_motion_switch(0, 1)

    def test_reevaluate_occupancy(self, occupancy_sensor, timer_manager):
        """Test re-evaluation sets occupancy from the switch count."""
        occupancy_sensor.set_motion_switch(0, True)
        occupancy_sensor.occupancy_detected = False

        occupancy_sensor.reevaluate_occupancy()
        assert occupancy_sensor.occupancy_detected is True

        occupancy_sensor.set_motion_switch(0, False)
        occupancy_sensor.occupancy_detected = False
        occupancy_sensor.reevaluate_occupancy()
        assert occupancy_sensor.occupancy_detected is False

        occupancy_sensor.set_motion_switch(1, True)
        assert occupancy_sensor.occupancy_detected is True


    @pytest.mark.parametrize("cell_name", ["occupancy_detected", "tampered", "active"])
    def test_state_setters_reject_non_boolean(self, occupancy_sensor, cell_name):
        """Test the state cells only accept booleans."""
        with pytest.raises(InvalidCommandError):
            setattr(occupancy_sensor, cell_name, 1)

        assert getattr(occupancy_sensor, cell_name) is False

    def test_motion_after_forced_clear(self, occupancy_sensor, timer_manager):
        """Test motion restores occupancy cleared while the timeout was pending."""
        occupancy_sensor.set_motion_switch(0, True)
        occupancy_sensor.set_motion_switch(0, False)
        occupancy_sensor.occupancy_detected = False

        occupancy_sensor.set_motion_switch(1, True)

        assert occupancy_sensor.occupancy_detected is True
        timer_manager.advance(10)
        assert occupancy_sensor.occupancy_detected is True


class TestDerivedState:
    """Test tampered, active and should_illuminate."""

    def test_should_illuminate(self, occupancy_sensor):
        """Test illumination needs occupancy, activity and no tampering."""
        occupancy_sensor.set_motion_switch(0, True)
        assert occupancy_sensor.should_illuminate.value is False

        occupancy_sensor.active = True
        assert occupancy_sensor.should_illuminate.value is True

        occupancy_sensor.tampered = True
        assert occupancy_sensor.should_illuminate.value is False

    def test_should_illuminate_not_persisted(self, occupancy_sensor, sink):
        """Test only the three primitive cells reach the sink."""
        occupancy_sensor.active = True
        occupancy_sensor.set_motion_switch(0, True)

        assert {cell for _, cell, _ in sink.saves} == {"occupancy", "tampered", "active"}

    def test_get_info(self, occupancy_sensor):
        """Test diagnostic info."""
        occupancy_sensor.set_motion_switch(1, True)
        info = occupancy_sensor.get_info()

        assert info["occupancy_detected"] is True
        assert info["active_count"] == 1
        assert info["motion_switches"] == {0: False, 1: True}
        assert info["occupancy_timeout"] == 3
