"""Tests for floodlight switches."""

from __future__ import annotations

import pytest

from custom_components.security_floodlights.core import (
    FloodlightSwitch,
    InvalidCommandError,
)


@pytest.fixture
def switch(sink) -> FloodlightSwitch:
    """Return a switch that starts off."""
    return FloodlightSwitch("front:override", "Front Floodlight Override", sink)


class TestFloodlightSwitch:
    """Test FloodlightSwitch class."""

    def test_defaults_off(self, switch):
        """Test a switch without a restored value starts off."""
        assert switch.is_on is False
        assert switch.is_off is True

    def test_restored_value(self, sink):
        """Test the restored value is used as the initial state."""
        switch = FloodlightSwitch("wind", "Wind", sink, initial=True)

        assert switch.is_on is True

    def test_initial_value_reported(self, switch, sink):
        """Test the initial value is persisted and logged."""
        assert sink.saves == [("front:override", "on", False)]
        assert sink.messages == ["Front Floodlight Override on: off"]

    def test_edges(self, switch):
        """Test turned_on and turned_off fire once per transition."""
        fired = []
        switch.turned_on.connect(lambda: fired.append("on"))
        switch.turned_off.connect(lambda: fired.append("off"))

        switch.is_on = True
        switch.is_on = True
        switch.is_on = False

        assert fired == ["on", "off"]

    def test_duplicate_write_not_reported(self, switch, sink):
        """Test writing the current value produces no telemetry."""
        switch.set(True)
        switch.set(True)

        assert sink.messages == [
            "Front Floodlight Override on: off",
            "Front Floodlight Override on: on",
        ]
        assert sink.restored("front:override", "on") is True

    def test_toggle(self, switch):
        """Test toggle inverts the state."""
        switch.toggle()
        assert switch.is_on is True

        switch.toggle()
        assert switch.is_on is False

    def test_rejects_non_boolean(self, switch):
        """Test non-boolean values raise."""
        with pytest.raises(InvalidCommandError):
            switch.set(1)

    def test_subscribe_replays(self, switch):
        """Test subscribe delivers the current value first."""
        received = []
        switch.subscribe(received.append)
        switch.set(True)

        assert received == [False, True]

    def test_cleanup_stops_reporting(self, switch, sink):
        """Test cleanup detaches the sink."""
        switch.cleanup()
        switch.set(True)

        assert len(sink.saves) == 1
