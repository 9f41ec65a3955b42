"""Exceptions raised by the floodlight core."""

from __future__ import annotations


class FloodlightError(Exception):
    """Base error for the floodlight core."""


class InvalidCommandError(FloodlightError, ValueError):
    """A command referenced an unknown target or carried an invalid value."""


class InvalidConfigError(FloodlightError, ValueError):
    """Light group or controller configuration is invalid."""
