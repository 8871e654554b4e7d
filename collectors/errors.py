"""Exceptions raised while sourcing metric readings."""

from __future__ import annotations


class CollectionError(RuntimeError):
    """A metric could not be read from the OS or the sensor utility."""


class SensorParseError(CollectionError):
    """The sensor utility ran but its output did not match the expected format."""
