"""Parsers for the text printed by hardware sensor utilities.

Two output shapes are understood:

* ``osx-cpu-temp`` prints a single value such as ``+61.8°C``.
* ``sensors`` (lm-sensors) prints ``label: value`` lines, e.g.::

      Core 0:        +45.0°C  (high = +80.0°C, crit = +100.0°C)
      fan1:          2500 RPM  (min =    0 RPM)

Only the first value after the colon is a reading; the bracketed limits the
utility prints after it are ignored.
"""

from __future__ import annotations

import logging
import re
from typing import List

from collectors.errors import SensorParseError
from models.records import MetricKind, Reading

logger = logging.getLogger(__name__)

FAN_IDENTIFIER = "fan"

_TEMPERATURE = r"(?P<value>[+-]?\d+(?:\.\d+)?)°C"
_BARE_TEMPERATURE_RE = re.compile(rf"^\s*{_TEMPERATURE}\s*$")
_LABELLED_TEMPERATURE_RE = re.compile(rf"^\s*(?P<label>[^:]+?)\s*:\s*{_TEMPERATURE}")
_FAN_RE = re.compile(r"^\s*(?P<label>[^:]+?)\s*:\s*(?P<value>\d+)\s*RPM\b", re.IGNORECASE)


def parse_temperatures(output: str) -> List[Reading]:
    """Extract temperature readings from utility output.

    Raises ``SensorParseError`` if no temperature in the documented format is found.
    """
    bare = _BARE_TEMPERATURE_RE.match(output)
    if bare:
        return [Reading(kind=MetricKind.temperature, value=float(bare["value"]))]

    readings: List[Reading] = []
    for line in output.splitlines():
        match = _LABELLED_TEMPERATURE_RE.match(line)
        if match is None:
            continue
        readings.append(
            Reading(
                kind=MetricKind.temperature,
                value=float(match["value"]),
                label=match["label"],
            )
        )

    if not readings:
        raise SensorParseError(
            f"no temperature matching '<sign><number>°C' in output: {output.strip()!r}"
        )
    return readings


def parse_fan_speeds(output: str) -> List[Reading]:
    """Extract fan speeds from lines mentioning the fan identifier.

    A host without fans yields an empty list. A fan line that does not carry an
    RPM value raises ``SensorParseError``.
    """
    readings: List[Reading] = []
    for line in output.splitlines():
        # chip headers such as "pwmfan-isa-0000" have no "label:" shape
        if ":" not in line:
            continue
        head = line.split(":", 1)[0]
        if FAN_IDENTIFIER not in head.lower():
            continue
        match = _FAN_RE.match(line)
        if match is None:
            raise SensorParseError(f"unrecognised fan line: {line.strip()!r}")
        readings.append(
            Reading(
                kind=MetricKind.fan_speed,
                value=float(match["value"]),
                label=match["label"],
            )
        )

    if not readings:
        logger.warning("No fan readings found in sensor output", extra={"metric": MetricKind.fan_speed.value})
    return readings
