"""Temperature and fan readings sourced from an external sensor utility."""

from __future__ import annotations

import logging
import shlex
import subprocess
from functools import lru_cache
from typing import List, Optional, Sequence

from collectors.errors import CollectionError
from collectors.parsing import parse_fan_speeds, parse_temperatures
from models.records import Reading
from settings import get_settings

logger = logging.getLogger(__name__)


class ThermalCollector:
    """Runs the sensor utility once per call and parses its standard output."""

    def __init__(
        self,
        temperature_command: str = "sensors",
        fan_command: str = "sensors",
        timeout: Optional[float] = 10.0,
    ) -> None:
        self.temperature_command = temperature_command
        self.fan_command = fan_command
        self.timeout = timeout

    def read_temperatures(self) -> List[Reading]:
        return parse_temperatures(self._run(self.temperature_command))

    def read_fan_speeds(self) -> List[Reading]:
        return parse_fan_speeds(self._run(self.fan_command))

    def _run(self, command: str) -> str:
        argv: Sequence[str] = shlex.split(command)
        if not argv:
            raise CollectionError("sensor command is empty")

        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise CollectionError(
                f"sensor utility {argv[0]!r} is not installed or not on PATH"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise CollectionError(
                f"sensor utility {argv[0]!r} did not finish within {self.timeout}s"
            ) from exc
        except OSError as exc:
            raise CollectionError(f"could not run sensor utility {argv[0]!r}: {exc}") from exc

        if result.returncode != 0:
            logger.error(
                "Sensor utility failed",
                extra={"command": command, "returncode": result.returncode},
            )
            stderr = (result.stderr or "").strip()
            raise CollectionError(
                f"sensor utility {argv[0]!r} exited with status {result.returncode}"
                + (f": {stderr}" if stderr else "")
            )

        logger.debug("Raw sensor output: %s", result.stdout.strip(), extra={"command": command})
        return result.stdout


@lru_cache
def build_default_thermal_collector() -> ThermalCollector:
    settings = get_settings()
    return ThermalCollector(
        temperature_command=settings.temperature_command,
        fan_command=settings.fan_command,
        timeout=settings.command_timeout,
    )
