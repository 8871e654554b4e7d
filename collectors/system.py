"""Clock, CPU, memory and disk readings sourced from psutil."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import List

import psutil

from collectors.errors import CollectionError
from models.records import MetricKind, Reading
from settings import get_settings

logger = logging.getLogger(__name__)


class SystemCollector:
    """Thin wrapper over psutil returning ``Reading`` objects."""

    def __init__(self, cpu_sample_interval: float = 0.5, disk_path: str = "/") -> None:
        self.cpu_sample_interval = cpu_sample_interval
        self.disk_path = disk_path

    def read_clock_speeds(self) -> List[Reading]:
        try:
            frequencies = psutil.cpu_freq(percpu=True)
        except (AttributeError, OSError, NotImplementedError, psutil.Error) as exc:
            raise CollectionError(f"could not read CPU clock speed: {exc}") from exc

        if not frequencies:
            raise CollectionError("CPU clock speed is not available on this platform")

        return [
            Reading(kind=MetricKind.clock_speed, value=freq.current / 1000.0, label=str(index))
            for index, freq in enumerate(frequencies)
        ]

    def read_cpu_usage(self) -> List[Reading]:
        try:
            per_core = psutil.cpu_percent(interval=self.cpu_sample_interval, percpu=True)
        except (OSError, psutil.Error) as exc:
            raise CollectionError(f"could not read CPU usage: {exc}") from exc

        if not per_core:
            raise CollectionError("CPU usage returned no cores")

        return [
            Reading(kind=MetricKind.cpu_usage, value=float(usage), label=str(index))
            for index, usage in enumerate(per_core)
        ]

    def read_memory_usage(self) -> List[Reading]:
        try:
            memory = psutil.virtual_memory()
        except (OSError, psutil.Error) as exc:
            raise CollectionError(f"could not read memory stats: {exc}") from exc
        return [Reading(kind=MetricKind.memory_usage, value=float(memory.percent))]

    def read_disk_usage(self) -> List[Reading]:
        try:
            usage = psutil.disk_usage(self.disk_path)
        except (OSError, psutil.Error) as exc:
            raise CollectionError(f"could not read disk usage for {self.disk_path}: {exc}") from exc
        logger.debug("Disk usage collected", extra={"label": self.disk_path, "value": usage.percent})
        return [Reading(kind=MetricKind.disk_usage, value=float(usage.percent), label=self.disk_path)]


@lru_cache
def build_default_system_collector() -> SystemCollector:
    settings = get_settings()
    return SystemCollector(
        cpu_sample_interval=settings.cpu_sample_interval,
        disk_path=settings.disk_path,
    )
