"""Domain models shared across collectors and services."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional


class MetricKind(str, Enum):
    """Monitored resources, in the order a run collects them."""

    temperature = "temperature"
    fan_speed = "fan_speed"
    clock_speed = "clock_speed"
    cpu_usage = "cpu_usage"
    memory_usage = "memory_usage"
    disk_usage = "disk_usage"


UNITS: Mapping[MetricKind, str] = MappingProxyType(
    {
        MetricKind.temperature: "°C",
        MetricKind.fan_speed: "RPM",
        MetricKind.clock_speed: "GHz",
        MetricKind.cpu_usage: "%",
        MetricKind.memory_usage: "%",
        MetricKind.disk_usage: "%",
    }
)


@dataclass(slots=True)
class Reading:
    """A single sampled metric value."""

    kind: MetricKind
    value: float
    label: Optional[str] = None

    @property
    def unit(self) -> str:
        return UNITS[self.kind]


@dataclass(frozen=True)
class Threshold:
    """Safe band for a metric; a missing side means unbounded."""

    minimum: Optional[float] = None
    maximum: Optional[float] = None

    def is_violated_by(self, value: float) -> bool:
        if self.minimum is not None and value < self.minimum:
            return True
        if self.maximum is not None and value > self.maximum:
            return True
        return False


@dataclass(frozen=True)
class ThresholdTable:
    temperature: Threshold = Threshold(minimum=80.0, maximum=90.0)
    fan_speed: Threshold = Threshold(minimum=3500.0, maximum=5000.0)
    clock_speed: Threshold = Threshold(minimum=3.20)
    cpu_usage: Threshold = Threshold(maximum=80.0)
    memory_usage: Threshold = Threshold(maximum=80.0)
    disk_usage: Threshold = Threshold(maximum=50.0)

    def for_kind(self, kind: MetricKind) -> Threshold:
        return getattr(self, kind.value)


class CollectionStatus(str, Enum):
    """Result of a single collection step."""

    collected = "collected"
    failed = "failed"
    skipped = "skipped"


@dataclass
class CollectionOutcome:
    kind: MetricKind
    status: CollectionStatus
    readings: List[Reading] = field(default_factory=list)
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is CollectionStatus.collected
