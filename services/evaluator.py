"""Threshold evaluation and alert composition for collected readings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from models.records import MetricKind, Reading, Threshold, ThresholdTable


@dataclass(frozen=True)
class Verdict:
    """One evaluated reading and the console or alert line describing it."""

    reading: Reading
    alert: bool
    line: str


@dataclass
class AlertReport:
    """Ordered outcome of a single evaluation pass."""

    verdicts: List[Verdict] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def alert_lines(self) -> List[str]:
        return [verdict.line for verdict in self.verdicts if verdict.alert]

    @property
    def safe_lines(self) -> List[str]:
        return [verdict.line for verdict in self.verdicts if not verdict.alert]

    @property
    def has_alerts(self) -> bool:
        return any(verdict.alert for verdict in self.verdicts)

    @property
    def body(self) -> str:
        """Alert text handed to the notifier; empty when everything is safe."""
        if not self.has_alerts:
            return ""
        return "".join(f"{line}\n" for line in [*self.alert_lines, *self.warnings])


def _limit(value: Optional[float]) -> str:
    return "" if value is None else f"{value:g}"


def _tag(reading: Reading) -> str:
    return f" ({reading.label})" if reading.label else ""


def _temperature(reading: Reading, threshold: Threshold, alert: bool) -> str:
    if alert:
        return f"Alert: CPU Temperature{_tag(reading)} is out of safe range: {reading.value:.2f}°C"
    return f"CPU Temperature{_tag(reading)}: {reading.value:.2f}°C (Safe)"


def _fan_speed(reading: Reading, threshold: Threshold, alert: bool) -> str:
    if alert:
        return f"Alert: Fan speed{_tag(reading)} is out of safe range: {reading.value:.2f} RPM"
    return f"Fan speed{_tag(reading)}: {reading.value:.2f} RPM (Safe)"


def _clock_speed(reading: Reading, threshold: Threshold, alert: bool) -> str:
    cpu = f"CPU {reading.label} " if reading.label else "CPU "
    if alert and threshold.minimum is not None and reading.value < threshold.minimum:
        return (
            f"Alert: {cpu}Clock Speed is below {threshold.minimum:.2f} GHz: "
            f"{reading.value:.2f} GHz"
        )
    if alert:
        return (
            f"Alert: {cpu}Clock Speed is above {threshold.maximum:.2f} GHz: "
            f"{reading.value:.2f} GHz"
        )
    return f"{cpu}Clock Speed: {reading.value:.2f} GHz (Safe)"


def _cpu_usage(reading: Reading, threshold: Threshold, alert: bool) -> str:
    if alert:
        return (
            f"Alert: CPU Core {reading.label} usage is above {_limit(threshold.maximum)}%: "
            f"{reading.value:.2f}%"
        )
    return f"CPU Core {reading.label} usage: {reading.value:.2f}% (Safe)"


def _memory_usage(reading: Reading, threshold: Threshold, alert: bool) -> str:
    if alert:
        return f"Alert: Memory usage is above {_limit(threshold.maximum)}%: {reading.value:.2f}%"
    return f"Memory usage: {reading.value:.2f}% (Safe)"


def _disk_usage(reading: Reading, threshold: Threshold, alert: bool) -> str:
    if alert:
        return f"Alert: Disk usage is above {_limit(threshold.maximum)}%: {reading.value:.2f}%"
    return f"Disk usage: {reading.value:.2f}% (Safe)"


_FORMATTERS: Dict[MetricKind, Callable[[Reading, Threshold, bool], str]] = {
    MetricKind.temperature: _temperature,
    MetricKind.fan_speed: _fan_speed,
    MetricKind.clock_speed: _clock_speed,
    MetricKind.cpu_usage: _cpu_usage,
    MetricKind.memory_usage: _memory_usage,
    MetricKind.disk_usage: _disk_usage,
}


class Evaluator:
    """Pure threshold check that can be unit tested in isolation."""

    def __init__(self, thresholds: Optional[ThresholdTable] = None) -> None:
        self.thresholds = thresholds or ThresholdTable()

    def evaluate_reading(self, reading: Reading) -> Verdict:
        threshold = self.thresholds.for_kind(reading.kind)
        alert = threshold.is_violated_by(reading.value)
        line = _FORMATTERS[reading.kind](reading, threshold, alert)
        return Verdict(reading=reading, alert=alert, line=line)

    def evaluate(self, readings: Iterable[Reading]) -> AlertReport:
        report = AlertReport()
        for reading in readings:
            report.verdicts.append(self.evaluate_reading(reading))
        return report
