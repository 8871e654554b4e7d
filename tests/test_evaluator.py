"""Unit tests for threshold evaluation and alert composition."""

from __future__ import annotations

import pytest

from models.records import MetricKind, Reading, Threshold, ThresholdTable
from services.evaluator import Evaluator


def _reading(kind: MetricKind, value: float, label: str | None = None) -> Reading:
    return Reading(kind=kind, value=value, label=label)


def test_memory_alert_and_safe_lines() -> None:
    evaluator = Evaluator()

    report = evaluator.evaluate(
        [_reading(MetricKind.memory_usage, 85.0), _reading(MetricKind.memory_usage, 60.0)]
    )

    assert report.alert_lines == ["Alert: Memory usage is above 80%: 85.00%"]
    assert report.safe_lines == ["Memory usage: 60.00% (Safe)"]


def test_disk_usage_uses_root_volume_threshold() -> None:
    evaluator = Evaluator()

    alert = evaluator.evaluate([_reading(MetricKind.disk_usage, 55.0, "/")])
    safe = evaluator.evaluate([_reading(MetricKind.disk_usage, 40.0, "/")])

    assert alert.alert_lines == ["Alert: Disk usage is above 50%: 55.00%"]
    assert safe.alert_lines == []
    assert safe.safe_lines == ["Disk usage: 40.00% (Safe)"]


def test_each_violating_core_gets_one_line() -> None:
    evaluator = Evaluator()
    usages = [10.0, 95.5, 80.0, 80.01, 42.0, 100.0]
    readings = [_reading(MetricKind.cpu_usage, value, str(i)) for i, value in enumerate(usages)]

    report = evaluator.evaluate(readings)

    assert report.alert_lines == [
        "Alert: CPU Core 1 usage is above 80%: 95.50%",
        "Alert: CPU Core 3 usage is above 80%: 80.01%",
        "Alert: CPU Core 5 usage is above 80%: 100.00%",
    ]
    assert "CPU Core 2 usage: 80.00% (Safe)" in report.safe_lines


@pytest.mark.parametrize(
    ("value", "alert"),
    [(79.99, True), (80.0, False), (85.0, False), (90.0, False), (90.01, True)],
)
def test_temperature_band_is_two_sided(value: float, alert: bool) -> None:
    verdict = Evaluator().evaluate_reading(_reading(MetricKind.temperature, value, "Core 0"))

    assert verdict.alert is alert
    if alert:
        assert verdict.line == f"Alert: CPU Temperature (Core 0) is out of safe range: {value:.2f}°C"
    else:
        assert verdict.line == f"CPU Temperature (Core 0): {value:.2f}°C (Safe)"


def test_unlabelled_temperature_line() -> None:
    verdict = Evaluator().evaluate_reading(_reading(MetricKind.temperature, 61.8))

    assert verdict.line == "Alert: CPU Temperature is out of safe range: 61.80°C"


@pytest.mark.parametrize(("value", "alert"), [(3499.0, True), (3500.0, False), (5000.0, False), (5001.0, True)])
def test_fan_speed_band(value: float, alert: bool) -> None:
    verdict = Evaluator().evaluate_reading(_reading(MetricKind.fan_speed, value, "fan1"))

    assert verdict.alert is alert
    assert "fan1" in verdict.line


def test_clock_speed_is_one_sided() -> None:
    evaluator = Evaluator()

    report = evaluator.evaluate(
        [
            _reading(MetricKind.clock_speed, 2.4, "0"),
            _reading(MetricKind.clock_speed, 3.2, "1"),
            _reading(MetricKind.clock_speed, 5.8, "2"),
        ]
    )

    assert report.alert_lines == ["Alert: CPU 0 Clock Speed is below 3.20 GHz: 2.40 GHz"]
    assert report.safe_lines == [
        "CPU 1 Clock Speed: 3.20 GHz (Safe)",
        "CPU 2 Clock Speed: 5.80 GHz (Safe)",
    ]


def test_all_safe_report_has_empty_body() -> None:
    report = Evaluator().evaluate(
        [
            _reading(MetricKind.temperature, 85.0),
            _reading(MetricKind.fan_speed, 4000.0, "fan1"),
            _reading(MetricKind.clock_speed, 3.6, "0"),
            _reading(MetricKind.cpu_usage, 20.0, "0"),
            _reading(MetricKind.memory_usage, 30.0),
            _reading(MetricKind.disk_usage, 10.0),
        ]
    )

    assert not report.has_alerts
    assert report.body == ""
    assert len(report.safe_lines) == 6


def test_body_concatenates_alert_lines_in_collector_order() -> None:
    report = Evaluator().evaluate(
        [
            _reading(MetricKind.cpu_usage, 90.0, "0"),
            _reading(MetricKind.memory_usage, 10.0),
            _reading(MetricKind.disk_usage, 75.0),
        ]
    )

    assert report.body == (
        "Alert: CPU Core 0 usage is above 80%: 90.00%\n"
        "Alert: Disk usage is above 50%: 75.00%\n"
    )


def test_injected_thresholds_change_policy_and_text() -> None:
    table = ThresholdTable(memory_usage=Threshold(maximum=95.0), disk_usage=Threshold(maximum=90.0))
    evaluator = Evaluator(table)

    report = evaluator.evaluate(
        [_reading(MetricKind.memory_usage, 85.0), _reading(MetricKind.disk_usage, 92.5)]
    )

    assert report.alert_lines == ["Alert: Disk usage is above 90%: 92.50%"]
    assert report.safe_lines == ["Memory usage: 85.00% (Safe)"]


def test_warnings_are_appended_only_when_alerting() -> None:
    quiet = Evaluator().evaluate([_reading(MetricKind.memory_usage, 10.0)])
    quiet.warnings.append("Warning: fan speed could not be collected: boom")

    loud = Evaluator().evaluate([_reading(MetricKind.memory_usage, 99.0)])
    loud.warnings.append("Warning: fan speed could not be collected: boom")

    assert quiet.body == ""
    assert loud.body.endswith("Warning: fan speed could not be collected: boom\n")
