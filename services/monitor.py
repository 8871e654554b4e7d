"""Single-pass orchestration: collect, evaluate, optionally notify."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Tuple

from collectors.errors import CollectionError
from collectors.system import SystemCollector, build_default_system_collector
from collectors.thermal import ThermalCollector, build_default_thermal_collector
from models.records import (
    CollectionOutcome,
    CollectionStatus,
    MetricKind,
    Reading,
    ThresholdTable,
)
from notify.email import ALERT_SUBJECT
from services.evaluator import AlertReport, Evaluator

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def send(self, subject: str, body: str) -> None: ...


class MonitorAborted(RuntimeError):
    """A collection step failed and the run was stopped before evaluation."""

    def __init__(self, outcome: CollectionOutcome, outcomes: List[CollectionOutcome]) -> None:
        super().__init__(f"Error fetching {outcome.kind.value.replace('_', ' ')}: {outcome.reason}")
        self.outcome = outcome
        self.outcomes = outcomes


@dataclass
class MonitorRun:
    outcomes: List[CollectionOutcome] = field(default_factory=list)
    report: AlertReport = field(default_factory=AlertReport)
    notified: bool = False

    @property
    def readings(self) -> List[Reading]:
        return [reading for outcome in self.outcomes for reading in outcome.readings]


class MonitorService:
    """Coordinates collectors, the evaluator and the notifier for one check."""

    def __init__(
        self,
        thermal: ThermalCollector,
        system: SystemCollector,
        evaluator: Evaluator,
        notifier: Optional[Notifier] = None,
        keep_going: bool = False,
    ) -> None:
        self.thermal = thermal
        self.system = system
        self.evaluator = evaluator
        self.notifier = notifier
        self.keep_going = keep_going

    def steps(self) -> List[Tuple[MetricKind, Callable[[], List[Reading]]]]:
        return [
            (MetricKind.temperature, self.thermal.read_temperatures),
            (MetricKind.fan_speed, self.thermal.read_fan_speeds),
            (MetricKind.clock_speed, self.system.read_clock_speeds),
            (MetricKind.cpu_usage, self.system.read_cpu_usage),
            (MetricKind.memory_usage, self.system.read_memory_usage),
            (MetricKind.disk_usage, self.system.read_disk_usage),
        ]

    def collect(self) -> List[CollectionOutcome]:
        """Run every collector in order.

        Without ``keep_going`` the first failure raises ``MonitorAborted`` and the
        remaining collectors are not run.
        """
        outcomes: List[CollectionOutcome] = []
        for kind, read in self.steps():
            try:
                readings = read()
            except CollectionError as exc:
                status = CollectionStatus.skipped if self.keep_going else CollectionStatus.failed
                outcome = CollectionOutcome(kind=kind, status=status, reason=str(exc))
                outcomes.append(outcome)
                logger.error(
                    "Collection failed",
                    extra={"metric": kind.value, "reason": str(exc)},
                )
                if not self.keep_going:
                    raise MonitorAborted(outcome, outcomes) from exc
                continue
            outcomes.append(
                CollectionOutcome(kind=kind, status=CollectionStatus.collected, readings=readings)
            )
        return outcomes

    def check(self) -> MonitorRun:
        outcomes = self.collect()
        run = MonitorRun(outcomes=outcomes)
        run.report = self.evaluator.evaluate(run.readings)
        for outcome in outcomes:
            if outcome.status is CollectionStatus.skipped:
                run.report.warnings.append(
                    f"Warning: {outcome.kind.value.replace('_', ' ')} could not be collected: {outcome.reason}"
                )
        logger.info("Evaluation finished", extra={"alert_count": len(run.report.alert_lines)})
        return run

    def dispatch(self, run: MonitorRun) -> bool:
        """Send the alert email if the report has any alert; return whether it was sent."""
        body = run.report.body
        if not body or self.notifier is None:
            return False
        self.notifier.send(ALERT_SUBJECT, body)
        run.notified = True
        return True

    def run(self) -> MonitorRun:
        run = self.check()
        self.dispatch(run)
        return run


def build_default_monitor(
    notifier: Optional[Notifier] = None,
    keep_going: bool = False,
    thresholds: Optional[ThresholdTable] = None,
) -> MonitorService:
    """Factory that wires the monitor with collectors configured from settings."""
    return MonitorService(
        thermal=build_default_thermal_collector(),
        system=build_default_system_collector(),
        evaluator=Evaluator(thresholds),
        notifier=notifier,
        keep_going=keep_going,
    )
