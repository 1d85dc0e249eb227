"""
Combines pool metrics, the parsed status report and thresholds into one
severity and summary line per pool.

Every check can only raise the running severity. The message fragments are
appended in the order the checks run:

    tank: H=ONLINE, C=50%, F10%, L=0, S=3d (REPAIRED), status pending, errors, cksum_err
"""
from datetime import datetime
from typing import List, Optional

from ..core.entities.evaluation import ErrorCounts, EvaluationResult, Severity
from ..core.entities.pool import PoolSummary
from ..core.entities.status_report import StatusReport
from ..core.exceptions.zfs_exceptions import MissingScanInfoError
from ..core.interfaces.logger_interface import ILogger
from .error_aggregator import aggregate, in_use_spares
from .scan_interpreter import ScanInterpreter
from .threshold_registry import ThresholdRegistry, ERROR_CATEGORIES, POOL_METRIC_CATEGORIES


class _Accumulator:
    """Running severity plus message fragments for one pool."""

    def __init__(self, severity: Severity, head: str):
        self.severity = severity
        self.parts: List[str] = [head]

    def raise_to(self, severity: Severity) -> None:
        self.severity = self.severity.raise_to(severity)

    def note(self, text: str, separator: str = ', ') -> None:
        self.parts.append(f"{separator}{text}")

    @property
    def message(self) -> str:
        return ''.join(self.parts)


class SeverityEvaluator:
    def __init__(self, registry: ThresholdRegistry,
                 scan_interpreter: Optional[ScanInterpreter] = None,
                 logger: Optional[ILogger] = None):
        self._registry = registry
        self._scan_interpreter = scan_interpreter or ScanInterpreter()
        self._logger = logger

    def evaluate(self, summary: PoolSummary, report: StatusReport,
                 now: Optional[datetime] = None) -> EvaluationResult:
        pool = summary.name
        acc = _Accumulator(
            summary.baseline_severity(),
            f"{pool}: H={summary.health}, C={summary.capacity}%, "
            f"F{summary.fragmentation}%, L={summary.leaked_label}",
        )

        metrics = {
            'capacity': summary.capacity,
            'frag': summary.fragmentation,
            'leaked': summary.leaked,
        }
        for category in POOL_METRIC_CATEGORIES:
            acc.raise_to(self._registry.resolve(pool, category).check(metrics[category]))

        self._check_scan(pool, report, acc, now)

        if report.status:
            acc.note("status pending")
            acc.raise_to(Severity.WARNING)
        if report.action:
            acc.note("action pending")
            acc.raise_to(Severity.WARNING)

        if report.has_data_errors():
            acc.note("errors")
            acc.raise_to(Severity.CRITICAL)

        for spare in in_use_spares(report.config):
            acc.note("in-use spare")
            acc.raise_to(Severity.WARNING)
            self._debug("Spare in use", {"pool": pool, "spare": spare.name, "state": spare.state})

        counts = aggregate(report.config)
        for category in ERROR_CATEGORIES:
            code = self._registry.resolve(pool, category).check(counts.get(category))
            if code != Severity.OK:
                acc.note(category)
                acc.raise_to(code)

        self._debug("Pool evaluated", {"pool": pool, "severity": acc.severity.name})
        return EvaluationResult(pool=pool, severity=acc.severity, message=acc.message,
                                error_counts=counts)

    def _check_scan(self, pool: str, report: StatusReport, acc: _Accumulator,
                    now: Optional[datetime]) -> None:
        if report.scan is None:
            raise MissingScanInfoError(pool)

        state = self._scan_interpreter.interpret(report.scan, now)
        acc.note(state.age_label())
        if state.has_age:
            acc.raise_to(self._registry.resolve(pool, 'scrub').check(state.elapsed_days))
        else:
            acc.raise_to(Severity.WARNING)

        if state.flags:
            acc.note(f"({state.flag_label()})", separator=' ')
            acc.raise_to(Severity.WARNING)

    def _debug(self, message: str, extra: dict) -> None:
        if self._logger:
            self._logger.debug(message, extra)


def evaluate(summary: PoolSummary, report: StatusReport, registry: ThresholdRegistry,
             now: Optional[datetime] = None) -> EvaluationResult:
    return SeverityEvaluator(registry).evaluate(summary, report, now)
