"""
Evaluation outcome entities: severity ordering and per-pool results.
"""
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Any


class Severity(IntEnum):
    """Monitoring severity, ordered so that `max()` picks the worst."""
    OK = 0
    WARNING = 1
    CRITICAL = 2
    # Only produced at the plugin boundary for fatal conditions
    UNKNOWN = 3

    def raise_to(self, other: 'Severity') -> 'Severity':
        """Return the worse of the two severities."""
        return Severity(max(self, other))


@dataclass(frozen=True)
class ErrorCounts:
    """Aggregated device error counters for one pool."""
    cksum_err: int = 0
    read_err: int = 0
    write_err: int = 0

    def __add__(self, other: 'ErrorCounts') -> 'ErrorCounts':
        return ErrorCounts(
            cksum_err=self.cksum_err + other.cksum_err,
            read_err=self.read_err + other.read_err,
            write_err=self.write_err + other.write_err,
        )

    def get(self, category: str) -> int:
        return getattr(self, category)

    def to_dict(self) -> Dict[str, int]:
        return {
            'cksum_err': self.cksum_err,
            'read_err': self.read_err,
            'write_err': self.write_err,
        }


@dataclass(frozen=True)
class EvaluationResult:
    """Final severity and message for one evaluated pool."""
    pool: str
    severity: Severity
    message: str
    error_counts: ErrorCounts = field(default_factory=ErrorCounts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'pool': self.pool,
            'severity': self.severity.name,
            'message': self.message,
            'error_counts': self.error_counts.to_dict(),
        }

    def __str__(self) -> str:
        return self.message
