"""
Pool summary entity built from one `zpool list` row.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..value_objects.size_value import SizeValue
from ..exceptions.zfs_exceptions import PoolListParseError
from .evaluation import Severity

# Columns requested from `zpool list -H -o ...`, in order
POOL_LIST_COLUMNS = ("name", "capacity", "fragmentation", "leaked", "health")


class PoolState(Enum):
    """Pool state enumeration."""
    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"
    DEGRADED = "DEGRADED"
    FAULTED = "FAULTED"
    REMOVED = "REMOVED"
    UNAVAIL = "UNAVAIL"
    SUSPENDED = "SUSPENDED"


def _percent(token: str) -> int:
    token = token.strip().rstrip('%')
    if token in ('', '-'):
        return 0
    return int(token)


@dataclass(frozen=True)
class PoolSummary:
    """Summary metrics for a single pool as reported by `zpool list`."""

    name: str
    capacity: int
    fragmentation: int
    leaked: int
    health: str
    # Leaked column exactly as zpool printed it, e.g. `1.5K`
    leaked_text: str = ""

    def __post_init__(self):
        if not self.name:
            raise ValueError("Pool name cannot be empty")

    @classmethod
    def from_list_line(cls, line: str) -> 'PoolSummary':
        """Parse a tab-separated `name, capacity%, fragmentation%, leaked, health` row."""
        parts = line.split('\t')
        if len(parts) < len(POOL_LIST_COLUMNS):
            raise PoolListParseError(line, f"expected {len(POOL_LIST_COLUMNS)} fields, got {len(parts)}")

        name, capacity, fragmentation, leaked, health = (p.strip() for p in parts[:5])
        try:
            return cls(
                name=name,
                capacity=_percent(capacity),
                fragmentation=_percent(fragmentation),
                leaked=SizeValue.from_zfs_string(leaked).bytes,
                health=health,
                leaked_text=leaked,
            )
        except ValueError as e:
            raise PoolListParseError(line, str(e))

    @property
    def state(self) -> Optional[PoolState]:
        """Known pool state, or None for values outside the enum."""
        try:
            return PoolState(self.health)
        except ValueError:
            return None

    @property
    def leaked_label(self) -> str:
        return self.leaked_text or str(self.leaked)

    def baseline_severity(self) -> Severity:
        """Severity implied by the pool health alone."""
        if self.state == PoolState.ONLINE:
            return Severity.OK
        if self.state in (PoolState.DEGRADED, PoolState.OFFLINE):
            return Severity.WARNING
        return Severity.CRITICAL

    def __str__(self) -> str:
        return f"Pool({self.name})"
