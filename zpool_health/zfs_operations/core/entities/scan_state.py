"""
Scan (scrub/resilver) state derived from the `scan:` sentence.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ScanKind(Enum):
    """Shape of the scan sentence."""
    SCRUB_COMPLETED = "scrub-completed"
    RESILVER_COMPLETED = "resilver-completed"
    SCRUB_IN_PROGRESS = "scrub-in-progress"
    RESILVER_IN_PROGRESS = "resilver-in-progress"
    NONE = "none"


class ScanFlag(Enum):
    """Anomalies worth surfacing next to the scrub age."""
    REPAIRED = "REPAIRED"
    ERRORS = "ERRORS"
    RSVLR_ERRORS = "RSVLR_ERRORS"
    RSVLR = "RSVLR"


@dataclass(frozen=True)
class ScanState:
    kind: ScanKind = ScanKind.NONE
    elapsed_days: Optional[int] = None
    flags: Tuple[ScanFlag, ...] = ()

    @property
    def has_age(self) -> bool:
        return self.elapsed_days is not None

    def age_label(self) -> str:
        """Message fragment such as `S=3d`, or `S=?d` when the age is unknown."""
        return f"S={self.elapsed_days}d" if self.has_age else "S=?d"

    def flag_label(self) -> str:
        return '|'.join(flag.value for flag in self.flags)
