"""
Classification of the free-text `scan:` sentence.
"""
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from ..core.entities.scan_state import ScanFlag, ScanKind, ScanState
from ..core.exceptions.zfs_exceptions import ScanDateParseError

SCAN_DATE_FORMAT = "%a %b %d %H:%M:%S %Y"
SECONDS_PER_DAY = 24 * 60 * 60


def parse_scan_date(text: str) -> datetime:
    """Parse a `Mon Jan  1 00:00:00 2024` style timestamp."""
    try:
        return datetime.strptime(text.strip(), SCAN_DATE_FORMAT)
    except ValueError:
        raise ScanDateParseError(text)


def elapsed_days(since: datetime, now: datetime) -> int:
    """Whole days between `since` and `now`, truncated toward zero."""
    return int((now - since).total_seconds() / SECONDS_PER_DAY)


@dataclass(frozen=True)
class ScanRule:
    pattern: re.Pattern
    extract: Callable[[re.Match, datetime], ScanState]


def _scrub_completed(match: re.Match, now: datetime) -> ScanState:
    repaired, errors, timestamp = match.group(1), int(match.group(2)), match.group(3)
    flags = []
    if repaired != '0B':
        flags.append(ScanFlag.REPAIRED)
    if errors != 0:
        flags.append(ScanFlag.ERRORS)
    return ScanState(
        kind=ScanKind.SCRUB_COMPLETED,
        elapsed_days=elapsed_days(parse_scan_date(timestamp), now),
        flags=tuple(flags),
    )


def _resilver_completed(match: re.Match, now: datetime) -> ScanState:
    flags = (ScanFlag.RSVLR_ERRORS,) if int(match.group(1)) != 0 else ()
    return ScanState(kind=ScanKind.RESILVER_COMPLETED, flags=flags)


def _scrub_in_progress(match: re.Match, now: datetime) -> ScanState:
    return ScanState(
        kind=ScanKind.SCRUB_IN_PROGRESS,
        elapsed_days=elapsed_days(parse_scan_date(match.group(1)), now),
    )


def _resilver_in_progress(match: re.Match, now: datetime) -> ScanState:
    return ScanState(kind=ScanKind.RESILVER_IN_PROGRESS, flags=(ScanFlag.RSVLR,))


# Tried in order; continuation lines are joined with `; `, which bounds timestamps
SCAN_RULES: List[ScanRule] = [
    ScanRule(re.compile(r'scrub repaired (\S+) in .* with (\d+) errors on ([^;]*)'), _scrub_completed),
    ScanRule(re.compile(r'resilvered .* in .* with (\d+) errors on'), _resilver_completed),
    ScanRule(re.compile(r'scrub in progress since ([^;]*)'), _scrub_in_progress),
    ScanRule(re.compile(r'resilver in progress since ([^;]*)'), _resilver_in_progress),
]


class ScanInterpreter:
    def __init__(self, rules: Optional[List[ScanRule]] = None):
        self._rules = rules if rules is not None else SCAN_RULES

    def interpret(self, scan_text: str, now: Optional[datetime] = None) -> ScanState:
        """
        Classify `scan_text`. An unrecognised sentence yields `ScanKind.NONE`;
        a recognised one with an unparseable timestamp raises
        `ScanDateParseError`.
        """
        now = now or datetime.now()
        for rule in self._rules:
            match = rule.pattern.search(scan_text)
            if match:
                return rule.extract(match, now)
        return ScanState()


def interpret(scan_text: str, now: Optional[datetime] = None) -> ScanState:
    return ScanInterpreter().interpret(scan_text, now)
