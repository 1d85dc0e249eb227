"""
Monitoring-plugin threshold ranges.

A bound follows the usual plugin range syntax:

    N       alert if value < 0 or value > N
    N:      alert if value < N
    ~:N     alert if value > N
    M:N     alert if value < M or value > N
    @M:N    alert if M <= value <= N
"""
import math
import re
from dataclasses import dataclass
from typing import Union

from ..entities.evaluation import Severity
from ..exceptions.validation_exceptions import ThresholdRangeError

Number = Union[int, float]

_NUMBER_RE = re.compile(r'^-?\d+(?:\.\d+)?$')


def _to_number(text: str, range_text: str) -> Number:
    if not _NUMBER_RE.match(text):
        raise ThresholdRangeError(range_text, f"'{text}' is not a number")
    return float(text) if '.' in text else int(text)


@dataclass(frozen=True)
class ThresholdRange:
    """A single warning or critical bound."""
    start: float = 0
    end: float = math.inf
    inside: bool = False
    text: str = ""

    @classmethod
    def parse(cls, value: Union[str, Number]) -> 'ThresholdRange':
        """Parse a bound given as a number or a range string."""
        if isinstance(value, bool):
            raise ThresholdRangeError(str(value), "boolean is not a threshold")
        if isinstance(value, (int, float)):
            return cls(start=0, end=value, text=str(value))

        range_text = str(value).strip()
        if not range_text:
            raise ThresholdRangeError(range_text, "empty range")

        body = range_text
        inside = body.startswith('@')
        if inside:
            body = body[1:]

        if ':' in body:
            start_text, end_text = body.split(':', 1)
            if start_text == '~':
                start = -math.inf
            elif start_text == '':
                start = 0
            else:
                start = _to_number(start_text, range_text)
            end = _to_number(end_text, range_text) if end_text else math.inf
        else:
            start = 0
            end = _to_number(body, range_text)

        if start > end:
            raise ThresholdRangeError(range_text, "start is greater than end")

        return cls(start=start, end=end, inside=inside, text=range_text)

    def alerts(self, value: Number) -> bool:
        """Check whether `value` falls on the alerting side of this range."""
        within = self.start <= value <= self.end
        return within if self.inside else not within

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class ThresholdPair:
    """Effective warning/critical bounds for one (pool, category)."""
    warning: ThresholdRange
    critical: ThresholdRange

    @classmethod
    def of(cls, warning: Union[str, Number], critical: Union[str, Number]) -> 'ThresholdPair':
        return cls(ThresholdRange.parse(warning), ThresholdRange.parse(critical))

    def check(self, value: Number) -> Severity:
        """Classify `value`; critical is tested before warning."""
        if self.critical.alerts(value):
            return Severity.CRITICAL
        if self.warning.alerts(value):
            return Severity.WARNING
        return Severity.OK

    def __str__(self) -> str:
        return f"w={self.warning}/c={self.critical}"
