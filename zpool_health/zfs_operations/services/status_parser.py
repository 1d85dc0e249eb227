"""
Parser for `zpool status -p <pool>` text output.

The report is a sequence of `category: text` sections. Free-text sections may
continue on following indented lines. The `config:` section holds the device
table, whose nesting is expressed purely by indentation after a leading tab:

    config:

    \tNAME        STATE     READ WRITE CKSUM
    \ttank        ONLINE       0     0     0      <- depth 0
    \t  mirror-0  ONLINE       0     0     0      <- depth 1
    \t    sda     ONLINE       0     0     0      <- depth 2
    \tspares
    \t  sdc       AVAIL                           <- spare, state only
"""
import re
from typing import Iterable, List, Optional, Union

from ..core.entities.status_report import DeviceNode, SparesGroup, StatusReport, SPARES
from ..core.exceptions.zfs_exceptions import MalformedReportError
from ..core.interfaces.logger_interface import ILogger
from ..core.value_objects.size_value import SizeValue

CONFIG = 'config'

_CATEGORY_RE = re.compile(r'^ *([a-z]+):(.*)$')
_NAME = r'[A-Za-z0-9_:.-]+'
# Index is the tree depth; the match is exact so deeper nesting is rejected
_DEVICE_RES = (
    re.compile(rf'^({_NAME})\s*(.*)$'),
    re.compile(rf'^  ({_NAME})\s*(.*)$'),
    re.compile(rf'^    ({_NAME})\s*(.*)$'),
)


class StatusParser:
    """Turns one pool's status report into a `StatusReport` tree."""

    def __init__(self, logger: Optional[ILogger] = None):
        self._logger = logger

    def parse(self, report: Union[str, Iterable[str]]) -> StatusReport:
        lines = report.splitlines() if isinstance(report, str) else list(report)
        return _ReportBuilder(self._logger).feed(lines)


def parse(report: Union[str, Iterable[str]]) -> StatusReport:
    """Parse status output with a default, silent parser."""
    return StatusParser().parse(report)


class _ReportBuilder:
    """Mutable state for a single parse: current section and open vdevs."""

    def __init__(self, logger: Optional[ILogger]):
        self._logger = logger
        self.report = StatusReport()
        self.category: Optional[str] = None
        self.top: Optional[DeviceNode] = None
        self.mid: Optional[DeviceNode] = None

    def feed(self, lines: List[str]) -> StatusReport:
        for raw in lines:
            line = raw.rstrip('\r\n').rstrip()
            if not line:
                continue

            match = _CATEGORY_RE.match(line)
            if match:
                self._start_category(match.group(1), match.group(2))
            elif self.category == CONFIG:
                self._config_line(line)
            elif self.category is not None:
                self._append_text(line.lstrip())
            elif self._logger:
                self._logger.debug("Ignoring status line outside any section", {"line": line})

        return self.report

    def _start_category(self, name: str, remainder: str) -> None:
        self.category = name
        if remainder.startswith(' '):
            remainder = remainder[1:]
        if name != CONFIG:
            # A repeated header starts the section over
            self.report.categories[name] = remainder

    def _append_text(self, text: str) -> None:
        existing = self.report.categories.get(self.category, '')
        self.report.categories[self.category] = f"{existing}; {text}" if existing else text

    def _config_line(self, line: str) -> None:
        if line.startswith('\t'):
            line = line[1:]
        if line.startswith('NAME'):
            return

        for depth, pattern in enumerate(_DEVICE_RES):
            match = pattern.match(line)
            if match:
                name, stats = match.group(1), match.group(2).split()
                if depth == 0:
                    self._top_level(name, stats, line)
                elif depth == 1:
                    self._child(name, stats, line)
                else:
                    self._grandchild(name, stats, line)
                return

        raise MalformedReportError(line)

    def _top_level(self, name: str, stats: List[str], line: str) -> None:
        self.mid = None
        if name == SPARES:
            self.top = self.report.config.setdefault(SPARES, SparesGroup())
            return
        self.top = self._node(name, stats, line, with_counters=True)
        self.report.config[name] = self.top

    def _child(self, name: str, stats: List[str], line: str) -> None:
        if self.top is None:
            raise MalformedReportError(line, "device listed before any top-level vdev")
        in_spares = isinstance(self.top, SparesGroup)
        self.mid = self.top.add_child(self._node(name, stats, line, with_counters=not in_spares))

    def _grandchild(self, name: str, stats: List[str], line: str) -> None:
        if self.mid is None:
            raise MalformedReportError(line, "leaf device listed before its parent vdev")
        in_spares = isinstance(self.top, SparesGroup)
        self.mid.add_child(self._node(name, stats, line, with_counters=not in_spares))

    def _node(self, name: str, stats: List[str], line: str, with_counters: bool) -> DeviceNode:
        state = stats[0] if stats else None
        if not with_counters:
            return DeviceNode(name=name, state=state)

        read_err, write_err, cksum_err = (self._counter(stats, i, line) for i in (1, 2, 3))
        return DeviceNode(
            name=name,
            state=state,
            read_err=read_err,
            write_err=write_err,
            cksum_err=cksum_err,
        )

    def _counter(self, stats: List[str], index: int, line: str) -> Optional[int]:
        if index >= len(stats):
            return None
        try:
            return SizeValue.from_zfs_string(stats[index]).bytes
        except ValueError:
            if self._logger:
                self._logger.warning("Non-numeric error counter in config line",
                                     {"line": line, "token": stats[index]})
            return None
