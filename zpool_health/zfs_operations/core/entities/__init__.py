"""Core domain entities"""

from .evaluation import Severity, ErrorCounts, EvaluationResult
from .pool import PoolState, PoolSummary, POOL_LIST_COLUMNS
from .scan_state import ScanKind, ScanFlag, ScanState
from .status_report import DeviceNode, SparesGroup, StatusReport, SPARES, NO_KNOWN_DATA_ERRORS

__all__ = [
    'Severity',
    'ErrorCounts',
    'EvaluationResult',
    'PoolState',
    'PoolSummary',
    'POOL_LIST_COLUMNS',
    'ScanKind',
    'ScanFlag',
    'ScanState',
    'DeviceNode',
    'SparesGroup',
    'StatusReport',
    'SPARES',
    'NO_KNOWN_DATA_ERRORS',
]
