"""Health-check services"""

from .threshold_registry import ThresholdRegistry, ThresholdRegistryBuilder, parse_threshold_spec
from .status_parser import StatusParser
from .scan_interpreter import ScanInterpreter
from .severity_evaluator import SeverityEvaluator
from .pool_health_service import PoolHealthService

__all__ = [
    'ThresholdRegistry',
    'ThresholdRegistryBuilder',
    'parse_threshold_spec',
    'StatusParser',
    'ScanInterpreter',
    'SeverityEvaluator',
    'PoolHealthService',
]
