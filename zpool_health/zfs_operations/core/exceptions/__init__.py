"""Core domain exceptions"""

from .validation_exceptions import (
    ValidationException,
    InvalidThresholdCategoryError,
    ThresholdSpecError,
    ThresholdRangeError,
    ThresholdsFileError,
)
from .zfs_exceptions import (
    ZFSException,
    PoolException,
    PoolListError,
    PoolStatusError,
    PoolNotFoundError,
    NoPoolsFoundError,
    PoolListParseError,
    StatusReportException,
    MalformedReportError,
    MissingScanInfoError,
    ScanDateParseError,
)

__all__ = [
    'ValidationException',
    'InvalidThresholdCategoryError',
    'ThresholdSpecError',
    'ThresholdRangeError',
    'ThresholdsFileError',
    'ZFSException',
    'PoolException',
    'PoolListError',
    'PoolStatusError',
    'PoolNotFoundError',
    'NoPoolsFoundError',
    'PoolListParseError',
    'StatusReportException',
    'MalformedReportError',
    'MissingScanInfoError',
    'ScanDateParseError',
]
