"""Core value objects"""

from .size_value import SizeValue
from .threshold import ThresholdRange, ThresholdPair

__all__ = [
    'SizeValue',
    'ThresholdRange',
    'ThresholdPair',
]
