from typing import Dict, Any, Optional


class ValidationException(Exception):
    """Base validation exception"""

    def __init__(self, message: str, field: Optional[str] = None, value: Optional[Any] = None):
        super().__init__(message)
        self.field = field
        self.value = value

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization"""
        return {
            'error_type': self.__class__.__name__,
            'message': str(self),
            'field': self.field,
            'value': self.value
        }


class InvalidThresholdCategoryError(ValidationException):
    """Threshold override names a category outside the known set"""

    def __init__(self, category: str):
        super().__init__(f"invalid category {category}", 'category', category)
        self.category = category


class ThresholdSpecError(ValidationException):
    """Threshold override is not a `pool.category.value` triple"""

    def __init__(self, spec: str, reason: str = ""):
        message = f"invalid threshold specification '{spec}'"
        if reason:
            message += f": {reason}"
        super().__init__(message, 'threshold', spec)
        self.spec = spec
        self.reason = reason


class ThresholdRangeError(ValidationException):
    """Threshold value is not a valid monitoring-plugin range"""

    def __init__(self, range_text: str, reason: str = ""):
        message = f"invalid threshold range '{range_text}'"
        if reason:
            message += f": {reason}"
        super().__init__(message, 'range', range_text)
        self.range_text = range_text
        self.reason = reason


class ThresholdsFileError(ValidationException):
    """Thresholds file could not be read or is not valid YAML"""

    def __init__(self, path: str, reason: str = ""):
        super().__init__(f"failed to load thresholds file {path}: {reason}", 'thresholds_file', path)
        self.path = path
