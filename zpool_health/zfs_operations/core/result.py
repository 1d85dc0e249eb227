from typing import Generic, TypeVar, Optional, cast
from dataclasses import dataclass

T = TypeVar('T')
E = TypeVar('E', bound=Exception)


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """Outcome of a health-check run: a value, or the fatal error that aborted it"""
    _value: Optional[T] = None
    _error: Optional[E] = None

    def __post_init__(self):
        if self._error is not None and self._value is not None:
            raise ValueError("Result cannot carry both a value and an error")

    @classmethod
    def success(cls, value: T) -> 'Result[T, E]':
        """Create a successful result"""
        return cls(_value=value)

    @classmethod
    def failure(cls, error: E) -> 'Result[T, E]':
        """Create a failed result"""
        if error is None:
            raise ValueError("Failure result requires an error")
        return cls(_error=error)

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def is_failure(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> T:
        """Get the success value (raises ValueError if result is failure)"""
        if self.is_failure:
            raise ValueError("Cannot get value from failed result")
        return cast(T, self._value)

    @property
    def error(self) -> E:
        """Get the error (raises ValueError if result is success)"""
        if self.is_success:
            raise ValueError("Cannot get error from successful result")
        return cast(E, self._error)

    def __bool__(self) -> bool:
        return self.is_success

    def __str__(self) -> str:
        if self.is_success:
            return f"Success({self._value})"
        return f"Failure({self._error})"

