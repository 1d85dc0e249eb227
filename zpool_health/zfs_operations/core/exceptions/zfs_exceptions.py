from typing import Dict, Any, Optional


class ZFSException(Exception):
    """Base exception for all ZFS health-check operations"""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization"""
        return {
            'error_type': self.__class__.__name__,
            'message': str(self),
            'error_code': self.error_code,
            'details': self.details
        }


class PoolException(ZFSException):
    """Pool-related exceptions"""
    pass


class PoolListError(PoolException):
    """`zpool list` could not be executed or exited non-zero"""

    def __init__(self, stderr: str = "", exit_code: Optional[int] = None):
        super().__init__(
            "zpool list failed",
            error_code="POOL_LIST_FAILED",
            details={"stderr": stderr, "exit_code": exit_code}
        )


class PoolStatusError(PoolException):
    """`zpool status <pool>` could not be executed or exited non-zero"""

    def __init__(self, pool_name: str, stderr: str = "", exit_code: Optional[int] = None):
        super().__init__(
            f"zpool status {pool_name} failed",
            error_code="POOL_STATUS_FAILED",
            details={"pool_name": pool_name, "stderr": stderr, "exit_code": exit_code}
        )


class PoolNotFoundError(PoolException):
    """Pool not found exception"""

    def __init__(self, pool_name: str):
        super().__init__(
            f"Pool '{pool_name}' not found",
            error_code="POOL_NOT_FOUND",
            details={"pool_name": pool_name}
        )


class NoPoolsFoundError(PoolException):
    """No pool survived the include/exclude filters"""

    def __init__(self, include: Optional[list] = None, exclude: Optional[list] = None):
        super().__init__(
            "no pools found",
            error_code="NO_POOLS_FOUND",
            details={"include": include or [], "exclude": exclude or []}
        )


class PoolListParseError(PoolException):
    """A `zpool list` row could not be parsed"""

    def __init__(self, line: str, reason: str = ""):
        message = f"unparseable zpool list line: {line}"
        if reason:
            message += f" ({reason})"
        super().__init__(
            message,
            error_code="POOL_LIST_PARSE_FAILED",
            details={"line": line, "reason": reason}
        )


class StatusReportException(ZFSException):
    """Exceptions raised while interpreting `zpool status` output"""
    pass


class MalformedReportError(StatusReportException):
    """A config line matched none of the known device line shapes"""

    def __init__(self, line: str, reason: str = ""):
        super().__init__(
            f"unknown zpool status config line: {line}",
            error_code="MALFORMED_REPORT",
            details={"line": line, "reason": reason}
        )


class MissingScanInfoError(StatusReportException):
    """The status report carries no `scan:` section"""

    def __init__(self, pool_name: str = ""):
        super().__init__(
            "no scan info found in zpool status",
            error_code="MISSING_SCAN_INFO",
            details={"pool_name": pool_name}
        )


class ScanDateParseError(StatusReportException):
    """The timestamp embedded in the scan sentence could not be parsed"""

    def __init__(self, timestamp: str):
        super().__init__(
            f"failed to parse scan date {timestamp}",
            error_code="SCAN_DATE_PARSE_FAILED",
            details={"timestamp": timestamp}
        )
