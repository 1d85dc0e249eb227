"""
Structured logger implementation for ZFS health checks.
"""
import json
import logging
import sys
import threading
from typing import Dict, Any, Optional, TextIO
from datetime import datetime, timezone
from ...core.interfaces.logger_interface import ILogger


class StructuredLogger(ILogger):
    """Structured logger implementation with JSON formatting and context support."""

    def __init__(self, name: str = "zpool_health", level: str = "WARNING", stream: Optional[TextIO] = None):
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

        # stdout belongs to the plugin status line
        if not self.logger.handlers:
            handler = logging.StreamHandler(stream or sys.stderr)
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)

        self.logger.propagate = False

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.DEBUG, message, extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.INFO, message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.WARNING, message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.ERROR, message, extra)

    def exception(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log exception with traceback."""
        self._log(logging.ERROR, message, extra, exc_info=True)

    def _log(self, level: int, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False) -> None:
        """Internal logging method with structured context."""
        if not self.logger.isEnabledFor(level):
            return

        record = self.logger.makeRecord(
            name=self.name,
            level=level,
            fn="",
            lno=0,
            msg=message,
            args=(),
            exc_info=sys.exc_info() if exc_info else None
        )

        for key, value in (extra or {}).items():
            setattr(record, key, value)

        record.timestamp = datetime.now(timezone.utc).isoformat()

        self.logger.handle(record)


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured JSON logging."""

    _RESERVED = {
        'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
        'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
        'thread', 'threadName', 'processName', 'process', 'stack_info',
        'exc_info', 'exc_text', 'message', 'timestamp', 'taskName'
    }

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": getattr(record, 'timestamp', datetime.now(timezone.utc).isoformat()),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in self._RESERVED:
                try:
                    json.dumps(value)
                    log_entry[key] = value
                except (TypeError, ValueError):
                    log_entry[key] = str(value)

        try:
            return json.dumps(log_entry, ensure_ascii=False, separators=(',', ':'))
        except (TypeError, ValueError):
            return str(log_entry)


class ContextLogger(StructuredLogger):
    """Logger with persistent context that gets added to all log messages."""

    def __init__(self, name: str = "zpool_health", level: str = "WARNING",
                 context: Optional[Dict[str, Any]] = None, stream: Optional[TextIO] = None):
        super().__init__(name, level, stream)
        self.context = context or {}
        self._context_lock = threading.Lock()

    def add_context(self, key: str, value: Any) -> None:
        """Add persistent context to all future log messages."""
        with self._context_lock:
            self.context[key] = value

    def remove_context(self, key: str) -> None:
        with self._context_lock:
            self.context.pop(key, None)

    def _log(self, level: int, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False) -> None:
        with self._context_lock:
            merged_extra = self.context.copy()
        if extra:
            merged_extra.update(extra)

        super()._log(level, message, merged_extra, exc_info)
