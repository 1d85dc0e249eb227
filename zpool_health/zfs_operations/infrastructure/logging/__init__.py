from .structured_logger import StructuredLogger, ContextLogger

__all__ = ["StructuredLogger", "ContextLogger"]
