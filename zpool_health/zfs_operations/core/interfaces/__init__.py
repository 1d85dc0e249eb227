"""Core interfaces"""

from .command_executor import CommandResult, ICommandExecutor
from .logger_interface import ILogger

__all__ = [
    'CommandResult',
    'ICommandExecutor',
    'ILogger',
]
