from abc import ABC, abstractmethod
from typing import Optional
from dataclasses import dataclass


@dataclass
class CommandResult:
    """Result of a command execution"""
    returncode: int
    stdout: str
    stderr: str
    success: Optional[bool] = None

    def __post_init__(self):
        if self.success is None:
            self.success = self.returncode == 0

    @property
    def lines(self):
        """Stdout split into lines, blank lines included."""
        return self.stdout.splitlines()


class ICommandExecutor(ABC):
    """Interface for running the external `zpool` tool"""

    @abstractmethod
    async def execute_system(self, command: str, *args: str) -> CommandResult:
        """Execute system command with validation"""
        pass
