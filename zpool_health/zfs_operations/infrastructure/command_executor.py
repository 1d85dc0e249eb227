"""
Concrete implementation of command executor interface.
"""
import asyncio
import logging
from typing import List

from ..core.interfaces.command_executor import ICommandExecutor, CommandResult


class CommandExecutor(ICommandExecutor):
    """Runs allow-listed system commands with a timeout; never raises."""

    TIMEOUT_EXIT_CODE = 124

    def __init__(self, timeout: int = 15):
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

        # Read-only health checks only need zpool
        self._allowed_system_commands = {'zpool'}

    async def execute_system(self, command: str, *args: str) -> CommandResult:
        """Execute system command with validation."""
        if command not in self._allowed_system_commands:
            return CommandResult(
                success=False,
                returncode=1,
                stdout="",
                stderr=f"System command '{command}' not allowed"
            )

        full_command = [command] + list(args)
        return await self._execute_command(full_command)

    async def _execute_command(self, command: List[str]) -> CommandResult:
        """Execute command with proper error handling."""
        try:
            self.logger.debug(f"Executing command: {' '.join(command)}")

            # zpool writes its diagnostics to stderr; both are kept for verbose output
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                limit=1024*1024
            )

            try:
                stdout, stderr = await asyncio.wait_for(
                    process.communicate(),
                    timeout=self.timeout
                )
            except asyncio.TimeoutError:
                process.kill()
                await process.wait()
                return CommandResult(
                    success=False,
                    returncode=self.TIMEOUT_EXIT_CODE,
                    stdout="",
                    stderr=f"Command timed out after {self.timeout} seconds"
                )

            # Trailing whitespace only: leading tabs carry the config tree depth
            stdout_str = stdout.decode('utf-8', errors='replace').rstrip()
            stderr_str = stderr.decode('utf-8', errors='replace').strip()

            success = process.returncode == 0

            if not success:
                self.logger.warning(
                    f"Command failed with exit code {process.returncode}: {stderr_str}"
                )

            return CommandResult(
                success=success,
                returncode=process.returncode if process.returncode is not None else 1,
                stdout=stdout_str,
                stderr=stderr_str
            )

        except Exception as e:
            self.logger.error(f"Command execution failed: {str(e)}")
            return CommandResult(
                success=False,
                returncode=-1,
                stdout="",
                stderr=f"Command execution failed: {str(e)}"
            )
