from datetime import datetime
from typing import Iterable, List, Optional

from ..core.interfaces.command_executor import ICommandExecutor, CommandResult
from ..core.interfaces.logger_interface import ILogger
from ..core.entities.evaluation import EvaluationResult
from ..core.entities.pool import PoolSummary, POOL_LIST_COLUMNS
from ..core.entities.status_report import StatusReport
from ..core.exceptions.zfs_exceptions import (
    ZFSException,
    PoolException,
    PoolListError,
    PoolStatusError,
    PoolNotFoundError,
    NoPoolsFoundError,
)
from ..core.result import Result
from .severity_evaluator import SeverityEvaluator
from .status_parser import StatusParser
from .threshold_registry import ThresholdRegistry


class PoolHealthService:
    """Collects `zpool` output and evaluates every selected pool."""

    def __init__(self,
                 executor: ICommandExecutor,
                 registry: ThresholdRegistry,
                 logger: ILogger):
        self._executor = executor
        self._registry = registry
        self._logger = logger
        self._parser = StatusParser(logger)
        self._evaluator = SeverityEvaluator(registry, logger=logger)
        # Output of the last failed command, for verbose reporting
        self.last_failed_output: Optional[CommandResult] = None

    @property
    def registry(self) -> ThresholdRegistry:
        return self._registry

    async def check_pools(self,
                          include: Optional[Iterable[str]] = None,
                          exclude: Optional[Iterable[str]] = None,
                          now: Optional[datetime] = None) -> Result[List[EvaluationResult], ZFSException]:
        """Evaluate every listed pool that passes the include/exclude filters."""
        include_set = set(include) if include else None
        exclude_set = set(exclude) if exclude else None
        try:
            self._logger.info("Checking pools", {
                "include": sorted(include_set or []),
                "exclude": sorted(exclude_set or []),
            })

            pools = await self.list_pools()
            selected = [p for p in pools if self._selected(p.name, include_set, exclude_set)]
            if not selected:
                raise NoPoolsFoundError(sorted(include_set or []), sorted(exclude_set or []))

            results = []
            for summary in selected:
                results.append(await self._evaluate(summary, now))

            self._logger.info(f"Successfully checked {len(results)} pools")
            return Result.success(results)

        except ZFSException as e:
            self._logger.error(f"Pool check aborted: {e}", {"error_code": e.error_code})
            return Result.failure(e)
        except Exception as e:
            self._logger.exception(f"Unexpected error checking pools: {e}")
            return Result.failure(PoolException(
                f"Unexpected error: {str(e)}",
                error_code="POOL_CHECK_UNEXPECTED_ERROR"
            ))

    async def check_pool(self, pool_name: str,
                         now: Optional[datetime] = None) -> Result[EvaluationResult, ZFSException]:
        """Evaluate a single pool by name."""
        try:
            pools = await self.list_pools()
            summary = next((p for p in pools if p.name == pool_name), None)
            if summary is None:
                raise PoolNotFoundError(pool_name)
            return Result.success(await self._evaluate(summary, now))

        except ZFSException as e:
            self._logger.error(f"Pool check aborted for {pool_name}: {e}", {"error_code": e.error_code})
            return Result.failure(e)
        except Exception as e:
            self._logger.exception(f"Unexpected error checking pool {pool_name}: {e}")
            return Result.failure(PoolException(
                f"Unexpected error: {str(e)}",
                error_code="POOL_CHECK_UNEXPECTED_ERROR"
            ))

    async def list_pools(self) -> List[PoolSummary]:
        """Run `zpool list` and parse its rows, in listing order."""
        result = await self._executor.execute_system(
            "zpool", "list", "-H", "-o", ",".join(POOL_LIST_COLUMNS)
        )
        if not result.success:
            self.last_failed_output = result
            raise PoolListError(result.stderr, result.returncode)

        pools = [PoolSummary.from_list_line(line) for line in result.lines if line.strip()]
        self._logger.debug(f"Listed {len(pools)} pools", {"pools": [p.name for p in pools]})
        return pools

    async def get_status(self, pool_name: str) -> StatusReport:
        """Run `zpool status -p <pool>` and parse it into a report tree."""
        result = await self._executor.execute_system("zpool", "status", "-p", pool_name)
        if not result.success:
            self.last_failed_output = result
            raise PoolStatusError(pool_name, result.stderr, result.returncode)
        return self._parser.parse(result.lines)

    async def _evaluate(self, summary: PoolSummary, now: Optional[datetime]) -> EvaluationResult:
        # Parser and evaluator share this logger, so their records carry the pool too
        self._logger.add_context("pool", summary.name)
        try:
            report = await self.get_status(summary.name)
            evaluation = self._evaluator.evaluate(summary, report, now)
            self._logger.info(f"Evaluated pool {summary.name}", {
                "severity": evaluation.severity.name,
            })
            return evaluation
        finally:
            self._logger.remove_context("pool")

    @staticmethod
    def _selected(name: str, include: Optional[set], exclude: Optional[set]) -> bool:
        return (include is None or name in include) and (exclude is None or name not in exclude)
