"""
zpool-health Test Configuration and Fixtures
"""

import pytest
from unittest.mock import Mock, AsyncMock

from zpool_health.zfs_operations.core.entities.pool import PoolSummary
from zpool_health.zfs_operations.core.interfaces.command_executor import CommandResult
from zpool_health.zfs_operations.services.pool_health_service import PoolHealthService
from zpool_health.zfs_operations.services.status_parser import StatusParser
from zpool_health.zfs_operations.services.threshold_registry import (
    ThresholdRegistry,
    ThresholdRegistryBuilder,
)
from tests.fixtures.zpool_data import (
    ZPOOL_LIST_OUTPUT,
    STATUS_BY_POOL,
    HEALTHY_STATUS,
    DEGRADED_STATUS,
)


def fake_zpool(list_output=ZPOOL_LIST_OUTPUT, statuses=None, failing=()):
    """
    Build an `execute_system` side effect answering `zpool list` and
    `zpool status -p <pool>` from canned text. Commands named in `failing`
    ('list' or a pool name) exit non-zero.
    """
    statuses = STATUS_BY_POOL if statuses is None else statuses

    async def execute_system(command, *args):
        if args[0] == "list":
            if "list" in failing:
                return CommandResult(returncode=1, stdout="", stderr="no such pool")
            return CommandResult(returncode=0, stdout=list_output, stderr="")
        pool = args[-1]
        if pool in failing or pool not in statuses:
            return CommandResult(returncode=1, stdout="",
                                 stderr=f"cannot open '{pool}': no such pool")
        return CommandResult(returncode=0, stdout=statuses[pool], stderr="")

    return execute_system


@pytest.fixture
def mock_executor():
    """Mock command executor serving the canned zpool output."""
    executor = Mock()
    executor.execute_system = AsyncMock(side_effect=fake_zpool())
    return executor


@pytest.fixture
def mock_logger():
    """Create mock logger."""
    logger = Mock()
    logger.info = Mock()
    logger.error = Mock()
    logger.warning = Mock()
    logger.debug = Mock()
    logger.exception = Mock()
    return logger


@pytest.fixture
def default_registry():
    return ThresholdRegistry.defaults()


@pytest.fixture
def relaxed_scrub_registry():
    """Registry whose scrub bounds never trip on old fixture dates."""
    return ThresholdRegistryBuilder() \
        .with_override("*", "scrub", "warning", 100000) \
        .with_override("*", "scrub", "critical", 200000) \
        .build()


@pytest.fixture
def pool_health_service(mock_executor, default_registry, mock_logger):
    return PoolHealthService(
        executor=mock_executor,
        registry=default_registry,
        logger=mock_logger
    )


@pytest.fixture
def healthy_summary():
    return PoolSummary.from_list_line("tank\t50%\t10%\t0\tONLINE")


@pytest.fixture
def degraded_summary():
    return PoolSummary.from_list_line("data\t45%\t20%\t0\tDEGRADED")


@pytest.fixture
def healthy_report():
    return StatusParser().parse(HEALTHY_STATUS)


@pytest.fixture
def degraded_report():
    return StatusParser().parse(DEGRADED_STATUS)
