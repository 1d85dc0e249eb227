"""
Pool health API router.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..dependencies import get_pool_health_service
from ..models import PoolHealthListResponse, PoolHealthResponse, PoolHealthResult
from ...zfs_operations.core.entities.evaluation import Severity
from ...zfs_operations.core.exceptions.validation_exceptions import ValidationException
from ...zfs_operations.core.exceptions.zfs_exceptions import (
    NoPoolsFoundError,
    PoolListError,
    PoolListParseError,
    PoolNotFoundError,
    PoolStatusError,
    StatusReportException,
)
from ...zfs_operations.services.pool_health_service import PoolHealthService

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/v1/pools", tags=["health"])


def _status_code_for(error: Exception) -> int:
    if isinstance(error, (NoPoolsFoundError, PoolNotFoundError)):
        return 404
    if isinstance(error, (StatusReportException, PoolListParseError, ValidationException)):
        return 422
    if isinstance(error, (PoolListError, PoolStatusError)):
        return 502
    return 500


def _raise_for(error: Exception):
    detail = error.to_dict() if hasattr(error, "to_dict") else {"message": str(error)}
    raise HTTPException(status_code=_status_code_for(error), detail=detail)


@router.get("/health", response_model=PoolHealthListResponse)
async def check_pools(
    include: Optional[List[str]] = Query(None, description="Pools to check"),
    exclude: Optional[List[str]] = Query(None, description="Pools to skip"),
    service: PoolHealthService = Depends(get_pool_health_service)
):
    """Evaluate all selected pools."""
    result = await service.check_pools(include=include, exclude=exclude)
    if result.is_failure:
        logger.warning(f"Pool health check failed: {result.error}")
        _raise_for(result.error)

    evaluations = result.value
    overall = Severity.OK
    for evaluation in evaluations:
        overall = overall.raise_to(evaluation.severity)

    return PoolHealthListResponse(
        success=True,
        severity=overall.name,
        results=[PoolHealthResult(**e.to_dict()) for e in evaluations],
        count=len(evaluations)
    )


@router.get("/{pool_name}/health", response_model=PoolHealthResponse)
async def check_pool(
    pool_name: str,
    service: PoolHealthService = Depends(get_pool_health_service)
):
    """Evaluate a single pool."""
    result = await service.check_pool(pool_name)
    if result.is_failure:
        logger.warning(f"Health check for {pool_name} failed: {result.error}")
        _raise_for(result.error)

    return PoolHealthResponse(
        success=True,
        result=PoolHealthResult(**result.value.to_dict())
    )
