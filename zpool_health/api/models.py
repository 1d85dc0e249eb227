"""
Pydantic models for API responses.
"""
from typing import Dict, Any, List, Optional

from pydantic import BaseModel, Field


class APIResponse(BaseModel):
    """Base API response model."""
    success: bool
    message: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class ErrorCountsModel(BaseModel):
    cksum_err: int = 0
    read_err: int = 0
    write_err: int = 0


class PoolHealthResult(BaseModel):
    """Evaluation of a single pool."""
    pool: str = Field(..., description="Pool name")
    severity: str = Field(..., description="OK, WARNING or CRITICAL")
    message: str = Field(..., description="Plugin message for the pool")
    error_counts: ErrorCountsModel = Field(default_factory=ErrorCountsModel)


class PoolHealthListResponse(APIResponse):
    """Evaluation of every selected pool."""
    severity: str = Field(..., description="Worst severity across all results")
    results: List[PoolHealthResult] = Field(default_factory=list)
    count: int = 0


class PoolHealthResponse(APIResponse):
    """Evaluation of one pool."""
    result: PoolHealthResult

