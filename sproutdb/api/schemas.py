"""
Request and response models for the HTTP transport.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class FindRequest(BaseModel):
    where: Optional[Dict[str, Any]] = None
    sort: Optional[Dict[str, Literal["asc", "desc"]]] = None
    limit: Optional[int] = Field(default=None, ge=0)
    offset: Optional[int] = Field(default=None, ge=0)


class DeleteRequest(BaseModel):
    where: Optional[Dict[str, Any]] = None


class UpdateRequest(BaseModel):
    where: Optional[Dict[str, Any]] = None
    update: Dict[str, Any]


class LoadRequest(BaseModel):
    records: List[Dict[str, Any]]


class CreateTableRequest(BaseModel):
    name: Optional[str] = None


class SuccessResponse(BaseModel):
    success: bool = True


class CreateTableResponse(BaseModel):
    success: bool = True
    message: str


class DatabaseSummary(BaseModel):
    tables: int
    totalRecords: int


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    uptime: float
    version: str
    database: DatabaseSummary


class RequestCounters(BaseModel):
    total: int
    byMethod: Dict[str, int]
    byEndpoint: Dict[str, int]
    errors: int


class PerformanceStats(BaseModel):
    avgResponseTime: float
    totalResponseTime: float


class DatabaseMetrics(BaseModel):
    tables: List[str]
    tableCount: int
    recordCounts: Dict[str, int]


class MetricsResponse(BaseModel):
    requests: RequestCounters
    performance: PerformanceStats
    startTime: datetime
    uptime: float
    database: DatabaseMetrics


class ErrorResponse(BaseModel):
    error: str


class ValidationFieldError(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    error_type: str = "VALIDATION_ERROR"
    message: str
    errors: List[ValidationFieldError]
