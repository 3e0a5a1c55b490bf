"""
Pydantic schemas for the health endpoint.
"""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from enum import Enum


class HealthStatus(str, Enum):
    """Health status values"""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class DatabaseHealth(BaseModel):
    """Database health information"""
    status: HealthStatus
    can_connect: bool
    response_time_ms: Optional[float] = None
    message: Optional[str] = None


class HealthCheckResponse(BaseModel):
    """Overall health check response"""
    status: HealthStatus
    timestamp: datetime
    version: str
    database: DatabaseHealth
