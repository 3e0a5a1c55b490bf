"""
Health monitoring API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.core.database import get_db

from ..services.health_service import HealthService
from ..schemas.health_schemas import HealthCheckResponse

router = APIRouter(prefix="/api/health", tags=["Health Monitoring"])


@router.get("", response_model=HealthCheckResponse)
def health_check(db: Session = Depends(get_db)):
    """
    Basic health check endpoint.

    Publicly accessible; reports overall status and database connectivity.
    """
    return HealthService(db).check_health()
