"""
Service probing the application's dependencies.
"""

import logging
import time
from datetime import datetime

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..schemas.health_schemas import DatabaseHealth, HealthCheckResponse, HealthStatus

logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


class HealthService:

    def __init__(self, db: Session):
        self.db = db

    def check_health(self) -> HealthCheckResponse:
        database = self.check_database_health()
        return HealthCheckResponse(
            status=database.status,
            timestamp=datetime.utcnow(),
            version=APP_VERSION,
            database=database,
        )

    def check_database_health(self) -> DatabaseHealth:
        """Check database connectivity and latency"""
        start_time = time.time()

        try:
            self.db.execute(text("SELECT 1")).fetchone()
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            return DatabaseHealth(
                status=HealthStatus.UNHEALTHY,
                can_connect=False,
                message="Database connection failed",
            )

        response_time_ms = (time.time() - start_time) * 1000
        if response_time_ms > 1000:
            status = HealthStatus.UNHEALTHY
        elif response_time_ms > 500:
            status = HealthStatus.DEGRADED
        else:
            status = HealthStatus.HEALTHY

        return DatabaseHealth(
            status=status,
            can_connect=True,
            response_time_ms=response_time_ms,
        )
