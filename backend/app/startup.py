"""
Application startup validation and initialization.

This module performs startup checks and initialization to ensure the
application is properly configured before serving requests.
"""

import logging
import sys
from typing import List, Tuple

import sqlalchemy as sa
from sqlalchemy import text

from backend.core.config import settings
from backend.core.database import Base, engine
from backend.modules.payments.config.payment_config import payment_config

logger = logging.getLogger(__name__)

REQUIRED_TABLES = [
    "restaurants",
    "menu_items",
    "orders",
    "order_items",
    "deliveries",
    "payments",
    "reviews",
]


def configure_logging():
    """Configure application logging"""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


class StartupValidator:
    """Validates application startup requirements"""

    def __init__(self):
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def check_database_connection(self) -> bool:
        """Check database connectivity"""
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1")).fetchone()
            logger.info("Database connection successful")
            return True
        except sa.exc.SQLAlchemyError as e:
            self.errors.append(f"Database connection failed: {str(e)}")
            return False

    def check_environment_config(self) -> bool:
        """Validate environment configuration"""
        if "dev-secret" in settings.jwt_secret_key:
            if settings.is_production:
                self.errors.append("JWT_SECRET_KEY must be set in production")
                return False
            self.warnings.append("Using development JWT_SECRET_KEY - change for production")
        if payment_config.is_production() is not settings.is_production:
            self.warnings.append(
                "PAYMENT_ENVIRONMENT does not match ENVIRONMENT"
            )
        return True

    def check_required_tables(self) -> bool:
        """Check if required database tables exist"""
        try:
            existing_tables = sa.inspect(engine).get_table_names()
        except sa.exc.SQLAlchemyError as e:
            self.warnings.append(f"Could not check database tables: {str(e)}")
            return True

        missing_tables = [t for t in REQUIRED_TABLES if t not in existing_tables]
        if missing_tables:
            self.warnings.append(
                f"Missing database tables: {', '.join(missing_tables)}. "
                "Run migrations with: alembic upgrade head"
            )
        return True

    def validate_all(self) -> Tuple[bool, List[str], List[str]]:
        """Run all validation checks"""
        checks = [
            ("Environment Configuration", self.check_environment_config),
            ("Database Connection", self.check_database_connection),
            ("Database Tables", self.check_required_tables),
        ]

        all_passed = True
        for check_name, check_func in checks:
            logger.info(f"Running check: {check_name}")
            if not check_func():
                all_passed = False

        return all_passed, self.errors, self.warnings


def create_tables():
    """Create any missing tables; local development only"""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")


def run_startup_checks():
    """Run all startup validation checks"""
    logger.info(f"Starting food delivery backend ({settings.environment})")

    if settings.auto_create_tables:
        create_tables()

    validator = StartupValidator()
    passed, errors, warnings = validator.validate_all()

    for warning in warnings:
        logger.warning(f"Startup warning: {warning}")
    for error in errors:
        logger.error(f"Startup error: {error}")

    if not passed and settings.is_production:
        logger.error("Cannot start in production with errors")
        sys.exit(1)
    elif not passed:
        logger.warning("Starting in development mode despite errors")
    else:
        logger.info("All startup checks passed")

    return passed
