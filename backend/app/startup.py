"""
Application startup validation and initialization.

Ensures the schema exists and the database answers before the API
starts serving requests.
"""

import logging
from typing import List, Tuple

import sqlalchemy as sa
from sqlalchemy import text

from core.config import get_settings
from core.database import engine, init_db

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ["products", "inventory_entries", "sales", "metrics_cache"]


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
        except Exception as e:
            self.errors.append(f"Database connection failed: {str(e)}")
            return False

    def check_required_tables(self) -> bool:
        """Check if required database tables exist"""
        try:
            existing_tables = sa.inspect(engine).get_table_names()
            missing_tables = [t for t in REQUIRED_TABLES if t not in existing_tables]
            if missing_tables:
                self.errors.append(
                    f"Missing database tables: {', '.join(missing_tables)}"
                )
                return False
            return True
        except Exception as e:
            self.warnings.append(f"Could not check database tables: {str(e)}")
            return True

    def validate_all(self) -> Tuple[bool, List[str], List[str]]:
        """Run all validation checks"""
        checks = [
            ("Database Connection", self.check_database_connection),
            ("Database Tables", self.check_required_tables),
        ]

        all_passed = True

        for check_name, check_func in checks:
            logger.info(f"Running check: {check_name}")
            if not check_func():
                all_passed = False

        return all_passed, self.errors, self.warnings


def run_startup_checks() -> Tuple[bool, List[str]]:
    """Create missing tables, then run all startup validation checks"""
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} ({settings.environment})")

    init_db()

    passed, errors, warnings = StartupValidator().validate_all()

    for warning in warnings:
        logger.warning(f"Startup warning: {warning}")
    for error in errors:
        logger.error(f"Startup error: {error}")

    if not passed and settings.is_production:
        raise RuntimeError("Cannot start in production with failing startup checks")
    if passed:
        logger.info("All startup checks passed")

    return passed, warnings


def configure_startup_logging():
    """Configure logging from settings"""
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
