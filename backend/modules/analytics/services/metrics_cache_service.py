# backend/modules/analytics/services/metrics_cache_service.py

"""
Caching service for dashboard metrics.

Stores the last computed metrics per period key in the `metrics_cache`
table. Payloads carry a schema version; rows written under another
version, or that no longer validate, read as a miss.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..constants import CACHE_SCHEMA_VERSION
from ..exceptions import CacheError
from ..models.analytics_models import MetricsCache
from ..schemas.analytics_schemas import DashboardMetrics

logger = logging.getLogger(__name__)


def build_payload(metrics: DashboardMetrics) -> Dict[str, Any]:
    return {
        "schema_version": CACHE_SCHEMA_VERSION,
        "metrics": metrics.model_dump(mode="json"),
    }


def parse_payload(payload: Any) -> Optional[DashboardMetrics]:
    """Metrics from a stored payload, or None when it is not readable"""
    if not isinstance(payload, dict):
        return None
    if payload.get("schema_version") != CACHE_SCHEMA_VERSION:
        return None

    try:
        return DashboardMetrics.model_validate(payload.get("metrics"))
    except ValidationError:
        return None


class MetricsCacheService:
    """Handles the persisted metrics cache"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, period_key: str) -> Optional[DashboardMetrics]:
        """Get cached metrics for a period key"""
        try:
            entry = (
                self.db.query(MetricsCache)
                .filter(MetricsCache.period_key == period_key)
                .first()
            )
        except SQLAlchemyError as e:
            raise CacheError("get", str(e), period_key)

        if entry is None:
            logger.debug(f"Cache miss: {period_key}")
            return None

        metrics = parse_payload(entry.kpis)
        if metrics is None:
            logger.info(f"Ignoring unreadable cached metrics for {period_key}")
            return None

        logger.debug(f"Cache hit: {period_key}")
        return metrics

    def put(self, metrics: DashboardMetrics) -> None:
        """Insert or overwrite the cached metrics for the metrics' period key"""
        payload = build_payload(metrics)

        try:
            entry = (
                self.db.query(MetricsCache)
                .filter(MetricsCache.period_key == metrics.period_key)
                .first()
            )
            if entry is None:
                self.db.add(MetricsCache(period_key=metrics.period_key, kpis=payload))
            else:
                entry.kpis = payload
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise CacheError("put", str(e), metrics.period_key)

    def invalidate(self, period_key: Optional[str] = None) -> int:
        """Delete one cached period, or all of them; returns rows removed"""
        try:
            query = self.db.query(MetricsCache)
            if period_key is not None:
                query = query.filter(MetricsCache.period_key == period_key)
            removed = query.delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise CacheError("invalidate", str(e), period_key)

        logger.info(f"Invalidated {removed} cached metrics entries")
        return removed
