# backend/modules/analytics/models/analytics_models.py

from sqlalchemy import Column, Integer, String, JSON

from core.database import Base
from core.mixins import TimestampMixin


class MetricsCache(Base, TimestampMixin):
    """
    Last computed dashboard metrics per period key.

    `kpis` holds a tagged payload ({"schema_version": n, "metrics": {...}})
    so rows written by an older layout are recognisable and ignored.
    One row per period key; writers overwrite (last writer wins).
    """
    __tablename__ = "metrics_cache"

    id = Column(Integer, primary_key=True, index=True)
    period_key = Column(String(50), nullable=False, unique=True, index=True)
    kpis = Column(JSON, nullable=False)
