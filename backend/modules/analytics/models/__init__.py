# backend/modules/analytics/models/__init__.py

from .analytics_models import MetricsCache

__all__ = ["MetricsCache"]
