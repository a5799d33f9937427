# backend/modules/analytics/routers/__init__.py

from .analytics_router import router as analytics_router
from .ai_insights_router import router as ai_insights_router

__all__ = ["analytics_router", "ai_insights_router"]
