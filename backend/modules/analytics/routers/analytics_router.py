# backend/modules/analytics/routers/analytics_router.py

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime
import logging

from core.database import get_db
from core.config import get_settings

from .. import __version__
from ..constants import DEFAULT_PERIOD_KEY, MAX_INSIGHTS
from ..exceptions import CacheError, handle_analytics_exception
from ..services.metrics_aggregator import MetricsAggregatorService
from ..services.metrics_cache_service import MetricsCacheService
from ..services.ai_insights_service import create_ai_insights_service
from ..services.retail_calculations import calculate_retail_metrics
from ..schemas.analytics_schemas import (
    AnalyticsHealth,
    CacheInvalidationResponse,
    DASHBOARD_METADATA_FIELDS,
    DashboardMetrics,
    RetailMathsRequest,
    RetailMetrics,
)
from ..schemas.ai_insights_schemas import InsightsResponse

router = APIRouter(prefix="/analytics", tags=["Analytics & Reporting"])
logger = logging.getLogger(__name__)


@router.get(
    "/dashboard",
    response_model=DashboardMetrics,
    response_model_exclude=DASHBOARD_METADATA_FIELDS,
)
async def get_dashboard_metrics(
    period: str = Query(
        DEFAULT_PERIOD_KEY,
        description="Period key (current_month, last_3_months); unknown keys use current_month",
    ),
    use_cache: bool = Query(False, description="Serve a cached copy when one exists"),
    db: Session = Depends(get_db),
):
    """
    Get dashboard KPIs for a period.

    Totals, cost of sales and the sales trend cover the period; stock
    levels always cover all recorded receipts and sales.
    """
    try:
        service = MetricsAggregatorService(db)
        return service.get_dashboard_metrics(period, use_cache=use_cache)

    except Exception as e:
        logger.error(f"Error getting dashboard metrics: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve dashboard metrics"
        )


@router.delete("/dashboard/cache", response_model=CacheInvalidationResponse)
async def invalidate_dashboard_cache(
    period: Optional[str] = Query(None, description="Period key; omit to clear all"),
    db: Session = Depends(get_db),
):
    """Drop cached dashboard metrics"""
    try:
        removed = MetricsCacheService(db).invalidate(period)
        return CacheInvalidationResponse(invalidated=removed)

    except CacheError as e:
        logger.error(f"Error invalidating metrics cache: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=handle_analytics_exception(e)
        )


@router.get("/insights", response_model=InsightsResponse)
async def get_analysis_insights(
    period: str = Query(DEFAULT_PERIOD_KEY, description="Period key"),
    limit: Optional[int] = Query(None, ge=1, le=MAX_INSIGHTS),
    db: Session = Depends(get_db),
):
    """
    In-depth insights for analysis pages.

    Adds margin, week-over-week, seasonal and inventory turnover
    observations to the period's stock position.
    """
    try:
        service = create_ai_insights_service(db)
        return service.get_analysis_insights(period, limit=limit)

    except Exception as e:
        logger.error(f"Error generating analysis insights: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate insights"
        )


@router.post("/retail-maths", response_model=RetailMetrics)
async def retail_maths(request: RetailMathsRequest):
    """Profit and suggested selling prices for a purchase"""
    return calculate_retail_metrics(
        request.quantity, request.purchase_price, request.selling_price
    )


@router.get("/health", response_model=AnalyticsHealth)
async def health_check():
    """
    Health check endpoint for the analytics service.
    """
    return AnalyticsHealth(
        status="healthy",
        service="analytics",
        timestamp=datetime.now(),
        version=__version__,
        cache_enabled=get_settings().metrics_cache_enabled,
    )
