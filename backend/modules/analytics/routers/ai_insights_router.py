# backend/modules/analytics/routers/ai_insights_router.py

import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from core.database import get_db
from ..constants import MAX_INSIGHTS, SUMMARY_INSIGHT_LIMIT
from ..schemas.ai_insights_schemas import InsightsResponse
from ..services.ai_insights_service import create_ai_insights_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["Analytics AI Insights"])


@router.get("/insights", response_model=InsightsResponse)
async def get_ai_insights(
    limit: Optional[int] = Query(
        None, ge=1, le=MAX_INSIGHTS, description="Maximum number of insights"
    ),
    summary: bool = Query(
        False, description="Summarized view; defaults the limit to the summary size"
    ),
    db: Session = Depends(get_db),
):
    """
    Stock alerts and month-over-month trend for the trailing month.

    Always returns at least one insight.
    """
    if limit is None and summary:
        limit = SUMMARY_INSIGHT_LIMIT

    try:
        insights_service = create_ai_insights_service(db)
        return insights_service.get_insights(limit=limit)

    except Exception as e:
        logger.error(f"Error generating AI insights: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate insights"
        )
