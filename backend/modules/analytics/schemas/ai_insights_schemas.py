# backend/modules/analytics/schemas/ai_insights_schemas.py

from pydantic import ConfigDict, Field
from typing import List, Optional
from enum import Enum

from core.response_models import CamelModel


class InsightType(str, Enum):
    """Severity of a generated insight"""

    CRITICAL = "critical"
    WARNING = "warning"
    SUCCESS = "success"
    INFO = "info"


class Insight(CamelModel):
    """Rule-based observation with an optional recommended action"""

    type: InsightType
    title: str
    message: str
    action: Optional[str] = Field(None, description="Recommended next step")


class InsightsResponse(CamelModel):
    insights: List[Insight] = Field(..., min_length=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "insights": [
                    {
                        "type": "critical",
                        "title": "Stock Alert",
                        "message": "Cotton Tee (SKU: P1) needs reorder. Current: 3 units, expected stockout in 3 days.",
                        "action": "Reorder 30 units to maintain 30-day stock.",
                    }
                ]
            }
        }
    )
