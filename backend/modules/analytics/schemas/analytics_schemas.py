# backend/modules/analytics/schemas/analytics_schemas.py

from pydantic import ConfigDict, Field
from typing import List, Optional
from datetime import datetime
from enum import Enum

from core.response_models import CamelModel


class PeriodKey(str, Enum):
    """Predefined dashboard periods"""

    CURRENT_MONTH = "current_month"
    LAST_3_MONTHS = "last_3_months"


class StockLevel(CamelModel):
    """All-time stock position of a single product"""

    product_id: int
    product_name: str
    sku: str
    current_stock: int = Field(
        ..., description="Units received minus units sold; negative when oversold"
    )
    is_low_stock: bool
    is_critical: bool


class SalesTrendPoint(CamelModel):
    """One sale as a chart point (not bucketed by day)"""

    date: datetime
    amount: float


class DashboardMetrics(CamelModel):
    """Period KPIs for the dashboard"""

    total_sales: float = Field(..., description="Revenue in the period")
    gross_margin: float = Field(..., description="Gross profit as % of revenue")
    total_products: int
    low_stock_count: int
    cost_of_sales: float = Field(
        ..., description="Units sold priced at each product's latest purchase price"
    )
    gross_profit: float
    total_quantity_sold: int
    stock_levels: List[StockLevel] = Field(default_factory=list)
    sales_trend: List[SalesTrendPoint] = Field(default_factory=list)

    period_key: str
    period_start: datetime
    period_end: datetime
    generated_at: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "totalSales": 100.0,
                "grossMargin": 40.0,
                "totalProducts": 1,
                "lowStockCount": 0,
                "costOfSales": 60.0,
                "grossProfit": 40.0,
                "totalQuantitySold": 5,
                "stockLevels": [
                    {
                        "productId": 1,
                        "productName": "Cotton Tee",
                        "sku": "P1",
                        "currentStock": 35,
                        "isLowStock": False,
                        "isCritical": False,
                    }
                ],
                "salesTrend": [{"date": "2024-03-01T00:00:00", "amount": 100.0}],
            }
        }
    )


# Cache bookkeeping fields left out of HTTP responses
DASHBOARD_METADATA_FIELDS = {"period_key", "period_start", "period_end", "generated_at"}


class CacheInvalidationResponse(CamelModel):
    invalidated: int = Field(..., description="Number of cached periods removed")


class RetailMathsRequest(CamelModel):
    """Inputs for the pricing calculator"""

    quantity: float = Field(..., ge=0, description="Units purchased")
    purchase_price: float = Field(..., ge=0, description="Cost per unit")
    selling_price: float = Field(0, ge=0, description="Intended selling price per unit")


class RetailMetrics(CamelModel):
    """Profitability of a purchase and suggested selling prices"""

    total_cost: float
    unit_profit: float
    total_profit: float
    gross_margin: float
    break_even_price: float
    min_price: float = Field(..., description="Price for a 15% markup")
    target_price: float = Field(..., description="Price for a 30% margin")
    premium_price: float = Field(..., description="Price for a 40% margin")


class AnalyticsHealth(CamelModel):
    status: str
    service: str
    timestamp: datetime
    version: str
    cache_enabled: Optional[bool] = None
