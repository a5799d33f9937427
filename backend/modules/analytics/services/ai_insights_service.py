# backend/modules/analytics/services/ai_insights_service.py

import logging
import math
from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from fractions import Fraction
from typing import List, Optional, Sequence

import numpy as np
from dateutil.relativedelta import relativedelta
from sqlalchemy.orm import Session

from modules.retail.services.record_store import DateRange, RecordStore
from ..constants import (
    CRITICAL_STOCK_THRESHOLD,
    DAYS_IN_WINDOW,
    LOW_STOCK_SKUS_LISTED,
    LOW_STOCK_THRESHOLD,
    MARGIN_EXCELLENT,
    MARGIN_TARGET_MIN,
    MAX_INSIGHTS,
    MIN_TREND_POINTS_FOR_WEEKLY,
    MONTH_OVER_MONTH_THRESHOLD,
    PEAK_SEASON_START_MONTH,
    REORDER_COVER_DAYS,
    TURNOVER_TARGET,
    UNIT_VALUE_PLACEHOLDER,
    WEEK_LENGTH,
    WEEK_OVER_WEEK_THRESHOLD,
)
from ..schemas.ai_insights_schemas import Insight, InsightType, InsightsResponse
from ..schemas.analytics_schemas import DashboardMetrics
from .metrics_aggregator import MetricsAggregatorService, sale_value

logger = logging.getLogger(__name__)


def _cap(insights: List[Insight], limit: Optional[int]) -> List[Insight]:
    cap = MAX_INSIGHTS if limit is None else min(limit, MAX_INSIGHTS)
    return insights[:cap]


def _stock_alerts(
    window_sales: Sequence,
    products: Sequence,
    inventory_entries: Sequence,
    stock_sales: Sequence,
) -> List[Insight]:
    received = defaultdict(int)
    for entry in inventory_entries:
        received[entry.product_id] += entry.quantity_received

    sold_all_time = defaultdict(int)
    for sale in stock_sales:
        sold_all_time[sale.product_id] += sale.quantity_sold

    sold_in_window = defaultdict(int)
    for sale in window_sales:
        sold_in_window[sale.product_id] += sale.quantity_sold

    alerts = []
    for product in products:
        current_stock = received[product.id] - sold_all_time[product.id]
        avg_daily_sales = Fraction(sold_in_window[product.id], DAYS_IN_WINDOW)

        if current_stock >= LOW_STOCK_THRESHOLD or avg_daily_sales <= 0:
            continue

        days_left = math.floor(current_stock / avg_daily_sales)
        reorder_quantity = math.ceil(avg_daily_sales * REORDER_COVER_DAYS)

        alerts.append(
            Insight(
                type=(
                    InsightType.CRITICAL
                    if current_stock < CRITICAL_STOCK_THRESHOLD
                    else InsightType.WARNING
                ),
                title="Stock Alert",
                message=(
                    f"{product.name} (SKU: {product.sku}) needs reorder. "
                    f"Current: {current_stock} units, expected stockout in {days_left} days."
                ),
                action=(
                    f"Reorder {reorder_quantity} units to maintain "
                    f"{REORDER_COVER_DAYS}-day stock."
                ),
            )
        )
    return alerts


def _month_over_month(window_sales: Sequence, now: datetime) -> Optional[Insight]:
    previous = now - relativedelta(months=1)
    current_month = (now.year, now.month)
    previous_month = (previous.year, previous.month)

    current_total = Decimal("0")
    previous_total = Decimal("0")
    for sale in window_sales:
        sold_in = (sale.date_sold.year, sale.date_sold.month)
        if sold_in == current_month:
            current_total += sale_value(sale)
        elif sold_in == previous_month:
            previous_total += sale_value(sale)

    if previous_total <= 0:
        return None

    growth = float((current_total - previous_total) / previous_total * 100)

    if growth > MONTH_OVER_MONTH_THRESHOLD:
        return Insight(
            type=InsightType.SUCCESS,
            title="Growth Opportunity",
            message=(
                f"Sales are up {growth:.1f}% this month. "
                "Consider expanding inventory for trending products."
            ),
            action="Review top-selling items and increase stock levels.",
        )
    if growth < -MONTH_OVER_MONTH_THRESHOLD:
        return Insight(
            type=InsightType.WARNING,
            title="Sales Decline",
            message=(
                f"Sales are down {abs(growth):.1f}% this month. "
                "Review pricing and marketing strategies."
            ),
            action="Analyze product performance and consider promotional campaigns.",
        )
    return None


def generate_insights(
    window_sales: Sequence,
    products: Sequence,
    inventory_entries: Sequence,
    now: datetime,
    all_sales: Sequence,
    limit: Optional[int] = None,
) -> List[Insight]:
    """
    Stock and month-over-month insights for the trailing sales window.

    Stock is received minus `all_sales`, so sales older than the window
    still count. Always returns at least one insight.
    """
    insights = _stock_alerts(window_sales, products, inventory_entries, all_sales)

    if window_sales:
        trend = _month_over_month(window_sales, now)
        if trend:
            insights.append(trend)

    if not insights:
        insights.append(
            Insight(
                type=InsightType.INFO,
                title="Business Health",
                message=(
                    "Your business metrics are stable. "
                    "Continue monitoring key performance indicators."
                ),
                action="Focus on customer retention and product diversification.",
            )
        )

    return _cap(insights, limit)


def generate_analysis_insights(
    metrics: DashboardMetrics, now: datetime, limit: Optional[int] = None
) -> List[Insight]:
    """In-depth insights over computed dashboard metrics"""
    insights = []

    critical_items = [level for level in metrics.stock_levels if level.is_critical]
    low_items = [
        level
        for level in metrics.stock_levels
        if level.is_low_stock and not level.is_critical
    ]

    if critical_items:
        insights.append(
            Insight(
                type=InsightType.CRITICAL,
                title="Critical Stock Alert",
                message=(
                    f"{len(critical_items)} product(s) have critical stock levels. "
                    "Immediate reordering required to avoid stockouts."
                ),
                action=(
                    f"Review {', '.join(item.sku for item in critical_items)} "
                    "and place urgent orders."
                ),
            )
        )

    if low_items:
        listed = ", ".join(item.sku for item in low_items[:LOW_STOCK_SKUS_LISTED])
        others = " and others" if len(low_items) > LOW_STOCK_SKUS_LISTED else ""
        insights.append(
            Insight(
                type=InsightType.WARNING,
                title="Low Stock Warning",
                message=(
                    f"{len(low_items)} product(s) are running low on stock. "
                    "Plan reorders soon to maintain inventory levels."
                ),
                action=f"Schedule reorders for {listed}{others}.",
            )
        )

    if metrics.gross_margin < MARGIN_TARGET_MIN:
        insights.append(
            Insight(
                type=InsightType.WARNING,
                title="Margin Below Target",
                message=(
                    f"Current gross margin of {metrics.gross_margin:.1f}% is below "
                    "the recommended 30%. Consider reviewing pricing strategy."
                ),
                action="Analyze product costs and adjust selling prices to improve profitability.",
            )
        )
    elif metrics.gross_margin > MARGIN_EXCELLENT:
        insights.append(
            Insight(
                type=InsightType.SUCCESS,
                title="Excellent Margins",
                message=(
                    f"Gross margin of {metrics.gross_margin:.1f}% is excellent. "
                    "You have room for competitive pricing or promotional campaigns."
                ),
                action="Consider strategic discounts to drive volume while maintaining profitability.",
            )
        )

    weekly = _week_over_week(metrics)
    if weekly:
        insights.append(weekly)

    if now.month >= PEAK_SEASON_START_MONTH:
        insights.append(
            Insight(
                type=InsightType.INFO,
                title="Seasonal Opportunity",
                message=(
                    "Q4 typically sees increased retail activity. "
                    "Prepare for holiday shopping season."
                ),
                action="Increase inventory for popular items and plan promotional campaigns.",
            )
        )

    total_stock_value = sum(
        level.current_stock * UNIT_VALUE_PLACEHOLDER for level in metrics.stock_levels
    )
    if metrics.total_sales > 0 and total_stock_value > 0:
        turnover = metrics.total_sales / total_stock_value
        if turnover < TURNOVER_TARGET:
            insights.append(
                Insight(
                    type=InsightType.INFO,
                    title="Inventory Optimization",
                    message=(
                        "Some products may be moving slowly. "
                        "Consider reviewing your inventory mix."
                    ),
                    action="Analyze product performance and consider markdowns for slow-moving items.",
                )
            )

    if not insights:
        insights.append(
            Insight(
                type=InsightType.INFO,
                title="Business Health Check",
                message=(
                    "Your business metrics are within normal ranges. "
                    "Continue monitoring key performance indicators."
                ),
                action="Focus on customer retention and explore opportunities for sustainable growth.",
            )
        )

    return _cap(insights, limit)


def _week_over_week(metrics: DashboardMetrics) -> Optional[Insight]:
    # Trend points are individual sales, so a "week" is the last 7 points
    if len(metrics.sales_trend) < MIN_TREND_POINTS_FOR_WEEKLY:
        return None

    amounts = np.array([point.amount for point in metrics.sales_trend])
    recent_avg = amounts[-WEEK_LENGTH:].mean()
    earlier_avg = amounts[-2 * WEEK_LENGTH:-WEEK_LENGTH].mean()

    if earlier_avg <= 0:
        return None

    growth = float((recent_avg - earlier_avg) / earlier_avg * 100)

    if growth > WEEK_OVER_WEEK_THRESHOLD:
        return Insight(
            type=InsightType.SUCCESS,
            title="Strong Sales Growth",
            message=(
                f"Sales are up {growth:.1f}% over the past week. "
                "Your business is showing positive momentum."
            ),
            action="Capitalize on this trend by ensuring adequate inventory and marketing support.",
        )
    if growth < -WEEK_OVER_WEEK_THRESHOLD:
        return Insight(
            type=InsightType.WARNING,
            title="Sales Decline",
            message=(
                f"Sales are down {abs(growth):.1f}% compared to the previous week. "
                "Investigate potential causes."
            ),
            action="Review market conditions, competitor activity, and customer feedback to address the decline.",
        )
    return None


class AIInsightsService:
    """Service for generating rule-based business insights"""

    def __init__(self, db: Session):
        self.db = db
        self.record_store = RecordStore(db)

    def get_insights(
        self, now: Optional[datetime] = None, limit: Optional[int] = None
    ) -> InsightsResponse:
        """Insights over the trailing calendar month ending at `now`"""
        now = now or datetime.now()
        window = DateRange(start=now - relativedelta(months=1), end=now)

        window_sales = self.record_store.list_sales(date_range=window)
        products = self.record_store.list_products()
        inventory_entries = self.record_store.list_inventory_entries()
        all_sales = self.record_store.list_sales()

        insights = generate_insights(
            window_sales,
            products,
            inventory_entries,
            now,
            all_sales=all_sales,
            limit=limit,
        )
        logger.info(
            f"Generated {len(insights)} insights from {len(window_sales)} sales "
            f"since {window.start.date()}"
        )
        return InsightsResponse(insights=insights)

    def get_analysis_insights(
        self,
        period_key: Optional[str] = None,
        now: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> InsightsResponse:
        """In-depth insights over a dashboard period"""
        now = now or datetime.now()
        metrics = MetricsAggregatorService(self.db).get_dashboard_metrics(
            period_key, now=now
        )
        return InsightsResponse(
            insights=generate_analysis_insights(metrics, now, limit=limit)
        )


# AI Insights service factory function
def create_ai_insights_service(db: Session) -> AIInsightsService:
    """Create an AI insights service instance"""
    return AIInsightsService(db)
