# backend/modules/analytics/services/metrics_aggregator.py

"""
Dashboard metrics aggregation.

`compute_dashboard_metrics` is a pure function over pre-fetched record
collections; `MetricsAggregatorService` fetches those collections from
the record store and optionally consults the metrics cache.
"""

import logging
from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy.orm import Session

from core.config import get_settings
from modules.retail.services.record_store import RecordStore
from ..constants import CRITICAL_STOCK_THRESHOLD, LOW_STOCK_THRESHOLD
from ..exceptions import CacheError
from ..schemas.analytics_schemas import (
    DashboardMetrics,
    SalesTrendPoint,
    StockLevel,
)
from .metrics_cache_service import MetricsCacheService
from .period_resolver import ResolvedPeriod, resolve_period

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def sale_value(sale) -> Decimal:
    """Revenue of a single sale"""
    return to_decimal(sale.sales_price) * sale.quantity_sold


def latest_unit_costs(inventory_entries: Iterable) -> Dict[int, Decimal]:
    """
    Unit cost per product: the purchase price of its most recent receipt.

    Receipts sharing the latest purchase date are ordered by id, highest wins.
    """
    latest = {}
    for entry in inventory_entries:
        current = latest.get(entry.product_id)
        if current is None or (entry.date_purchased, entry.id) > (
            current.date_purchased,
            current.id,
        ):
            latest[entry.product_id] = entry

    return {
        product_id: to_decimal(entry.purchase_price)
        for product_id, entry in latest.items()
    }


def compute_stock_levels(
    products: Sequence, inventory_entries: Iterable, sales: Iterable
) -> List[StockLevel]:
    """Stock per product over every receipt and sale given, in product order"""
    received = defaultdict(int)
    for entry in inventory_entries:
        received[entry.product_id] += entry.quantity_received

    sold = defaultdict(int)
    for sale in sales:
        sold[sale.product_id] += sale.quantity_sold

    stock_levels = []
    for product in products:
        current_stock = received[product.id] - sold[product.id]
        stock_levels.append(
            StockLevel(
                product_id=product.id,
                product_name=product.name,
                sku=product.sku,
                current_stock=current_stock,
                is_low_stock=current_stock < LOW_STOCK_THRESHOLD,
                is_critical=current_stock < CRITICAL_STOCK_THRESHOLD,
            )
        )
    return stock_levels


def compute_dashboard_metrics(
    period: ResolvedPeriod,
    period_sales: Sequence,
    products: Sequence,
    inventory_entries: Sequence,
    all_sales: Sequence,
    generated_at: datetime,
) -> DashboardMetrics:
    """
    Aggregate period KPIs.

    Args:
        period: Resolved period the sales were fetched for
        period_sales: Sales dated within the period, in chronological order
        products: Full product catalogue
        inventory_entries: Every inventory receipt, regardless of date
        all_sales: Every sale, regardless of date (stock is all-time)
        generated_at: Timestamp recorded on the result

    Returns:
        DashboardMetrics with monetary values converted to float
    """
    unit_costs = latest_unit_costs(inventory_entries)

    total_sales = ZERO
    cost_of_sales = ZERO
    total_quantity_sold = 0
    uncosted_products = set()

    for sale in period_sales:
        total_sales += sale_value(sale)
        total_quantity_sold += sale.quantity_sold

        unit_cost = unit_costs.get(sale.product_id)
        if unit_cost is None:
            uncosted_products.add(sale.product_id)
            continue
        cost_of_sales += unit_cost * sale.quantity_sold

    if uncosted_products:
        logger.warning(
            f"No purchase price recorded for products {sorted(uncosted_products)}; "
            f"their sales contribute zero cost of sales"
        )

    gross_profit = total_sales - cost_of_sales
    gross_margin = gross_profit / total_sales * 100 if total_sales > 0 else ZERO

    stock_levels = compute_stock_levels(products, inventory_entries, all_sales)

    return DashboardMetrics(
        total_sales=float(total_sales),
        gross_margin=float(gross_margin),
        total_products=len(products),
        low_stock_count=sum(1 for level in stock_levels if level.is_low_stock),
        cost_of_sales=float(cost_of_sales),
        gross_profit=float(gross_profit),
        total_quantity_sold=total_quantity_sold,
        stock_levels=stock_levels,
        sales_trend=[
            SalesTrendPoint(date=sale.date_sold, amount=float(sale_value(sale)))
            for sale in period_sales
        ],
        period_key=period.key,
        period_start=period.start,
        period_end=period.end,
        generated_at=generated_at,
    )


class MetricsAggregatorService:
    """Computes dashboard metrics from the record store"""

    def __init__(self, db: Session, cache_service: Optional[MetricsCacheService] = None):
        self.db = db
        self.record_store = RecordStore(db)
        self.cache_enabled = get_settings().metrics_cache_enabled
        self.cache_service = cache_service or MetricsCacheService(db)

    def get_dashboard_metrics(
        self,
        period_key: Optional[str] = None,
        use_cache: bool = False,
        now: Optional[datetime] = None,
    ) -> DashboardMetrics:
        """
        Dashboard metrics for a period key.

        With `use_cache`, a cached copy for the same period window is served
        when one exists. Fresh results are written through to the cache
        whenever caching is enabled.
        """
        now = now or datetime.now()
        period = resolve_period(period_key, now)

        if use_cache and self.cache_enabled:
            cached = self._read_cache(period)
            if cached is not None:
                return cached

        metrics = self.compute(period, now)

        if self.cache_enabled:
            try:
                self.cache_service.put(metrics)
            except CacheError as e:
                logger.warning(f"Metrics cache write skipped: {e.message}")

        return metrics

    def compute(self, period: ResolvedPeriod, now: datetime) -> DashboardMetrics:
        period_sales = self.record_store.list_sales(date_range=period.date_range)
        products = self.record_store.list_products()
        inventory_entries = self.record_store.list_inventory_entries()
        all_sales = self.record_store.list_sales()

        return compute_dashboard_metrics(
            period=period,
            period_sales=period_sales,
            products=products,
            inventory_entries=inventory_entries,
            all_sales=all_sales,
            generated_at=now,
        )

    def _read_cache(self, period: ResolvedPeriod) -> Optional[DashboardMetrics]:
        try:
            cached = self.cache_service.get(period.key)
        except CacheError as e:
            logger.warning(f"Metrics cache read failed, computing fresh: {e.message}")
            return None

        if cached is None:
            return None
        if cached.period_start != period.start or cached.period_end != period.end:
            logger.info(f"Cached metrics for '{period.key}' cover another window")
            return None

        logger.debug(f"Serving cached metrics for '{period.key}'")
        return cached
