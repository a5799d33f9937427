# backend/modules/analytics/tests/factories.py

"""Lightweight stand-ins for retail records in pure-function tests."""

from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

from modules.analytics.schemas.analytics_schemas import (
    DashboardMetrics,
    SalesTrendPoint,
    StockLevel,
)


def make_product(id, sku=None, name=None):
    return SimpleNamespace(id=id, sku=sku or f"SKU-{id}", name=name or f"Product {id}")


def make_entry(id, product_id, purchase_price, quantity_received, date_purchased):
    return SimpleNamespace(
        id=id,
        product_id=product_id,
        purchase_price=Decimal(str(purchase_price)),
        quantity_received=quantity_received,
        date_purchased=date_purchased,
        grn_number=f"GRN-{id:04d}",
    )


def make_sale(id, product_id, sales_price, quantity_sold, date_sold):
    return SimpleNamespace(
        id=id,
        product_id=product_id,
        sales_price=Decimal(str(sales_price)),
        quantity_sold=quantity_sold,
        date_sold=date_sold,
    )


def make_stock_level(product_id, current_stock, sku=None):
    return StockLevel(
        product_id=product_id,
        product_name=f"Product {product_id}",
        sku=sku or f"SKU-{product_id}",
        current_stock=current_stock,
        is_low_stock=current_stock < 10,
        is_critical=current_stock < 5,
    )


def make_metrics(
    gross_margin=30.0,
    total_sales=0.0,
    stock_levels=None,
    trend_amounts=None,
):
    """Dashboard metrics with only the fields the insight rules read varied"""
    trend_amounts = trend_amounts or []
    return DashboardMetrics(
        total_sales=total_sales,
        gross_margin=gross_margin,
        total_products=len(stock_levels or []),
        low_stock_count=sum(1 for s in stock_levels or [] if s.is_low_stock),
        cost_of_sales=0.0,
        gross_profit=0.0,
        total_quantity_sold=0,
        stock_levels=stock_levels or [],
        sales_trend=[
            SalesTrendPoint(date=datetime(2024, 5, 1 + i % 28), amount=amount)
            for i, amount in enumerate(trend_amounts)
        ],
        period_key="current_month",
        period_start=datetime(2024, 5, 1),
        period_end=datetime(2024, 5, 31, 23, 59, 59, 999999),
        generated_at=datetime(2024, 5, 15),
    )
