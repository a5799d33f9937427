# backend/modules/analytics/services/retail_calculations.py

"""
Retail pricing and stock calculators.

Plain float arithmetic for what-if calculations. Every ratio is guarded
so a zero denominator yields 0 rather than an error or infinity.
"""

import math

from ..schemas.analytics_schemas import RetailMetrics

MIN_PRICE_MARKUP = 1.15
TARGET_MARGIN = 0.30
PREMIUM_MARGIN = 0.40


def calculate_retail_metrics(
    quantity: float, purchase_price: float, selling_price: float = 0
) -> RetailMetrics:
    """Profit on a purchase at a selling price, plus suggested price points"""
    unit_profit = selling_price - purchase_price

    return RetailMetrics(
        total_cost=quantity * purchase_price,
        unit_profit=unit_profit,
        total_profit=quantity * unit_profit,
        gross_margin=(unit_profit / selling_price) * 100 if selling_price > 0 else 0,
        break_even_price=purchase_price,
        min_price=purchase_price * MIN_PRICE_MARKUP,
        target_price=purchase_price / (1 - TARGET_MARGIN),
        premium_price=purchase_price / (1 - PREMIUM_MARGIN),
    )


def calculate_inventory_turnover(
    cost_of_goods_sold: float, average_inventory_value: float
) -> float:
    if average_inventory_value == 0:
        return 0
    return cost_of_goods_sold / average_inventory_value


def calculate_gross_profit_margin(revenue: float, cost_of_goods_sold: float) -> float:
    if revenue == 0:
        return 0
    return ((revenue - cost_of_goods_sold) / revenue) * 100


def calculate_markup(cost_price: float, selling_price: float) -> float:
    """Profit as a percentage of cost"""
    if cost_price == 0:
        return 0
    return ((selling_price - cost_price) / cost_price) * 100


def calculate_margin(cost_price: float, selling_price: float) -> float:
    """Profit as a percentage of selling price"""
    if selling_price == 0:
        return 0
    return ((selling_price - cost_price) / selling_price) * 100


def calculate_break_even_units(
    fixed_costs: float, price_per_unit: float, variable_cost_per_unit: float
) -> float:
    contribution_margin = price_per_unit - variable_cost_per_unit
    if contribution_margin <= 0:
        return 0
    return fixed_costs / contribution_margin


def calculate_reorder_point(
    lead_time_days: float, daily_sales_rate: float, safety_stock: float = 0
) -> float:
    return lead_time_days * daily_sales_rate + safety_stock


def calculate_economic_order_quantity(
    annual_demand: float, ordering_cost: float, holding_cost_per_unit: float
) -> float:
    if holding_cost_per_unit == 0:
        return 0
    return math.sqrt((2 * annual_demand * ordering_cost) / holding_cost_per_unit)


def calculate_price_from_margin(cost_price: float, target_margin: float) -> float:
    # A margin of 100% or more has no finite price
    if target_margin >= 100:
        return 0
    return cost_price / (1 - target_margin / 100)


def calculate_price_from_markup(cost_price: float, markup: float) -> float:
    return cost_price * (1 + markup / 100)
