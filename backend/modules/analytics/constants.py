# backend/modules/analytics/constants.py

"""
Constants for analytics module.

Centralizes all thresholds used by the dashboard metrics and insight rules.
"""

# Stock Thresholds
LOW_STOCK_THRESHOLD = 10  # current stock below this is low
CRITICAL_STOCK_THRESHOLD = 5  # current stock below this is critical

# Margin Bands (percent)
MARGIN_TARGET_MIN = 25  # below this: margin warning
MARGIN_EXCELLENT = 35  # above this: margin success

# Growth Thresholds (percent)
MONTH_OVER_MONTH_THRESHOLD = 10
WEEK_OVER_WEEK_THRESHOLD = 15
WEEK_LENGTH = 7
MIN_TREND_POINTS_FOR_WEEKLY = 2 * WEEK_LENGTH

# Insight Limits
MAX_INSIGHTS = 5
SUMMARY_INSIGHT_LIMIT = 4  # summarized dashboard views
LOW_STOCK_SKUS_LISTED = 3

# Sales Window
DAYS_IN_WINDOW = 30  # divisor for average daily sales
REORDER_COVER_DAYS = 30  # reorder enough for this many days

# Inventory Turnover
UNIT_VALUE_PLACEHOLDER = 100  # stand-in unit value for turnover estimate
TURNOVER_TARGET = 2

# Seasonality
PEAK_SEASON_START_MONTH = 10  # October through December

# Periods
DEFAULT_PERIOD_KEY = "current_month"
TRAILING_MONTHS_FOR_QUARTER = 3

# Cache
CACHE_SCHEMA_VERSION = 1
