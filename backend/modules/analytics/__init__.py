# backend/modules/analytics/__init__.py

"""
Analytics Module - Dashboard Metrics & Insights

Turns the raw retail records (products, inventory receipts, sales) into
dashboard KPIs and rule-based insight messages.

Key Features:
- Period-scoped totals, cost of sales and gross margin
- All-time stock levels with low and critical flags
- Per-sale sales trend
- Stock, growth, margin and seasonal insights
- Versioned metrics cache
- Retail pricing and margin calculators

Components:
- Models: Metrics cache storage
- Services: Pure calculations plus thin database-backed wrappers
- Schemas: Pydantic models for API requests/responses
- Routers: FastAPI endpoints for analytics APIs
"""

__version__ = "1.0.0"
