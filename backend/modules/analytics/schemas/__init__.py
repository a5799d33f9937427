# backend/modules/analytics/schemas/__init__.py
