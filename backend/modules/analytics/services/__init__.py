# backend/modules/analytics/services/__init__.py
