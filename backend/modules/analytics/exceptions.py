# backend/modules/analytics/exceptions.py

"""
Custom exceptions for analytics module.

Provides specific exception types for better error handling and debugging.
"""

from typing import Optional, Dict, Any


class AnalyticsBaseException(Exception):
    """Base exception for all analytics errors"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class CacheError(AnalyticsBaseException):
    """Raised when cache operations fail"""

    def __init__(self, operation: str, reason: str, period_key: Optional[str] = None):
        message = f"Cache {operation} failed: {reason}"
        details = {
            "operation": operation,
            "reason": reason,
            "period_key": period_key
        }
        super().__init__(message, "CACHE_ERROR", details)


# Error handler utility
def handle_analytics_exception(exc: AnalyticsBaseException) -> Dict[str, Any]:
    """Convert analytics exception to API response format"""
    return {
        "error": {
            "code": exc.error_code,
            "message": exc.message,
            "details": exc.details
        }
    }
