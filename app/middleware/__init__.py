"""
Middleware Module
Request tracing for the matching API
"""

from app.middleware.correlation_id import CorrelationIdMiddleware, get_correlation_id

__all__ = ["CorrelationIdMiddleware", "get_correlation_id"]
