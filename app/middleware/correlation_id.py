"""
Correlation ID Middleware
Every matching request gets an X-Request-ID that is echoed back and logged
"""

from asgi_correlation_id import CorrelationIdMiddleware
from asgi_correlation_id.context import correlation_id

__all__ = ["CorrelationIdMiddleware", "get_correlation_id"]

NO_CORRELATION_ID = "none"


def get_correlation_id() -> str:
    """
    Correlation ID of the request being served.

    The ID lives in a contextvar. Batch matching workers run on pool threads
    that start with an empty context, so the engine reads the ID on the
    request thread and binds it to the worker logger itself.

    Returns:
        str: The correlation ID, or 'none' outside a request
    """
    return correlation_id.get() or NO_CORRELATION_ID
