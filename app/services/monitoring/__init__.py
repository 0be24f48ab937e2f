"""
Monitoring Module
Exports for structured logging and error tracking
"""

from app.services.monitoring.logging import setup_logging, CorrelationJsonFormatter
from app.services.monitoring.error_tracking import init_sentry, add_breadcrumb, capture_exception

__all__ = [
    "setup_logging",
    "CorrelationJsonFormatter",
    "init_sentry",
    "add_breadcrumb",
    "capture_exception",
]
