"""
Structured JSON Logging with Correlation ID
Provides JSON formatter that automatically injects correlation IDs into all log entries
"""

import logging
import sys
import os
import structlog
from pythonjsonlogger import jsonlogger
from asgi_correlation_id.context import correlation_id


SERVICE_NAME = "resource-matcher"


class CorrelationJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter with automatic correlation ID injection.

    Extends python-json-logger to add correlation_id field to every log record.
    The correlation ID is retrieved from async context (set by CorrelationIdMiddleware).
    """

    def add_fields(self, log_record, record, message_dict):
        """
        Add custom fields to log record.

        Adds:
        - correlation_id: From async context or 'none' if not available
        - service: Application name for multi-service environments
        - environment: Deployment environment (development/production)
        """
        super().add_fields(log_record, record, message_dict)

        log_record['correlation_id'] = correlation_id.get() or 'none'
        log_record['service'] = SERVICE_NAME
        log_record['environment'] = os.getenv('ENVIRONMENT', 'development')


def add_correlation_id(logger, method_name, event_dict):
    """structlog processor adding the request correlation ID."""
    event_dict.setdefault("correlation_id", correlation_id.get() or "none")
    return event_dict


def setup_logging(level: int = logging.INFO):
    """
    Configure structured JSON logging to stdout.

    Sets up root logger with CorrelationJsonFormatter and configures
    structlog to emit JSON lines carrying the same correlation ID, so
    stdlib and structlog output can be joined per request.

    Returns:
        logging.Handler: The configured handler (for testing)
    """
    handler = logging.StreamHandler(sys.stdout)

    formatter = CorrelationJsonFormatter(
        '%(timestamp)s %(level)s %(name)s %(message)s',
        rename_fields={
            'timestamp': 'asctime',
            'level': 'levelname'
        }
    )
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            add_correlation_id,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )

    return handler
