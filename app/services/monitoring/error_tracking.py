"""
Sentry Error Tracking
Reports matching failures with entity and direction context
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


def init_sentry() -> None:
    """
    Initialize Sentry SDK with FastAPI integration.

    Disabled (with a warning) when SENTRY_DSN is not set, so local runs and
    tests need no Sentry project. Events are tagged with the active skill
    policy, since match results depend on it.
    """
    from app.config import settings

    if settings.sentry_dsn is None:
        logger.warning("Sentry DSN not configured - error tracking disabled")
        return

    environment = settings.sentry_environment or settings.environment
    try:
        import sentry_sdk
        from sentry_sdk.integrations.fastapi import FastApiIntegration

        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=environment,
            traces_sample_rate=settings.sentry_traces_sample_rate,
            integrations=[FastApiIntegration()],
        )
        sentry_sdk.set_tag("skill_policy", settings.match_skill_policy)

        logger.info(
            "Sentry initialized",
            extra={
                "environment": environment,
                "traces_sample_rate": settings.sentry_traces_sample_rate,
            }
        )
    except Exception as e:
        logger.error(f"Failed to initialize Sentry: {e}")


def add_breadcrumb(
    category: str,
    message: str,
    level: str = "info",
    data: Optional[dict] = None
) -> None:
    """
    Record a matching step so a later error shows what ran before it.

    Args:
        category: Breadcrumb category, "matching" for engine steps
        message: Human-readable message
        level: Severity level
        data: Entity id, direction, counts
    """
    try:
        import sentry_sdk

        sentry_sdk.add_breadcrumb(category=category, message=message, level=level, data=data or {})
    except ImportError:
        pass


def capture_exception(error: BaseException, context: Optional[dict] = None) -> None:
    """
    Report a handled exception to Sentry.

    Used where an error is contained instead of propagated, e.g. a failing
    item inside a batch count, so it still reaches error tracking.

    Args:
        error: The exception that was caught
        context: Matching context (entity_id, direction) attached to the event
    """
    try:
        import sentry_sdk

        with sentry_sdk.new_scope() as scope:
            if context:
                scope.set_context("matching", context)
                for key, value in context.items():
                    scope.set_tag(key, str(value))
            sentry_sdk.capture_exception(error)
    except ImportError:
        # Sentry not installed or disabled
        pass
