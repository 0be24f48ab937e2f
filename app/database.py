"""
Database Configuration and Session Management
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings
import logging

logger = logging.getLogger(__name__)

# Create SQLAlchemy engine
engine = None
SessionLocal = None

def init_db():
    """Initialize database connection"""
    global engine, SessionLocal

    if not settings.database_url:
        logger.warning("DATABASE_URL not configured - matching endpoints disabled")
        return

    logger.info("Connecting to database...")
    if settings.database_url.startswith("sqlite"):
        # SQLite (local development) does not support connection pool sizing
        engine = create_engine(
            settings.database_url,
            connect_args={"check_same_thread": False}
        )
    else:
        engine = create_engine(
            settings.database_url,
            pool_pre_ping=True,  # Verify connections before using them
            pool_size=settings.match_batch_max_workers,  # One connection per batch worker
            max_overflow=10
        )

    # Matching is read-only; nothing is committed through these sessions
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    logger.info("Database connection established")


def get_session_factory():
    """
    Dependency returning the configured sessionmaker.

    Returns None if the database is not configured; routers answer 503.
    """
    return SessionLocal


# Base class for all models
Base = declarative_base()
