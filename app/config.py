"""
Application Configuration
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Database
    database_url: Optional[str] = None

    # Environment
    environment: str = "development"

    # Matching Engine Configuration
    # Skill compatibility policy: "strict_superset" (default) or "threshold_overlap"
    match_skill_policy: str = "strict_superset"
    match_skill_threshold_max: int = 3  # k = min(|required|, this) for threshold_overlap
    match_batch_max_size: int = 100  # Max ids per batch count request
    match_batch_max_workers: int = 10  # Thread pool size for batch counts
    match_default_page_size: int = 10
    match_max_page_size: int = 100
    match_candidate_pool_warn_size: int = 1000  # Details ranks the full pool in memory

    # Sentry Error Tracking
    sentry_dsn: Optional[str] = None  # Sentry project DSN
    sentry_environment: Optional[str] = None  # Defaults to environment setting
    sentry_traces_sample_rate: float = 0.1  # Fraction of requests traced

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
