"""
Resource Matcher - Main Application
FastAPI Entry Point for the Resource-Requirement Matching Engine
"""

from fastapi import FastAPI
from fastapi.responses import JSONResponse
import structlog

from app.config import settings
from app.database import init_db
from app.middleware import CorrelationIdMiddleware
from app.routers.matching import router as matching_router
from app.services.monitoring import setup_logging, init_sentry

# Structured Logging Setup
setup_logging()
logger = structlog.get_logger()

# Error tracking (no-op without SENTRY_DSN)
init_sentry()

# FastAPI App
app = FastAPI(
    title="Resource Matcher",
    description="Matches vendor resources against client requirements and ranks them by skill fit",
    version="1.0.0",
    docs_url="/docs" if settings.environment == "development" else None,
    redoc_url="/redoc" if settings.environment == "development" else None,
)

app.add_middleware(CorrelationIdMiddleware)

# Register routers
app.include_router(matching_router)


@app.on_event("startup")
async def startup_event():
    """Application Startup"""
    logger.info("startup",
               environment=settings.environment,
               skill_policy=settings.match_skill_policy,
               batch_max_size=settings.match_batch_max_size)

    # Initialize database connection
    init_db()
    logger.info("database_initialized")


@app.on_event("shutdown")
async def shutdown_event():
    """Application Shutdown"""
    logger.info("shutdown")


@app.get("/")
async def root():
    """Root Endpoint"""
    return {
        "message": "Resource Matcher API",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """
    Health Check Endpoint
    Reports whether the application is running and the database is configured
    """
    health_status = {
        "status": "healthy",
        "environment": settings.environment,
        "services": {
            "api": "running",
            "database": "configured" if settings.database_url else "not_configured"
        },
        "matching": {
            "skill_policy": settings.match_skill_policy,
            "batch_max_size": settings.match_batch_max_size
        }
    }

    return JSONResponse(
        content=health_status,
        status_code=200
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "development"
    )
