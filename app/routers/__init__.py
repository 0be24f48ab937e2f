"""
API routers package
"""

from app.routers.matching import router as matching_router
