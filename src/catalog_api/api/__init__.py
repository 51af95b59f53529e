"""
HTTP API routers for the Catalog service.
"""

from .dependencies import get_health_reporter, get_repository
from .health import router as health_router
from .items import router as items_router

__all__ = ["get_health_reporter", "get_repository", "health_router", "items_router"]
