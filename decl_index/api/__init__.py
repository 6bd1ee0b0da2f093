"""API endpoints for the declaration index."""

from .search import router as search_router
from .lookup import router as lookup_router
from .health import router as health_router

__all__ = [
    "search_router",
    "lookup_router",
    "health_router",
]
