"""
API routers for Catalog Search
"""
from .search import router as search_router, get_orchestrator

__all__ = [
    "search_router",
    "get_orchestrator",
]
