"""API endpoints for the fuzzy trie index."""

from .words import router as words_router
from .search import router as search_router
from .health import router as health_router
from .metrics import router as metrics_router

__all__ = [
    "words_router",
    "search_router",
    "health_router",
    "metrics_router",
]
