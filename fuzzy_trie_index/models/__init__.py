"""Data models for the fuzzy trie index."""

from .response import (
    FuzzyResult,
    FuzzySearchResponse,
    OperationResponse,
    WordLookupResponse,
    ErrorResponse,
    HealthResponse,
    MetricsResponse,
)
from .request import WordRequest, BatchWordRequest, FuzzySearchRequest

__all__ = [
    "FuzzyResult",
    "FuzzySearchResponse",
    "OperationResponse",
    "WordLookupResponse",
    "ErrorResponse",
    "HealthResponse",
    "MetricsResponse",
    "WordRequest",
    "BatchWordRequest",
    "FuzzySearchRequest",
]
