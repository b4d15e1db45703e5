"""Response models for API endpoints."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FuzzyResult(BaseModel):
    """A word found by fuzzy search and its distance from the query."""

    model_config = ConfigDict(frozen=True)

    token: str = Field(..., description="The matched word")
    distance: int = Field(..., ge=0, description="Levenshtein distance from the query")


class FuzzySearchResponse(BaseModel):
    """Response for fuzzy search queries."""

    query: str = Field(..., description="Original search word")
    max_distance: int = Field(..., description="Edit-distance budget used")
    total_results: int = Field(..., description="Total number of results")
    results: List[FuzzyResult] = Field(..., description="Matched words")
    execution_time_ms: float = Field(..., description="Query execution time in milliseconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class OperationResponse(BaseModel):
    """Response for index mutations."""

    operation: str = Field(..., description="Operation performed (insert, delete, reset, ...)")
    applied: bool = Field(..., description="Whether the operation reached the index")
    word: Optional[str] = Field(None, description="Word the operation applied to")
    count: Optional[int] = Field(None, description="Number of words affected by a bulk operation")
    message: str = Field(..., description="Human readable summary")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class WordLookupResponse(BaseModel):
    """Response for exact membership lookups."""

    word: str = Field(..., description="The word looked up")
    exists: bool = Field(..., description="Whether the word is currently indexed")


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
    uptime: float = Field(..., description="Service uptime in seconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")
    dependencies: Dict[str, str] = Field(..., description="Dependency status")


class MetricsResponse(BaseModel):
    """Performance metrics response."""

    total_searches: int = Field(..., description="Total fuzzy searches processed")
    total_inserts: int = Field(..., description="Total words inserted")
    total_deletes: int = Field(..., description="Total delete operations")
    average_search_time_ms: float = Field(..., description="Average search time")
    word_count: int = Field(..., description="Words currently indexed")
    node_count: int = Field(..., description="Trie nodes below the root")
    memory_usage_mb: float = Field(..., description="Process resident memory in MB")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Metrics timestamp")
