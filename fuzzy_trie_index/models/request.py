"""Request models for API endpoints."""

from typing import List, Optional

from pydantic import BaseModel, Field


class WordRequest(BaseModel):
    """Request model for inserting a single word."""

    word: str = Field(..., description="Word to insert; empty is a no-op")


class BatchWordRequest(BaseModel):
    """Request model for inserting many words at once."""

    words: List[str] = Field(..., description="Words to insert; empty entries are skipped")


class FuzzySearchRequest(BaseModel):
    """Request model for fuzzy search queries."""

    word: str = Field(..., description="Search word; empty yields no results")
    max_distance: Optional[int] = Field(
        None, ge=0, description="Maximum edit distance (defaults to the configured value)"
    )
    sort: bool = Field(
        default=False, description="Order results by distance, then token"
    )
