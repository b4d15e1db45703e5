"""Fuzzy search API endpoints."""

import time
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from fastapi.responses import Response

from ..config import Settings
from ..core.service import IndexService, encode_results
from ..models.request import FuzzySearchRequest
from ..models.response import FuzzyResult, FuzzySearchResponse
from .dependencies import check_word_length, get_app_settings, get_index_service

router = APIRouter(prefix="/api/v1", tags=["search"])


@router.get(
    "/search/{word}",
    response_model=List[FuzzyResult],
    summary="Fuzzy search",
    description="Find indexed words within an edit distance of the given word"
)
async def search_word(
    word: str = Path(..., description="The word to search for"),
    max_distance: Optional[int] = Query(
        None,
        ge=0,
        description="Maximum Levenshtein distance (defaults to the configured value)"
    ),
    service: IndexService = Depends(get_index_service),
    settings: Settings = Depends(get_app_settings)
) -> Response:
    """
    Fuzzy search returning a bare JSON array of {token, distance} objects.

    Result order is unspecified.
    """
    check_word_length(word, settings)

    if max_distance is None:
        max_distance = settings.default_max_distance

    try:
        return Response(
            content=service.search_json(word, max_distance),
            media_type="application/json"
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Search failed: {str(e)}"
        )


@router.post(
    "/search",
    response_model=FuzzySearchResponse,
    summary="Fuzzy search with request body",
    description="Fuzzy search with optional sorting and response metadata"
)
async def search_with_body(
    request: FuzzySearchRequest,
    service: IndexService = Depends(get_index_service),
    settings: Settings = Depends(get_app_settings)
) -> FuzzySearchResponse:
    """
    Fuzzy search using a structured request body.

    An empty word yields an empty result list.
    """
    check_word_length(request.word, settings)

    max_distance = request.max_distance
    if max_distance is None:
        max_distance = settings.default_max_distance

    try:
        start_time = time.time()
        results = service.search(request.word, max_distance)
        if request.sort:
            results.sort(key=lambda r: (r.distance, r.token))
        execution_time = (time.time() - start_time) * 1000

        return FuzzySearchResponse(
            query=request.word,
            max_distance=max_distance,
            total_results=len(results),
            results=results,
            execution_time_ms=execution_time
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Search failed: {str(e)}"
        )


@router.get(
    "/match/{word}",
    response_model=List[FuzzyResult],
    summary="Resolve a token",
    description="Return the exact token if indexed, otherwise fuzzy matches within the tolerance"
)
async def match_word(
    word: str = Path(..., description="The token to resolve"),
    tolerance: int = Query(0, ge=0, description="Maximum edit distance for non-exact matches"),
    service: IndexService = Depends(get_index_service),
    settings: Settings = Depends(get_app_settings)
) -> Response:
    """Resolve a query token the way a document search expands its terms."""
    check_word_length(word, settings)

    try:
        return Response(
            content=encode_results(service.match_tokens(word, tolerance)),
            media_type="application/json"
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Match failed: {str(e)}"
        )
