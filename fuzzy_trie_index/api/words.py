"""Index mutation and lookup API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Path

from ..config import Settings
from ..core.service import IndexService
from ..models.request import WordRequest, BatchWordRequest
from ..models.response import OperationResponse, WordLookupResponse
from .dependencies import check_word_length, get_app_settings, get_index_service

router = APIRouter(prefix="/api/v1", tags=["words"])


@router.post(
    "/index/reset",
    response_model=OperationResponse,
    summary="Reset the index",
    description="Replace the index with a fresh empty one"
)
async def reset_index(
    service: IndexService = Depends(get_index_service)
) -> OperationResponse:
    """Drop every indexed word."""
    try:
        service.reset()
        return OperationResponse(
            operation="reset",
            applied=True,
            message="Index reset successfully"
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Reset failed: {str(e)}"
        )


@router.post(
    "/words",
    response_model=OperationResponse,
    summary="Insert a word",
    description="Insert a single word into the index; an empty word is ignored"
)
async def insert_word(
    request: WordRequest,
    service: IndexService = Depends(get_index_service),
    settings: Settings = Depends(get_app_settings)
) -> OperationResponse:
    """
    Insert a word into the index.

    Inserting a word that is already indexed leaves the index unchanged.
    """
    check_word_length(request.word, settings)

    try:
        applied = service.insert(request.word)
        return OperationResponse(
            operation="insert",
            applied=applied,
            word=request.word,
            message=(
                f"Word '{request.word}' inserted successfully"
                if applied else "Empty word ignored"
            )
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Insert failed: {str(e)}"
        )


@router.post(
    "/words/batch",
    response_model=OperationResponse,
    summary="Insert many words",
    description="Insert a list of words in one request; empty entries are skipped"
)
async def insert_words(
    request: BatchWordRequest,
    service: IndexService = Depends(get_index_service),
    settings: Settings = Depends(get_app_settings)
) -> OperationResponse:
    """Bulk load words into the index."""
    if len(request.words) > settings.max_batch_size:
        raise HTTPException(
            status_code=400,
            detail=f"Batch too large. Maximum size is {settings.max_batch_size} words"
        )
    for word in request.words:
        check_word_length(word, settings)

    try:
        inserted = service.insert_many(request.words)
        return OperationResponse(
            operation="insert_batch",
            applied=inserted > 0,
            count=inserted,
            message=f"{inserted} word(s) inserted successfully"
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Batch insert failed: {str(e)}"
        )


@router.get(
    "/words/{word}",
    response_model=WordLookupResponse,
    summary="Check a word",
    description="Check whether a word is currently indexed"
)
async def lookup_word(
    word: str = Path(..., description="The word to look up"),
    service: IndexService = Depends(get_index_service),
    settings: Settings = Depends(get_app_settings)
) -> WordLookupResponse:
    """Exact membership lookup."""
    check_word_length(word, settings)

    try:
        return WordLookupResponse(word=word, exists=service.contains(word))

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Lookup failed: {str(e)}"
        )


@router.delete(
    "/words/{word}",
    response_model=OperationResponse,
    summary="Delete a word",
    description="Remove a word from the index; deleting an absent word is a no-op"
)
async def delete_word(
    word: str = Path(..., description="The word to remove from the index"),
    service: IndexService = Depends(get_index_service),
    settings: Settings = Depends(get_app_settings)
) -> OperationResponse:
    """Remove a word and prune the branches it leaves behind."""
    check_word_length(word, settings)

    try:
        applied = service.delete(word)
        return OperationResponse(
            operation="delete",
            applied=applied,
            word=word,
            message=f"Word '{word}' deleted"
        )

    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Delete failed: {str(e)}"
        )
