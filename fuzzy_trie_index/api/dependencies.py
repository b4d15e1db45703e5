"""FastAPI dependencies shared by the routers."""

from fastapi import HTTPException, Request

from ..config import Settings
from ..core.service import IndexService


def get_index_service(request: Request) -> IndexService:
    """Return the index service owned by the running application."""
    return request.app.state.index_service


def get_app_settings(request: Request) -> Settings:
    """Return the settings the running application was created with."""
    return request.app.state.settings


def check_word_length(word: str, settings: Settings) -> None:
    """
    Reject words longer than the configured limit.

    Raises:
        HTTPException: 400 if the word exceeds settings.max_word_length
    """
    if len(word) > settings.max_word_length:
        raise HTTPException(
            status_code=400,
            detail=f"Word too long. Maximum length is {settings.max_word_length} characters"
        )
