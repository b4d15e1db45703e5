"""Main FastAPI application for the Fuzzy Trie Index."""

import json
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List, Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
import structlog

from .api import (
    words_router,
    search_router,
    health_router,
    metrics_router,
)
from .config import Settings, get_settings
from .core.service import IndexService
from .models.response import ErrorResponse

logger = structlog.get_logger()


def configure_logging(settings: Settings) -> None:
    """Configure structlog on top of the standard library logger."""
    logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

    if settings.log_format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def load_seed_words(path: str) -> List[str]:
    """
    Read a JSON array of words.

    Args:
        path: Path to the JSON file

    Returns:
        The words in the file

    Raises:
        ValueError: If the file does not hold a JSON array of strings
    """
    with open(path, "r", encoding="utf-8") as f:
        words = json.load(f)

    if not isinstance(words, list) or not all(isinstance(w, str) for w in words):
        raise ValueError(f"{path} must contain a JSON array of strings")

    return words


def create_app(
    settings: Optional[Settings] = None,
    service: Optional[IndexService] = None
) -> FastAPI:
    """
    Build the application around one explicitly owned index service.

    Args:
        settings: Settings to use (cached environment settings if None)
        service: Index service to expose (a new empty one if None)

    Returns:
        The FastAPI application
    """
    settings = settings or get_settings()
    service = service if service is not None else IndexService()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        logger.info("Starting Fuzzy Trie Index service", version=settings.app_version)

        if settings.seed_words_file:
            try:
                words = load_seed_words(settings.seed_words_file)
                inserted = service.insert_many(words)
                logger.info(
                    "Seed words loaded",
                    path=settings.seed_words_file,
                    total_words=inserted
                )
            except FileNotFoundError:
                logger.warning("Seed words file not found", path=settings.seed_words_file)
            except Exception as e:
                logger.error("Failed to load seed words", error=str(e))
                raise

        yield

        logger.info("Shutting down Fuzzy Trie Index service")

    app = FastAPI(
        title=settings.app_name,
        description="In-memory trie index with typo-tolerant fuzzy lookup",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.index_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def log_requests(request: Request, call_next) -> Response:
        """Log all HTTP requests."""
        start_time = time.time()

        logger.info(
            "Request started",
            method=request.method,
            url=str(request.url),
            client_ip=request.client.host if request.client else None
        )

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            "Request completed",
            method=request.method,
            url=str(request.url),
            status_code=response.status_code,
            process_time_ms=round(process_time * 1000, 2)
        )

        return response

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle global exceptions."""
        logger.error(
            "Unhandled exception",
            method=request.method,
            url=str(request.url),
            error=str(exc),
            exc_info=True
        )

        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Internal Server Error",
                message="An unexpected error occurred",
                details={"exception": str(exc)} if settings.debug else None
            ).model_dump(mode="json")
        )

    app.include_router(words_router)
    app.include_router(search_router)
    app.include_router(health_router)
    app.include_router(metrics_router)

    @app.get("/", summary="Root endpoint", description="Get basic information about the API")
    async def root() -> dict:
        """Root endpoint with basic API information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "description": "In-memory trie index with typo-tolerant fuzzy lookup",
            "docs_url": "/docs",
            "health_url": "/api/v1/health",
            "status": "running"
        }

    @app.get("/api", summary="API information", description="Get detailed API information")
    async def api_info() -> dict:
        """Get detailed API information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "endpoints": {
                "reset": "POST /api/v1/index/reset",
                "insert": "POST /api/v1/words",
                "insert_batch": "POST /api/v1/words/batch",
                "lookup": "GET /api/v1/words/{word}",
                "delete": "DELETE /api/v1/words/{word}",
                "search": "GET /api/v1/search/{word}?max_distance=N",
                "search_body": "POST /api/v1/search",
                "match": "GET /api/v1/match/{word}?tolerance=N",
                "health": "GET /api/v1/health",
                "metrics": "GET /api/v1/metrics"
            },
            "defaults": {
                "max_distance": settings.default_max_distance,
                "max_word_length": settings.max_word_length,
                "max_batch_size": settings.max_batch_size
            }
        }

    return app


configure_logging(get_settings())
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "fuzzy_trie_index.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
        log_level=settings.log_level.lower()
    )
