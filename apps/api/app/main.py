"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.db.session import init_db
from app.routers import cards, health, sessions, translation
from app.schemas.api import ErrorResponse
from app.settings import settings
from lingocards_core.errors import (
    CardNotFoundError,
    InvalidAnswerError,
    InvalidSessionOptionsError,
    NoCardsAvailableError,
    SessionNotFoundError,
    SessionStateViolationError,
    TranslationError,
)
from lingocards_core.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialize services on startup and cleanup on shutdown."""
    # Startup
    init_db()
    yield
    # Shutdown
    pass


app = FastAPI(
    title="lingocards API",
    description="API for flashcard translation practice",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware - allow all origins in dev, restrict in production
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.cors_allow_all else settings.cors_origins,
    allow_credentials=not settings.cors_allow_all,  # credentials require specific origins
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, detail: str, context: dict | None = None) -> JSONResponse:
    body = ErrorResponse(detail=detail, context=context)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(NoCardsAvailableError)
async def no_cards_handler(request: Request, exc: NoCardsAvailableError) -> JSONResponse:
    return _error(
        404,
        str(exc),
        {
            "source_language": exc.source_language,
            "tags": exc.tags,
            "include_untagged": exc.include_untagged,
        },
    )


@app.exception_handler(SessionNotFoundError)
@app.exception_handler(CardNotFoundError)
async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    return _error(404, str(exc))


@app.exception_handler(SessionStateViolationError)
async def state_violation_handler(
    request: Request, exc: SessionStateViolationError
) -> JSONResponse:
    return _error(409, str(exc))


@app.exception_handler(InvalidAnswerError)
async def invalid_answer_handler(
    request: Request, exc: InvalidAnswerError
) -> JSONResponse:
    return _error(422, str(exc))


@app.exception_handler(InvalidSessionOptionsError)
async def invalid_options_handler(
    request: Request, exc: InvalidSessionOptionsError
) -> JSONResponse:
    return _error(422, str(exc))


@app.exception_handler(TranslationError)
async def translation_error_handler(
    request: Request, exc: TranslationError
) -> JSONResponse:
    logger.error(f"Translation request failed: {exc.message}")
    return JSONResponse(status_code=502, content=exc.to_dict())


# Include routers
app.include_router(health.router, prefix="/api/v1", tags=["health"])
app.include_router(cards.router, prefix="/api/v1", tags=["cards"])
app.include_router(sessions.router, prefix="/api/v1", tags=["sessions"])
app.include_router(translation.router, prefix="/api/v1", tags=["translation"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
