"""Practice session routes."""

from fastapi import APIRouter, Depends

from app.schemas.api import (
    AnswerSubmit,
    CurrentCardResponse,
    SessionCreate,
    SessionDetailResponse,
    SessionListResponse,
    StatsResponse,
)
from app.services.translation import get_session_service
from app.settings import settings
from lingocards_core.schemas import AdvanceResult, AnswerResult, SessionOptions
from lingocards_core.session import SessionService

router = APIRouter()


@router.post("/sessions", response_model=SessionDetailResponse, status_code=201)
async def create_session(
    payload: SessionCreate,
    service: SessionService = Depends(get_session_service),
) -> SessionDetailResponse:
    """Start a session over randomly selected cards."""
    options = SessionOptions(
        source_language=payload.source_language or settings.default_source_language,
        target_language=payload.target_language or settings.default_target_language,
        max_cards=payload.max_cards or settings.max_cards_per_session,
        tags=payload.tags,
        include_untagged=payload.include_untagged,
        use_sample_cards=payload.use_sample_cards,
    )
    session = service.create_session(options)
    return SessionDetailResponse.from_session(session)


@router.get("/sessions", response_model=SessionListResponse)
async def list_sessions(
    active_only: bool = False,
    completed_only: bool = False,
    service: SessionService = Depends(get_session_service),
) -> SessionListResponse:
    """List sessions, newest first."""
    sessions = service.list_sessions(
        active_only=active_only, completed_only=completed_only
    )
    return SessionListResponse(
        sessions=[SessionDetailResponse.from_session(s) for s in sessions]
    )


@router.get("/sessions/{session_id}", response_model=SessionDetailResponse)
async def get_session(
    session_id: str,
    service: SessionService = Depends(get_session_service),
) -> SessionDetailResponse:
    """Get a specific session by ID."""
    return SessionDetailResponse.from_session(service.get_session(session_id))


@router.get("/sessions/{session_id}/current", response_model=CurrentCardResponse)
async def get_current_card(
    session_id: str,
    service: SessionService = Depends(get_session_service),
) -> CurrentCardResponse:
    """Get the card to practice next."""
    current = service.get_current_card(session_id)
    if current is None:
        return CurrentCardResponse(session_id=session_id, is_complete=True)
    return CurrentCardResponse(
        session_id=session_id,
        is_complete=False,
        session_progress=current.session_progress,
        card=current.card,
    )


@router.post("/sessions/{session_id}/answer", response_model=AnswerResult)
async def submit_answer(
    session_id: str,
    payload: AnswerSubmit,
    service: SessionService = Depends(get_session_service),
) -> AnswerResult:
    """Evaluate and record an answer for the current card."""
    return await service.submit_answer(session_id, payload.answer)


@router.post("/sessions/{session_id}/advance", response_model=AdvanceResult)
async def advance_session(
    session_id: str,
    service: SessionService = Depends(get_session_service),
) -> AdvanceResult:
    """Get the next card, or the final statistics once the session is complete."""
    return service.advance_session(session_id)


@router.get("/sessions/{session_id}/stats", response_model=StatsResponse)
async def get_session_stats(
    session_id: str,
    service: SessionService = Depends(get_session_service),
) -> StatsResponse:
    """Get statistics for a session."""
    stats = service.get_session_stats(session_id)
    return StatsResponse(session_id=session_id, **stats.model_dump())
