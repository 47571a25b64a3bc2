"""Pydantic schemas for API request and response models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from lingocards_core.schemas import (
    FlashCard,
    Session,
    SessionProgress,
    SessionResponse,
    SessionStats,
)


class CardCreate(BaseModel):
    """Payload for creating a flashcard."""

    content: str
    source_language: str
    comment: str | None = None
    user_translation: str | None = None
    tags: list[str] | None = None


class CardUpdate(BaseModel):
    """Payload for updating a flashcard.

    Only fields present in the request are changed; an explicit ``null`` for
    ``tags`` removes all tags.
    """

    content: str | None = None
    source_language: str | None = None
    comment: str | None = None
    user_translation: str | None = None
    tags: list[str] | None = None


class CardListResponse(BaseModel):
    """List response for flashcards."""

    cards: list[FlashCard]


class SessionCreate(BaseModel):
    """Payload for starting a practice session.

    Missing languages and card count fall back to the configured defaults.
    """

    source_language: str | None = None
    target_language: str | None = None
    max_cards: int | None = Field(None, gt=0)
    tags: list[str] | None = None
    include_untagged: bool = False
    use_sample_cards: bool = False


class SessionDetailResponse(BaseModel):
    """Session response payload."""

    id: str
    source_language: str
    target_language: str
    card_ids: list[str]
    current_card_index: int
    responses: list[SessionResponse]
    created_at: datetime
    completed_at: datetime | None
    is_complete: bool

    @classmethod
    def from_session(cls, session: Session) -> "SessionDetailResponse":
        return cls(**session.model_dump(), is_complete=session.is_complete)


class SessionListResponse(BaseModel):
    """List response for sessions."""

    sessions: list[SessionDetailResponse]


class CurrentCardResponse(BaseModel):
    """The card to practice, or completion once every card is answered."""

    session_id: str
    is_complete: bool
    session_progress: SessionProgress | None = None
    card: FlashCard | None = None


class AnswerSubmit(BaseModel):
    """Payload for answering the current card."""

    answer: str = Field(..., min_length=1)

    @field_validator("answer", mode="before")
    @classmethod
    def strip_answer(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value


class GenerationResponse(BaseModel):
    """Generated translation."""

    translation: str


class StatsResponse(SessionStats):
    """Statistics for a session."""

    session_id: str


class ErrorResponse(BaseModel):
    """Error payload for failed requests."""

    detail: str
    context: dict[str, Any] | None = None
