"""Practice session schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from lingocards_core.schemas.cards import FlashCard, new_id, normalize_tags, utcnow
from lingocards_core.schemas.evaluation import EvaluationResult

DEFAULT_MAX_CARDS = 20


class SessionOptions(BaseModel):
    """Options for creating a practice session."""

    source_language: str = Field(..., min_length=1)
    target_language: str = Field(..., min_length=1)
    max_cards: int = Field(DEFAULT_MAX_CARDS, gt=0, description="Upper bound on cards")
    tags: list[str] = Field(default_factory=list)
    include_untagged: bool = False
    use_sample_cards: bool = Field(
        False, description="Skip the card store and use the built-in sample cards"
    )

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> list[str]:
        return normalize_tags(value)


class SessionResponse(BaseModel):
    """One recorded answer."""

    card_id: str
    user_response: str | None = None
    correct: bool = False
    skipped: bool = Field(False, description="Card could not be resolved")
    timestamp: datetime = Field(default_factory=utcnow)


class Session(BaseModel):
    """One practice run over a fixed sequence of cards.

    ``card_ids`` never changes after creation and ``len(responses)`` always
    equals ``current_card_index``.
    """

    id: str = Field(default_factory=new_id)
    source_language: str
    target_language: str
    card_ids: list[str] = Field(default_factory=list)
    current_card_index: int = 0
    responses: list[SessionResponse] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    completed_at: datetime | None = None

    @property
    def is_complete(self) -> bool:
        return self.current_card_index >= len(self.card_ids)

    @property
    def current_card_id(self) -> str | None:
        if self.is_complete:
            return None
        return self.card_ids[self.current_card_index]


class SessionProgress(BaseModel):
    """One-based position of the current card."""

    current: int
    total: int


class CurrentCard(BaseModel):
    """The card to practice next."""

    session_id: str
    session_progress: SessionProgress
    card: FlashCard


class SessionStats(BaseModel):
    """Derived statistics for a session."""

    total: int = 0
    correct: int = 0
    accuracy: float = 0.0
    skipped: int = 0
    total_cards: int = 0
    is_complete: bool = False


class AnswerResult(BaseModel):
    """Outcome of submitting an answer for the current card."""

    session_id: str
    card_id: str
    evaluation: EvaluationResult
    reference_translation: str | None = None
    had_translation_error: bool = False
    is_complete: bool = False


class AdvanceResult(BaseModel):
    """Session state after an answer has been recorded."""

    session_id: str
    is_complete: bool
    stats: SessionStats | None = None
    next_card: CurrentCard | None = None
