"""Data schemas shared by the card store, sessions and translation pipeline."""

from lingocards_core.schemas.cards import (
    FlashCard,
    TagCount,
    TagFilter,
    TagSummary,
    normalize_tags,
)
from lingocards_core.schemas.evaluation import (
    EvaluationDetails,
    EvaluationRequest,
    EvaluationResult,
    GenerationRequest,
)
from lingocards_core.schemas.sessions import (
    AdvanceResult,
    AnswerResult,
    CurrentCard,
    Session,
    SessionOptions,
    SessionProgress,
    SessionResponse,
    SessionStats,
)

__all__ = [
    # Cards and tags
    "FlashCard",
    "TagCount",
    "TagFilter",
    "TagSummary",
    "normalize_tags",
    # Translation
    "EvaluationDetails",
    "EvaluationRequest",
    "EvaluationResult",
    "GenerationRequest",
    # Sessions
    "AdvanceResult",
    "AnswerResult",
    "CurrentCard",
    "Session",
    "SessionOptions",
    "SessionProgress",
    "SessionResponse",
    "SessionStats",
]
