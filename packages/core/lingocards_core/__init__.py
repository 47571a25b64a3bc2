"""lingocards-core: Flashcard practice sessions with translation feedback.

This package provides the card store, the tag-filtered session engine and the
translation pipeline that judges learner answers.

Sessions:
    Cards are selected at random from those matching a source language and
    a tag filter. Each answer is evaluated and recorded, and the session
    completes after the last selected card.

    >>> from lingocards_core.session import SessionEngine
    >>> engine = SessionEngine(card_store)
    >>> session = engine.create_session(SessionOptions(source_language="en",
    ...                                                target_language="de"))

Translation:
    Evaluation and reference generation go to the configured provider, then
    to the fallback provider, then to a built-in phrase table. Answers are
    always judged, even without an API key.

    >>> from lingocards_core.translation import TranslationService
    >>> result = await TranslationService().evaluate_translation(request)
"""

from lingocards_core.schemas.cards import FlashCard, TagFilter
from lingocards_core.schemas.evaluation import EvaluationRequest, EvaluationResult
from lingocards_core.schemas.sessions import Session, SessionOptions
from lingocards_core.session.engine import SessionEngine
from lingocards_core.session.service import SessionService
from lingocards_core.translation.service import TranslationService

__version__ = "0.1.0"

__all__ = [
    # Sessions
    "SessionEngine",
    "SessionService",
    # Translation
    "TranslationService",
    # Schemas
    "EvaluationRequest",
    "EvaluationResult",
    "FlashCard",
    "Session",
    "SessionOptions",
    "TagFilter",
]
