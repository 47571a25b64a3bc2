"""Evaluation of a submitted answer against the card's reference translation."""

from dataclasses import dataclass

from lingocards_core.errors import TranslationError
from lingocards_core.schemas.cards import FlashCard
from lingocards_core.schemas.evaluation import (
    EvaluationDetails,
    EvaluationRequest,
    EvaluationResult,
    GenerationRequest,
)
from lingocards_core.schemas.sessions import Session
from lingocards_core.translation.baseline import is_untranslated
from lingocards_core.translation.service import TranslationService
from lingocards_core.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AnswerEvaluation:
    """Evaluation plus the reference it was judged against."""

    evaluation: EvaluationResult
    reference_translation: str | None
    had_translation_error: bool


class SessionEvaluator:
    """Evaluates answers, generating a reference when the card has none."""

    def __init__(self, translation_service: TranslationService):
        self.translation_service = translation_service

    async def _reference_for(
        self, session: Session, card: FlashCard
    ) -> tuple[str | None, TranslationError | None]:
        if card.user_translation:
            return card.user_translation, None

        try:
            outcome = await self.translation_service.generate(
                GenerationRequest(
                    content=card.content,
                    source_language=session.source_language,
                    target_language=session.target_language,
                )
            )
        except TranslationError as e:
            logger.error(f"Error generating reference translation: {e}")
            return None, e

        # A bracketed echo means no translation was found; judge without one.
        if is_untranslated(outcome.translation, card.content):
            return None, outcome.error
        return outcome.translation, outcome.error

    async def evaluate_answer(
        self, session: Session, card: FlashCard, answer: str
    ) -> AnswerEvaluation:
        """Evaluate an answer for a card in a session.

        Never raises for provider problems: if evaluation itself fails the
        answer is accepted with a fallback result.
        """
        reference, translation_error = await self._reference_for(session, card)

        try:
            evaluation = await self.translation_service.evaluate_translation(
                EvaluationRequest(
                    source_content=card.content,
                    source_language=session.source_language,
                    target_language=session.target_language,
                    user_translation=answer,
                    reference_translation=reference,
                )
            )
        except TranslationError as e:
            logger.error(f"Error evaluating translation: {e}")
            evaluation = EvaluationResult(
                correct=True,
                score=0.5,
                feedback=(
                    "We couldn't properly evaluate your translation due to an API "
                    "error. Continuing session."
                    if translation_error
                    else "Your answer was accepted, but we couldn't provide "
                    "detailed feedback."
                ),
                suggested_translation=reference or answer,
                details=EvaluationDetails(
                    grammar="Evaluation unavailable",
                    vocabulary="Evaluation unavailable",
                    accuracy="Evaluation unavailable",
                ),
                fallback=True,
                error=True,
                warning=e.message,
            )

        return AnswerEvaluation(
            evaluation=evaluation,
            reference_translation=reference,
            had_translation_error=translation_error is not None,
        )
