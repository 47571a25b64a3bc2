"""Id-based session operations used by the API layer."""

import random

from lingocards_core.errors import (
    InvalidAnswerError,
    SessionNotFoundError,
    SessionStateViolationError,
)
from lingocards_core.schemas.sessions import (
    AdvanceResult,
    AnswerResult,
    CurrentCard,
    Session,
    SessionOptions,
    SessionStats,
)
from lingocards_core.session.engine import SessionEngine
from lingocards_core.session.evaluator import SessionEvaluator
from lingocards_core.store.base import CardStore, SessionRepository
from lingocards_core.translation.service import TranslationService
from lingocards_core.utils.logging import get_logger, log_exceptions

logger = get_logger(__name__)


class SessionService:
    """Loads sessions by id, runs engine operations and saves the result.

    No session is held between calls; every operation names its session.
    """

    def __init__(
        self,
        card_store: CardStore,
        session_repository: SessionRepository,
        translation_service: TranslationService,
        rng: random.Random | None = None,
    ):
        self.card_store = card_store
        self.sessions = session_repository
        self.engine = SessionEngine(card_store, rng=rng)
        self.evaluator = SessionEvaluator(translation_service)

    def create_session(self, options: SessionOptions) -> Session:
        session = self.engine.create_session(options)
        return self.sessions.save_session(session)

    def get_session(self, session_id: str) -> Session:
        """Load a session.

        Raises:
            SessionNotFoundError: If no session has this id
        """
        session = self.sessions.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def list_sessions(
        self, active_only: bool = False, completed_only: bool = False
    ) -> list[Session]:
        return self.sessions.list_sessions(
            active_only=active_only, completed_only=completed_only
        )

    def _current_card(self, session: Session) -> CurrentCard | None:
        index_before = session.current_card_index
        current = self.engine.get_current_card(session)
        if session.current_card_index != index_before:
            # Deleted cards were skipped; keep the new position.
            self.sessions.save_session(session)
        return current

    def get_current_card(self, session_id: str) -> CurrentCard | None:
        """Current card of a session, or None if it is complete."""
        return self._current_card(self.get_session(session_id))

    @log_exceptions(logger)
    async def submit_answer(self, session_id: str, answer: str) -> AnswerResult:
        """Evaluate an answer for the current card and record it.

        Raises:
            InvalidAnswerError: If the answer is blank
            SessionNotFoundError: If no session has this id
            SessionStateViolationError: If the session is already complete
        """
        if not answer or not answer.strip():
            raise InvalidAnswerError("Please enter a translation before submitting")

        session = self.get_session(session_id)
        current = self._current_card(session)
        if current is None:
            raise SessionStateViolationError(
                f"Session {session.id} is already complete"
            )

        card = current.card
        result = await self.evaluator.evaluate_answer(session, card, answer)
        self.engine.record_response(
            session, card.id, answer, result.evaluation.correct
        )
        self.sessions.save_session(session)

        return AnswerResult(
            session_id=session.id,
            card_id=card.id,
            evaluation=result.evaluation,
            reference_translation=result.reference_translation,
            had_translation_error=result.had_translation_error,
            is_complete=session.is_complete,
        )

    def advance_session(self, session_id: str) -> AdvanceResult:
        """Report what follows the last recorded answer.

        Recording an answer already moves the cursor, so this does not change
        the session beyond skipping deleted cards.
        """
        session = self.get_session(session_id)
        next_card = self._current_card(session)
        if next_card is None:
            return AdvanceResult(
                session_id=session.id,
                is_complete=True,
                stats=self.engine.get_session_stats(session),
            )
        return AdvanceResult(
            session_id=session.id, is_complete=False, next_card=next_card
        )

    def get_session_stats(self, session_id: str) -> SessionStats:
        return self.engine.get_session_stats(self.get_session(session_id))
