"""Session state machine: creation, current card, responses and statistics.

A session moves from in progress (``current_card_index < len(card_ids)``)
to complete (``current_card_index == len(card_ids)``) and never leaves the
complete state. Sessions only reference cards by id.
"""

import random

from lingocards_core.errors import InvalidSessionOptionsError, SessionStateViolationError
from lingocards_core.schemas.cards import FlashCard, utcnow
from lingocards_core.schemas.sessions import (
    CurrentCard,
    Session,
    SessionOptions,
    SessionProgress,
    SessionResponse,
    SessionStats,
)
from lingocards_core.session.samples import get_sample_card, is_sample_id
from lingocards_core.session.selector import CardSelector
from lingocards_core.store.base import CardStore
from lingocards_core.utils.logging import get_logger

logger = get_logger(__name__)


class SessionEngine:
    """Creates sessions and advances them one response at a time."""

    def __init__(
        self,
        card_store: CardStore,
        rng: random.Random | None = None,
        selector: CardSelector | None = None,
    ):
        self.card_store = card_store
        self.selector = selector or CardSelector(card_store, rng=rng)

    def create_session(self, options: SessionOptions) -> Session:
        """Create a session over a random selection of matching cards.

        Raises:
            InvalidSessionOptionsError: If source and target language are equal
            NoCardsAvailableError: If no stored card matches the filters
        """
        if options.source_language == options.target_language:
            raise InvalidSessionOptionsError(
                "Source and target language must differ "
                f"(both are '{options.source_language}')"
            )

        card_ids = self.selector.select_cards(options)
        session = Session(
            source_language=options.source_language,
            target_language=options.target_language,
            card_ids=card_ids,
        )
        logger.info(
            f"Created session {session.id} with {len(card_ids)} cards "
            f"({options.source_language} -> {options.target_language})"
        )
        return session

    def resolve_card(self, card_id: str) -> FlashCard | None:
        """Look a card up in the store, then in the sample catalogue."""
        card = self.card_store.get_flashcard(card_id)
        if card is None and is_sample_id(card_id):
            card = get_sample_card(card_id)
        return card

    def get_current_card(self, session: Session) -> CurrentCard | None:
        """Return the card to practice, or None once the session is complete.

        Cards deleted after the session was created are skipped: each one is
        recorded as a skipped, incorrect response and the cursor moves on.
        The session is mutated in that case and should be saved by the caller.
        """
        while not session.is_complete:
            card_id = session.card_ids[session.current_card_index]
            card = self.resolve_card(card_id)
            if card is not None:
                return CurrentCard(
                    session_id=session.id,
                    session_progress=SessionProgress(
                        current=session.current_card_index + 1,
                        total=len(session.card_ids),
                    ),
                    card=card,
                )

            logger.warning(
                f"Card {card_id} in session {session.id} no longer exists; skipping"
            )
            self._append_response(
                session,
                SessionResponse(card_id=card_id, correct=False, skipped=True),
            )
        return None

    def record_response(
        self,
        session: Session,
        card_id: str,
        user_response: str,
        correct: bool,
    ) -> Session:
        """Record an answer for the current card and advance the cursor.

        Raises:
            SessionStateViolationError: If the session is complete or the card
                is not the current one
        """
        if session.is_complete:
            raise SessionStateViolationError(
                f"Session {session.id} is already complete"
            )

        expected = session.card_ids[session.current_card_index]
        if card_id != expected:
            raise SessionStateViolationError(
                f"Response for card {card_id} does not match current card "
                f"{expected} in session {session.id}"
            )

        self._append_response(
            session,
            SessionResponse(card_id=card_id, user_response=user_response, correct=correct),
        )
        return session

    @staticmethod
    def _append_response(session: Session, response: SessionResponse) -> None:
        session.responses.append(response)
        session.current_card_index += 1
        if session.is_complete and session.completed_at is None:
            session.completed_at = utcnow()
            logger.info(f"Session {session.id} completed")

    @staticmethod
    def get_session_stats(session: Session) -> SessionStats:
        """Compute statistics from the recorded responses."""
        total = len(session.responses)
        correct = sum(1 for response in session.responses if response.correct)
        skipped = sum(1 for response in session.responses if response.skipped)
        accuracy = round(100 * correct / total, 2) if total > 0 else 0.0
        return SessionStats(
            total=total,
            correct=correct,
            accuracy=accuracy,
            skipped=skipped,
            total_cards=len(session.card_ids),
            is_complete=session.is_complete,
        )
