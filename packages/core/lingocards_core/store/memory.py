"""In-memory stores, used for tests and ephemeral runs."""

from lingocards_core.schemas.cards import FlashCard, TagFilter
from lingocards_core.schemas.sessions import Session
from lingocards_core.store.base import CardStore, SessionRepository


class InMemoryCardStore(CardStore):
    """Card store backed by a dict.

    Cards are copied on the way in and out so callers never share state with
    the store.
    """

    def __init__(self, cards: list[FlashCard] | None = None):
        self._cards: dict[str, FlashCard] = {}
        for card in cards or []:
            self.save_flashcard(card)

    def save_flashcard(self, card: FlashCard) -> FlashCard:
        self._cards[card.id] = card.model_copy(deep=True)
        return card

    def get_flashcard(self, card_id: str) -> FlashCard | None:
        if not card_id:
            return None
        card = self._cards.get(card_id)
        return card.model_copy(deep=True) if card else None

    def delete_flashcard(self, card_id: str) -> bool:
        return self._cards.pop(card_id, None) is not None

    def get_all_flashcards(
        self,
        source_language: str | None = None,
        tag_filter: TagFilter | None = None,
        search_term: str | None = None,
    ) -> list[FlashCard]:
        cards = [card.model_copy(deep=True) for card in self._cards.values()]
        return self._apply_filters(cards, source_language, tag_filter, search_term)

    def __len__(self) -> int:
        return len(self._cards)


class InMemorySessionRepository(SessionRepository):
    """Session repository backed by a dict."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    def save_session(self, session: Session) -> Session:
        self._sessions[session.id] = session.model_copy(deep=True)
        return session

    def get_session(self, session_id: str) -> Session | None:
        if not session_id:
            return None
        session = self._sessions.get(session_id)
        return session.model_copy(deep=True) if session else None

    def delete_session(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def list_sessions(
        self,
        active_only: bool = False,
        completed_only: bool = False,
    ) -> list[Session]:
        sessions = [s.model_copy(deep=True) for s in self._sessions.values()]
        if active_only:
            sessions = [s for s in sessions if s.completed_at is None]
        if completed_only:
            sessions = [s for s in sessions if s.completed_at is not None]
        sessions.sort(key=lambda s: s.created_at, reverse=True)
        return sessions
