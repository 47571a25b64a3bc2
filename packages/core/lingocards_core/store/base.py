"""Storage interfaces for flashcards and sessions."""

from abc import ABC, abstractmethod
from typing import Any

from lingocards_core.errors import CardNotFoundError
from lingocards_core.filters import filter_cards, summarize_tags
from lingocards_core.schemas.cards import FlashCard, TagFilter, TagSummary
from lingocards_core.schemas.sessions import Session


class CardStore(ABC):
    """Abstract base class for flashcard storage.

    Implementations only provide persistence primitives; filtering and tag
    aggregation are shared and work on normalized cards.
    """

    @abstractmethod
    def save_flashcard(self, card: FlashCard) -> FlashCard:
        """Insert or replace a card.

        Args:
            card: Card to persist

        Returns:
            The stored card
        """
        pass

    @abstractmethod
    def get_flashcard(self, card_id: str) -> FlashCard | None:
        """Load a card by id, or None if it does not exist."""
        pass

    @abstractmethod
    def delete_flashcard(self, card_id: str) -> bool:
        """Delete a card by id.

        Returns:
            True if a card was deleted
        """
        pass

    @abstractmethod
    def get_all_flashcards(
        self,
        source_language: str | None = None,
        tag_filter: TagFilter | None = None,
        search_term: str | None = None,
    ) -> list[FlashCard]:
        """List cards, most recently updated first.

        Args:
            source_language: Optional exact language match
            tag_filter: Optional tag predicate
            search_term: Optional substring searched in content and comment

        Returns:
            Matching cards
        """
        pass

    def update_flashcard(self, card_id: str, **changes: Any) -> FlashCard:
        """Apply changes to a stored card.

        Raises:
            CardNotFoundError: If no card has this id
        """
        card = self.get_flashcard(card_id)
        if card is None:
            raise CardNotFoundError(card_id)
        card.update(**changes)
        return self.save_flashcard(card)

    def get_flashcards_by_language(self, source_language: str) -> list[FlashCard]:
        return self.get_all_flashcards(source_language=source_language)

    def get_cards_by_language_and_filter(
        self,
        source_language: str,
        tag_filter: TagFilter | None = None,
    ) -> list[FlashCard]:
        """Cards in a language that pass the tag predicate."""
        return self.get_all_flashcards(
            source_language=source_language, tag_filter=tag_filter
        )

    def get_available_tags(self, source_language: str) -> TagSummary:
        """Tags used by cards in a language, with counts and untagged total."""
        if not source_language:
            return TagSummary()
        return summarize_tags(self.get_flashcards_by_language(source_language))

    @staticmethod
    def _apply_filters(
        cards: list[FlashCard],
        source_language: str | None,
        tag_filter: TagFilter | None,
        search_term: str | None,
    ) -> list[FlashCard]:
        matched = filter_cards(cards, source_language, tag_filter)
        if search_term:
            needle = search_term.lower()
            matched = [
                card
                for card in matched
                if needle in card.content.lower() or needle in card.comment.lower()
            ]
        matched.sort(key=lambda card: card.updated_at, reverse=True)
        return matched


class SessionRepository(ABC):
    """Abstract base class for session persistence."""

    @abstractmethod
    def save_session(self, session: Session) -> Session:
        pass

    @abstractmethod
    def get_session(self, session_id: str) -> Session | None:
        pass

    @abstractmethod
    def delete_session(self, session_id: str) -> bool:
        pass

    @abstractmethod
    def list_sessions(
        self,
        active_only: bool = False,
        completed_only: bool = False,
    ) -> list[Session]:
        """List sessions, newest first."""
        pass
