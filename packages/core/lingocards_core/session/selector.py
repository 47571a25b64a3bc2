"""Card selection for new practice sessions."""

import random

from lingocards_core.errors import NoCardsAvailableError
from lingocards_core.schemas.cards import FlashCard, TagFilter
from lingocards_core.schemas.sessions import SessionOptions
from lingocards_core.session.samples import SAMPLE_CARDS
from lingocards_core.store.base import CardStore
from lingocards_core.utils.logging import get_logger

logger = get_logger(__name__)


class CardSelector:
    """Chooses the ordered card ids for a session."""

    def __init__(self, card_store: CardStore, rng: random.Random | None = None):
        """Initialize the selector.

        Args:
            card_store: Store queried for matching cards
            rng: Random source (a private ``random.Random`` by default)
        """
        self.card_store = card_store
        self.rng = rng or random.Random()

    def select_cards(self, options: SessionOptions) -> list[str]:
        """Select card ids for a session.

        Raises:
            NoCardsAvailableError: If no stored card matches the filters
        """
        if options.use_sample_cards:
            return self.select_sample_cards(options.max_cards)
        return self.select_stored_cards(options)

    def select_sample_cards(self, max_cards: int) -> list[str]:
        """First ``max_cards`` built-in sample cards, ignoring all filters."""
        card_ids = [card.id for card in SAMPLE_CARDS[:max_cards]]
        logger.info(f"Selected {len(card_ids)} sample cards for session")
        return card_ids

    def select_stored_cards(self, options: SessionOptions) -> list[str]:
        tag_filter = TagFilter(
            tags=options.tags, include_untagged=options.include_untagged
        )
        logger.debug(
            f"Fetching cards for {options.source_language} with "
            f"{tag_filter.model_dump()}"
        )
        matching = self.card_store.get_cards_by_language_and_filter(
            options.source_language, tag_filter
        )
        logger.info(f"Found {len(matching)} matching cards")

        if not matching:
            raise NoCardsAvailableError(
                options.source_language,
                tags=options.tags,
                include_untagged=options.include_untagged,
            )

        selected = self.random_sample(matching, options.max_cards)
        logger.info(f"Selected {len(selected)} random cards for session")
        return [card.id for card in selected]

    def random_sample(self, cards: list[FlashCard], count: int) -> list[FlashCard]:
        """Uniform sample without replacement, in random order."""
        return self.rng.sample(cards, min(count, len(cards)))
