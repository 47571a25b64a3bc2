"""Shared fixtures for core tests."""

import random

import pytest

from lingocards_core.schemas.cards import FlashCard
from lingocards_core.store.memory import InMemoryCardStore, InMemorySessionRepository


@pytest.fixture
def scenario_cards() -> list[FlashCard]:
    """Five English cards (three tagged, two untagged) and one German card."""
    return [
        FlashCard(
            id="en-hello",
            content="Hello",
            source_language="en",
            user_translation="Hallo",
            tags=["common", "greeting"],
        ),
        FlashCard(
            id="en-goodbye",
            content="Goodbye",
            source_language="en",
            user_translation="Auf Wiedersehen",
            tags=["common", "farewell"],
        ),
        FlashCard(
            id="en-please",
            content="Please",
            source_language="en",
            user_translation="Bitte",
            tags=["common", "polite"],
        ),
        FlashCard(
            id="en-empty-tags",
            content="Thank you",
            source_language="en",
            user_translation="Danke",
            tags=[],
        ),
        FlashCard(
            id="en-null-tags",
            content="Yes",
            source_language="en",
            user_translation="Ja",
            tags=None,
        ),
        FlashCard(
            id="de-hallo",
            content="Hallo",
            source_language="de",
            user_translation="Hello",
            tags=["greeting"],
        ),
    ]


@pytest.fixture
def card_store(scenario_cards: list[FlashCard]) -> InMemoryCardStore:
    return InMemoryCardStore(scenario_cards)


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible sampling."""
    return random.Random(1234)
