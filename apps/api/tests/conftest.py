"""Shared fixtures for API tests."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from app.db.session import get_card_store, get_session_repository
from app.main import app
from app.services.translation import get_translation_service
from lingocards_core.config import Settings
from lingocards_core.schemas import FlashCard
from lingocards_core.store import InMemoryCardStore, InMemorySessionRepository
from lingocards_core.translation import ProviderRegistry, TranslationService


@pytest.fixture
def card_store() -> InMemoryCardStore:
    return InMemoryCardStore(
        [
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
                id="en-thanks",
                content="Thank you",
                source_language="en",
                user_translation="Danke",
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
    )


@pytest.fixture
def translation_service() -> TranslationService:
    """Translation service without providers (baseline only)."""
    return TranslationService(
        registry=ProviderRegistry(), settings=Settings(_env_file=None)
    )


@pytest.fixture
def client(
    card_store: InMemoryCardStore, translation_service: TranslationService
) -> Iterator[TestClient]:
    """Test client wired to in-memory stores."""
    session_repository = InMemorySessionRepository()
    app.dependency_overrides[get_card_store] = lambda: card_store
    app.dependency_overrides[get_session_repository] = lambda: session_repository
    app.dependency_overrides[get_translation_service] = lambda: translation_service
    yield TestClient(app)
    app.dependency_overrides.clear()
