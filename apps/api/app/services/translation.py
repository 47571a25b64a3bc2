"""Translation and session service dependencies.

Providers are built once from settings so provider clients are reused across
requests. Tests replace these dependencies through ``dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends

from app.db.session import get_card_store, get_session_repository
from app.settings import settings
from lingocards_core.session import SessionService
from lingocards_core.store import CardStore, SessionRepository
from lingocards_core.translation import TranslationService


@lru_cache
def get_translation_service() -> TranslationService:
    """Dependency that provides the shared translation service."""
    return TranslationService(settings=settings)


def get_session_service(
    card_store: CardStore = Depends(get_card_store),
    session_repository: SessionRepository = Depends(get_session_repository),
    translation_service: TranslationService = Depends(get_translation_service),
) -> SessionService:
    """Dependency that provides a session service over the configured stores."""
    return SessionService(card_store, session_repository, translation_service)
