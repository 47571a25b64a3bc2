"""Database engine and store dependencies."""

from functools import lru_cache

from sqlalchemy import Engine

from app.settings import settings
from lingocards_core.store import (
    CardStore,
    SessionRepository,
    SqlCardStore,
    SqlSessionRepository,
    create_db_engine,
)


@lru_cache
def get_engine() -> Engine:
    """Return the process-wide engine, creating tables on first use."""
    return create_db_engine(settings.database_url, echo=settings.debug)


def get_card_store() -> CardStore:
    """Dependency that provides the card store."""
    return SqlCardStore(get_engine())


def get_session_repository() -> SessionRepository:
    """Dependency that provides the session repository."""
    return SqlSessionRepository(get_engine())


def init_db() -> None:
    """Initialize database tables."""
    get_engine()
