"""Flashcard and session storage."""

from lingocards_core.store.base import CardStore, SessionRepository
from lingocards_core.store.memory import InMemoryCardStore, InMemorySessionRepository
from lingocards_core.store.sql import (
    SqlCardStore,
    SqlSessionRepository,
    create_db_engine,
)

__all__ = [
    "CardStore",
    "SessionRepository",
    "InMemoryCardStore",
    "InMemorySessionRepository",
    "SqlCardStore",
    "SqlSessionRepository",
    "create_db_engine",
]
