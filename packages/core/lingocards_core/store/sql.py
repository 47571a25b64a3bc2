"""SQLite-backed stores built on SQLAlchemy."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Engine, create_engine, select
from sqlalchemy.orm import Session as DbSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from lingocards_core.schemas.cards import FlashCard, TagFilter
from lingocards_core.schemas.sessions import Session, SessionResponse
from lingocards_core.store.base import CardStore, SessionRepository
from lingocards_core.store.models import Base, FlashCardRecord, SessionRecord
from lingocards_core.utils.logging import get_logger

logger = get_logger(__name__)


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine and make sure all tables exist.

    Args:
        database_url: SQLAlchemy URL, e.g. ``sqlite:///lingocards.db``
        echo: Log emitted SQL

    Returns:
        Configured engine
    """
    kwargs: dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        # The API serves requests from a thread pool.
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # An in-memory database only lives as long as its connection.
            kwargs["poolclass"] = StaticPool
    engine = create_engine(database_url, echo=echo, **kwargs)
    Base.metadata.create_all(engine)
    logger.info(f"Initialized database at {engine.url.render_as_string()}")
    return engine


def _as_utc(value: datetime | None) -> datetime | None:
    """SQLite drops tzinfo; stored values are always UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_db_time(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class _SqlStore:
    """Shared engine and session factory handling."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = sessionmaker(engine, expire_on_commit=False)

    def _db(self) -> DbSession:
        return self._session_factory()


class SqlCardStore(_SqlStore, CardStore):
    """Card store persisted in a relational database."""

    @staticmethod
    def _to_card(row: FlashCardRecord) -> FlashCard:
        return FlashCard(
            id=row.id,
            content=row.content,
            source_language=row.source_language,
            comment=row.comment,
            user_translation=row.user_translation,
            tags=row.tags,
            created_at=_as_utc(row.created_at),
            updated_at=_as_utc(row.updated_at),
        )

    def save_flashcard(self, card: FlashCard) -> FlashCard:
        with self._db() as db:
            db.merge(
                FlashCardRecord(
                    id=card.id,
                    content=card.content,
                    source_language=card.source_language,
                    comment=card.comment,
                    user_translation=card.user_translation,
                    tags=list(card.tags),
                    created_at=_to_db_time(card.created_at),
                    updated_at=_to_db_time(card.updated_at),
                )
            )
            db.commit()
        return card

    def get_flashcard(self, card_id: str) -> FlashCard | None:
        if not card_id:
            return None
        with self._db() as db:
            row = db.get(FlashCardRecord, card_id)
            return self._to_card(row) if row else None

    def delete_flashcard(self, card_id: str) -> bool:
        if not card_id:
            return False
        with self._db() as db:
            row = db.get(FlashCardRecord, card_id)
            if row is None:
                return False
            db.delete(row)
            db.commit()
            return True

    def get_all_flashcards(
        self,
        source_language: str | None = None,
        tag_filter: TagFilter | None = None,
        search_term: str | None = None,
    ) -> list[FlashCard]:
        query = select(FlashCardRecord)
        if source_language:
            query = query.where(FlashCardRecord.source_language == source_language)

        with self._db() as db:
            rows = db.execute(query).scalars().all()
            cards = [self._to_card(row) for row in rows]

        # Tags live in a JSON column, so the tag predicate runs on loaded cards.
        return self._apply_filters(cards, source_language, tag_filter, search_term)


class SqlSessionRepository(_SqlStore, SessionRepository):
    """Session repository persisted in a relational database."""

    @staticmethod
    def _to_session(row: SessionRecord) -> Session:
        return Session(
            id=row.id,
            source_language=row.source_language,
            target_language=row.target_language,
            card_ids=list(row.card_ids or []),
            current_card_index=row.current_card_index,
            responses=[
                SessionResponse.model_validate(item) for item in row.responses or []
            ],
            created_at=_as_utc(row.created_at),
            completed_at=_as_utc(row.completed_at),
        )

    def save_session(self, session: Session) -> Session:
        with self._db() as db:
            db.merge(
                SessionRecord(
                    id=session.id,
                    source_language=session.source_language,
                    target_language=session.target_language,
                    card_ids=list(session.card_ids),
                    current_card_index=session.current_card_index,
                    responses=[r.model_dump(mode="json") for r in session.responses],
                    created_at=_to_db_time(session.created_at),
                    completed_at=_to_db_time(session.completed_at),
                )
            )
            db.commit()
        return session

    def get_session(self, session_id: str) -> Session | None:
        if not session_id:
            return None
        with self._db() as db:
            row = db.get(SessionRecord, session_id)
            return self._to_session(row) if row else None

    def delete_session(self, session_id: str) -> bool:
        if not session_id:
            return False
        with self._db() as db:
            row = db.get(SessionRecord, session_id)
            if row is None:
                return False
            db.delete(row)
            db.commit()
            return True

    def list_sessions(
        self,
        active_only: bool = False,
        completed_only: bool = False,
    ) -> list[Session]:
        query = select(SessionRecord).order_by(SessionRecord.created_at.desc())
        if active_only:
            query = query.where(SessionRecord.completed_at.is_(None))
        if completed_only:
            query = query.where(SessionRecord.completed_at.is_not(None))

        with self._db() as db:
            rows = db.execute(query).scalars().all()
            return [self._to_session(row) for row in rows]
