"""Flashcard and tag schemas."""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, field_validator


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Generate an opaque unique identifier."""
    return uuid.uuid4().hex


def normalize_tags(raw: Any) -> list[str]:
    """Normalize a raw tag value into an ordered list of unique tags.

    ``None``, a missing value and an empty list all mean "untagged" and
    become ``[]``. Blank entries are dropped and duplicates keep their
    first position.

    Args:
        raw: Tag value as stored or submitted

    Returns:
        Normalized tag list
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = [raw]

    tags: list[str] = []
    for tag in raw:
        if tag is None:
            continue
        cleaned = str(tag).strip()
        if cleaned and cleaned not in tags:
            tags.append(cleaned)
    return tags


class FlashCard(BaseModel):
    """A unit of study content."""

    id: str = Field(default_factory=new_id, description="Opaque card identifier")
    content: str = Field(..., description="Source-language text")
    source_language: str = Field(..., description="Language code of the content")
    comment: str = Field("", description="Free-text note")
    user_translation: str = Field(
        "", description="Reference translation supplied by the user"
    )
    tags: list[str] = Field(default_factory=list, description="Card tags")
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("content")
    @classmethod
    def _content_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("content must not be empty")
        return value

    @field_validator("source_language")
    @classmethod
    def _language_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("source_language must not be empty")
        return value.strip()

    @field_validator("comment", "user_translation", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> list[str]:
        return normalize_tags(value)

    @property
    def is_untagged(self) -> bool:
        return not self.tags

    def update(self, **changes: Any) -> "FlashCard":
        """Apply changes in place and refresh ``updated_at``.

        Only content, source language, comment, translation and tags can be
        changed; ``None`` values are ignored except for tags, where ``None``
        clears them.

        Returns:
            The updated card
        """
        allowed = {"content", "source_language", "comment", "user_translation"}
        unknown = set(changes) - allowed - {"tags"}
        if unknown:
            raise ValueError(f"Cannot update fields: {sorted(unknown)}")

        data = self.model_dump()
        for key, value in changes.items():
            if key == "tags":
                data["tags"] = value
            elif value is not None:
                data[key] = value

        # Re-validate so updates get the same checks as construction.
        validated = FlashCard.model_validate(data)
        self.content = validated.content
        self.source_language = validated.source_language
        self.comment = validated.comment
        self.user_translation = validated.user_translation
        self.tags = validated.tags
        self.updated_at = utcnow()
        return self


class TagFilter(BaseModel):
    """Tag predicate requested for a card query."""

    tags: list[str] = Field(default_factory=list, description="Accepted tags (OR)")
    include_untagged: bool = Field(False, description="Also match untagged cards")

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> list[str]:
        return normalize_tags(value)

    @property
    def is_unfiltered(self) -> bool:
        return not self.tags and not self.include_untagged


class TagCount(BaseModel):
    """Number of cards carrying a tag."""

    tag: str
    count: int


class TagSummary(BaseModel):
    """Tags in use for one source language."""

    tags: list[TagCount] = Field(default_factory=list)
    untagged_count: int = 0

    def count_for(self, tag: str) -> int:
        """Return the card count for a tag, 0 if unused."""
        for entry in self.tags:
            if entry.tag == tag:
                return entry.count
        return 0
