"""Flashcard management routes."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from app.db.session import get_card_store
from app.schemas.api import CardCreate, CardListResponse, CardUpdate
from lingocards_core.errors import CardNotFoundError
from lingocards_core.schemas import FlashCard, TagFilter, TagSummary
from lingocards_core.store import CardStore

router = APIRouter()


@router.get("/cards", response_model=CardListResponse)
async def list_cards(
    source_language: str | None = None,
    tags: list[str] | None = Query(None),
    include_untagged: bool = False,
    search: str | None = None,
    store: CardStore = Depends(get_card_store),
) -> CardListResponse:
    """List flashcards, most recently updated first."""
    cards = store.get_all_flashcards(
        source_language=source_language,
        tag_filter=TagFilter(tags=tags, include_untagged=include_untagged),
        search_term=search,
    )
    return CardListResponse(cards=cards)


@router.get("/cards/tags", response_model=TagSummary)
async def list_tags(
    source_language: str,
    store: CardStore = Depends(get_card_store),
) -> TagSummary:
    """Tags in use for a source language, with card counts."""
    return store.get_available_tags(source_language)


@router.post("/cards", response_model=FlashCard, status_code=201)
async def create_card(
    payload: CardCreate,
    store: CardStore = Depends(get_card_store),
) -> FlashCard:
    """Create a flashcard."""
    try:
        card = FlashCard(**payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return store.save_flashcard(card)


@router.get("/cards/{card_id}", response_model=FlashCard)
async def get_card(
    card_id: str,
    store: CardStore = Depends(get_card_store),
) -> FlashCard:
    """Get a specific flashcard by ID."""
    card = store.get_flashcard(card_id)
    if card is None:
        raise CardNotFoundError(card_id)
    return card


@router.patch("/cards/{card_id}", response_model=FlashCard)
async def update_card(
    card_id: str,
    payload: CardUpdate,
    store: CardStore = Depends(get_card_store),
) -> FlashCard:
    """Update the fields present in the payload."""
    changes = payload.model_dump(exclude_unset=True)
    try:
        return store.update_flashcard(card_id, **changes)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.delete("/cards/{card_id}", status_code=204)
async def delete_card(
    card_id: str,
    store: CardStore = Depends(get_card_store),
) -> Response:
    """Delete a flashcard.

    Sessions that still reference the card skip it when they reach it.
    """
    if not store.delete_flashcard(card_id):
        raise CardNotFoundError(card_id)
    return Response(status_code=204)
