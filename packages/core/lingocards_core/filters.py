"""Tag predicate and tag aggregation over flashcards.

The predicate has three cases:

- no tags requested and untagged not requested: every card matches
- tags requested: a card matches if it carries at least one of them
- untagged requested: cards without tags match as well (union with the above)
"""

from collections.abc import Iterable, Sequence

from lingocards_core.schemas.cards import (
    FlashCard,
    TagCount,
    TagFilter,
    TagSummary,
    normalize_tags,
)


def matches_tag_filter(card_tags: Sequence[str] | None, tag_filter: TagFilter) -> bool:
    """Check whether a card's tags pass the filter.

    Args:
        card_tags: Tags of the card (``None`` is treated as untagged)
        tag_filter: Requested tags and untagged flag

    Returns:
        True if the card matches
    """
    if tag_filter.is_unfiltered:
        return True

    tags = normalize_tags(card_tags)
    if not tags:
        return tag_filter.include_untagged

    requested = set(tag_filter.tags)
    return any(tag in requested for tag in tags)


def filter_cards(
    cards: Iterable[FlashCard],
    source_language: str | None = None,
    tag_filter: TagFilter | None = None,
) -> list[FlashCard]:
    """Select cards matching a language and tag filter."""
    tag_filter = tag_filter or TagFilter()
    return [
        card
        for card in cards
        if (source_language is None or card.source_language == source_language)
        and matches_tag_filter(card.tags, tag_filter)
    ]


def summarize_tags(cards: Iterable[FlashCard]) -> TagSummary:
    """Count tag usage across cards.

    Tags are sorted alphabetically so repeated calls on unchanged data give
    the same order.
    """
    counts: dict[str, int] = {}
    untagged = 0

    for card in cards:
        tags = normalize_tags(card.tags)
        if not tags:
            untagged += 1
            continue
        for tag in tags:
            counts[tag] = counts.get(tag, 0) + 1

    return TagSummary(
        tags=[TagCount(tag=tag, count=counts[tag]) for tag in sorted(counts)],
        untagged_count=untagged,
    )
