"""Built-in sample cards for sessions started without stored data."""

from datetime import datetime, timezone

from lingocards_core.schemas.cards import FlashCard

SAMPLE_ID_PREFIX = "sample-"
SAMPLE_TAG = "sample"

_CREATED_AT = datetime(2024, 1, 1, tzinfo=timezone.utc)

_SAMPLE_DATA = [
    ("Hello", "Hallo"),
    ("Goodbye", "Auf Wiedersehen"),
    ("Thank you", "Danke"),
    ("Yes", "Ja"),
    ("No", "Nein"),
    ("Please", "Bitte"),
    ("Excuse me", "Entschuldigung"),
    ("Sorry", "Es tut mir leid"),
    ("Good morning", "Guten Morgen"),
    ("Good evening", "Guten Abend"),
    ("How are you", "Wie geht es dir"),
    ("What is your name", "Wie heißt du"),
    ("My name is", "Ich heiße"),
    ("Where is the bathroom", "Wo ist die Toilette"),
    ("How much does it cost", "Wie viel kostet das"),
    ("I don't understand", "Ich verstehe nicht"),
    ("Can you help me", "Können Sie mir helfen"),
    ("I would like", "Ich möchte"),
    ("I am from", "Ich komme aus"),
    ("Do you speak English", "Sprechen Sie Englisch"),
]

SAMPLE_CARDS: list[FlashCard] = [
    FlashCard(
        id=f"{SAMPLE_ID_PREFIX}{index:02d}",
        content=content,
        source_language="en",
        user_translation=translation,
        tags=[SAMPLE_TAG],
        created_at=_CREATED_AT,
        updated_at=_CREATED_AT,
    )
    for index, (content, translation) in enumerate(_SAMPLE_DATA, start=1)
]

_SAMPLES_BY_ID = {card.id: card for card in SAMPLE_CARDS}


def is_sample_id(card_id: str) -> bool:
    return card_id.startswith(SAMPLE_ID_PREFIX)


def get_sample_card(card_id: str) -> FlashCard | None:
    """Return a copy of a sample card, or None for unknown ids."""
    card = _SAMPLES_BY_ID.get(card_id)
    return card.model_copy(deep=True) if card else None
