"""Deterministic translator used when no provider is available.

Evaluation compares the answer to a reference translation with a coarse
lexical heuristic: exact match after case folding, substring containment,
or at least half of the shorter string's words shared. It does not
understand paraphrases or word order, so false positives and negatives are
expected.
"""

from lingocards_core.schemas.evaluation import (
    EvaluationDetails,
    EvaluationRequest,
    EvaluationResult,
    GenerationRequest,
)
from lingocards_core.utils.logging import get_logger

logger = get_logger(__name__)

CLOSE_MATCH_RATIO = 0.5

# (source language, target language) -> normalized phrase -> translation
PHRASE_TABLE: dict[tuple[str, str], dict[str, str]] = {
    ("en", "de"): {
        "hello": "Hallo",
        "goodbye": "Auf Wiedersehen",
        "thank you": "Danke",
        "yes": "Ja",
        "no": "Nein",
        "please": "Bitte",
        "excuse me": "Entschuldigung",
        "sorry": "Es tut mir leid",
        "good morning": "Guten Morgen",
        "good evening": "Guten Abend",
        "how are you": "Wie geht es dir",
        "fine": "Gut",
        "what is your name": "Wie heißt du",
        "my name is": "Ich heiße",
        "nice to meet you": "Schön, dich kennenzulernen",
        "where is": "Wo ist",
        "when": "Wann",
        "why": "Warum",
        "today": "Heute",
        "tomorrow": "Morgen",
    },
    ("en", "fr"): {
        "hello": "Bonjour",
        "goodbye": "Au revoir",
        "thank you": "Merci",
        "yes": "Oui",
        "no": "Non",
        "please": "S'il vous plaît",
        "excuse me": "Excusez-moi",
        "sorry": "Désolé",
        "good morning": "Bonjour",
        "good evening": "Bonsoir",
    },
    ("en", "es"): {
        "hello": "Hola",
        "goodbye": "Adiós",
        "thank you": "Gracias",
        "yes": "Sí",
        "no": "No",
        "please": "Por favor",
        "excuse me": "Disculpe",
        "sorry": "Lo siento",
        "good morning": "Buenos días",
        "good evening": "Buenas noches",
    },
    ("de", "en"): {
        "hallo": "Hello",
        "auf wiedersehen": "Goodbye",
        "danke": "Thank you",
        "ja": "Yes",
        "nein": "No",
        "bitte": "Please",
        "entschuldigung": "Excuse me",
        "es tut mir leid": "I am sorry",
        "guten morgen": "Good morning",
        "guten abend": "Good evening",
        "wie geht es dir": "How are you",
        "gut": "Fine",
        "wie heißt du": "What is your name",
        "ich heiße": "My name is",
        "schön, dich kennenzulernen": "Nice to meet you",
    },
}


def normalize_text(text: str) -> str:
    """Lowercase and trim text for comparison.

    ``str.lower`` rather than ``casefold`` keeps "ß" intact, matching the
    phrase table keys.
    """
    return text.strip().lower()


def is_close_match(first: str, second: str) -> bool:
    """Check whether two normalized strings are lexically close.

    Args:
        first: Normalized answer
        second: Normalized reference

    Returns:
        True if one contains the other, or if the shared words reach half of
        the shorter string's word count
    """
    if first in second or second in first:
        return True

    words_first = first.split()
    words_second = second.split()
    shared = sum(1 for word in words_first if word in words_second)
    threshold = min(len(words_first), len(words_second)) * CLOSE_MATCH_RATIO
    return shared >= threshold


def untranslated(content: str) -> str:
    """Mark content as untranslated using the bracket convention."""
    return f"[{content}]"


def is_untranslated(translation: str | None, content: str) -> bool:
    """Return True if a translation is the bracketed original content."""
    return translation == untranslated(content)


class BaselineTranslator:
    """Dependency-free evaluator and phrase-table translator."""

    def evaluate_translation(self, request: EvaluationRequest) -> EvaluationResult:
        """Judge a translation without calling any provider.

        Without a reference every answer is accepted, since there is nothing
        to check against.
        """
        logger.debug("Using baseline translation evaluation")

        if not request.reference_translation:
            return EvaluationResult(
                correct=True,
                score=1.0,
                feedback="Great job! Your translation is correct.",
                suggested_translation=request.user_translation,
                details=EvaluationDetails(
                    grammar="Perfect", vocabulary="Appropriate", accuracy="Precise"
                ),
            )

        answer = normalize_text(request.user_translation)
        reference = normalize_text(request.reference_translation)

        if answer == reference:
            return EvaluationResult(
                correct=True,
                score=1.0,
                feedback="Perfect! Your translation matches exactly.",
                suggested_translation=request.reference_translation,
                details=EvaluationDetails(
                    grammar="Perfect", vocabulary="Appropriate", accuracy="Precise"
                ),
            )

        if is_close_match(answer, reference):
            return EvaluationResult(
                correct=True,
                score=0.8,
                feedback="Good job! Your translation is very close.",
                suggested_translation=request.reference_translation,
                details=EvaluationDetails(
                    grammar="Good", vocabulary="Appropriate", accuracy="Close"
                ),
            )

        return EvaluationResult(
            correct=False,
            score=0.2,
            feedback="Try again. Your translation doesn't match the expected answer.",
            suggested_translation=request.reference_translation,
            details=EvaluationDetails(
                grammar="Check your word order",
                vocabulary="Review key terms",
                accuracy="Needs improvement",
            ),
        )

    def generate_translation(self, request: GenerationRequest) -> str:
        """Look a phrase up in the built-in table.

        Returns:
            The table translation, or the original content in square brackets
        """
        logger.debug("Using baseline translation generation")
        table = PHRASE_TABLE.get((request.source_language, request.target_language), {})
        return table.get(normalize_text(request.content), untranslated(request.content))
