"""Exception types raised by the card store, session engine and translation pipeline."""

from typing import Any

API_KEY_ERROR_MARKERS = ("api key", "api_key", "authentication", "unauthorized", "401")


class LingoCardsError(Exception):
    """Base class for all lingocards errors."""

    pass


class NoCardsAvailableError(LingoCardsError):
    """No stored card matched the requested session filters."""

    def __init__(
        self,
        source_language: str,
        tags: list[str] | None = None,
        include_untagged: bool = False,
    ):
        self.source_language = source_language
        self.tags = list(tags or [])
        self.include_untagged = include_untagged
        detail = f"No flashcards available for language '{source_language}'"
        if self.tags or include_untagged:
            detail += (
                f" with tags {self.tags}"
                f"{' (including untagged)' if include_untagged else ''}"
            )
        super().__init__(detail)


class InvalidSessionOptionsError(LingoCardsError, ValueError):
    """Session options were rejected before any card was selected."""

    pass


class InvalidAnswerError(LingoCardsError, ValueError):
    """A submitted answer was empty or only whitespace."""

    pass


class SessionStateViolationError(LingoCardsError):
    """An operation did not respect the session state machine.

    Raised for responses recorded against the wrong card or against a
    session that is already complete. Indicates a caller bug.
    """

    pass


class SessionNotFoundError(LingoCardsError):
    """No session exists with the given id."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


class CardNotFoundError(LingoCardsError):
    """No flashcard exists with the given id."""

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(f"Card not found: {card_id}")


class ProviderError(LingoCardsError):
    """A translation provider call failed."""

    def __init__(self, message: str, provider: str | None = None):
        super().__init__(message)
        self.provider = provider


class TranslationError(LingoCardsError):
    """A provider failure enriched with translation context.

    Attributes:
        original_error: The exception raised by the provider
        context: Diagnostic details (provider, languages, availability)
        api_key_error: True when the failure looks like an API key problem
    """

    def __init__(
        self,
        message: str,
        original_error: BaseException | None = None,
        context: dict[str, Any] | None = None,
        api_key_error: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.context = context or {}
        self.api_key_error = api_key_error

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for API responses."""
        return {
            "message": self.message,
            "api_key_error": self.api_key_error,
            "context": self.context,
        }


def is_api_key_error(error: BaseException) -> bool:
    """Return True if the error message points at an authentication problem."""
    message = str(error).lower()
    return any(marker in message for marker in API_KEY_ERROR_MARKERS)
