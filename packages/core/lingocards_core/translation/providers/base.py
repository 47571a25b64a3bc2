"""Base translation provider interface and shared prompt/response handling."""

import json
import re
from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError

from lingocards_core.schemas.evaluation import (
    EvaluationDetails,
    EvaluationRequest,
    EvaluationResult,
    GenerationRequest,
)
from lingocards_core.utils.logging import get_logger

logger = get_logger(__name__)

LANGUAGE_NAMES = {
    "en": "English",
    "de": "German",
    "fr": "French",
    "es": "Spanish",
    "it": "Italian",
    "pt": "Portuguese",
    "ru": "Russian",
    "zh": "Chinese",
    "ja": "Japanese",
    "ko": "Korean",
}

EVALUATION_CRITERIA = """Evaluate the user's translation with these criteria:
1. Accuracy - It should convey the same meaning - significant changes in meaning should be considered incorrect
2. Grammar - It should be grammatically correct
3. Vocabulary - Appropriate vocabulary should be used, with key terms correctly translated
4. Style - The style should match the context
5. Spelling - Up to 2 typos or spelling mistakes may be acceptable, but more than that must be considered incorrect

EVALUATION RULES:
- Accuracy is your top priority
- Core meaning must be preserved, though synonyms and alternative phrasings are acceptable
- Translations should be rejected if they significantly change the action, object, direction, or core meaning
- Focus first on whether the core meaning is preserved before evaluating grammar or style
- Allow for different ways of expressing the same idea as long as the meaning is equivalent

Respond with JSON only, using this exact format:
{
  "correct": boolean,
  "score": number between 0.0 and 1.0,
  "feedback": string (short, helpful feedback for the user),
  "suggestedTranslation": string (a correct translation if the user's is wrong),
  "details": {
    "grammar": string,
    "vocabulary": string,
    "accuracy": string
  }
}"""


def language_name(code: str) -> str:
    """Human-readable language name for an ISO code."""
    return LANGUAGE_NAMES.get(code, code)


def build_evaluation_context(request: EvaluationRequest) -> str:
    """Describe the translation under evaluation."""
    text = (
        f'Original text: "{request.source_content}"\n'
        f'User\'s translation: "{request.user_translation}"'
    )
    if request.reference_translation:
        text += f'\nReference translation: "{request.reference_translation}"'
    return text


def evaluator_role(request: EvaluationRequest) -> str:
    return (
        "You are a language expert evaluating translations from "
        f"{language_name(request.source_language)} to "
        f"{language_name(request.target_language)}."
    )


def unavailable_evaluation(request: EvaluationRequest) -> EvaluationResult:
    """Result returned when a provider answered with an unusable payload."""
    return EvaluationResult(
        correct=False,
        score=0.5,
        feedback="Unable to evaluate translation due to a technical issue.",
        suggested_translation=request.reference_translation or request.user_translation,
        details=EvaluationDetails(
            grammar="Evaluation unavailable",
            vocabulary="Evaluation unavailable",
            accuracy="Evaluation unavailable",
        ),
    )


def extract_json_object(content: str) -> dict[str, Any] | None:
    """Pull the first JSON object out of model output.

    Args:
        content: Raw response text, possibly wrapped in prose or code fences

    Returns:
        Parsed object, or None if nothing parseable was found
    """
    if not content:
        logger.warning("Empty response content received")
        return None

    try:
        data = json.loads(content)
        return data if isinstance(data, dict) else None
    except json.JSONDecodeError:
        pass

    match = re.search(r"\{[\s\S]*\}", content)
    if not match:
        return None
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON response: {e}. Content: {content[:200]}...")
        return None
    return data if isinstance(data, dict) else None


def parse_evaluation(content: str, request: EvaluationRequest) -> EvaluationResult:
    """Convert model output into an EvaluationResult.

    Malformed payloads do not raise; they yield the "technical issue" result.
    """
    data = extract_json_object(content)
    if data is None:
        logger.error("Could not extract JSON from evaluation response")
        return unavailable_evaluation(request)

    details = data.get("details")
    if (
        not isinstance(data.get("correct"), bool)
        or not isinstance(data.get("score"), (int, float))
        or not isinstance(data.get("feedback"), str)
        or not isinstance(data.get("suggestedTranslation"), str)
        or not isinstance(details, dict)
    ):
        logger.error(f"Evaluation response format is invalid: {data}")
        return unavailable_evaluation(request)

    try:
        return EvaluationResult(
            correct=data["correct"],
            score=min(max(float(data["score"]), 0.0), 1.0),
            feedback=data["feedback"],
            suggested_translation=data["suggestedTranslation"],
            details=EvaluationDetails(
                grammar=details.get("grammar") or "No grammar feedback available",
                vocabulary=details.get("vocabulary")
                or "No vocabulary feedback available",
                accuracy=details.get("accuracy") or "No accuracy feedback available",
            ),
        )
    except ValidationError as e:
        logger.error(f"Evaluation response failed validation: {e}")
        return unavailable_evaluation(request)


def clean_translation(text: str) -> str:
    """Strip whitespace and surrounding quotes from a generated translation."""
    return re.sub(r"^[\"']|[\"']$", "", text.strip())


class BaseTranslationProvider(ABC):
    """Abstract base class for translation providers."""

    name: str = "base"

    @abstractmethod
    async def evaluate_translation(self, request: EvaluationRequest) -> EvaluationResult:
        """Evaluate a user translation.

        Args:
            request: Source content, languages, answer and optional reference

        Returns:
            Structured evaluation

        Raises:
            ProviderError: If the provider call fails
        """
        pass

    @abstractmethod
    async def generate_translation(self, request: GenerationRequest) -> str:
        """Translate content.

        Args:
            request: Content and language pair

        Returns:
            Translated text

        Raises:
            ProviderError: If the provider call fails
        """
        pass
