"""Tests for the baseline translator."""

import pytest

from lingocards_core.schemas.evaluation import EvaluationRequest, GenerationRequest
from lingocards_core.translation.baseline import BaselineTranslator, is_close_match


@pytest.fixture
def translator() -> BaselineTranslator:
    return BaselineTranslator()


def _evaluate(
    translator: BaselineTranslator, answer: str, reference: str | None
) -> tuple[bool, float]:
    result = translator.evaluate_translation(
        EvaluationRequest(
            source_content="Hello",
            source_language="en",
            target_language="de",
            user_translation=answer,
            reference_translation=reference,
        )
    )
    return result.correct, result.score


class TestBaselineEvaluation:
    """Tests for heuristic evaluation."""

    def test_exact_match(self, translator: BaselineTranslator) -> None:
        assert _evaluate(translator, "Hallo", "Hallo") == (True, 1.0)

    def test_exact_match_ignores_case_and_whitespace(
        self, translator: BaselineTranslator
    ) -> None:
        assert _evaluate(translator, "  hallo ", "Hallo") == (True, 1.0)

    @pytest.mark.parametrize("reference", [None, ""])
    def test_no_reference_accepts_anything(
        self, translator: BaselineTranslator, reference: str | None
    ) -> None:
        assert _evaluate(translator, "anything", reference) == (True, 1.0)

    def test_substring_is_close(self, translator: BaselineTranslator) -> None:
        assert _evaluate(translator, "Guten Morgen", "Guten Morgen, Anna") == (True, 0.8)

    def test_shared_words_are_close(self, translator: BaselineTranslator) -> None:
        assert _evaluate(translator, "wie geht es", "wie geht es dir heute") == (
            True,
            0.8,
        )

    def test_mismatch(self, translator: BaselineTranslator) -> None:
        correct, score = _evaluate(translator, "Tschüss", "Hallo")
        assert not correct
        assert score == 0.2

    def test_result_carries_reference(self, translator: BaselineTranslator) -> None:
        result = translator.evaluate_translation(
            EvaluationRequest(
                source_content="Hello",
                source_language="en",
                target_language="de",
                user_translation="Tschüss",
                reference_translation="Hallo",
            )
        )
        assert result.suggested_translation == "Hallo"
        assert not result.fallback
        assert result.details.accuracy == "Needs improvement"


class TestCloseMatch:
    """Tests for the lexical heuristic."""

    def test_half_of_shorter_is_enough(self) -> None:
        assert is_close_match("a b c d", "a b x y z")

    def test_below_threshold(self) -> None:
        assert not is_close_match("a b c d", "a x y z")


class TestBaselineGeneration:
    """Tests for phrase table lookup."""

    def test_known_phrase(self, translator: BaselineTranslator) -> None:
        request = GenerationRequest(
            content="hello", source_language="en", target_language="de"
        )
        assert translator.generate_translation(request) == "Hallo"

    def test_lookup_is_case_insensitive(self, translator: BaselineTranslator) -> None:
        request = GenerationRequest(
            content="  Thank You ", source_language="en", target_language="es"
        )
        assert translator.generate_translation(request) == "Gracias"

    def test_sharp_s_key(self, translator: BaselineTranslator) -> None:
        request = GenerationRequest(
            content="Wie heißt du", source_language="de", target_language="en"
        )
        assert translator.generate_translation(request) == "What is your name"

    def test_miss_keeps_original_casing(self, translator: BaselineTranslator) -> None:
        request = GenerationRequest(
            content="zzz unknown", source_language="en", target_language="de"
        )
        assert translator.generate_translation(request) == "[zzz unknown]"

    def test_unknown_language_pair(self, translator: BaselineTranslator) -> None:
        request = GenerationRequest(
            content="Hello", source_language="en", target_language="ja"
        )
        assert translator.generate_translation(request) == "[Hello]"
