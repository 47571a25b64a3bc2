"""Practice sessions: card selection, state machine and answer evaluation."""

from lingocards_core.session.engine import SessionEngine
from lingocards_core.session.evaluator import AnswerEvaluation, SessionEvaluator
from lingocards_core.session.samples import SAMPLE_CARDS, get_sample_card
from lingocards_core.session.selector import CardSelector
from lingocards_core.session.service import SessionService

__all__ = [
    "AnswerEvaluation",
    "CardSelector",
    "SAMPLE_CARDS",
    "SessionEngine",
    "SessionEvaluator",
    "SessionService",
    "get_sample_card",
]
