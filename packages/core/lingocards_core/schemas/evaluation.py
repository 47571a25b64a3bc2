"""Translation request and evaluation schemas."""

from pydantic import BaseModel, Field


class EvaluationRequest(BaseModel):
    """A user translation to be judged."""

    source_content: str
    source_language: str
    target_language: str
    user_translation: str
    reference_translation: str | None = None


class GenerationRequest(BaseModel):
    """Content to be translated."""

    content: str
    source_language: str
    target_language: str


class EvaluationDetails(BaseModel):
    """Per-criterion feedback."""

    grammar: str = "No grammar feedback available"
    vocabulary: str = "No vocabulary feedback available"
    accuracy: str = "No accuracy feedback available"


class EvaluationResult(BaseModel):
    """Structured verdict on a translation."""

    correct: bool
    score: float = Field(..., ge=0.0, le=1.0)
    feedback: str
    suggested_translation: str
    details: EvaluationDetails = Field(default_factory=EvaluationDetails)
    fallback: bool = Field(False, description="Produced by a degraded method")
    error: bool = Field(False, description="A provider error was absorbed")
    warning: str | None = Field(None, description="User-facing provider notice")
