"""Translation evaluation and generation routes."""

from fastapi import APIRouter, Depends

from app.schemas.api import GenerationResponse
from app.services.translation import get_translation_service
from lingocards_core.schemas import (
    EvaluationRequest,
    EvaluationResult,
    GenerationRequest,
)
from lingocards_core.translation import TranslationService

router = APIRouter()


@router.post("/translation/evaluate", response_model=EvaluationResult)
async def evaluate_translation(
    payload: EvaluationRequest,
    translation_service: TranslationService = Depends(get_translation_service),
) -> EvaluationResult:
    """Evaluate a translation with the configured providers."""
    return await translation_service.evaluate_translation(payload)


@router.post("/translation/generate", response_model=GenerationResponse)
async def generate_translation(
    payload: GenerationRequest,
    translation_service: TranslationService = Depends(get_translation_service),
) -> GenerationResponse:
    """Translate content with the configured providers."""
    translation = await translation_service.generate_translation(payload)
    return GenerationResponse(translation=translation)
