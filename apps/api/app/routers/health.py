from fastapi import APIRouter, Depends

from app.services.translation import get_translation_service
from lingocards_core.translation import TranslationService

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/health/ready")
async def readiness_check(
    translation_service: TranslationService = Depends(get_translation_service),
) -> dict[str, object]:
    """Readiness check - reports which translation providers are configured."""
    registry = translation_service.registry
    return {
        "status": "ready",
        "primary_provider": registry.primary,
        "providers": registry.names,
        "baseline_only": not registry.has_providers,
    }
