"""Health check endpoints."""
from datetime import datetime, timezone
from fastapi import APIRouter

from thumbforge.core.config import settings, ModelConfig
from thumbforge.models.responses import DependencyStatus, HealthData
from thumbforge.utils.response_helpers import ResponseHelper

router = APIRouter(tags=["health"])

service_start_time = datetime.now(timezone.utc)


@router.get("/")
async def root():
    """Root endpoint."""
    return {"message": f"{settings.api_title} is running"}


@router.get("/health")
async def health_check():
    """
    Health check endpoint with provider configuration status
    """
    now = datetime.now(timezone.utc)

    health_data = HealthData(
        status="healthy" if settings.provider_configured else "degraded",
        timestamp=now.isoformat(),
        version=settings.api_version,
        uptime_seconds=int((now - service_start_time).total_seconds()),
        dependencies=DependencyStatus(
            provider="configured" if settings.provider_configured else "not_configured",
            analysis_model=settings.analysis_model,
            image_model=settings.image_model,
            image_models=ModelConfig.IMAGE_MODELS,
        )
    )

    return ResponseHelper.create_success_response(health_data)
