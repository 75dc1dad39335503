"""Response models for the ThumbForge service."""
from typing import Any, Dict, List, Optional

from .analysis import CamelModel, ThumbnailConcept, VideoAnalysis
from .face import FaceAnalysis
from .thumbnail import GeneratedThumbnail


class ErrorResponse(CamelModel):
    """Standard error response."""
    error: str
    code: str
    request_id: str
    details: Optional[Dict[str, Any]] = None


class AnalyzeResponse(CamelModel):
    analysis: VideoAnalysis


class FaceAnalyzeResponse(CamelModel):
    analysis: FaceAnalysis


class ThumbnailPayload(CamelModel):
    """Thumbnail as delivered to the front end."""
    id: str
    image_data_url: str
    concept: ThumbnailConcept
    text_overlay: str
    width: int
    height: int

    @classmethod
    def from_thumbnail(cls, thumbnail: GeneratedThumbnail) -> "ThumbnailPayload":
        return cls(
            id=thumbnail.id,
            image_data_url=thumbnail.image_data_url,
            concept=thumbnail.concept,
            text_overlay=thumbnail.text_overlay,
            width=thumbnail.width,
            height=thumbnail.height,
        )


class GenerateResponse(CamelModel):
    thumbnails: List[ThumbnailPayload]


class TextSuggestionsResponse(CamelModel):
    suggestions: List[str]


class DependencyStatus(CamelModel):
    """Service dependency status."""
    provider: str
    analysis_model: str
    image_model: str
    image_models: List[str]


class HealthData(CamelModel):
    """Complete health check response."""
    status: str
    timestamp: str
    version: str
    uptime_seconds: int
    dependencies: DependencyStatus
