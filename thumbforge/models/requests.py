"""Request models for the ThumbForge service."""
from typing import List, Optional
from pydantic import Field

from .analysis import CamelModel, VideoAnalysis


class AnalyzeRequest(CamelModel):
    """Request model for video or description analysis."""
    youtube_url: Optional[str] = None
    description: Optional[str] = None


class GenerateRequest(CamelModel):
    """Request model for thumbnail generation."""
    analysis: Optional[VideoAnalysis] = None
    custom_prompt: Optional[str] = None
    face_image_base64: Optional[str] = None
    face_images: Optional[List[str]] = None
    face_description: Optional[str] = None
    model: Optional[str] = None
    count: Optional[int] = Field(None, ge=0)

    @property
    def primary_face_image(self) -> Optional[str]:
        """Single reference image; the legacy single-image field wins."""
        if self.face_image_base64:
            return self.face_image_base64
        if self.face_images:
            return self.face_images[0]
        return None


class FaceAnalyzeRequest(CamelModel):
    """Request model for face analysis."""
    face_images: Optional[List[str]] = None


class TextSuggestionsRequest(CamelModel):
    """Request model for thumbnail text suggestions."""
    topic: Optional[str] = None
    mood: Optional[str] = None
    current_text: Optional[str] = None
