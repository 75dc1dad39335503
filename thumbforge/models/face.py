"""Face analysis models."""
from typing import List
from pydantic import Field

from .analysis import CamelModel


class FaceAnalysis(CamelModel):
    """Likeness description derived from reference photos."""
    description: str = Field(..., description="Physical description for image generation prompts")
    key_features: List[str] = Field(default_factory=list, description="Most distinctive features, most important first")
    age_range: str = Field("unknown", description="Estimated age range")
    gender_presentation: str = Field("unknown", description="Gender presentation")
    photo_count: int = Field(..., ge=0, description="Number of reference photos analyzed")
