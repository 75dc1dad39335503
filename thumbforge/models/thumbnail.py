"""Generated thumbnail models."""
from typing import Optional
from pydantic import BaseModel, Field

from .analysis import CamelModel, ThumbnailConcept
from ..core.config import ThumbnailConfig


class GeneratedImage(BaseModel):
    """Normalized image payload returned by the image provider."""
    image_base64: str
    revised_prompt: Optional[str] = None


class GeneratedThumbnail(CamelModel):
    """One generated thumbnail and the concept it came from."""
    id: str
    image_base64: str = Field(..., exclude=True)
    concept: ThumbnailConcept
    text_overlay: str = ""
    width: int = ThumbnailConfig.WIDTH
    height: int = ThumbnailConfig.HEIGHT

    @property
    def image_data_url(self) -> str:
        return f"data:image/png;base64,{self.image_base64}"
