"""Video analysis and thumbnail concept models."""
from typing import List
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exchanged with the front end in camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ThumbnailConcept(CamelModel):
    """Structured description of one candidate thumbnail."""
    description: str = Field("", description="Scene and composition of the thumbnail")
    text_overlay: str = Field("", description="Text to show on the thumbnail (1-4 words)")
    mood: str = Field("", description="Mood of this concept")
    visual_style: str = Field("", description="Style such as cinematic, cartoon, minimalist, bold")
    face_expression: str = Field("", description="Expression the person should have")


class VideoAnalysis(CamelModel):
    """Content analysis of a video or description, with thumbnail concepts."""
    title: str = ""
    topic: str = ""
    hook: str = ""
    mood: str = ""
    key_moments: List[str] = Field(default_factory=list)
    visual_elements: List[str] = Field(default_factory=list)
    text_suggestions: List[str] = Field(default_factory=list)
    color_palette: List[str] = Field(default_factory=list, description="Hex colors matching the mood")
    target_emotion: str = ""
    thumbnail_concepts: List[ThumbnailConcept] = Field(default_factory=list)


class VideoMetadata(CamelModel):
    """Public metadata for a video; empty strings when unavailable."""
    title: str = ""
    author: str = ""
