"""Transcript-related data models."""
from pydantic import BaseModel, Field


class VideoTranscript(BaseModel):
    """Plain-text transcript and the source that produced it."""
    video_id: str = Field(..., description="11-character YouTube video ID")
    full_text: str = Field(..., description="Complete transcript text")
    source: str = Field(..., description="Name of the transcript source that succeeded")

    @property
    def word_count(self) -> int:
        return len(self.full_text.split())
