"""Dependency injection setup for FastAPI."""
from functools import lru_cache

from thumbforge.services import (
    ProviderClient, ContentAnalyzer, FaceAnalyzer, ThumbnailGenerator, TextSuggester
)


# Service instances cache
@lru_cache()
def get_provider_client() -> ProviderClient:
    """Get ProviderClient instance."""
    return ProviderClient()


@lru_cache()
def get_content_analyzer() -> ContentAnalyzer:
    """Get ContentAnalyzer service instance."""
    return ContentAnalyzer(provider=get_provider_client())


@lru_cache()
def get_face_analyzer() -> FaceAnalyzer:
    """Get FaceAnalyzer service instance."""
    return FaceAnalyzer(provider=get_provider_client())


@lru_cache()
def get_thumbnail_generator() -> ThumbnailGenerator:
    """Get ThumbnailGenerator service instance."""
    return ThumbnailGenerator(provider=get_provider_client())


@lru_cache()
def get_text_suggester() -> TextSuggester:
    """Get TextSuggester service instance."""
    return TextSuggester(provider=get_provider_client())
