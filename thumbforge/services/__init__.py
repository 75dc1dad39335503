"""Service layer modules for the ThumbForge service."""
from .provider_client import ProviderClient
from .transcript_service import TranscriptService
from .metadata_service import MetadataService
from .content_analyzer import ContentAnalyzer
from .face_analyzer import FaceAnalyzer
from .thumbnail_generator import ThumbnailGenerator
from .text_suggester import TextSuggester

__all__ = [
    "ProviderClient", "TranscriptService", "MetadataService", "ContentAnalyzer",
    "FaceAnalyzer", "ThumbnailGenerator", "TextSuggester"
]
