"""Data models for the ThumbForge service."""
from .analysis import ThumbnailConcept, VideoAnalysis, VideoMetadata
from .face import FaceAnalysis
from .thumbnail import GeneratedImage, GeneratedThumbnail
from .requests import AnalyzeRequest, GenerateRequest, FaceAnalyzeRequest, TextSuggestionsRequest
from .responses import (
    ErrorResponse, AnalyzeResponse, FaceAnalyzeResponse, ThumbnailPayload,
    GenerateResponse, TextSuggestionsResponse, DependencyStatus, HealthData
)

__all__ = [
    "ThumbnailConcept", "VideoAnalysis", "VideoMetadata",
    "FaceAnalysis",
    "GeneratedImage", "GeneratedThumbnail",
    "AnalyzeRequest", "GenerateRequest", "FaceAnalyzeRequest", "TextSuggestionsRequest",
    "ErrorResponse", "AnalyzeResponse", "FaceAnalyzeResponse", "ThumbnailPayload",
    "GenerateResponse", "TextSuggestionsResponse", "DependencyStatus", "HealthData"
]
