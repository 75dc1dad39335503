"""Utility modules for the ThumbForge service."""
from .validators import URLValidator, ImageValidator, ContentValidator
from .response_helpers import ResponseHelper
from .logging import LoggerSetup, CorrelatedLogger

__all__ = [
    "URLValidator", "ImageValidator", "ContentValidator", "ResponseHelper",
    "LoggerSetup", "CorrelatedLogger"
]
