"""Custom exceptions for the ThumbForge service."""
from typing import Optional


class ThumbForgeBaseException(Exception):
    """Base exception for the thumbnail service."""

    def __init__(self, message: str, error_code: str, details: Optional[dict] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidInputError(ThumbForgeBaseException):
    """Exception raised for bad or missing client input."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, "INVALID_INPUT", details)


class NoTranscriptAvailableError(ThumbForgeBaseException):
    """Exception raised when every transcript source failed."""

    def __init__(self, url: str, reason: str = "The video may not have captions available."):
        message = f"Could not extract transcript. {reason}"
        details = {"url": url, "reason": reason}
        super().__init__(message, "NO_TRANSCRIPT_AVAILABLE", details)


class NoContentAvailableError(ThumbForgeBaseException):
    """Exception raised when neither a transcript nor a title could be found."""

    def __init__(self, url: str):
        message = (
            "Could not extract any information from this video. Please provide a video "
            "with captions or try describing your video instead."
        )
        super().__init__(message, "NO_CONTENT_AVAILABLE", {"url": url})


class AnalysisParseError(ThumbForgeBaseException):
    """Exception raised when model output cannot be parsed."""

    def __init__(self, what: str = "video analysis", reason: Optional[str] = None):
        message = f"Failed to parse {what}. Please try again."
        details = {"reason": reason} if reason else None
        super().__init__(message, "ANALYSIS_PARSE_ERROR", details)


class NoImageReturnedError(ThumbForgeBaseException):
    """Exception raised when an image response carries no image payload."""

    def __init__(self, model: str):
        message = "No image returned from the image provider"
        super().__init__(message, "NO_IMAGE_RETURNED", {"model": model})


class NoThumbnailsGeneratedError(ThumbForgeBaseException):
    """Exception raised when every thumbnail in a batch failed."""

    def __init__(self, attempted: int):
        message = "Failed to generate any thumbnails. Please try again."
        super().__init__(message, "NO_THUMBNAILS_GENERATED", {"attempted": attempted})


class ConfigurationError(ThumbForgeBaseException):
    """Exception raised for configuration errors."""

    def __init__(self, setting: str, reason: str):
        message = f"Configuration error for {setting}: {reason}"
        details = {"setting": setting, "reason": reason}
        super().__init__(message, "CONFIGURATION_ERROR", details)


class ProviderError(ThumbForgeBaseException):
    """Exception raised for a failed call to the hosted model provider."""

    def __init__(self, status_code: Optional[int], body: str, operation: str = "completion"):
        self.status_code = status_code
        self.body = body
        if status_code is None:
            message = f"Provider {operation} request failed: {body}"
        else:
            message = f"Provider {operation} API error ({status_code}): {body}"
        details = {"status_code": status_code, "reason": body}
        super().__init__(message, "PROVIDER_ERROR", details)
