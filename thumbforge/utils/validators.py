"""URL, image and model-output validation utilities."""
import json
import re
from typing import Any, List, Optional

from thumbforge.core.exceptions import InvalidInputError


class URLValidator:
    """YouTube URL utilities."""

    VIDEO_ID_PATTERNS = [
        re.compile(r'(?:youtube\.com/watch\?v=)([a-zA-Z0-9_-]{11})'),
        re.compile(r'(?:youtu\.be/)([a-zA-Z0-9_-]{11})'),
        re.compile(r'(?:youtube\.com/embed/)([a-zA-Z0-9_-]{11})'),
        re.compile(r'(?:youtube\.com/shorts/)([a-zA-Z0-9_-]{11})'),
    ]

    @staticmethod
    def extract_video_id(url: str) -> Optional[str]:
        """Extract the 11-character video ID, or None if the URL shape is unknown."""
        if not url:
            return None

        for pattern in URLValidator.VIDEO_ID_PATTERNS:
            match = pattern.search(url)
            if match:
                return match.group(1)
        return None

    @staticmethod
    def require_video_id(url: str) -> str:
        """Extract the video ID or raise InvalidInputError."""
        video_id = URLValidator.extract_video_id(url)
        if not video_id:
            raise InvalidInputError("Invalid YouTube URL", {"url": url})
        return video_id


class ImageValidator:
    """Base64 image helpers."""

    DATA_URL_PREFIX = re.compile(r'^data:image/[\w.+-]+;base64,')

    @staticmethod
    def to_data_url(image_base64: str, mime_type: str = "image/jpeg") -> str:
        """Wrap raw base64 in a data URL; data URLs pass through unchanged."""
        if image_base64.startswith("data:"):
            return image_base64
        return f"data:{mime_type};base64,{image_base64}"

    @staticmethod
    def strip_data_url(url: str) -> str:
        """Remove a ``data:image/...;base64,`` prefix if present."""
        return ImageValidator.DATA_URL_PREFIX.sub("", url)

    @staticmethod
    def validate_face_images(images: Optional[List[str]], max_images: int) -> List[str]:
        """Check the reference photo count is between 1 and ``max_images``."""
        if not images:
            raise InvalidInputError("Please provide at least one face image (base64)")
        if len(images) > max_images:
            raise InvalidInputError(
                f"Maximum {max_images} reference photos allowed",
                {"count": len(images), "max": max_images}
            )
        return images


class ContentValidator:
    """Helpers for JSON returned by text-completion models."""

    FENCE_PATTERN = re.compile(r'```(?:json)?\s*')

    @staticmethod
    def strip_code_fences(content: str) -> str:
        """Remove markdown code fences around a model response."""
        return ContentValidator.FENCE_PATTERN.sub("", content).strip()

    @staticmethod
    def parse_json(content: str) -> Any:
        """Strip code fences and decode JSON. Raises json.JSONDecodeError."""
        return json.loads(ContentValidator.strip_code_fences(content))
