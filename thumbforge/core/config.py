"""
Configuration management for the ThumbForge service.
Centralizes environment variable handling and application settings.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class ModelConfig:
    """Hosted model identifiers."""

    # Text analysis
    ANALYSIS = "anthropic/claude-3.5-sonnet"

    # Image generation
    IMAGE_FLASH = "google/gemini-2.5-flash-image-preview"
    IMAGE_PRO = "google/gemini-3-pro-image-preview"
    IMAGE_FLUX = "black-forest-labs/flux-pro-1.1"

    IMAGE_MODELS = [IMAGE_FLASH, IMAGE_PRO, IMAGE_FLUX]


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        # API Configuration
        self.api_title = "ThumbForge"
        self.api_description = "Generates YouTube thumbnails from a video URL or a description using hosted AI models"
        self.api_version = "1.0.0"
        self.debug_mode = os.getenv("DEBUG_MODE", "false").lower() == "true"
        self.allowed_origins = self._parse_list(os.getenv("ALLOWED_ORIGINS", "*"))

        # Hosted provider (OpenRouter)
        self.openrouter_api_key = os.getenv("OPENROUTER_API_KEY", "")
        self.openrouter_base_url = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")
        self.app_referer = os.getenv("APP_REFERER", "https://github.com/empowerment-ai/thumbforge")
        self.app_title = os.getenv("APP_TITLE", "ThumbForge")
        self.provider_timeout = int(os.getenv("PROVIDER_TIMEOUT", "30"))  # seconds

        # Models
        self.analysis_model = os.getenv("ANALYSIS_MODEL", ModelConfig.ANALYSIS)
        self.image_model = os.getenv("IMAGE_MODEL", ModelConfig.IMAGE_FLASH)

        # Transcript sources
        self.transcript_cli_script = os.getenv("TRANSCRIPT_CLI_SCRIPT", "")
        self.transcript_cli_command = os.getenv(
            "TRANSCRIPT_CLI_COMMAND", "node {script} transcript --url {url}"
        )
        self.transcript_cli_timeout = int(os.getenv("TRANSCRIPT_CLI_TIMEOUT", "30"))
        self.transcript_api_timeout = int(os.getenv("TRANSCRIPT_API_TIMEOUT", "15"))
        self.supadata_api_key = os.getenv("SUPADATA_API_KEY", "")
        self.metadata_timeout = int(os.getenv("METADATA_TIMEOUT", "10"))

        # Limits
        self.max_face_images = int(os.getenv("MAX_FACE_IMAGES", "5"))
        self.transcript_prompt_chars = int(os.getenv("TRANSCRIPT_PROMPT_CHARS", "3000"))

        # Logging
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.log_format = os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

        # Prompt templates
        self.default_prompt_language = os.getenv("DEFAULT_PROMPT_LANGUAGE", "en")

    @staticmethod
    def _parse_list(value: str) -> List[str]:
        return [item.strip() for item in value.split(",") if item.strip()]

    @property
    def provider_configured(self) -> bool:
        return bool(self.openrouter_api_key)


class ThumbnailConfig:
    """Fixed output geometry for generated thumbnails."""

    WIDTH = 1280
    HEIGHT = 720
    DEFAULT_COUNT = 4


# Create global settings instance
settings = Settings()
