"""Core application modules."""
from .config import settings, ModelConfig, ThumbnailConfig

__all__ = ["settings", "ModelConfig", "ThumbnailConfig"]
