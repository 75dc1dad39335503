"""ThumbForge: YouTube thumbnail generation from videos and descriptions."""

__version__ = "1.0.0"
