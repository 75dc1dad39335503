"""Logging configuration and utilities."""
import logging
import sys
from typing import Optional
from ..core.config import settings


class LoggerSetup:
    """Centralized logging configuration."""

    @staticmethod
    def setup_logging(
        level: Optional[str] = None,
        format_string: Optional[str] = None
    ) -> None:
        """Setup application logging."""
        log_level = level or settings.log_level
        log_format = format_string or settings.log_format

        # Configure root logger
        logging.basicConfig(
            level=getattr(logging, log_level.upper(), logging.INFO),
            format=log_format,
            handlers=[
                logging.StreamHandler(sys.stdout)
            ]
        )

        # Set specific logger levels
        logging.getLogger("uvicorn").setLevel(logging.INFO)
        logging.getLogger("fastapi").setLevel(logging.INFO)
        logging.getLogger("openai").setLevel(logging.WARNING)
        logging.getLogger("httpx").setLevel(logging.WARNING)  # openai transport
        logging.getLogger("youtube_transcript_api").setLevel(logging.WARNING)


class CorrelatedLogger:
    """Logger with correlation ID support for request tracking."""

    def __init__(self, name: str, request_id: Optional[str] = None):
        self.logger = logging.getLogger(name)
        self.request_id = request_id

    def bind(self, request_id: Optional[str]) -> "CorrelatedLogger":
        """Return a logger for the same name tagged with ``request_id``."""
        return CorrelatedLogger(self.logger.name, request_id)

    def _format_message(self, message: str) -> str:
        """Format message with request ID if available."""
        if self.request_id:
            return f"[{self.request_id}] {message}"
        return message

    def debug(self, message: str, **kwargs) -> None:
        self.logger.debug(self._format_message(message), **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self.logger.info(self._format_message(message), **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self.logger.warning(self._format_message(message), **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self.logger.error(self._format_message(message), **kwargs)

    def exception(self, message: str, **kwargs) -> None:
        self.logger.exception(self._format_message(message), **kwargs)
