"""Video and description analysis producing thumbnail concepts."""
import asyncio
import json
from typing import Optional

from pydantic import ValidationError

from ..core.config import settings
from ..core.exceptions import AnalysisParseError, InvalidInputError, NoContentAvailableError
from ..config.templates import get_template_engine
from ..models.analysis import VideoAnalysis, VideoMetadata
from ..utils.logging import CorrelatedLogger
from ..utils.validators import ContentValidator, URLValidator
from .metadata_service import MetadataService
from .provider_client import ProviderClient
from .transcript_service import TranscriptService


class ContentAnalyzer:
    """Service for turning a video or a description into a VideoAnalysis."""

    TEMPERATURE = 0.8
    MAX_TOKENS = 2048

    def __init__(
        self,
        provider: Optional[ProviderClient] = None,
        transcript_service: Optional[TranscriptService] = None,
        metadata_service: Optional[MetadataService] = None
    ):
        self.provider = provider or ProviderClient()
        self.transcript_service = transcript_service or TranscriptService()
        self.metadata_service = metadata_service or MetadataService()
        self.template_engine = get_template_engine()
        self.logger = CorrelatedLogger(__name__)

    async def _transcript_or_empty(self, url: str, request_id: Optional[str]) -> str:
        """Transcript text, or an empty string if it cannot be obtained."""
        try:
            transcript = await self.transcript_service.extract_transcript(url, request_id)
        except Exception as e:
            self.logger.bind(request_id).warning(f"No transcript for {url}: {e}")
            return ""
        return transcript.full_text

    async def analyze_video(self, url: str, request_id: Optional[str] = None) -> VideoAnalysis:
        """
        Analyze a YouTube video from its transcript and metadata.

        Raises:
            InvalidInputError: If the URL is not a recognizable YouTube URL
            NoContentAvailableError: If neither a transcript nor a title was found
            AnalysisParseError: If the model response is not a valid analysis
        """
        logger = self.logger.bind(request_id)
        URLValidator.require_video_id(url)

        transcript, metadata = await asyncio.gather(
            self._transcript_or_empty(url, request_id),
            self.metadata_service.get_video_metadata(url, request_id),
        )
        metadata = metadata or VideoMetadata()

        if not transcript and not metadata.title:
            raise NoContentAvailableError(url)

        logger.info(
            f"Analyzing video: title={metadata.title!r} transcript_chars={len(transcript)}"
        )

        prompt = self.template_engine.render_prompt(
            "video_analysis",
            title=metadata.title,
            author=metadata.author,
            transcript=transcript[:settings.transcript_prompt_chars],
            transcript_chars=settings.transcript_prompt_chars,
        )
        return await self._complete_analysis(prompt, "video analysis", request_id)

    async def analyze_description(self, description: str, request_id: Optional[str] = None) -> VideoAnalysis:
        """Analyze a free-text description of a video."""
        if not description or not description.strip():
            raise InvalidInputError("Please provide a YouTube URL or video description")

        self.logger.bind(request_id).info(f"Analyzing description ({len(description)} chars)")

        prompt = self.template_engine.render_prompt("description_analysis", description=description)
        return await self._complete_analysis(prompt, "analysis", request_id)

    async def _complete_analysis(self, prompt: str, what: str, request_id: Optional[str]) -> VideoAnalysis:
        result = await self.provider.text_completion(
            [{"role": "user", "content": prompt}],
            model=settings.analysis_model,
            temperature=self.TEMPERATURE,
            max_tokens=self.MAX_TOKENS,
            request_id=request_id,
        )
        return self.parse_analysis(result, what, request_id)

    def parse_analysis(self, content: str, what: str = "video analysis", request_id: Optional[str] = None) -> VideoAnalysis:
        """Parse a model response into a VideoAnalysis or raise AnalysisParseError."""
        try:
            data = ContentValidator.parse_json(content)
            if not isinstance(data, dict):
                raise AnalysisParseError(what, "response is not a JSON object")
            analysis = VideoAnalysis.model_validate(data)
        except json.JSONDecodeError as e:
            self.logger.bind(request_id).warning(f"Invalid JSON from model: {e}; content: {content[:200]}...")
            raise AnalysisParseError(what, str(e))
        except ValidationError as e:
            self.logger.bind(request_id).warning(f"Analysis does not match schema: {e.error_count()} errors")
            raise AnalysisParseError(what, str(e))

        if len(analysis.thumbnail_concepts) != 4:
            self.logger.bind(request_id).warning(
                f"Model returned {len(analysis.thumbnail_concepts)} thumbnail concepts instead of 4"
            )
        return analysis
