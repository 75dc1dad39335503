"""Transcript acquisition with an ordered chain of fallback sources."""
import re
import shlex
import shutil
import asyncio
import aiohttp
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence

from youtube_transcript_api import YouTubeTranscriptApi

from ..core.config import settings
from ..core.exceptions import NoTranscriptAvailableError
from ..models.transcript import VideoTranscript
from ..utils.logging import CorrelatedLogger
from ..utils.validators import URLValidator

# A transcript must be longer than this to count as usable
MIN_TRANSCRIPT_LENGTH = 20

# Replacements applied in order; &amp; first so double-encoded entities collapse
HTML_ENTITIES = [
    ("&amp;", "&"),
    ("&#39;", "'"),
    ("&quot;", '"'),
    ("&lt;", "<"),
    ("&gt;", ">"),
]

CAPTION_ARTIFACTS = [
    re.compile(r'\[♪♪♪\]'),
    re.compile(r'♪'),
    re.compile(r'\[Music\]', re.IGNORECASE),
]


def clean_transcript_text(text: str) -> str:
    """Decode HTML entities, drop music markers and collapse whitespace."""
    for entity, replacement in HTML_ENTITIES:
        text = text.replace(entity, replacement)
    for pattern in CAPTION_ARTIFACTS:
        text = pattern.sub("", text)
    return re.sub(r'\s+', ' ', text).strip()


def is_usable(text: Optional[str]) -> bool:
    return bool(text) and len(text) > MIN_TRANSCRIPT_LENGTH


class TranscriptSource(ABC):
    """One way of obtaining a transcript; returns None when it has nothing."""

    name: str = "unknown"

    @abstractmethod
    async def fetch(self, url: str, video_id: str) -> Optional[str]:
        ...


class LibraryTranscriptSource(TranscriptSource):
    """Captions through the youtube-transcript-api package."""

    name = "youtube_transcript_api"

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout or settings.transcript_api_timeout

    async def fetch(self, url: str, video_id: str) -> Optional[str]:
        # The library issues its requests without a timeout
        segments = await asyncio.wait_for(
            asyncio.to_thread(self._fetch_segments, video_id),
            timeout=self.timeout,
        )
        if not segments:
            return None
        return clean_transcript_text(" ".join(segments))

    @staticmethod
    def _fetch_segments(video_id: str) -> List[str]:
        transcript = YouTubeTranscriptApi().fetch(video_id)
        return [snippet.text for snippet in transcript]


class CommandLineTranscriptSource(TranscriptSource):
    """
    A local transcript command whose stdout is the transcript.

    The command template may reference ``{url}``, ``{video_id}`` and
    ``{script}``. The source is skipped when the executable or the configured
    script does not exist on this machine.
    """

    name = "command_line"

    def __init__(
        self,
        command: Optional[str] = None,
        script: Optional[str] = None,
        timeout: Optional[int] = None
    ):
        self.command = settings.transcript_cli_command if command is None else command
        self.script = settings.transcript_cli_script if script is None else script
        self.timeout = timeout or settings.transcript_cli_timeout

    def build_args(self, url: str, video_id: str) -> Optional[List[str]]:
        """Argument vector for the command, or None if it cannot run here."""
        if not self.command.strip():
            return None
        if "{script}" in self.command and not (self.script and Path(self.script).exists()):
            return None

        args = [
            token.format(url=url, video_id=video_id, script=self.script)
            for token in shlex.split(self.command)
        ]
        if shutil.which(args[0]) is None:
            return None
        return args

    async def fetch(self, url: str, video_id: str) -> Optional[str]:
        args = self.build_args(url, video_id)
        if args is None:
            return None

        process = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, _ = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise

        if process.returncode != 0:
            return None
        return stdout.decode("utf-8", errors="replace").strip()


class WebAPITranscriptSource(TranscriptSource):
    """Base for public transcript HTTP APIs queried with the video URL."""

    endpoint: str = ""

    def __init__(self, timeout: Optional[int] = None):
        self.timeout = timeout or settings.transcript_api_timeout

    def headers(self) -> dict:
        return {}

    @abstractmethod
    def parse(self, data: dict) -> Optional[str]:
        ...

    async def fetch(self, url: str, video_id: str) -> Optional[str]:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(self.endpoint, params={"url": url}, headers=self.headers()) as response:
                if response.status != 200:
                    return None
                data = await response.json(content_type=None)

        if not isinstance(data, dict):
            return None
        return self.parse(data)


class TranscriptIOSource(WebAPITranscriptSource):
    """youtube-transcript.io public API."""

    name = "youtube_transcript_io"
    endpoint = "https://www.youtube-transcript.io/api/transcript"

    def parse(self, data: dict) -> Optional[str]:
        text = data.get("transcript") or data.get("text")
        return text if isinstance(text, str) else None


class SupadataTranscriptSource(WebAPITranscriptSource):
    """Supadata public API; content is a string or a list of segments."""

    name = "supadata"
    endpoint = "https://api.supadata.ai/v1/youtube/transcript"

    def headers(self) -> dict:
        if settings.supadata_api_key:
            return {"x-api-key": settings.supadata_api_key}
        return {}

    def parse(self, data: dict) -> Optional[str]:
        content = data.get("content")
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            return " ".join(
                segment.get("text", "") for segment in content if isinstance(segment, dict)
            )
        return None


def default_sources() -> List[TranscriptSource]:
    """Sources in priority order."""
    return [
        LibraryTranscriptSource(),
        CommandLineTranscriptSource(),
        TranscriptIOSource(),
        SupadataTranscriptSource(),
    ]


class TranscriptService:
    """Resolves a transcript by trying each source in order until one succeeds."""

    def __init__(self, sources: Optional[Sequence[TranscriptSource]] = None):
        self.sources = list(sources) if sources is not None else default_sources()
        self.logger = CorrelatedLogger(__name__)

    async def extract_transcript(
        self,
        url: str,
        request_id: Optional[str] = None
    ) -> VideoTranscript:
        """
        Get the transcript for a YouTube URL.

        Raises:
            InvalidInputError: If no video ID can be extracted from the URL
            NoTranscriptAvailableError: If every source failed
        """
        logger = self.logger.bind(request_id)
        video_id = URLValidator.require_video_id(url)

        for source in self.sources:
            try:
                text = await source.fetch(url, video_id)
            except Exception as e:
                logger.warning(f"Transcript source {source.name} failed for {video_id}: {type(e).__name__}: {e}")
                continue

            if is_usable(text):
                transcript = VideoTranscript(video_id=video_id, full_text=text.strip(), source=source.name)
                logger.info(f"Transcript for {video_id} from {source.name} ({transcript.word_count} words)")
                return transcript

            logger.debug(f"Transcript source {source.name} returned no usable text for {video_id}")

        raise NoTranscriptAvailableError(url)
