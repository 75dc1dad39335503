"""Video metadata lookup through the public YouTube oEmbed endpoint."""
import asyncio
import aiohttp
from typing import Optional

from ..core.config import settings
from ..models.analysis import VideoMetadata
from ..utils.logging import CorrelatedLogger


class MetadataService:
    """Fetches title and author for a video URL. Never raises."""

    OEMBED_URL = "https://www.youtube.com/oembed"

    def __init__(self, timeout: Optional[int] = None):
        self.timeout = timeout or settings.metadata_timeout
        self.logger = CorrelatedLogger(__name__)

    async def get_video_metadata(self, url: str, request_id: Optional[str] = None) -> VideoMetadata:
        logger = self.logger.bind(request_id)
        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(self.OEMBED_URL, params={"url": url, "format": "json"}) as response:
                    if response.status != 200:
                        logger.warning(f"oEmbed lookup returned HTTP {response.status} for {url}")
                        return VideoMetadata()
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning(f"oEmbed lookup failed for {url}: {type(e).__name__}: {e}")
            return VideoMetadata()

        if not isinstance(data, dict):
            return VideoMetadata()

        return VideoMetadata(
            title=str(data.get("title") or ""),
            author=str(data.get("author_name") or ""),
        )
