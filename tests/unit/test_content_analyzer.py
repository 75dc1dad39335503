"""Unit tests for ContentAnalyzer."""
import json
import pytest
from unittest.mock import AsyncMock, Mock

from thumbforge.core.exceptions import (
    AnalysisParseError, InvalidInputError, NoContentAvailableError, NoTranscriptAvailableError
)
from thumbforge.models.analysis import VideoMetadata
from thumbforge.models.transcript import VideoTranscript
from thumbforge.services.content_analyzer import ContentAnalyzer

VIDEO_URL = "https://youtu.be/dQw4w9WgXcQ"

ANALYSIS_JSON = {
    "title": "Never Gonna Give You Up",
    "topic": "80s pop",
    "hook": "The most famous music video on the internet",
    "mood": "funny",
    "keyMoments": ["intro", "chorus", "dance"],
    "visualElements": ["trench coat", "dance moves"],
    "textSuggestions": ["RICKROLLED", "NEVER GONNA"],
    "colorPalette": ["#FF0000", "#000000", "#FFFFFF"],
    "targetEmotion": "nostalgia",
    "thumbnailConcepts": [
        {
            "description": f"Concept {i}",
            "textOverlay": "GOT YOU",
            "mood": "funny",
            "visualStyle": "bold",
            "faceExpression": "smug",
        }
        for i in range(4)
    ],
}


class TestContentAnalyzer:
    """Test video and description analysis."""

    @pytest.fixture
    def provider(self):
        provider = Mock()
        provider.text_completion = AsyncMock(return_value=json.dumps(ANALYSIS_JSON))
        return provider

    @pytest.fixture
    def transcript_service(self):
        service = Mock()
        service.extract_transcript = AsyncMock(return_value=VideoTranscript(
            video_id="dQw4w9WgXcQ", full_text="We're no strangers to love " * 10, source="fake"
        ))
        return service

    @pytest.fixture
    def metadata_service(self):
        service = Mock()
        service.get_video_metadata = AsyncMock(
            return_value=VideoMetadata(title="Never Gonna Give You Up", author="Rick Astley")
        )
        return service

    @pytest.fixture
    def analyzer(self, provider, transcript_service, metadata_service):
        return ContentAnalyzer(
            provider=provider,
            transcript_service=transcript_service,
            metadata_service=metadata_service,
        )

    @pytest.mark.asyncio
    async def test_analyze_video(self, analyzer, provider):
        analysis = await analyzer.analyze_video(VIDEO_URL, "req_test")

        assert analysis.title == "Never Gonna Give You Up"
        assert len(analysis.thumbnail_concepts) == 4
        assert analysis.thumbnail_concepts[0].face_expression == "smug"

        prompt = provider.text_completion.call_args.args[0][0]["content"]
        assert "VIDEO TITLE: Never Gonna Give You Up" in prompt
        assert "CHANNEL: Rick Astley" in prompt
        assert "We're no strangers to love" in prompt
        assert provider.text_completion.call_args.kwargs["temperature"] == 0.8
        assert provider.text_completion.call_args.kwargs["max_tokens"] == 2048

    @pytest.mark.asyncio
    async def test_transcript_truncated_in_prompt(self, analyzer, provider, transcript_service):
        transcript_service.extract_transcript.return_value = VideoTranscript(
            video_id="dQw4w9WgXcQ", full_text="a" * 2999 + "bcdef", source="fake"
        )

        await analyzer.analyze_video(VIDEO_URL)

        prompt = provider.text_completion.call_args.args[0][0]["content"]
        assert "a" * 2999 + "b" in prompt
        assert "bc" not in prompt

    @pytest.mark.asyncio
    async def test_title_only_is_enough(self, analyzer, provider, transcript_service):
        transcript_service.extract_transcript.side_effect = NoTranscriptAvailableError(VIDEO_URL)

        analysis = await analyzer.analyze_video(VIDEO_URL)

        assert analysis.topic == "80s pop"
        provider.text_completion.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_transcript_only_is_enough(self, analyzer, provider, metadata_service):
        metadata_service.get_video_metadata.return_value = VideoMetadata()

        await analyzer.analyze_video(VIDEO_URL)

        prompt = provider.text_completion.call_args.args[0][0]["content"]
        assert "VIDEO TITLE: Unknown" in prompt

    @pytest.mark.asyncio
    async def test_no_transcript_and_no_title(self, analyzer, provider, transcript_service, metadata_service):
        transcript_service.extract_transcript.side_effect = NoTranscriptAvailableError(VIDEO_URL)
        metadata_service.get_video_metadata.return_value = VideoMetadata()

        with pytest.raises(NoContentAvailableError):
            await analyzer.analyze_video(VIDEO_URL)

        provider.text_completion.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_url(self, analyzer, provider):
        with pytest.raises(InvalidInputError):
            await analyzer.analyze_video("https://example.com/not-youtube")

        provider.text_completion.assert_not_called()

    @pytest.mark.asyncio
    async def test_fenced_json_is_accepted(self, analyzer, provider):
        provider.text_completion.return_value = f"```json\n{json.dumps(ANALYSIS_JSON)}\n```"

        analysis = await analyzer.analyze_description("A video about 80s pop music")

        assert analysis.hook == "The most famous music video on the internet"

    @pytest.mark.asyncio
    async def test_malformed_json_is_not_retried(self, analyzer, provider):
        provider.text_completion.return_value = "Here are some great ideas for your thumbnail!"

        with pytest.raises(AnalysisParseError) as exc_info:
            await analyzer.analyze_description("A video about 80s pop music")

        assert exc_info.value.message == "Failed to parse analysis. Please try again."
        provider.text_completion.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_json_array_is_rejected(self, analyzer, provider):
        provider.text_completion.return_value = "[1, 2, 3]"

        with pytest.raises(AnalysisParseError):
            await analyzer.analyze_description("A video about 80s pop music")

    @pytest.mark.asyncio
    async def test_analyze_description_prompt(self, analyzer, provider):
        await analyzer.analyze_description("Speedrunning Zelda in under an hour")

        prompt = provider.text_completion.call_args.args[0][0]["content"]
        assert "VIDEO DESCRIPTION: Speedrunning Zelda in under an hour" in prompt
        assert prompt.startswith("You are a YouTube thumbnail expert.")

    @pytest.mark.asyncio
    async def test_blank_description(self, analyzer):
        with pytest.raises(InvalidInputError):
            await analyzer.analyze_description("   ")

    def test_parse_analysis_tolerates_concept_count(self, analyzer):
        data = dict(ANALYSIS_JSON, thumbnailConcepts=ANALYSIS_JSON["thumbnailConcepts"][:2])

        analysis = analyzer.parse_analysis(json.dumps(data))

        assert len(analysis.thumbnail_concepts) == 2
