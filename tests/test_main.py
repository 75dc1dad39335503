"""API tests for the ThumbForge application."""
import json
import pytest
from unittest.mock import AsyncMock, Mock, patch
from fastapi.testclient import TestClient

from thumbforge.main import app
from thumbforge.core.config import settings
from thumbforge.core.dependencies import (
    get_content_analyzer, get_face_analyzer, get_thumbnail_generator, get_text_suggester
)
from thumbforge.core.exceptions import ConfigurationError, NoTranscriptAvailableError, ProviderError
from thumbforge.models.analysis import VideoMetadata
from thumbforge.models.thumbnail import GeneratedImage
from thumbforge.services import ContentAnalyzer, FaceAnalyzer, ThumbnailGenerator, TextSuggester

ANALYSIS = {
    "title": "Homemade Pizza",
    "topic": "cooking",
    "hook": "Restaurant pizza at home",
    "mood": "exciting",
    "keyMoments": ["dough", "oven"],
    "visualElements": ["pizza", "flames"],
    "textSuggestions": ["BETTER THAN TAKEOUT"],
    "colorPalette": ["#E63946", "#F1FAEE"],
    "targetEmotion": "hunger",
    "thumbnailConcepts": [
        {
            "description": f"Pizza scene {i}",
            "textOverlay": "10 MIN PIZZA",
            "mood": "exciting",
            "visualStyle": "bold",
            "faceExpression": "amazed",
        }
        for i in range(4)
    ],
}


@pytest.fixture
def provider():
    """Provider double shared by the services under test."""
    provider = Mock()
    provider.text_completion = AsyncMock(return_value=json.dumps(ANALYSIS))
    provider.generate_image = AsyncMock(return_value=GeneratedImage(image_base64="IMG"))
    return provider


@pytest.fixture
def client(provider):
    """Test client with services wired to the provider double."""
    transcript_service = Mock()
    transcript_service.extract_transcript = AsyncMock(side_effect=NoTranscriptAvailableError("url"))
    metadata_service = Mock()
    metadata_service.get_video_metadata = AsyncMock(return_value=VideoMetadata(title="Homemade Pizza"))

    app.dependency_overrides[get_content_analyzer] = lambda: ContentAnalyzer(
        provider=provider, transcript_service=transcript_service, metadata_service=metadata_service
    )
    app.dependency_overrides[get_face_analyzer] = lambda: FaceAnalyzer(provider=provider)
    app.dependency_overrides[get_thumbnail_generator] = lambda: ThumbnailGenerator(provider=provider)
    app.dependency_overrides[get_text_suggester] = lambda: TextSuggester(provider=provider)

    yield TestClient(app)

    app.dependency_overrides.clear()


def assert_error(response, status_code: int, code: str):
    assert response.status_code == status_code
    data = response.json()
    assert data["code"] == code
    assert data["error"]
    assert data["requestId"].startswith("req_")
    return data


def test_root_endpoint(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["message"] == "ThumbForge is running"


def test_health_endpoint(client):
    """Test health check endpoint."""
    with patch.object(settings, "openrouter_api_key", "sk-or-test"):
        response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == "1.0.0"
    assert data["dependencies"]["provider"] == "configured"
    assert "black-forest-labs/flux-pro-1.1" in data["dependencies"]["imageModels"]
    assert "uptimeSeconds" in data


def test_health_degraded_without_key(client):
    with patch.object(settings, "openrouter_api_key", ""):
        data = client.get("/health").json()

    assert data["status"] == "degraded"
    assert data["dependencies"]["provider"] == "not_configured"


class TestAnalyzeEndpoint:

    def test_analyze_url(self, client):
        response = client.post("/analyze", json={"youtubeUrl": "https://youtu.be/dQw4w9WgXcQ"})

        assert response.status_code == 200
        analysis = response.json()["analysis"]
        assert analysis["title"] == "Homemade Pizza"
        assert len(analysis["thumbnailConcepts"]) == 4
        assert analysis["thumbnailConcepts"][0]["faceExpression"] == "amazed"

    def test_analyze_description(self, client, provider):
        response = client.post("/analyze", json={"description": "Making pizza from scratch"})

        assert response.status_code == 200
        prompt = provider.text_completion.call_args.args[0][0]["content"]
        assert "VIDEO DESCRIPTION: Making pizza from scratch" in prompt

    def test_missing_input(self, client):
        response = client.post("/analyze", json={})

        data = assert_error(response, 400, "INVALID_INPUT")
        assert data["error"] == "Please provide a YouTube URL or video description"

    def test_invalid_url(self, client):
        response = client.post("/analyze", json={"youtubeUrl": "https://example.com/video"})

        assert_error(response, 400, "INVALID_INPUT")

    def test_parse_failure(self, client, provider):
        provider.text_completion.return_value = "not json at all"

        response = client.post("/analyze", json={"description": "Making pizza"})

        assert_error(response, 500, "ANALYSIS_PARSE_ERROR")

    def test_provider_failure(self, client, provider):
        provider.text_completion.side_effect = ProviderError(401, "invalid key")

        response = client.post("/analyze", json={"description": "Making pizza"})

        data = assert_error(response, 500, "PROVIDER_ERROR")
        assert data["details"]["status_code"] == 401

    def test_error_request_id_matches_service_call(self, client, provider):
        provider.text_completion.side_effect = ProviderError(503, "overloaded")

        response = client.post("/analyze", json={"description": "Making pizza"})

        data = assert_error(response, 500, "PROVIDER_ERROR")
        assert data["requestId"] == provider.text_completion.call_args.kwargs["request_id"]

    def test_malformed_body(self, client):
        response = client.post("/analyze", content="not json", headers={"content-type": "application/json"})

        assert_error(response, 400, "INVALID_INPUT")


class TestFaceAnalyzeEndpoint:

    def test_face_analyze(self, client, provider):
        provider.text_completion.return_value = json.dumps({
            "description": "A woman with short silver hair",
            "keyFeatures": ["silver hair"],
            "ageRange": "50s",
            "genderPresentation": "female",
        })

        response = client.post("/face-analyze", json={"faceImages": ["AAAA", "BBBB"]})

        assert response.status_code == 200
        analysis = response.json()["analysis"]
        assert analysis["description"] == "A woman with short silver hair"
        assert analysis["photoCount"] == 2
        assert analysis["genderPresentation"] == "female"

    def test_no_images(self, client, provider):
        assert_error(client.post("/face-analyze", json={"faceImages": []}), 400, "INVALID_INPUT")
        assert_error(client.post("/face-analyze", json={}), 400, "INVALID_INPUT")
        provider.text_completion.assert_not_called()

    def test_too_many_images(self, client, provider):
        response = client.post("/face-analyze", json={"faceImages": ["AAAA"] * 6})

        assert_error(response, 400, "INVALID_INPUT")
        provider.text_completion.assert_not_called()


class TestGenerateEndpoint:

    def test_generate_from_analysis(self, client, provider):
        response = client.post("/generate", json={"analysis": ANALYSIS, "count": 2, "faceImages": ["FACE"]})

        assert response.status_code == 200
        thumbnails = response.json()["thumbnails"]
        assert len(thumbnails) == 2
        thumbnail = thumbnails[0]
        assert thumbnail["imageDataUrl"] == "data:image/png;base64,IMG"
        assert thumbnail["textOverlay"] == "10 MIN PIZZA"
        assert thumbnail["width"] == 1280
        assert thumbnail["height"] == 720
        assert thumbnail["concept"]["visualStyle"] == "bold"
        assert "imageBase64" not in thumbnail
        assert provider.generate_image.call_args.kwargs["reference_image_base64"] == "FACE"

    def test_custom_prompt_wins(self, client, provider):
        response = client.post("/generate", json={
            "analysis": ANALYSIS,
            "customPrompt": "A neon pizza floating in space",
            "faceImageBase64": "LEGACY",
            "faceImages": ["OTHER"],
        })

        assert response.status_code == 200
        thumbnails = response.json()["thumbnails"]
        assert len(thumbnails) == 1
        assert thumbnails[0]["id"].startswith("thumb-custom-")
        assert provider.generate_image.await_count == 1
        assert provider.generate_image.call_args.kwargs["reference_image_base64"] == "LEGACY"

    def test_missing_input(self, client):
        data = assert_error(client.post("/generate", json={}), 400, "INVALID_INPUT")
        assert data["error"] == "Please provide video analysis or a custom prompt"

    def test_all_thumbnails_fail(self, client, provider):
        provider.generate_image.side_effect = ProviderError(500, "upstream down", "image")

        response = client.post("/generate", json={"analysis": ANALYSIS})

        assert_error(response, 500, "NO_THUMBNAILS_GENERATED")

    def test_missing_api_key(self, client, provider):
        provider.generate_image.side_effect = ConfigurationError("OPENROUTER_API_KEY", "not set")

        response = client.post("/generate", json={"analysis": ANALYSIS})

        data = assert_error(response, 500, "CONFIGURATION_ERROR")
        assert data["requestId"] == provider.generate_image.call_args.kwargs["request_id"]
        assert provider.generate_image.await_count == 1

    def test_negative_count(self, client):
        assert_error(client.post("/generate", json={"analysis": ANALYSIS, "count": -1}), 400, "INVALID_INPUT")


class TestTextSuggestionsEndpoint:

    def test_text_suggestions(self, client, provider):
        provider.text_completion.return_value = '["HOT TAKE", "PIZZA HACK"]'

        response = client.post("/text-suggestions", json={"topic": "pizza", "currentText": "PIZZA"})

        assert response.status_code == 200
        assert response.json()["suggestions"] == ["HOT TAKE", "PIZZA HACK"]

    def test_missing_topic(self, client):
        assert_error(client.post("/text-suggestions", json={}), 400, "INVALID_INPUT")
