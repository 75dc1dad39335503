"""Analysis API endpoints: video/description, face photos and text suggestions."""
from fastapi import APIRouter, Depends

from thumbforge.core.dependencies import get_content_analyzer, get_face_analyzer, get_text_suggester
from thumbforge.core.exceptions import InvalidInputError, ThumbForgeBaseException
from thumbforge.models.requests import AnalyzeRequest, FaceAnalyzeRequest, TextSuggestionsRequest
from thumbforge.models.responses import AnalyzeResponse, FaceAnalyzeResponse, TextSuggestionsResponse
from thumbforge.services import ContentAnalyzer, FaceAnalyzer, TextSuggester
from thumbforge.utils.logging import CorrelatedLogger
from thumbforge.utils.response_helpers import ResponseHelper

router = APIRouter(tags=["analysis"])
logger = CorrelatedLogger(__name__)


@router.post("/analyze")
async def analyze(
    request: AnalyzeRequest,
    analyzer: ContentAnalyzer = Depends(get_content_analyzer)
):
    """Analyze a YouTube URL or a free-text description into thumbnail concepts.

    The URL wins when both are given.
    """
    request_id = ResponseHelper.generate_request_id()

    try:
        if request.youtube_url:
            analysis = await analyzer.analyze_video(request.youtube_url, request_id)
        elif request.description:
            analysis = await analyzer.analyze_description(request.description, request_id)
        else:
            raise InvalidInputError("Please provide a YouTube URL or video description")

        return ResponseHelper.create_success_response(AnalyzeResponse(analysis=analysis))

    except ThumbForgeBaseException as e:
        logger.bind(request_id).warning(f"/analyze failed: {e.error_code}: {e.message}")
        return ResponseHelper.create_error_from_exception(e, request_id)


@router.post("/face-analyze")
async def face_analyze(
    request: FaceAnalyzeRequest,
    analyzer: FaceAnalyzer = Depends(get_face_analyzer)
):
    """Describe a person from 1-5 reference photos for likeness in generated images."""
    request_id = ResponseHelper.generate_request_id()

    try:
        analysis = await analyzer.analyze_face(request.face_images or [], request_id)
        return ResponseHelper.create_success_response(FaceAnalyzeResponse(analysis=analysis))

    except ThumbForgeBaseException as e:
        logger.bind(request_id).warning(f"/face-analyze failed: {e.error_code}: {e.message}")
        return ResponseHelper.create_error_from_exception(e, request_id)


@router.post("/text-suggestions")
async def text_suggestions(
    request: TextSuggestionsRequest,
    suggester: TextSuggester = Depends(get_text_suggester)
):
    """Suggest short text overlays for a topic."""
    request_id = ResponseHelper.generate_request_id()

    try:
        suggestions = await suggester.suggest(
            request.topic or "",
            mood=request.mood,
            current_text=request.current_text,
            request_id=request_id,
        )
        return ResponseHelper.create_success_response(TextSuggestionsResponse(suggestions=suggestions))

    except ThumbForgeBaseException as e:
        logger.bind(request_id).warning(f"/text-suggestions failed: {e.error_code}: {e.message}")
        return ResponseHelper.create_error_from_exception(e, request_id)
