"""Thumbnail generation API endpoint."""
from fastapi import APIRouter, Depends

from thumbforge.core.dependencies import get_thumbnail_generator
from thumbforge.core.exceptions import InvalidInputError, ThumbForgeBaseException
from thumbforge.models.requests import GenerateRequest
from thumbforge.models.responses import GenerateResponse, ThumbnailPayload
from thumbforge.services import ThumbnailGenerator
from thumbforge.utils.logging import CorrelatedLogger
from thumbforge.utils.response_helpers import ResponseHelper

router = APIRouter(tags=["generation"])
logger = CorrelatedLogger(__name__)


@router.post("/generate")
async def generate(
    request: GenerateRequest,
    generator: ThumbnailGenerator = Depends(get_thumbnail_generator)
):
    """Generate thumbnails from an analysis, or one thumbnail from a custom prompt.

    ``customPrompt`` takes precedence over ``analysis``.
    """
    request_id = ResponseHelper.generate_request_id()
    face_image = request.primary_face_image

    try:
        if request.custom_prompt:
            thumbnail = await generator.generate_custom_thumbnail(
                request.custom_prompt,
                face_image_base64=face_image,
                face_description=request.face_description,
                model=request.model,
                request_id=request_id,
            )
            thumbnails = [thumbnail]
        elif request.analysis is not None:
            thumbnails = await generator.generate_thumbnails(
                request.analysis,
                face_image_base64=face_image,
                face_description=request.face_description,
                model=request.model,
                count=request.count,
                request_id=request_id,
            )
        else:
            raise InvalidInputError("Please provide video analysis or a custom prompt")

        return ResponseHelper.create_success_response(GenerateResponse(
            thumbnails=[ThumbnailPayload.from_thumbnail(t) for t in thumbnails]
        ))

    except ThumbForgeBaseException as e:
        logger.bind(request_id).warning(f"/generate failed: {e.error_code}: {e.message}")
        return ResponseHelper.create_error_from_exception(e, request_id)
