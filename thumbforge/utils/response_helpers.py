"""Response creation utilities."""
import uuid
from typing import Optional
from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..models.responses import ErrorResponse
from ..core.exceptions import ThumbForgeBaseException


class ResponseHelper:
    """Utilities for creating standardized API responses."""

    # Client input problems are 400; everything else is a server-side failure
    STATUS_MAPPING = {
        "INVALID_INPUT": status.HTTP_400_BAD_REQUEST,
        "NO_TRANSCRIPT_AVAILABLE": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "NO_CONTENT_AVAILABLE": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "ANALYSIS_PARSE_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "NO_IMAGE_RETURNED": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "NO_THUMBNAILS_GENERATED": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "CONFIGURATION_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "PROVIDER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    }

    @staticmethod
    def generate_request_id() -> str:
        """Generate unique request ID."""
        return f"req_{uuid.uuid4().hex[:8]}"

    @staticmethod
    def create_success_response(data: BaseModel) -> JSONResponse:
        """Serialize a response model with camelCase keys."""
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content=data.model_dump(by_alias=True)
        )

    @staticmethod
    def create_error_response(
        error_code: str,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        request_id: Optional[str] = None,
        details: Optional[dict] = None
    ) -> JSONResponse:
        """Create standardized error response."""
        if not request_id:
            request_id = ResponseHelper.generate_request_id()

        response = ErrorResponse(
            error=message,
            code=error_code,
            request_id=request_id,
            details=details or None
        )
        return JSONResponse(
            status_code=status_code,
            content=response.model_dump(by_alias=True, exclude_none=True)
        )

    @staticmethod
    def create_error_from_exception(
        exc: ThumbForgeBaseException,
        request_id: Optional[str] = None
    ) -> JSONResponse:
        """Create error response from custom exception."""
        http_status = ResponseHelper.STATUS_MAPPING.get(
            exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR
        )

        return ResponseHelper.create_error_response(
            error_code=exc.error_code,
            message=exc.message,
            status_code=http_status,
            request_id=request_id,
            details=exc.details
        )
