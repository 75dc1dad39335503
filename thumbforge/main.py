"""Main FastAPI application with modular architecture."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from thumbforge.core.config import settings
from thumbforge.core.exceptions import ThumbForgeBaseException
from thumbforge.api import analysis_router, generation_router, health_router
from thumbforge.utils.logging import LoggerSetup
from thumbforge.utils.response_helpers import ResponseHelper

# Setup logging
LoggerSetup.setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info(f"{settings.api_title} v{settings.api_version} starting up...")
    if not settings.provider_configured:
        logger.warning("OPENROUTER_API_KEY is not set; provider-backed endpoints will fail")
    yield
    logger.info("Application shutting down...")


# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    description=settings.api_description,
    version=settings.api_version,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ThumbForgeBaseException)
async def thumbforge_exception_handler(request, exc: ThumbForgeBaseException):
    """Handle custom service exceptions."""
    logger.warning(f"{request.method} {request.url.path} failed: {exc.error_code}: {exc.message}")
    return ResponseHelper.create_error_from_exception(exc)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    """Malformed request bodies are client errors."""
    return ResponseHelper.create_error_response(
        error_code="INVALID_INPUT",
        message="Invalid request body",
        status_code=400,
        details={"errors": [error.get("msg", "") for error in exc.errors()]}
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    """Handle FastAPI HTTP exceptions."""
    return ResponseHelper.create_error_response(
        error_code="HTTP_ERROR",
        message=str(exc.detail),
        status_code=exc.status_code
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")

    return ResponseHelper.create_error_response(
        error_code="INTERNAL_SERVER_ERROR",
        message="An unexpected error occurred",
        status_code=500
    )


# Include routers
app.include_router(health_router)
app.include_router(analysis_router)
app.include_router(generation_router)
