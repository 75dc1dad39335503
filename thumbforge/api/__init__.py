"""API module initialization."""
from .analysis import router as analysis_router
from .generation import router as generation_router
from .health import router as health_router

__all__ = ["analysis_router", "generation_router", "health_router"]
