"""Entry point for the ThumbForge FastAPI service."""

if __name__ == "__main__":
    import uvicorn
    from thumbforge.core.config import settings

    print(f"🚀 Starting {settings.api_title} v{settings.api_version}")
    print(f"🧠 Analysis model: {settings.analysis_model}")
    print(f"🎨 Image model: {settings.image_model}")
    print(f"📝 Log level: {settings.log_level}")

    uvicorn.run(
        "thumbforge.main:app",  # Use string import for hot reload
        host="0.0.0.0",
        port=8000,
        reload=settings.debug_mode,
        log_level=settings.log_level.lower()
    )
