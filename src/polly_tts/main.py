"""
FastAPI Application Entry Point.

Usage:
    # Run with uvicorn
    uvicorn polly_tts.main:app --host 0.0.0.0 --port 8000

    # Or use the module directly
    python -m uvicorn polly_tts.main:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

import polly_tts
from polly_tts.api.routes import router
from polly_tts.core.logging import configure_logging


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance ready to serve requests.
    """
    # Reads POLLY_TTS_LOG_LEVEL / settings.yaml logging section
    configure_logging()

    app = FastAPI(title="polly-tts", version=polly_tts.__version__)
    app.include_router(router)
    return app


# Global application instance for ASGI servers (uvicorn, gunicorn, etc.)
app = create_app()
