"""
FastAPI REST API Layer for polly-tts.

    - routes.py: /api/polly, /health, /metrics
    - schemas.py: Request/response Pydantic models
    - dependencies.py: FastAPI dependency injection
"""
