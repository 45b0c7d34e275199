"""
FastAPI Dependency Injection Providers.

Dependencies:
    get_settings()        - Loads and caches the YAML settings (empty if absent)
    get_client_factory()  - Returns the function that builds Polly clients

The synthesis handler itself is not a dependency. It is built inside the
POST branch of the route, after method gating, from a PollyConfig that
reads the environment at that moment.

Tests override get_client_factory to avoid real AWS calls:

    app.dependency_overrides[get_client_factory] = lambda: fake_factory
"""
from __future__ import annotations

import os
from functools import lru_cache

from polly_tts.core.config import Defaults, Settings, load_settings
from polly_tts.core.logging import get_logger, verbose
from polly_tts.polly.client import ClientFactory, create_polly_client

_LOG = get_logger("polly-tts.api")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load and cache application settings.

    Reads POLLY_TTS_SETTINGS (default config/settings.yaml). A serverless
    deployment usually has no settings file; defaults and environment
    variables are used in that case.
    """
    path = os.getenv("POLLY_TTS_SETTINGS", Defaults.SETTINGS_PATH)
    try:
        return load_settings(path)
    except FileNotFoundError:
        verbose(_LOG, "settings_missing", path=path)
        return Settings(raw={})


def get_client_factory() -> ClientFactory:
    """Return the Polly client factory used by the route."""
    return create_polly_client
