"""
Request Context and Configuration State for Logging.

The request id lives in a ContextVar so every log line emitted while a
request is handled carries the same id, including lines written from
FastAPI's worker threads. Level and file settings are module-level state
shared by the whole process.

Environment Variables:
    - POLLY_TTS_LOG_LEVEL: Override log level (1-4 or name)
    - POLLY_TTS_LOG_DIR: Directory for the JSONL log file
    - POLLY_TTS_JSONL_FILE: Override JSONL filename
    - POLLY_TTS_SETTINGS: Settings file to read the logging section from
"""
from __future__ import annotations

import os
from contextvars import ContextVar
from typing import Any, Dict

from .levels import LEVEL_NAMES, LogLevel

# "-" marks log lines written outside a request
_request_id: ContextVar[str] = ContextVar("request_id", default="-")

_configured: bool = False
_current_level: LogLevel = LogLevel.NORMAL


def get_request_id() -> str:
    """Get current request ID from context, or "-" if not set."""
    return _request_id.get()


def set_request_id(rid: str) -> None:
    """Set request ID in context for log correlation."""
    _request_id.set(rid)


def get_level() -> LogLevel:
    return _current_level


def set_level(level: LogLevel) -> None:
    global _current_level
    _current_level = level


def get_level_name() -> str:
    """Get current log level as a name ("MINIMAL" ... "DEBUG")."""
    return LEVEL_NAMES.get(_current_level, "NORMAL")


def is_configured() -> bool:
    return _configured


def set_configured(value: bool) -> None:
    global _configured
    _configured = value


def read_logging_config() -> Dict[str, Any]:
    """
    Read logging configuration from settings file and environment.

    Configuration priority (highest to lowest):
        1. Environment variables (POLLY_TTS_LOG_LEVEL, etc.)
        2. settings.yaml logging section
        3. Default values

    Returns:
        Dictionary with resolved logging configuration.
    """
    cfg: Dict[str, Any] = {}

    settings_path = os.getenv("POLLY_TTS_SETTINGS", "config/settings.yaml")
    try:
        from polly_tts.core.config import load_settings
        settings = load_settings(settings_path)
        cfg.update(settings.raw.get("logging", {}) or {})
    except FileNotFoundError:
        pass

    if os.getenv("POLLY_TTS_LOG_LEVEL"):
        cfg["level"] = os.environ["POLLY_TTS_LOG_LEVEL"]
    if os.getenv("POLLY_TTS_LOG_DIR"):
        cfg["log_dir"] = os.environ["POLLY_TTS_LOG_DIR"]
    if os.getenv("POLLY_TTS_JSONL_FILE"):
        cfg["jsonl_file"] = os.environ["POLLY_TTS_JSONL_FILE"]

    return cfg
