"""
Configuration Management for polly-tts.

This module provides centralized configuration handling with:
    - Default values (Defaults class)
    - Dataclass-based configuration objects
    - YAML file loading with environment variable overrides
    - Validation with meaningful error messages

Configuration Hierarchy (highest priority first):
    1. Environment variables (AWS_REGION, AWS_ACCESS_KEY_ID, ...)
    2. YAML config file (config/settings.yaml)
    3. Defaults class values

Example settings.yaml:
    aws:
      region: eu-central-1

    polly:
      engine: standard
      connect_timeout_s: 5
      read_timeout_s: 30

    logging:
      level: 2  # NORMAL

Credentials are normally supplied through the environment. They are read
when a request is handled, not at import time, so a deployment can rotate
them without a restart.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
import os
import yaml


class ConfigValidationError(Exception):
    """
    Raised when configuration validation fails.

    This exception is thrown when a configuration value is outside
    acceptable bounds or of the wrong type.
    """
    pass


class Defaults:
    """
    Centralized default configuration values.

    These values are used when no override is provided via YAML config
    or environment variables.
    """

    # ─────────────────────────────────────────────────────────────────────────
    # AWS
    # ─────────────────────────────────────────────────────────────────────────
    AWS_REGION = "eu-central-1"         # Region used when AWS_REGION is unset

    # ─────────────────────────────────────────────────────────────────────────
    # Polly
    # ─────────────────────────────────────────────────────────────────────────
    POLLY_ENGINE = "standard"           # Engine tier sent with every request
    POLLY_CONNECT_TIMEOUT_S = 5.0       # TCP connect timeout for the client
    POLLY_READ_TIMEOUT_S = 30.0         # Socket read timeout for the client

    # ─────────────────────────────────────────────────────────────────────────
    # Logging
    # ─────────────────────────────────────────────────────────────────────────
    LOGGING_TEXT_PREVIEW_CHARS = 80     # Characters to show in text preview

    SETTINGS_PATH = "config/settings.yaml"


# Engine tiers accepted by SynthesizeSpeech
ENGINE_TIERS = ("standard", "neural", "long-form", "generative")


@dataclass(frozen=True)
class PollyConfig:
    """
    Everything the synthesis handler needs to reach Polly.

    Built once per invocation and passed into SynthesisRequestHandler,
    so the handler never reads the process environment itself.

    Attributes:
        region: AWS region for the Polly endpoint.
        access_key_id: AWS access key id (None when not configured).
        secret_access_key: AWS secret access key (None when not configured).
        session_token: Optional STS session token.
        engine: Engine tier (standard, neural, long-form, generative).
        connect_timeout_s: Connect timeout for the boto3 client.
        read_timeout_s: Read timeout for the boto3 client.
        text_preview_chars: Max characters of input text shown in logs.
    """
    region: str = Defaults.AWS_REGION
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    session_token: Optional[str] = None
    engine: str = Defaults.POLLY_ENGINE
    connect_timeout_s: float = Defaults.POLLY_CONNECT_TIMEOUT_S
    read_timeout_s: float = Defaults.POLLY_READ_TIMEOUT_S
    text_preview_chars: int = Defaults.LOGGING_TEXT_PREVIEW_CHARS

    @property
    def has_credentials(self) -> bool:
        """True when both halves of the key pair are present and non-empty."""
        return bool(self.access_key_id) and bool(self.secret_access_key)

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        environ: Optional[Mapping[str, str]] = None,
    ) -> "PollyConfig":
        """
        Create PollyConfig from Settings plus the process environment.

        Args:
            settings: Raw Settings object loaded from YAML.
            environ: Environment mapping (defaults to os.environ).

        Returns:
            Validated PollyConfig instance.

        Raises:
            ConfigValidationError: If any value fails validation.
        """
        env = os.environ if environ is None else environ
        aws_raw = settings.raw.get("aws", {}) or {}
        polly_raw = settings.raw.get("polly", {}) or {}
        logging_raw = settings.raw.get("logging", {}) or {}

        config = cls(
            region=env.get("AWS_REGION") or str(aws_raw.get("region") or Defaults.AWS_REGION),
            access_key_id=env.get("AWS_ACCESS_KEY_ID") or aws_raw.get("access_key_id"),
            secret_access_key=env.get("AWS_SECRET_ACCESS_KEY") or aws_raw.get("secret_access_key"),
            session_token=env.get("AWS_SESSION_TOKEN") or aws_raw.get("session_token"),
            engine=str(polly_raw.get("engine", Defaults.POLLY_ENGINE)).lower(),
            connect_timeout_s=float(polly_raw.get("connect_timeout_s", Defaults.POLLY_CONNECT_TIMEOUT_S)),
            read_timeout_s=float(polly_raw.get("read_timeout_s", Defaults.POLLY_READ_TIMEOUT_S)),
            text_preview_chars=int(logging_raw.get("text_preview_chars", Defaults.LOGGING_TEXT_PREVIEW_CHARS)),
        )

        if config.engine not in ENGINE_TIERS:
            raise ConfigValidationError(
                f"polly.engine must be one of {', '.join(ENGINE_TIERS)}, got {config.engine}"
            )
        _validate_positive("polly.connect_timeout_s", config.connect_timeout_s)
        _validate_positive("polly.read_timeout_s", config.read_timeout_s)
        _validate_non_negative("logging.text_preview_chars", config.text_preview_chars)
        return config


def _validate_positive(name: str, value: int | float) -> None:
    """Validate that a value is positive (> 0)."""
    if value <= 0:
        raise ConfigValidationError(f"{name} must be positive, got {value}")


def _validate_non_negative(name: str, value: int | float) -> None:
    """Validate that a value is non-negative (>= 0)."""
    if value < 0:
        raise ConfigValidationError(f"{name} must be non-negative, got {value}")


@dataclass(frozen=True)
class Settings:
    """
    Immutable settings container loaded from YAML.

    This is the raw settings object before validation. Use
    get_polly_config() to get a validated PollyConfig.

    Attributes:
        raw: Dictionary of raw configuration values.
    """
    raw: Dict[str, Any]

    def get_polly_config(self, environ: Optional[Mapping[str, str]] = None) -> PollyConfig:
        """
        Get validated PollyConfig from these settings and the environment.

        Raises:
            ConfigValidationError: If validation fails.
        """
        return PollyConfig.from_settings(self, environ)


def load_settings(path: str = Defaults.SETTINGS_PATH) -> Settings:
    """
    Load settings from a YAML configuration file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Settings object with loaded configuration.

    Raises:
        FileNotFoundError: If the settings file doesn't exist.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"settings file not found: {p.resolve()}")

    with p.open("r", encoding="utf-8") as f:
        raw: Dict[str, Any] = yaml.safe_load(f) or {}

    return Settings(raw=raw)
