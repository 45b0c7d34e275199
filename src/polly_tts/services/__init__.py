"""
polly-tts Services Layer.

This package holds the logic between the HTTP layer and AWS Polly:
    - synthesis_service.py: SynthesisRequestHandler and the resolution rules
    - validators.py: Input validation for untrusted request fields
    - errors.py: TTSError hierarchy and error codes
"""
from .errors import (
    EmptyAudioError,
    ErrorCode,
    InvalidArgumentError,
    MisconfiguredError,
    ProviderError,
    TTSError,
)
from .synthesis_service import (
    DEFAULT_VOICES,
    FALLBACK_VOICE,
    OutputFormat,
    SynthesisParams,
    SynthesisRequest,
    SynthesisRequestHandler,
    SynthesisResult,
    TextType,
    build_synthesis_params,
)

__all__ = [
    "SynthesisRequestHandler",
    "SynthesisRequest",
    "SynthesisResult",
    "SynthesisParams",
    "OutputFormat",
    "TextType",
    "DEFAULT_VOICES",
    "FALLBACK_VOICE",
    "build_synthesis_params",
    "TTSError",
    "InvalidArgumentError",
    "MisconfiguredError",
    "EmptyAudioError",
    "ProviderError",
    "ErrorCode",
]
