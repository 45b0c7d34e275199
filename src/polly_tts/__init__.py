"""
polly-tts: AWS Polly Text-to-Speech Relay.

A small HTTP service that takes a JSON text-to-speech request, maps it onto
an AWS Polly SynthesizeSpeech call, and returns the audio as base64 JSON.

Key Features:
    - Single endpoint (/api/polly) with CORS and method gating
    - One canonical language -> voice table (Joanna, Filiz, Marlene, ...)
    - mp3 / ogg_vorbis / pcm output formats
    - SSML prosody envelope for speaking rate and pitch
    - Structured logging, Prometheus metrics, CLI with dry-run

Example Usage:
    >>> from polly_tts.core.config import PollyConfig
    >>> from polly_tts.services import SynthesisRequest, SynthesisRequestHandler
    >>>
    >>> config = PollyConfig(access_key_id="AKIA...", secret_access_key="...")
    >>> handler = SynthesisRequestHandler(config)
    >>> result = handler.handle(SynthesisRequest(text="Merhaba", language_code="tr-TR"))
    >>> result.content_type
    'audio/mpeg'
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
