"""
SynthesisRequestHandler - Request Mapping and Response Normalization.

This module turns an untrusted synthesis request into one AWS Polly
SynthesizeSpeech call and turns Polly's audio stream into a base64
payload with a matching content type.

Architecture:
    Request → Validate → Resolve voice/format/prosody → Polly → Drain → Base64

Resolution Rules:
    Voice:
        explicit voiceName wins; otherwise the language prefix of
        languageCode picks from DEFAULT_VOICES; otherwise Joanna.
    Output format:
        "ogg" → ogg_vorbis, "pcm" → pcm, anything else → mp3
        (case-insensitive, unknown values silently ignored).
    Prosody:
        if speakingRate or pitch is a number, the text is wrapped in
        <speak><prosody rate="R%" pitch="P%">…</prosody></speak> and
        sent as SSML; otherwise it is sent as plain text.

Example:
    >>> from polly_tts.core.config import PollyConfig
    >>> handler = SynthesisRequestHandler(
    ...     PollyConfig(access_key_id="AKIA...", secret_access_key="..."),
    ... )
    >>> result = handler.handle(SynthesisRequest(text="Hallo", language_code="de-DE"))
    >>> result.to_dict()["contentType"]
    'audio/mpeg'
"""
from __future__ import annotations

import base64
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
from xml.sax.saxutils import escape

from botocore.exceptions import ClientError

from polly_tts.core.config import PollyConfig
from polly_tts.core.logging import debug, error, get_logger, info, success, verbose
from polly_tts.core.metrics import metrics
from polly_tts.polly.client import ClientFactory, create_polly_client
from polly_tts.polly.stream import drain_audio_stream
from polly_tts.services.errors import (
    EmptyAudioError,
    MisconfiguredError,
    ProviderError,
    TTSError,
)
from polly_tts.services.validators import coerce_number, optional_string, validate_text
from polly_tts.utils.timeit import timeit

_LOG = get_logger("polly-tts.service")


# =============================================================================
# Voice and Format Tables
# =============================================================================

# Used when no voiceName is given and the language prefix is not listed
# (or no languageCode was sent at all).
FALLBACK_VOICE = "Joanna"

# The one language → voice table. Keys are lowercase language prefixes.
DEFAULT_VOICES: Dict[str, str] = {
    "en": "Joanna",
    "fr": "Celine",
    "it": "Carla",
    "es": "Conchita",
    "ko": "Seoyeon",
    "zh": "Zhiyu",
    "cmn": "Zhiyu",   # Polly tags Mandarin as cmn-CN
    "ja": "Mizuki",
    "de": "Marlene",
    "tr": "Filiz",
}


class OutputFormat(str, Enum):
    """Polly output formats this service can return."""
    MP3 = "mp3"
    OGG_VORBIS = "ogg_vorbis"
    PCM = "pcm"

    @property
    def content_type(self) -> str:
        return CONTENT_TYPES[self]


CONTENT_TYPES: Dict[OutputFormat, str] = {
    OutputFormat.MP3: "audio/mpeg",
    OutputFormat.OGG_VORBIS: "audio/ogg",
    OutputFormat.PCM: "audio/wav",
}

# Accepted audioFormat spellings (after lowercasing)
_FORMAT_ALIASES: Dict[str, OutputFormat] = {
    "ogg": OutputFormat.OGG_VORBIS,
    "pcm": OutputFormat.PCM,
}


class TextType(str, Enum):
    TEXT = "text"
    SSML = "ssml"


# =============================================================================
# Request/Response Dataclasses
# =============================================================================

@dataclass
class SynthesisRequest:
    """
    A synthesis request as received from the client.

    Fields are typed ``Any`` because they come straight from JSON; the
    handler decides what is usable.

    Attributes:
        text: Text to speak (required).
        language_code: e.g. "tr-TR", "de-DE".
        voice_name: Explicit Polly VoiceId, overrides the table.
        speaking_rate: Rate multiplier (1.0 = normal).
        pitch: Pitch offset in percent.
        audio_format: "ogg", "pcm", or anything else for mp3.
    """
    text: Any = None
    language_code: Any = None
    voice_name: Any = None
    speaking_rate: Any = None
    pitch: Any = None
    audio_format: Any = None


@dataclass(frozen=True)
class SynthesisParams:
    """
    Fully resolved SynthesizeSpeech parameters.

    Attributes:
        text: Plain text or SSML markup, depending on text_type.
        voice_id: Polly VoiceId.
        language_code: Passed through only when the client sent one.
        output_format: Resolved OutputFormat.
        engine: Engine tier ("standard" unless configured otherwise).
        text_type: TextType.TEXT or TextType.SSML.
    """
    text: str
    voice_id: str
    output_format: OutputFormat
    text_type: TextType
    engine: str = "standard"
    language_code: Optional[str] = None

    def to_provider_kwargs(self) -> Dict[str, str]:
        """Keyword arguments for ``client.synthesize_speech``."""
        kwargs = {
            "Text": self.text,
            "VoiceId": self.voice_id,
            "OutputFormat": self.output_format.value,
            "Engine": self.engine,
            "TextType": self.text_type.value,
        }
        if self.language_code:
            kwargs["LanguageCode"] = self.language_code
        return kwargs


@dataclass
class SynthesisResult:
    """
    Result of a successful synthesis.

    Attributes:
        base64: Audio encoded as base64 (ASCII).
        content_type: MIME type for the resolved output format.
        voice_id: Voice that produced the audio.
        audio_bytes: Size of the decoded audio.
    """
    base64: str
    content_type: str
    voice_id: str = ""
    audio_bytes: int = 0

    def to_dict(self) -> Dict[str, str]:
        """Convert to the JSON success body sent to clients."""
        return {"base64": self.base64, "contentType": self.content_type}


# =============================================================================
# Resolution Functions
# =============================================================================

def language_prefix(language_code: Optional[str]) -> str:
    """
    Lowercased primary subtag of a language code.

    >>> language_prefix("tr-TR")
    'tr'
    >>> language_prefix("cmn_CN")
    'cmn'
    """
    if not language_code:
        return ""
    return language_code.replace("_", "-").split("-", 1)[0].lower()


def resolve_voice(voice_name: Any = None, language_code: Any = None) -> str:
    """Pick the Polly VoiceId for a request."""
    explicit = optional_string(voice_name)
    if explicit:
        return explicit
    prefix = language_prefix(optional_string(language_code))
    return DEFAULT_VOICES.get(prefix, FALLBACK_VOICE)


def resolve_output_format(audio_format: Any = None) -> OutputFormat:
    """Map the client's audioFormat onto an OutputFormat (mp3 by default)."""
    requested = optional_string(audio_format)
    if requested is None:
        return OutputFormat.MP3
    return _FORMAT_ALIASES.get(requested.lower(), OutputFormat.MP3)


def round_half_up(value: float) -> int:
    """Round .5 towards positive infinity (round(2.5) == 3, round(-2.5) == -2)."""
    return int(math.floor(value + 0.5))


def build_prosody_markup(text: str, speaking_rate: Optional[float], pitch: Optional[float]) -> str:
    """
    Wrap text in an SSML prosody envelope.

    Args:
        text: Plain text; XML special characters are escaped.
        speaking_rate: Multiplier, or None for 100%. A multiplier too large
            to express as a percentage also gives 100%.
        pitch: Percent offset, or None for 0%.
    """
    rate_pct = 100
    if speaking_rate is not None and math.isfinite(speaking_rate * 100):
        rate_pct = round_half_up(speaking_rate * 100)
    pitch_pct = round_half_up(pitch) if pitch is not None else 0
    return f'<speak><prosody rate="{rate_pct}%" pitch="{pitch_pct}%">{escape(text)}</prosody></speak>'


def build_synthesis_params(request: SynthesisRequest, engine: str = "standard") -> SynthesisParams:
    """
    Resolve a request into SynthesizeSpeech parameters.

    Raises:
        InvalidArgumentError: If the request text is unusable.
    """
    text = validate_text(request.text)
    language_code = optional_string(request.language_code)
    speaking_rate = coerce_number(request.speaking_rate)
    pitch = coerce_number(request.pitch)

    if speaking_rate is not None or pitch is not None:
        body = build_prosody_markup(text, speaking_rate, pitch)
        text_type = TextType.SSML
    else:
        body = text
        text_type = TextType.TEXT

    return SynthesisParams(
        text=body,
        voice_id=resolve_voice(request.voice_name, language_code),
        output_format=resolve_output_format(request.audio_format),
        text_type=text_type,
        engine=engine,
        language_code=language_code,
    )


# =============================================================================
# Handler
# =============================================================================

class SynthesisRequestHandler:
    """
    Stateless Polly synthesis handler.

    One instance may serve one request or many; it holds only its
    configuration and client factory. A new Polly client is built for
    every call to handle().

    Usage:
        handler = SynthesisRequestHandler(PollyConfig.from_settings(settings))
        result = handler.handle(SynthesisRequest(text="Merhaba", language_code="tr"))
    """

    def __init__(self, config: PollyConfig, client_factory: ClientFactory = create_polly_client):
        """
        Args:
            config: Region, credentials, engine tier, and timeouts.
            client_factory: Builds a Polly client from the config.
        """
        self._config = config
        self._client_factory = client_factory

    @property
    def config(self) -> PollyConfig:
        return self._config

    def _preview(self, text: str) -> str:
        limit = self._config.text_preview_chars
        return text if len(text) <= limit else text[:limit] + "…"

    def handle(self, request: SynthesisRequest) -> SynthesisResult:
        """
        Synthesize one request.

        Returns:
            SynthesisResult with base64 audio and content type.

        Raises:
            InvalidArgumentError: text missing, not a string, or blank.
            MisconfiguredError: credentials absent (no Polly call is made).
            EmptyAudioError: the response had no AudioStream.
            ProviderError: the Polly call or the stream drain failed.
        """
        status = "success"
        output_format = "none"
        audio_bytes = 0
        characters = 0

        with timeit("handle") as t:
            try:
                params = build_synthesis_params(request, engine=self._config.engine)
                output_format = params.output_format.value
                characters = len(params.text)

                if not self._config.has_credentials:
                    raise MisconfiguredError(details={"region": self._config.region})

                info(
                    _LOG, "synth_start",
                    chars=characters,
                    voice=params.voice_id,
                    format=output_format,
                    text_type=params.text_type.value,
                )
                debug(_LOG, "synth_text", text=self._preview(params.text))

                audio = self._call_provider(params)
                audio_bytes = len(audio)

                result = SynthesisResult(
                    base64=base64.b64encode(audio).decode("ascii"),
                    content_type=params.output_format.content_type,
                    voice_id=params.voice_id,
                    audio_bytes=audio_bytes,
                )
            except TTSError as e:
                status = e.code.lower()
                raise
            except Exception as e:
                status = "provider_failure"
                error(_LOG, "synth_failed", code="PROVIDER_FAILURE", error=str(e), error_type=type(e).__name__)
                raise
            finally:
                metrics.record_request(
                    status=status,
                    duration=t.seconds,
                    output_format=output_format,
                    audio_bytes=audio_bytes,
                    characters=characters,
                )

        success(_LOG, "synth_done", seconds=round(t.seconds, 3), bytes=audio_bytes)
        return result

    def _call_provider(self, params: SynthesisParams) -> bytes:
        """Make the SynthesizeSpeech call and drain its audio into one buffer."""
        try:
            client = self._client_factory(self._config)
            with timeit("polly_call") as call_t:
                response = client.synthesize_speech(**params.to_provider_kwargs())
            verbose(_LOG, "polly_call", seconds=round(call_t.seconds, 3), region=self._config.region)

            stream = response.get("AudioStream")
            if stream is None:
                raise EmptyAudioError()

            with timeit("drain") as drain_t:
                audio = drain_audio_stream(stream)
            verbose(_LOG, "stream_drained", seconds=round(drain_t.seconds, 3), bytes=len(audio))
        except TTSError as e:
            error(_LOG, "synth_failed", code=e.code, error=e.message)
            raise
        except Exception as e:
            reason = _provider_message(e)
            error(_LOG, "synth_failed", code="PROVIDER_FAILURE", error=reason, error_type=type(e).__name__)
            raise ProviderError(reason, details={"error_type": type(e).__name__}) from e

        return audio


def _provider_message(exc: Exception) -> str:
    """The service's own message for botocore ClientErrors, str(exc) otherwise."""
    if isinstance(exc, ClientError):
        message = exc.response.get("Error", {}).get("Message")
        if message:
            return message
    return str(exc)
