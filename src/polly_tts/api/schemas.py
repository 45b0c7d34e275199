"""
API Request/Response Schemas.

Pydantic models for the /api/polly endpoint. The request model is
deliberately loose: every field accepts any JSON value so that bad
input reaches the handler's own validation (which answers with
``{"error": "text is required"}`` and 400) instead of FastAPI's 422.

Example Request:
    {
        "text": "Merhaba, nasılsınız?",
        "languageCode": "tr-TR",
        "speakingRate": 1.1,
        "audioFormat": "ogg"
    }

Example Response:
    {
        "base64": "SUQzBAAAAAAA...",
        "contentType": "audio/ogg"
    }
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from polly_tts.services.synthesis_service import SynthesisRequest


class PollyRequest(BaseModel):
    """
    Synthesis request body.

    Attributes:
        text: Text to synthesize (required, validated by the handler).
        language_code: ``languageCode``, e.g. "de-DE". Picks the default voice.
        voice_name: ``voiceName``, explicit Polly VoiceId.
        speaking_rate: ``speakingRate``, multiplier (1.0 = normal).
        pitch: ``pitch``, percent offset.
        audio_format: ``audioFormat``, "ogg" or "pcm"; anything else gives mp3.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    text: Any = Field(default=None, description="Text to synthesize")
    language_code: Any = Field(default=None, alias="languageCode", description="Language code, e.g. 'tr-TR'")
    voice_name: Any = Field(default=None, alias="voiceName", description="Polly VoiceId override")
    speaking_rate: Any = Field(default=None, alias="speakingRate", description="Rate multiplier")
    pitch: Any = Field(default=None, description="Pitch offset in percent")
    audio_format: Any = Field(default=None, alias="audioFormat", description="'ogg', 'pcm', or mp3 by default")

    def to_synthesis_request(self) -> SynthesisRequest:
        return SynthesisRequest(
            text=self.text,
            language_code=self.language_code,
            voice_name=self.voice_name,
            speaking_rate=self.speaking_rate,
            pitch=self.pitch,
            audio_format=self.audio_format,
        )


class PollyResponse(BaseModel):
    """Successful synthesis response body."""
    model_config = ConfigDict(populate_by_name=True)

    base64: str = Field(..., description="Base64-encoded audio")
    content_type: str = Field(..., alias="contentType", description="MIME type of the audio")


class ErrorResponse(BaseModel):
    """Error body returned for every failure."""
    error: str
