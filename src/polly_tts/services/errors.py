"""
Error Codes and Exceptions for the synthesis handler.

Every failure the handler can report is a TTSError subclass carrying a
machine-readable code and the exact message returned to HTTP clients.
The API layer maps codes to status codes (see api/routes.py).

    InvalidArgumentError  INVALID_ARGUMENT  400  text is required
    MisconfiguredError    MISCONFIGURED     500  AWS credentials not configured
    EmptyAudioError       EMPTY_AUDIO       500  No audio stream
    ProviderError         PROVIDER_FAILURE  500  Polly failed: <message>
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class ErrorCode:
    """Standardized error codes used in TTSError and metrics labels."""
    INVALID_ARGUMENT = "INVALID_ARGUMENT"   # Missing/empty/non-string text
    MISCONFIGURED = "MISCONFIGURED"         # Credentials absent
    EMPTY_AUDIO = "EMPTY_AUDIO"             # Polly answered without audio
    PROVIDER_FAILURE = "PROVIDER_FAILURE"   # Anything raised by the call or drain


class TTSError(Exception):
    """
    Base exception for synthesis errors.

    Attributes:
        message: Message returned to the client.
        code: Error code from ErrorCode.
        details: Optional dictionary with additional context (logged, not returned).
    """
    def __init__(self, message: str, code: str = ErrorCode.PROVIDER_FAILURE, details: Optional[Dict] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON error body sent to clients."""
        return {"error": self.message}


class InvalidArgumentError(TTSError):
    """Raised when the request text is missing, not a string, or blank."""
    def __init__(self, message: str = "text is required", details: Optional[Dict] = None):
        super().__init__(message, ErrorCode.INVALID_ARGUMENT, details)


class MisconfiguredError(TTSError):
    """Raised when AWS credentials are not available."""
    def __init__(self, message: str = "AWS credentials not configured", details: Optional[Dict] = None):
        super().__init__(message, ErrorCode.MISCONFIGURED, details)


class EmptyAudioError(TTSError):
    """Raised when Polly returns a response without audio."""
    def __init__(self, message: str = "No audio stream", details: Optional[Dict] = None):
        super().__init__(message, ErrorCode.EMPTY_AUDIO, details)


class ProviderError(TTSError):
    """Raised for any failure during the Polly call or while draining its stream."""

    PREFIX = "Polly failed: "

    def __init__(self, reason: str, details: Optional[Dict] = None):
        self.reason = reason
        super().__init__(self.PREFIX + reason, ErrorCode.PROVIDER_FAILURE, details)
