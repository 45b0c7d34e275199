"""
Tests for the synthesis error hierarchy.

Each error carries a code for the API layer and the exact client message.
"""
import pytest

from polly_tts.services.errors import (
    EmptyAudioError,
    ErrorCode,
    InvalidArgumentError,
    MisconfiguredError,
    ProviderError,
    TTSError,
)


class TestErrorMessages:
    """Default messages match what clients see."""

    @pytest.mark.parametrize(
        "exc, code, message",
        [
            (InvalidArgumentError(), ErrorCode.INVALID_ARGUMENT, "text is required"),
            (MisconfiguredError(), ErrorCode.MISCONFIGURED, "AWS credentials not configured"),
            (EmptyAudioError(), ErrorCode.EMPTY_AUDIO, "No audio stream"),
        ],
    )
    def test_defaults(self, exc, code, message):
        assert exc.code == code
        assert exc.message == message
        assert str(exc) == message
        assert exc.to_dict() == {"error": message}

    def test_provider_error_prefix(self):
        """ProviderError prefixes the underlying reason."""
        exc = ProviderError("ThrottlingException: Rate exceeded")
        assert exc.code == ErrorCode.PROVIDER_FAILURE
        assert exc.reason == "ThrottlingException: Rate exceeded"
        assert exc.to_dict() == {"error": "Polly failed: ThrottlingException: Rate exceeded"}

    def test_provider_error_empty_reason(self):
        assert ProviderError("").message == "Polly failed: "


class TestErrorHierarchy:
    """All errors derive from TTSError."""

    @pytest.mark.parametrize(
        "cls", [InvalidArgumentError, MisconfiguredError, EmptyAudioError]
    )
    def test_subclasses(self, cls):
        assert issubclass(cls, TTSError)
        with pytest.raises(TTSError):
            raise cls()

    def test_details_are_not_returned(self):
        """Details are for logs only; the client body holds the message."""
        exc = MisconfiguredError(details={"region": "eu-central-1"})
        assert exc.details == {"region": "eu-central-1"}
        assert exc.to_dict() == {"error": "AWS credentials not configured"}

    def test_base_default_code(self):
        assert TTSError("boom").code == ErrorCode.PROVIDER_FAILURE
        assert TTSError("boom").details == {}
