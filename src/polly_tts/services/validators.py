"""
Input Validation for the synthesis handler.

Request bodies arrive as untrusted JSON, so every field may hold any JSON
type. These helpers decide what counts as usable input:

    - text: required string with at least one non-whitespace character
    - speakingRate / pitch: numbers only (booleans, NaN, inf rejected)
    - languageCode / voiceName / audioFormat: non-empty strings only

Only text is mandatory. An optional field of the wrong type is treated
as absent rather than rejected, which keeps defaults in charge. Values
that pass are returned exactly as sent; nothing is trimmed.
"""
from __future__ import annotations

import math
from typing import Any, Optional

from polly_tts.services.errors import InvalidArgumentError


def validate_text(text: Any) -> str:
    """
    Validate request text.

    Args:
        text: Raw ``text`` value from the request body.

    Returns:
        The text unchanged.

    Raises:
        InvalidArgumentError: If text is missing, not a string, or blank.
    """
    if not isinstance(text, str) or not text.strip():
        raise InvalidArgumentError(details={"type": type(text).__name__})
    return text


def coerce_number(value: Any) -> Optional[float]:
    """
    Return value as a float if it is a real, finite JSON number.

    >>> coerce_number(1.25)
    1.25
    >>> coerce_number("1.25") is None
    True
    >>> coerce_number(True) is None
    True
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    if not math.isfinite(number):
        return None
    return number


def optional_string(value: Any) -> Optional[str]:
    """Return value if it is a non-empty string, else None."""
    if not isinstance(value, str) or not value:
        return None
    return value
