"""
Drainable Byte Sources for Polly Audio Streams.

SynthesizeSpeech hands back its audio as ``AudioStream``. Depending on
where the response comes from, that value has a different shape:

    - botocore ``StreamingBody``: incremental reader (read / iter_chunks)
    - bytes / bytearray / memoryview: a single buffer (stubs, fakes)
    - list of ints: an array-like byte sequence
    - an iterable of byte chunks: a generator-backed stream

Callers should not branch on any of these. ``as_byte_source`` wraps the
value in one of two variants, and ``drain()`` returns one contiguous
``bytes`` object either way.

Example:
    >>> as_byte_source(b"abc").drain()
    b'abc'
    >>> as_byte_source(iter([b"ab", b"c"])).drain()
    b'abc'
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterator

# botocore's own default for StreamingBody.iter_chunks
DEFAULT_CHUNK_SIZE = 1024


class ByteSource(ABC):
    """A source of audio bytes that can be drained exactly once."""

    @abstractmethod
    def drain(self) -> bytes:
        """Read everything and return it as one buffer."""


class BufferSource(ByteSource):
    """Audio that is already fully in memory."""

    def __init__(self, data: Any):
        self._data = data

    def drain(self) -> bytes:
        # bytes() accepts buffers and sequences of ints in 0..255
        return bytes(self._data)


class ReaderSource(ByteSource):
    """
    Audio delivered incrementally.

    Chunks are appended in the order they arrive. The reader is closed
    after draining when it exposes ``close()``.
    """

    def __init__(self, reader: Any, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self._reader = reader
        self._chunk_size = chunk_size

    def chunks(self) -> Iterator[bytes]:
        reader = self._reader
        if hasattr(reader, "iter_chunks"):
            yield from reader.iter_chunks(self._chunk_size)
        elif hasattr(reader, "read"):
            while True:
                chunk = reader.read(self._chunk_size)
                if not chunk:
                    break
                yield chunk
        else:
            yield from reader

    def drain(self) -> bytes:
        buf = bytearray()
        try:
            for chunk in self.chunks():
                buf.extend(chunk)
        finally:
            close = getattr(self._reader, "close", None)
            if callable(close):
                close()
        return bytes(buf)


def _is_int_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and all(
        isinstance(v, int) and not isinstance(v, bool) for v in value
    )


def as_byte_source(value: Any, chunk_size: int = DEFAULT_CHUNK_SIZE) -> ByteSource:
    """
    Wrap a provider audio payload in the matching ByteSource variant.

    Args:
        value: The ``AudioStream`` value from a SynthesizeSpeech response.
        chunk_size: Read size used for incremental readers.

    Returns:
        BufferSource or ReaderSource.

    Raises:
        TypeError: If the value is None, text, or not byte-like at all.
    """
    if value is None:
        raise TypeError("audio stream is None")
    if isinstance(value, str):
        raise TypeError("audio stream must be bytes, not str")
    if isinstance(value, (bytes, bytearray, memoryview)) or _is_int_sequence(value):
        return BufferSource(value)
    if hasattr(value, "iter_chunks") or hasattr(value, "read") or hasattr(value, "__iter__"):
        return ReaderSource(value, chunk_size=chunk_size)
    raise TypeError(f"unsupported audio stream type: {type(value).__name__}")


def drain_audio_stream(value: Any, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """Drain any supported audio payload shape into one ``bytes`` buffer."""
    return as_byte_source(value, chunk_size=chunk_size).drain()
