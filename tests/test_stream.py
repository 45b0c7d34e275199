"""
Tests for draining Polly audio streams.

Every supported AudioStream shape must drain to the same bytes.
"""
import io

import pytest
from botocore.response import StreamingBody

from polly_tts.polly.stream import (
    BufferSource,
    ReaderSource,
    as_byte_source,
    drain_audio_stream,
)

AUDIO = b"ID3\x04\x00\x00\x00\x00\x00\x00" + bytes(range(256))


class ReadOnlyReader:
    """File-like object with read() but no iter_chunks()."""

    def __init__(self, data: bytes):
        self._buf = io.BytesIO(data)
        self.closed = False
        self.read_sizes = []

    def read(self, size=-1):
        self.read_sizes.append(size)
        return self._buf.read(size)

    def close(self):
        self.closed = True


class TestBufferSource:
    """Single in-memory buffers."""

    def test_bytes(self):
        source = as_byte_source(AUDIO)
        assert isinstance(source, BufferSource)
        assert source.drain() == AUDIO

    def test_bytearray_and_memoryview(self):
        assert drain_audio_stream(bytearray(AUDIO)) == AUDIO
        assert drain_audio_stream(memoryview(AUDIO)) == AUDIO

    def test_list_of_ints(self):
        assert drain_audio_stream([73, 68, 51]) == b"ID3"

    def test_empty_buffer(self):
        assert drain_audio_stream(b"") == b""

    def test_drain_returns_bytes(self):
        assert type(drain_audio_stream(bytearray(b"ab"))) is bytes


class TestReaderSource:
    """Incremental readers."""

    def test_chunks_concatenate_in_order(self):
        """A three-chunk stream drains to the same bytes as one buffer."""
        chunks = [AUDIO[:5], AUDIO[5:100], AUDIO[100:]]
        source = as_byte_source(iter(chunks))
        assert isinstance(source, ReaderSource)
        assert source.drain() == drain_audio_stream(AUDIO)

    def test_generator(self):
        def gen():
            yield b"ab"
            yield b""
            yield b"cd"

        assert drain_audio_stream(gen()) == b"abcd"

    def test_read_only_reader(self):
        reader = ReadOnlyReader(AUDIO)
        assert drain_audio_stream(reader, chunk_size=64) == AUDIO
        assert reader.read_sizes[0] == 64
        assert reader.closed

    def test_botocore_streaming_body(self):
        body = StreamingBody(io.BytesIO(AUDIO), len(AUDIO))
        assert drain_audio_stream(body, chunk_size=100) == AUDIO

    def test_reader_closed_on_error(self):
        class Broken(ReadOnlyReader):
            def read(self, size=-1):
                raise IOError("connection reset")

        reader = Broken(AUDIO)
        with pytest.raises(IOError, match="connection reset"):
            drain_audio_stream(reader)
        assert reader.closed


class TestUnsupported:
    """Values that are not byte-like."""

    @pytest.mark.parametrize("value", [None, "audio", 42, 1.5])
    def test_type_error(self, value):
        with pytest.raises(TypeError):
            as_byte_source(value)

    def test_list_with_non_ints_is_iterated(self):
        """A list of byte chunks is treated as a chunk iterable."""
        assert drain_audio_stream([b"ab", b"cd"]) == b"abcd"
