"""
AWS Polly Provider Layer.

    - client.py: boto3 client construction from PollyConfig
    - stream.py: Draining AudioStream payloads into one buffer
"""
from .client import ClientFactory, create_polly_client
from .stream import BufferSource, ByteSource, ReaderSource, as_byte_source, drain_audio_stream

__all__ = [
    "ClientFactory",
    "create_polly_client",
    "ByteSource",
    "BufferSource",
    "ReaderSource",
    "as_byte_source",
    "drain_audio_stream",
]
