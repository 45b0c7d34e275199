"""Shared fixtures: a fake Polly client and a clean AWS environment."""
from __future__ import annotations

import pytest

from polly_tts.core.config import PollyConfig

AWS_ENV_VARS = (
    "AWS_REGION",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SESSION_TOKEN",
)


class FakePollyClient:
    """Stands in for a boto3 Polly client; records every call."""

    def __init__(self, response=None, exc=None):
        self.response = {"AudioStream": b"ID3fake-mp3"} if response is None else response
        self.exc = exc
        self.calls = []

    def synthesize_speech(self, **kwargs):
        self.calls.append(kwargs)
        if self.exc is not None:
            raise self.exc
        return self.response


class FakeClientFactory:
    """Client factory that hands out one FakePollyClient and remembers configs."""

    def __init__(self, client=None):
        self.client = client or FakePollyClient()
        self.configs = []

    def __call__(self, config):
        self.configs.append(config)
        return self.client


@pytest.fixture(autouse=True)
def clean_aws_env(monkeypatch):
    """No test sees the developer's real AWS credentials."""
    for name in AWS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def aws_env(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKIDTESTING")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "secret-testing")


@pytest.fixture
def polly_config():
    return PollyConfig(
        region="eu-central-1",
        access_key_id="AKIDTESTING",
        secret_access_key="secret-testing",
    )


@pytest.fixture
def fake_factory():
    return FakeClientFactory()
