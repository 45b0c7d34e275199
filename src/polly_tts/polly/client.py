"""
boto3 Client Construction for AWS Polly.

Each invocation gets its own client built from an explicit PollyConfig.
The client is created from a fresh ``boto3.session.Session`` because the
module-level default session is not safe to share across FastAPI's worker
threads.

botocore's automatic retries are switched off (one attempt in total) so a
throttled or failed call surfaces to the caller immediately.
"""
from __future__ import annotations

from typing import Any, Callable

import boto3
from botocore.config import Config

from polly_tts.core.config import PollyConfig

# Signature of anything that can produce a Polly client from a config.
# Tests substitute a fake; production uses create_polly_client.
ClientFactory = Callable[[PollyConfig], Any]


def create_polly_client(config: PollyConfig) -> Any:
    """
    Create a boto3 Polly client for one invocation.

    Args:
        config: Region, credentials, and timeouts.

    Returns:
        A ``botocore.client.Polly`` instance.
    """
    session = boto3.session.Session(
        aws_access_key_id=config.access_key_id,
        aws_secret_access_key=config.secret_access_key,
        aws_session_token=config.session_token,
        region_name=config.region,
    )
    return session.client(
        "polly",
        config=Config(
            connect_timeout=config.connect_timeout_s,
            read_timeout=config.read_timeout_s,
            retries={"total_max_attempts": 1},
        ),
    )
