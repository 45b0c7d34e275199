"""
Prometheus Metrics for polly-tts.

Metrics Exposed:
    polly_requests_total              - Counter of requests by status and format
    polly_request_duration_seconds    - Histogram of handler latency
    polly_audio_bytes_total           - Counter of audio bytes returned
    polly_characters_total            - Counter of characters sent to Polly

Usage:
    from polly_tts.core.metrics import metrics

    metrics.record_request(status="success", output_format="mp3",
                           duration=0.4, audio_bytes=5120, characters=12)

    content, content_type = metrics.get_metrics_response()

Status values mirror the error codes of the synthesis handler
("success", "invalid_argument", "misconfigured", "empty_audio",
"provider_failure").
"""
from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)


class PollyMetrics:
    """
    Metrics collection for the Polly relay.

    Uses a private CollectorRegistry so that several instances (one per
    test, for example) never collide on metric names.
    """

    def __init__(self):
        self._registry = CollectorRegistry()

        self._requests_total = Counter(
            "polly_requests_total",
            "Total synthesis requests",
            ["status", "output_format"],
            registry=self._registry,
        )
        self._request_duration = Histogram(
            "polly_request_duration_seconds",
            "Synthesis request duration in seconds",
            ["status"],
            buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
            registry=self._registry,
        )
        self._audio_bytes_total = Counter(
            "polly_audio_bytes_total",
            "Total audio bytes returned by Polly",
            registry=self._registry,
        )
        self._characters_total = Counter(
            "polly_characters_total",
            "Total characters sent to Polly",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def record_request(
        self,
        status: str,
        duration: float,
        output_format: str = "none",
        audio_bytes: int = 0,
        characters: int = 0,
    ) -> None:
        """
        Record a finished synthesis request.

        Args:
            status: "success" or a lowercased error code.
            duration: Handler duration in seconds.
            output_format: Resolved output format, "none" if not resolved.
            audio_bytes: Size of the decoded audio.
            characters: Characters sent to Polly (markup included).
        """
        self._requests_total.labels(status=status, output_format=output_format).inc()
        self._request_duration.labels(status=status).observe(duration)
        if audio_bytes > 0:
            self._audio_bytes_total.inc(audio_bytes)
        if characters > 0:
            self._characters_total.inc(characters)

    def get_metrics_response(self) -> tuple[bytes, str]:
        """
        Get metrics in Prometheus format.

        Returns:
            Tuple of (content_bytes, content_type)
        """
        return generate_latest(self._registry), CONTENT_TYPE_LATEST


# Global singleton metrics instance
metrics = PollyMetrics()
