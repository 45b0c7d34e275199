"""
Core Infrastructure for polly-tts.

This package provides foundational components:
    - config.py: Settings loading and PollyConfig construction
    - logging/: Structured logging with numeric levels
    - metrics.py: Prometheus metrics collection
"""
