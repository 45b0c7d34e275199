"""
Log Formatters for JSON and Console Output.

    JsonlFormatter: one JSON object per line, for the rotating file handler.
    ColoredConsoleFormatter: human-readable line for stdout.

Output Examples:
    JSONL (file):
        {"ts":"2026-01-15T14:30:05+03:00","level":2,"tag":"INFO","message":"synth_done","request_id":"abc123","seconds":0.41,"extra":{"bytes":5120}}

    Console:
        14:30:05 [ INFO  ] (abc123) synth_done 0.410s bytes=5120
"""
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime
from typing import Any, Dict


class Colors:
    """ANSI escape codes used by the console formatter."""
    RESET = "\033[0m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"
    GRAY = "\033[90m"
    BRIGHT_RED = "\033[91m"
    BRIGHT_GREEN = "\033[92m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_CYAN = "\033[96m"


TAG_COLORS = {
    "SUCCESS": Colors.BRIGHT_GREEN,
    "ERROR": Colors.BRIGHT_RED,
    "WARN": Colors.BRIGHT_YELLOW,
    "INFO": Colors.BRIGHT_CYAN,
    "DEBUG": Colors.GRAY,
}


def supports_color() -> bool:
    """
    Check if stdout should receive ANSI color codes.

    Colors are off when POLLY_TTS_NO_COLOR=1 or NO_COLOR is set, or when
    stdout is not a TTY.
    """
    if os.getenv("POLLY_TTS_NO_COLOR", "0") == "1":
        return False
    if os.getenv("NO_COLOR"):
        return False
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


class JsonlFormatter(logging.Formatter):
    """Format log records as JSON Lines for file output."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created).astimezone().isoformat()

        payload: Dict[str, Any] = {
            "ts": ts,
            "level": getattr(record, "numeric_level", 2),
            "tag": getattr(record, "tag", record.levelname),
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
        }

        seconds = getattr(record, "seconds", None)
        if seconds is not None:
            payload["seconds"] = seconds

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            payload["extra"] = extra_data

        return json.dumps(payload, ensure_ascii=False, default=str)


class ColoredConsoleFormatter(logging.Formatter):
    """
    Format log records for console display.

    Output Format:
        HH:MM:SS [ TAG   ] (rid) message 0.123s key=value
    """

    def __init__(self, use_colors: bool = False):
        super().__init__()
        self.use_colors = use_colors

    def _c(self, text: str, color: str) -> str:
        if not self.use_colors:
            return text
        return f"{color}{text}{Colors.RESET}"

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        tag = getattr(record, "tag", record.levelname)
        rid = getattr(record, "request_id", "-")

        parts = [
            self._c(ts, Colors.DIM),
            self._c(f"[{tag:^7}]", TAG_COLORS.get(tag.upper(), Colors.WHITE)),
        ]
        if rid != "-":
            parts.append(self._c(f"({rid})", Colors.DIM + Colors.CYAN))
        parts.append(record.getMessage())

        seconds = getattr(record, "seconds", None)
        if seconds is not None:
            # Polly round-trips are usually a few hundred ms
            if seconds < 0.5:
                time_color = Colors.GREEN
            elif seconds < 2.0:
                time_color = Colors.YELLOW
            else:
                time_color = Colors.RED
            parts.append(self._c(f"{seconds:.3f}s", time_color))

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            for k, v in extra_data.items():
                parts.append(self._c(f"{k}={v}", Colors.DIM))

        return " ".join(parts)
