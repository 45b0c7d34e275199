"""
Command-Line Interface for polly-tts.

Synthesizes one text with AWS Polly without running the HTTP server,
using the same handler and voice table as /api/polly.

Usage Examples:
    # Synthesize to a file
    polly-tts --text "Merhaba dünya" --language tr-TR --out hello.mp3

    # Positional text, Ogg output, faster speech
    polly-tts "Hallo Welt" --language de --format ogg --rate 1.2 --out hallo.ogg

    # Show the resolved Polly parameters without calling AWS
    polly-tts --text "Test" --pitch 5 --dry-run --json

    # Print the language -> voice table
    polly-tts --voices

Environment Variables:
    AWS_REGION, AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY, AWS_SESSION_TOKEN
    POLLY_TTS_SETTINGS: Settings file (default config/settings.yaml)
"""

from __future__ import annotations

import argparse
import base64
import json
import os
from pathlib import Path
from typing import List, Optional
from uuid import uuid4

from polly_tts.core.config import ConfigValidationError, Defaults, Settings, load_settings
from polly_tts.core.logging import configure_logging, get_logger, info, set_request_id
from polly_tts.services.errors import TTSError
from polly_tts.services.synthesis_service import (
    DEFAULT_VOICES,
    FALLBACK_VOICE,
    SynthesisRequest,
    SynthesisRequestHandler,
    build_synthesis_params,
)


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="polly-tts CLI (AWS Polly synthesis)")

    parser.add_argument("text_pos", nargs="?", help="Text to synthesize (positional)")
    parser.add_argument("--text", help="Text to synthesize")

    parser.add_argument("--language", help="Language code, e.g. tr-TR")
    parser.add_argument("--voice", help="Polly VoiceId override")
    parser.add_argument("--rate", type=float, help="Speaking rate multiplier (1.0 = normal)")
    parser.add_argument("--pitch", type=float, help="Pitch offset in percent")
    parser.add_argument("--format", dest="audio_format", help="ogg, pcm, or mp3 (default)")

    parser.add_argument("--out", help="Write decoded audio to this path")

    parser.add_argument("--dry-run", action="store_true",
                        help="Resolve parameters without calling Polly")
    parser.add_argument("--json", action="store_true",
                        help="Print JSON summary")
    parser.add_argument("--voices", action="store_true",
                        help="Print the language -> voice table")

    return parser.parse_args(argv)


def _load_settings() -> Settings:
    try:
        return load_settings(os.getenv("POLLY_TTS_SETTINGS", Defaults.SETTINGS_PATH))
    except FileNotFoundError:
        return Settings(raw={})


def _print_voices(as_json: bool) -> None:
    table = dict(DEFAULT_VOICES)
    if as_json:
        print(json.dumps({"voices": table, "fallback": FALLBACK_VOICE}))
        return
    for prefix, voice in table.items():
        print(f"{prefix:<5} {voice}")
    print(f"{'*':<5} {FALLBACK_VOICE}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code (0 for success, 1 for synthesis errors, 2 for bad config).
    """
    args = _parse_args(argv)

    if args.voices:
        _print_voices(args.json)
        return 0

    configure_logging()
    log = get_logger("polly-tts.cli")
    set_request_id(str(uuid4())[:12])

    request = SynthesisRequest(
        text=args.text or args.text_pos,
        language_code=args.language,
        voice_name=args.voice,
        speaking_rate=args.rate,
        pitch=args.pitch,
        audio_format=args.audio_format,
    )
    settings = _load_settings()

    try:
        config = settings.get_polly_config()

        if args.dry_run:
            params = build_synthesis_params(request, engine=config.engine)
            payload = {
                "ok": True,
                "dry_run": True,
                "region": config.region,
                "credentials": config.has_credentials,
                "params": params.to_provider_kwargs(),
                "content_type": params.output_format.content_type,
            }
            if args.json:
                print(json.dumps(payload, ensure_ascii=False))
            else:
                info(log, "dry_run", voice=params.voice_id, format=params.output_format.value)
                print(payload)
            print("DRY_RUN_OK")
            return 0

        result = SynthesisRequestHandler(config).handle(request)
    except ConfigValidationError as e:
        print(f"config error: {e}")
        return 2
    except TTSError as e:
        if args.json:
            print(json.dumps({"ok": False, "code": e.code, **e.to_dict()}, ensure_ascii=False))
        else:
            print(e.message)
        return 1

    payload = {
        "ok": True,
        "voice": result.voice_id,
        "content_type": result.content_type,
        "bytes": result.audio_bytes,
    }
    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(base64.b64decode(result.base64))
        payload["out"] = str(out_path)
    else:
        payload["base64"] = result.base64

    if args.json:
        print(json.dumps(payload, ensure_ascii=False))
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
