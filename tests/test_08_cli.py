"""Tests for the polly-tts command-line interface."""
from __future__ import annotations

import base64
import json

from polly_tts import cli
from polly_tts.services.synthesis_service import DEFAULT_VOICES, SynthesisRequestHandler

from conftest import FakeClientFactory, FakePollyClient

AUDIO = b"OggS" + b"\x02" * 20


def _json_lines(out: str):
    return [json.loads(line) for line in out.splitlines() if line.startswith("{")]


class TestVoices:
    def test_table(self, capsys):
        assert cli.main(["--voices"]) == 0
        out = capsys.readouterr().out
        assert "de" in out and "Marlene" in out
        assert "Joanna" in out

    def test_json(self, capsys):
        assert cli.main(["--voices", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["voices"] == DEFAULT_VOICES
        assert data["fallback"] == "Joanna"


class TestDryRun:
    def test_dry_run_ok(self, capsys):
        assert cli.main(["--text", "Hallo", "--language", "de", "--dry-run"]) == 0
        assert "DRY_RUN_OK" in capsys.readouterr().out

    def test_dry_run_json(self, capsys):
        code = cli.main(["Merhaba", "--language", "tr-TR", "--rate", "1.5", "--format", "ogg", "--dry-run", "--json"])
        assert code == 0
        out = capsys.readouterr().out
        assert out.strip().endswith("DRY_RUN_OK")
        payload = _json_lines(out)[0]
        assert payload["dry_run"] is True
        assert payload["credentials"] is False
        assert payload["params"]["VoiceId"] == "Filiz"
        assert payload["params"]["OutputFormat"] == "ogg_vorbis"
        assert payload["params"]["TextType"] == "ssml"
        assert payload["content_type"] == "audio/ogg"

    def test_dry_run_missing_text(self, capsys):
        assert cli.main(["--dry-run", "--json"]) == 1
        assert _json_lines(capsys.readouterr().out)[-1] == {
            "ok": False,
            "code": "INVALID_ARGUMENT",
            "error": "text is required",
        }


class TestSynthesize:
    def test_missing_credentials(self, capsys):
        assert cli.main(["--text", "Hello"]) == 1
        assert "AWS credentials not configured" in capsys.readouterr().out

    def test_bad_config(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "settings.yaml"
        path.write_text("polly:\n  engine: turbo\n", encoding="utf-8")
        monkeypatch.setenv("POLLY_TTS_SETTINGS", str(path))
        assert cli.main(["--text", "Hello"]) == 2
        assert "config error" in capsys.readouterr().out

    def test_writes_audio(self, tmp_path, monkeypatch, capsys, aws_env):
        factory = FakeClientFactory(FakePollyClient({"AudioStream": AUDIO}))
        monkeypatch.setattr(
            cli, "SynthesisRequestHandler",
            lambda config: SynthesisRequestHandler(config, factory),
        )
        out_path = tmp_path / "out" / "hello.ogg"
        code = cli.main(["--text", "Hello", "--format", "ogg", "--out", str(out_path), "--json"])
        assert code == 0
        assert out_path.read_bytes() == AUDIO
        payload = _json_lines(capsys.readouterr().out)[-1]
        assert payload["ok"] is True
        assert payload["content_type"] == "audio/ogg"
        assert payload["bytes"] == len(AUDIO)

    def test_prints_base64_without_out(self, monkeypatch, capsys, aws_env):
        factory = FakeClientFactory(FakePollyClient({"AudioStream": AUDIO}))
        monkeypatch.setattr(
            cli, "SynthesisRequestHandler",
            lambda config: SynthesisRequestHandler(config, factory),
        )
        assert cli.main(["Hello", "--json"]) == 0
        payload = _json_lines(capsys.readouterr().out)[-1]
        assert base64.b64decode(payload["base64"]) == AUDIO
        assert payload["voice"] == "Joanna"
