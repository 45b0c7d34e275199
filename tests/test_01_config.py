"""Tests for configuration loading and PollyConfig validation."""
from __future__ import annotations

import pytest

from polly_tts.core.config import (
    ConfigValidationError,
    Defaults,
    PollyConfig,
    Settings,
    load_settings,
)


class TestLoadSettings:
    """Tests for load_settings()."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "aws:\n  region: us-east-1\npolly:\n  engine: neural\nlogging:\n  level: 3\n",
            encoding="utf-8",
        )
        settings = load_settings(str(path))
        assert settings.raw["aws"]["region"] == "us-east-1"
        assert settings.raw["logging"]["level"] == 3
        config = settings.get_polly_config(environ={})
        assert config.region == "us-east-1"
        assert config.engine == "neural"

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings(str(path)).raw == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(str(tmp_path / "nope.yaml"))

    def test_repo_settings_file_is_valid(self):
        """The shipped config/settings.yaml produces a valid PollyConfig."""
        from pathlib import Path

        path = Path(__file__).resolve().parents[1] / Defaults.SETTINGS_PATH
        config = load_settings(str(path)).get_polly_config(environ={})
        assert config.engine in ("standard", "neural", "long-form", "generative")
        assert not config.has_credentials


class TestPollyConfig:
    """Tests for PollyConfig.from_settings()."""

    def test_defaults(self):
        config = PollyConfig.from_settings(Settings(raw={}), environ={})
        assert config.region == Defaults.AWS_REGION
        assert config.engine == "standard"
        assert config.connect_timeout_s == Defaults.POLLY_CONNECT_TIMEOUT_S
        assert config.read_timeout_s == Defaults.POLLY_READ_TIMEOUT_S
        assert config.access_key_id is None
        assert not config.has_credentials

    def test_environment_wins_over_yaml(self):
        settings = Settings(raw={"aws": {"region": "us-west-2", "access_key_id": "yaml-key"}})
        env = {
            "AWS_REGION": "eu-west-1",
            "AWS_ACCESS_KEY_ID": "env-key",
            "AWS_SECRET_ACCESS_KEY": "env-secret",
            "AWS_SESSION_TOKEN": "token",
        }
        config = PollyConfig.from_settings(settings, environ=env)
        assert config.region == "eu-west-1"
        assert config.access_key_id == "env-key"
        assert config.secret_access_key == "env-secret"
        assert config.session_token == "token"
        assert config.has_credentials

    def test_yaml_region_used_without_env(self):
        settings = Settings(raw={"aws": {"region": "ap-northeast-1"}})
        assert PollyConfig.from_settings(settings, environ={}).region == "ap-northeast-1"

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKIDPROC")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "proc-secret")
        config = Settings(raw={}).get_polly_config()
        assert config.access_key_id == "AKIDPROC"
        assert config.has_credentials

    @pytest.mark.parametrize(
        "key_id, secret",
        [(None, None), ("AKID", None), (None, "secret"), ("", "secret"), ("AKID", "")],
    )
    def test_partial_credentials(self, key_id, secret):
        """Both halves of the key pair are required."""
        assert not PollyConfig(access_key_id=key_id, secret_access_key=secret).has_credentials

    def test_engine_is_normalized(self):
        settings = Settings(raw={"polly": {"engine": "Neural"}})
        assert PollyConfig.from_settings(settings, environ={}).engine == "neural"

    def test_unknown_engine(self):
        settings = Settings(raw={"polly": {"engine": "turbo"}})
        with pytest.raises(ConfigValidationError, match="polly.engine"):
            PollyConfig.from_settings(settings, environ={})

    @pytest.mark.parametrize("key", ["connect_timeout_s", "read_timeout_s"])
    def test_non_positive_timeouts(self, key):
        settings = Settings(raw={"polly": {key: 0}})
        with pytest.raises(ConfigValidationError, match=key):
            PollyConfig.from_settings(settings, environ={})

    def test_negative_preview_chars(self):
        settings = Settings(raw={"logging": {"text_preview_chars": -1}})
        with pytest.raises(ConfigValidationError, match="text_preview_chars"):
            PollyConfig.from_settings(settings, environ={})

    def test_config_is_frozen(self):
        config = PollyConfig()
        with pytest.raises(AttributeError):
            config.region = "us-east-1"
