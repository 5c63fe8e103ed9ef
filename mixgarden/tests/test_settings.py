import pytest
from pydantic import ValidationError

from mixgarden.config.settings import DEFAULT_BASE_URL, MixgardenSettings


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("MIXGARDEN_API_KEY", raising=False)
    cfg = MixgardenSettings(_env_file=None)
    assert cfg.api_key is None
    assert cfg.base_url == DEFAULT_BASE_URL
    assert cfg.poll_interval_ms == 1500
    assert cfg.timeout_ms == 30000
    assert cfg.wait_for_response is True


def test_settings_reads_env(monkeypatch):
    monkeypatch.setenv("MIXGARDEN_API_KEY", "env-key-123")
    monkeypatch.setenv("MIXGARDEN_BASE_URL", "https://staging.mixgarden.ai/api/v1/")
    cfg = MixgardenSettings(_env_file=None)
    assert cfg.api_key == "env-key-123"
    assert cfg.base_url == "https://staging.mixgarden.ai/api/v1"


def test_settings_reads_yaml(monkeypatch, tmp_path):
    config_file = tmp_path / "mixgarden.yaml"
    config_file.write_text("api_key: yaml-key-456\ntimeout_ms: 5000\n", encoding="utf-8")
    monkeypatch.delenv("MIXGARDEN_API_KEY", raising=False)
    monkeypatch.setenv("MIXGARDEN_CONFIG_FILE", str(config_file))
    cfg = MixgardenSettings(_env_file=None)
    assert cfg.api_key == "yaml-key-456"
    assert cfg.timeout_ms == 5000


def test_settings_blank_api_key_is_none():
    cfg = MixgardenSettings(api_key="   ", _env_file=None)
    assert cfg.api_key is None


def test_settings_rejects_zero_poll_interval():
    with pytest.raises(ValidationError):
        MixgardenSettings(api_key="k", poll_interval_ms=0, _env_file=None)
