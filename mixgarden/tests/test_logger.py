import json
import logging

import httpx
import pytest

from mixgarden.client import MixgardenClient
from mixgarden.config.settings import MixgardenSettings
from mixgarden.infrastructure.logging.logger import JsonFormatter, SdkFileHandler, configure_logging, logger
from mixgarden.tests.test_client import FakeBackend


def _settings(**kw):
    values = {"api_key": "mg-test-key", "base_url": "https://api.test/api/v1", "_env_file": None}
    values.update(kw)
    return MixgardenSettings(**values)


def _sdk_handlers():
    return [h for h in logger.handlers if isinstance(h, SdkFileHandler)]


@pytest.mark.asyncio
async def test_client_writes_log_to_configured_dir(tmp_path):
    backend = FakeBackend()
    log_dir = tmp_path / "client-logs"
    client = MixgardenClient(
        settings=_settings(log_dir=str(log_dir)),
        http_transport=httpx.MockTransport(backend.handler),
    )
    assert not log_dir.exists()

    await client.chat("hello", "mistral-small", wait_for_response=False)

    lines = (log_dir / "mixgarden.log").read_text(encoding="utf-8").splitlines()
    events = [json.loads(line) for line in lines]
    started = [e for e in events if e["msg"] == "orchestrator.generation_started"]
    assert started and started[-1]["job_id"] == "job-7"


def test_configure_logging_replaces_handler_for_new_dir(tmp_path):
    first = configure_logging(_settings(log_dir=str(tmp_path / "a")))
    assert configure_logging(_settings(log_dir=str(tmp_path / "a"))) is first

    second = configure_logging(_settings(log_dir=str(tmp_path / "b")))
    assert second is not first
    assert _sdk_handlers() == [second]


def test_configure_logging_creates_nothing_until_first_record(tmp_path):
    configure_logging(_settings(log_dir=str(tmp_path / "lazy")))
    assert not (tmp_path / "lazy").exists()


def test_json_formatter_redacts_long_messages():
    record = logging.LogRecord("mixgarden", logging.INFO, __file__, 1, "x" * 200, None, None)
    record.extra = {"job_id": "job-1"}

    payload = json.loads(JsonFormatter(redact_content=True).format(record))
    assert payload["msg"] == "x" * 64
    assert payload["job_id"] == "job-1"
    assert json.loads(JsonFormatter().format(record))["msg"] == "x" * 200
