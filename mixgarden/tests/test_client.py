import json

import httpx
import pytest

from mixgarden.client import MixgardenClient
from mixgarden.config.settings import MixgardenSettings
from mixgarden.domain.exceptions import ConfigurationError, JobTimeoutError
from mixgarden.domain.models import CompletionMessage


def _settings(**kw):
    values = {"api_key": "mg-test-key", "base_url": "https://api.test/api/v1", "_env_file": None}
    values.update(kw)
    return MixgardenSettings(**values)


class FakeBackend:
    """按路径模拟 Mixgarden 后端，并记录所有请求。"""

    def __init__(self, statuses=None):
        self.requests = []
        self._statuses = list(statuses or [{"status": "completed", "result": {"text": "Hi there!"}}])

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.replace("/api/v1", "", 1)
        body = json.loads(request.content) if request.content else None
        self.requests.append((request.method, path, body))

        if request.method == "POST" and path == "/conversations":
            return httpx.Response(201, json={"id": "c-42", "title": body["title"], "model": body["model"]})
        if request.method == "POST" and path.endswith("/messages"):
            return httpx.Response(201, json={"id": "m-1", **body})
        if request.method == "POST" and path.endswith("/generate"):
            return httpx.Response(202, json={"jobId": "job-7"})
        if request.method == "GET" and path.startswith("/conversations/generate/status/"):
            status = self._statuses.pop(0) if len(self._statuses) > 1 else self._statuses[0]
            return httpx.Response(200, json=status)
        if request.method == "GET" and path == "/models":
            return httpx.Response(200, json=[{"id": "mistral-small", "name": "Mistral Small"}])
        if request.method == "GET" and path == "/plugins":
            page = int(request.url.params["page"])
            limit = int(request.url.params["limit"])
            total = 3
            start = (page - 1) * limit
            items = [{"id": f"p-{i}", "name": f"Plugin {i}"} for i in range(start, min(start + limit, total))]
            return httpx.Response(200, json={"data": items})
        if request.method == "GET" and path == "/conversations":
            return httpx.Response(200, json=[{"id": "c-42", "title": "New Conversation", "model": "mistral-small"}])
        if request.method == "GET" and path == "/conversations/c-42":
            return httpx.Response(200, json={"id": "c-42", "title": "New Conversation", "messages": []})
        if request.method == "POST" and path == "/chat/completions":
            return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": "ok"}}]})
        return httpx.Response(404, text="unknown route")

    def paths(self):
        return [(m, p) for m, p, _ in self.requests]


def _client(backend, **kw):
    return MixgardenClient(settings=_settings(**kw), http_transport=httpx.MockTransport(backend.handler))


def test_client_without_credential_fails_before_network(monkeypatch):
    monkeypatch.delenv("MIXGARDEN_API_KEY", raising=False)
    backend = FakeBackend()
    with pytest.raises(ConfigurationError):
        MixgardenClient(settings=_settings(api_key=None), http_transport=httpx.MockTransport(backend.handler))
    assert backend.requests == []


def test_client_explicit_overrides():
    backend = FakeBackend()
    client = MixgardenClient(
        api_key="override-key",
        base_url="https://other.test/v2/",
        settings=_settings(api_key=None),
        http_transport=httpx.MockTransport(backend.handler),
    )
    assert client.settings.api_key == "override-key"
    assert client.settings.base_url == "https://other.test/v2"


@pytest.mark.asyncio
async def test_chat_scenario_creates_appends_starts_and_polls():
    backend = FakeBackend()
    client = _client(backend)

    response = await client.chat(
        "hello",
        "mistral-small",
        plugin_id="tone-pro",
        plugin_settings={"emotion-type": "neutral", "personality-type": "friendly"},
    )

    assert backend.paths() == [
        ("POST", "/conversations"),
        ("POST", "/conversations/c-42/messages"),
        ("POST", "/conversations/c-42/generate"),
        ("GET", "/conversations/generate/status/job-7"),
    ]
    assert backend.requests[0][2] == {"title": "New Conversation", "model": "mistral-small"}
    assert backend.requests[1][2]["role"] == "user"
    assert backend.requests[1][2]["pluginId"] == "tone-pro"
    assert backend.requests[2][2] == {
        "model": "mistral-small",
        "pluginId": "tone-pro",
        "pluginSettings": {"emotion-type": "neutral", "personality-type": "friendly"},
    }
    assert response.result == {"text": "Hi there!"}
    assert response.to_dict() == {"jobId": "job-7", "conversationId": "c-42", "result": {"text": "Hi there!"}}


@pytest.mark.asyncio
async def test_chat_without_waiting_issues_no_polls():
    backend = FakeBackend()
    client = _client(backend)

    response = await client.chat("hello", "mistral-small", conversation_id="c-42", wait_for_response=False)

    assert response.to_dict() == {"jobId": "job-7", "conversationId": "c-42"}
    assert backend.paths() == [
        ("POST", "/conversations/c-42/messages"),
        ("POST", "/conversations/c-42/generate"),
    ]


@pytest.mark.asyncio
async def test_chat_fire_and_forget_from_settings():
    backend = FakeBackend()
    client = _client(backend, wait_for_response=False)

    response = await client.chat("hello", "mistral-small")

    assert response.result is None
    assert not any(p.startswith("/conversations/generate/status") for _, p in backend.paths())


@pytest.mark.asyncio
async def test_chat_times_out_when_job_never_finishes():
    backend = FakeBackend(statuses=[{"status": "running"}])
    client = _client(backend)

    with pytest.raises(JobTimeoutError):
        await client.chat("hello", "mistral-small", poll_interval_ms=5, timeout_ms=20)


@pytest.mark.asyncio
async def test_resource_helpers():
    backend = FakeBackend()
    client = _client(backend, plugins_page_size=2)

    models = await client.get_models()
    assert [m.id for m in models] == ["mistral-small"]

    plugins = await client.get_plugins()
    assert [p.id for p in plugins] == ["p-0", "p-1", "p-2"]
    assert [p for m, p in backend.paths() if p == "/plugins"] == ["/plugins", "/plugins"]

    conversations = await client.get_conversations(limit=10)
    assert conversations[0].id == "c-42"
    assert conversations[0].model == "mistral-small"

    conversation = await client.get_conversation("c-42")
    assert conversation.raw["messages"] == []

    completion = await client.get_completion(
        "mistral-small",
        [CompletionMessage(role="user", content="hi")],
        max_tokens=64,
    )
    assert completion["choices"][0]["message"]["content"] == "ok"
    assert backend.requests[-1][2] == {
        "model": "mistral-small",
        "messages": [{"role": "user", "content": "hi"}],
        "maxTokens": 64,
    }


def test_client_with_custom_transport_skips_credential_check(monkeypatch):
    monkeypatch.delenv("MIXGARDEN_API_KEY", raising=False)

    class TransportStub:
        async def execute(self, method, path, body=None, query=None):
            return None

    stub = TransportStub()
    client = MixgardenClient(settings=_settings(api_key=None), transport=stub)
    assert client.transport is stub
