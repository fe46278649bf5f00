"""Tests for HttpA2AClient against a mocked HTTP transport."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import patch

import httpx
import pytest
from pydantic import ValidationError

from a2alink.config import ClientConfig
from a2alink.protocol.client import A2AClient
from a2alink.protocol.errors import INTERNAL_ERROR, NetworkError, RemoteError, RpcError
from a2alink.protocol.http import HttpA2AClient
from a2alink.protocol.models import Message, TaskQueryParams, TaskSendParams
from a2alink.protocol.streaming import StreamState, TaskEventStream

URL = "https://agent.example.com"


def _card_json(**capabilities: bool) -> dict[str, Any]:
    return {
        "name": "echo-agent",
        "url": URL,
        "version": "1.0.0",
        "capabilities": capabilities,
        "skills": [{"id": "echo", "name": "Echo"}],
    }


def _ok(result: Any, rid: Any = 1) -> httpx.Response:
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": rid, "result": result})


class _Recorder:
    """MockTransport handler that records requests and replays canned responses."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []
        self._respond = respond

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    def body(self, index: int = -1) -> dict[str, Any]:
        return json.loads(self.requests[index].content)


def _client(
    recorder: _Recorder, config: ClientConfig | None = None, base_url: str | None = URL
) -> HttpA2AClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    return HttpA2AClient(base_url, http_client=http, config=config)


class TestLifecycle:
    def test_requires_base_url(self) -> None:
        with pytest.raises(ValueError, match="base_url"):
            HttpA2AClient()

    def test_base_url_from_config(self) -> None:
        client = HttpA2AClient(config=ClientConfig(base_url="https://cfg.example.com/"))
        assert client.base_url == "https://cfg.example.com"

    def test_satisfies_protocol(self) -> None:
        assert isinstance(HttpA2AClient(URL), A2AClient)

    async def test_unentered_client_raises(self) -> None:
        client = HttpA2AClient(URL)
        with pytest.raises(RuntimeError, match="async context manager"):
            await client.get_task({"id": "t1"})

    async def test_owned_client_closed_on_exit(self) -> None:
        async with HttpA2AClient(URL) as client:
            http = client._http()
        assert http.is_closed

    async def test_injected_client_left_open(self) -> None:
        http = httpx.AsyncClient(transport=httpx.MockTransport(lambda _r: _ok(None)))
        async with HttpA2AClient(URL, http_client=http):
            pass
        assert not http.is_closed
        await http.aclose()


class TestUnaryCalls:
    async def test_get_task_wire_exchange(self) -> None:
        recorder = _Recorder(
            lambda _r: httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": "abc", "result": {"id": "t1", "status": "done"}},
            )
        )
        with patch("a2alink.protocol.jsonrpc.generate_request_id", return_value="abc"):
            result = await _client(recorder).get_task({"id": "t1"})

        assert result == {"id": "t1", "status": "done"}
        assert recorder.body() == {
            "jsonrpc": "2.0",
            "id": "abc",
            "method": "tasks/get",
            "params": {"id": "t1"},
        }
        request = recorder.requests[0]
        assert request.method == "POST"
        assert request.url.host == "agent.example.com"
        assert request.headers["content-type"] == "application/json"
        assert request.headers["accept"] == "application/json"
        assert request.extensions["timeout"]["read"] == 30.0

    async def test_send_task_uses_wire_names(self) -> None:
        recorder = _Recorder(lambda _r: _ok({"id": "t1", "status": {"state": "submitted"}}))
        params = TaskSendParams(id="t1", session_id="s1", message=Message.from_text("hi"))
        await _client(recorder).send_task(params)

        body = recorder.body()
        assert body["method"] == "tasks/send"
        assert body["params"] == {
            "id": "t1",
            "sessionId": "s1",
            "message": {"role": "user", "parts": [{"type": "text", "text": "hi"}]},
        }

    async def test_history_length(self) -> None:
        recorder = _Recorder(lambda _r: _ok(None))
        await _client(recorder).get_task(TaskQueryParams(id="t1", history_length=2))
        assert recorder.body()["params"] == {"id": "t1", "historyLength": 2}

    @pytest.mark.parametrize(
        ("operation", "params", "method"),
        [
            ("cancel_task", {"id": "t1"}, "tasks/cancel"),
            ("get_task_push_notification", {"id": "t1"}, "tasks/pushNotification/get"),
            (
                "set_task_push_notification",
                {"id": "t1", "pushNotificationConfig": {"url": "https://hook.example.com"}},
                "tasks/pushNotification/set",
            ),
        ],
    )
    async def test_method_names(self, operation: str, params: dict[str, Any], method: str) -> None:
        recorder = _Recorder(lambda _r: _ok({"id": "t1"}))
        result = await getattr(_client(recorder), operation)(params)
        assert result == {"id": "t1"}
        assert recorder.body()["method"] == method
        assert recorder.body()["params"] == params

    async def test_null_result(self) -> None:
        recorder = _Recorder(lambda _r: _ok(None))
        assert await _client(recorder).cancel_task({"id": "t1"}) is None

    async def test_unique_request_ids(self) -> None:
        recorder = _Recorder(lambda _r: _ok(None))
        client = _client(recorder)
        await client.get_task({"id": "t1"})
        await client.get_task({"id": "t1"})
        assert recorder.body(0)["id"] != recorder.body(1)["id"]

    async def test_missing_id_rejected_before_io(self) -> None:
        recorder = _Recorder(lambda _r: _ok(None))
        with pytest.raises(ValidationError):
            await _client(recorder).get_task({})
        assert recorder.requests == []

    async def test_configured_headers_sent(self) -> None:
        recorder = _Recorder(lambda _r: _ok(None))
        config = ClientConfig(headers={"X-Trace": "abc"})
        await _client(recorder, config=config).get_task({"id": "t1"})
        assert recorder.requests[0].headers["x-trace"] == "abc"

    async def test_remote_error_verbatim(self) -> None:
        recorder = _Recorder(
            lambda _r: httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32002, "message": "Task cannot be canceled"}},
            )
        )
        with pytest.raises(RemoteError) as exc_info:
            await _client(recorder).cancel_task({"id": "t1"})
        assert exc_info.value.code == -32002
        assert exc_info.value.message == "Task cannot be canceled"

    async def test_network_error(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NetworkError) as exc_info:
            await _client(_Recorder(refuse)).get_task({"id": "t1"})
        assert exc_info.value.code == INTERNAL_ERROR
        assert "connection refused" in exc_info.value.message


class TestStreamingCalls:
    async def test_subscribe_is_lazy(self) -> None:
        body = b'data: {"jsonrpc":"2.0","id":1,"result":{"id":"t1","status":{"state":"working"}}}\n\n'
        recorder = _Recorder(
            lambda _r: httpx.Response(200, headers={"content-type": "text/event-stream"}, content=body)
        )
        client = _client(recorder)

        events = client.send_task_subscribe({"id": "t1", "message": Message.from_text("go").to_wire()})
        assert isinstance(events, TaskEventStream)
        assert recorder.requests == []

        async with events:
            results = [event async for event in events]

        assert results == [{"id": "t1", "status": {"state": "working"}}]
        assert events.state is StreamState.COMPLETED
        assert recorder.body()["method"] == "tasks/sendSubscribe"
        assert recorder.requests[0].headers["accept"] == "text/event-stream"

    async def test_resubscribe(self) -> None:
        recorder = _Recorder(
            lambda _r: httpx.Response(200, headers={"content-type": "text/event-stream"}, content=b"")
        )
        events = _client(recorder).resubscribe_task({"id": "t1"})
        assert [event async for event in events] == []
        assert recorder.body()["method"] == "tasks/resubscribe"
        assert recorder.body()["params"] == {"id": "t1"}
        request = recorder.requests[0]
        assert request.headers["accept"] == "text/event-stream"
        assert request.extensions["timeout"]["read"] is None
        assert request.extensions["timeout"]["connect"] == 30.0

    def test_subscribe_validates_params(self) -> None:
        recorder = _Recorder(lambda _r: _ok(None))
        with pytest.raises(ValidationError):
            _client(recorder).send_task_subscribe({"id": "t1"})


class TestAgentCard:
    async def test_fetched_once(self) -> None:
        recorder = _Recorder(lambda _r: httpx.Response(200, json=_card_json(streaming=True)))
        client = _client(recorder)

        first = await client.agent_card()
        second = await client.agent_card()

        assert first is second
        assert first.name == "echo-agent"
        assert len(recorder.requests) == 1
        request = recorder.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/agent-card"

    async def test_custom_path(self) -> None:
        recorder = _Recorder(lambda _r: httpx.Response(200, json=_card_json()))
        config = ClientConfig(agent_card_path=".well-known/agent.json")
        await _client(recorder, config=config).agent_card()
        assert recorder.requests[0].url.path == "/.well-known/agent.json"

    async def test_fetch_failure(self) -> None:
        recorder = _Recorder(lambda _r: httpx.Response(404, text="not found"))
        with pytest.raises(RpcError, match="Could not retrieve agent card") as exc_info:
            await _client(recorder).agent_card()
        assert exc_info.value.code == INTERNAL_ERROR

    async def test_invalid_card_body(self) -> None:
        recorder = _Recorder(lambda _r: httpx.Response(200, content=b"not json"))
        with pytest.raises(RpcError):
            await _client(recorder).agent_card()


class TestSupports:
    @pytest.mark.parametrize(
        ("capability", "expected"),
        [
            ("streaming", True),
            ("pushNotifications", False),
            ("stateTransitionHistory", True),
            ("teleportation", False),
        ],
    )
    async def test_capabilities(self, capability: str, expected: bool) -> None:
        recorder = _Recorder(
            lambda _r: httpx.Response(
                200, json=_card_json(streaming=True, stateTransitionHistory=True)
            )
        )
        assert await _client(recorder).supports(capability) is expected

    async def test_false_when_card_unavailable(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("down", request=request)

        assert await _client(_Recorder(refuse)).supports("streaming") is False

    async def test_uses_cached_card(self) -> None:
        recorder = _Recorder(lambda _r: httpx.Response(200, json=_card_json(streaming=True)))
        client = _client(recorder)
        await client.agent_card()
        assert await client.supports("streaming") is True
        assert len(recorder.requests) == 1
