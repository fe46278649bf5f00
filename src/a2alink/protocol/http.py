"""HttpA2AClient — talks to a remote agent with JSON-RPC 2.0 over HTTP."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from a2alink.config import ClientConfig
from a2alink.protocol.client import (
    CANCEL_TASK,
    GET_TASK,
    GET_TASK_PUSH_NOTIFICATION,
    RESUBSCRIBE_TASK,
    SEND_TASK,
    SEND_TASK_SUBSCRIBE,
    SET_TASK_PUSH_NOTIFICATION,
    STREAMING_METHODS,
)
from a2alink.protocol.decoding import decode_response
from a2alink.protocol.errors import INTERNAL_ERROR, NetworkError, RpcError
from a2alink.protocol.jsonrpc import JsonRpcRequest, build_request
from a2alink.protocol.models import (
    AgentCard,
    TaskIdParams,
    TaskPushNotificationConfig,
    TaskQueryParams,
    TaskSendParams,
)
from a2alink.protocol.streaming import TaskEventStream
from a2alink.utils.telemetry import (
    ATTR_ERROR_CODE,
    ATTR_HTTP_STATUS,
    ATTR_METHOD,
    ATTR_REQUEST_ID,
    ATTR_TASK_ID,
    get_tracer,
)

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

_ModelT = TypeVar("_ModelT", bound=BaseModel)

JSON_CONTENT_TYPE = "application/json"
SSE_CONTENT_TYPE = "text/event-stream"

# Capability names as advertised in the agent card, mapped to model fields.
_CAPABILITY_FIELDS = {
    "streaming": "streaming",
    "pushNotifications": "push_notifications",
    "push_notifications": "push_notifications",
    "stateTransitionHistory": "state_transition_history",
    "state_transition_history": "state_transition_history",
}


class HttpA2AClient:
    """Communicates with a remote A2A agent over JSON-RPC on HTTP.

    Satisfies the :class:`~a2alink.protocol.client.A2AClient` protocol.

    Usage::

        async with HttpA2AClient("https://agent.example.com") as client:
            task = await client.get_task({"id": "t1"})
            async with client.resubscribe_task({"id": "t1"}) as events:
                async for event in events:
                    ...

    Diagnostics go to *log* (default: this module's logger). Pass
    ``http_client`` to reuse an existing :class:`httpx.AsyncClient`; the
    caller then owns its lifecycle and the client works without ``async with``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        config: ClientConfig | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self._config = config or ClientConfig()
        url = base_url if base_url is not None else self._config.base_url
        if not url:
            msg = "HttpA2AClient needs a base_url (argument or config)"
            raise ValueError(msg)
        self._base_url = url.rstrip("/")
        self._client = http_client
        self._owns_client = http_client is None
        self._card: AgentCard | None = None
        self._log = log or logger

    async def __aenter__(self) -> HttpA2AClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self

    async def __aexit__(self, *_: object) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "HttpA2AClient must be used as an async context manager"
            raise RuntimeError(msg)
        return self._client

    # ------------------------------------------------------------------
    # Agent card
    # ------------------------------------------------------------------

    async def agent_card(self) -> AgentCard:
        """GET the agent card once and cache it for the client's lifetime.

        Raises:
            RpcError: ``-32603`` if the card cannot be fetched or parsed.
        """
        if self._card is not None:
            return self._card

        card_url = f"{self._base_url}{self._config.agent_card_path}"
        with _tracer.start_as_current_span("a2a.agent_card") as span:
            span.set_attribute(ATTR_METHOD, "agent_card")
            try:
                response = await self._http().get(
                    card_url,
                    headers=self._headers(JSON_CONTENT_TYPE, body=False),
                    timeout=httpx.Timeout(self._config.timeout),
                )
                span.set_attribute(ATTR_HTTP_STATUS, response.status_code)
                response.raise_for_status()
                card = AgentCard.model_validate(response.json())
            except (httpx.HTTPError, ValueError) as exc:
                self._log.error("Failed to fetch or parse agent card from %s: %s", card_url, exc)
                span.set_attribute(ATTR_ERROR_CODE, INTERNAL_ERROR)
                raise RpcError(
                    INTERNAL_ERROR,
                    f"Could not retrieve agent card: {exc}",
                    data=type(exc).__name__,
                ) from exc

        self._card = card
        return card

    async def supports(self, capability: str) -> bool:
        """Check a capability flag on the agent card.

        Known capabilities: ``streaming``, ``pushNotifications`` and
        ``stateTransitionHistory``. Returns ``False`` for anything else and
        when the card cannot be retrieved.
        """
        try:
            card = await self.agent_card()
        except RpcError as exc:
            self._log.error("Failed to determine support for capability '%s': %s", capability, exc)
            return False

        field = _CAPABILITY_FIELDS.get(capability)
        if field is None:
            self._log.warning("Unknown capability '%s'", capability)
            return False
        return bool(getattr(card.capabilities, field))

    # ------------------------------------------------------------------
    # Unary methods
    # ------------------------------------------------------------------

    async def send_task(self, params: TaskSendParams | Mapping[str, Any]) -> Any:
        """``tasks/send`` — returns the task, or ``None`` for no payload."""
        return await self._call(SEND_TASK, _coerce(params, TaskSendParams))

    async def get_task(self, params: TaskQueryParams | Mapping[str, Any]) -> Any:
        """``tasks/get`` — returns the task, or ``None`` for no payload."""
        return await self._call(GET_TASK, _coerce(params, TaskQueryParams))

    async def cancel_task(self, params: TaskIdParams | Mapping[str, Any]) -> Any:
        """``tasks/cancel`` — returns the task, or ``None`` for no payload."""
        return await self._call(CANCEL_TASK, _coerce(params, TaskIdParams))

    async def set_task_push_notification(
        self, params: TaskPushNotificationConfig | Mapping[str, Any]
    ) -> Any:
        """``tasks/pushNotification/set`` — returns the stored config."""
        return await self._call(
            SET_TASK_PUSH_NOTIFICATION, _coerce(params, TaskPushNotificationConfig)
        )

    async def get_task_push_notification(
        self, params: TaskIdParams | Mapping[str, Any]
    ) -> Any:
        """``tasks/pushNotification/get`` — returns the config, or ``None``."""
        return await self._call(GET_TASK_PUSH_NOTIFICATION, _coerce(params, TaskIdParams))

    # ------------------------------------------------------------------
    # Streaming methods
    # ------------------------------------------------------------------

    def send_task_subscribe(
        self, params: TaskSendParams | Mapping[str, Any]
    ) -> TaskEventStream:
        """``tasks/sendSubscribe`` — stream of status and artifact updates.

        The request is sent when the stream is first iterated.
        """
        return self._stream(SEND_TASK_SUBSCRIBE, _coerce(params, TaskSendParams))

    def resubscribe_task(
        self, params: TaskQueryParams | Mapping[str, Any]
    ) -> TaskEventStream:
        """``tasks/resubscribe`` — reattach to a task's update stream."""
        return self._stream(RESUBSCRIBE_TASK, _coerce(params, TaskQueryParams))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _headers(self, accept: str, *, body: bool = True) -> dict[str, str]:
        headers = dict(self._config.headers)
        if body:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        headers["Accept"] = accept
        return headers

    def _build(self, method: str, params: BaseModel) -> tuple[JsonRpcRequest, httpx.Request]:
        rpc = build_request(method, params)
        if method in STREAMING_METHODS:
            accept = SSE_CONTENT_TYPE
            timeout = httpx.Timeout(self._config.timeout, read=None)
        else:
            accept = JSON_CONTENT_TYPE
            timeout = httpx.Timeout(self._config.timeout)
        request = self._http().build_request(
            "POST",
            self._base_url,
            json=rpc.model_dump(mode="json"),
            headers=self._headers(accept),
            timeout=timeout,
        )
        return rpc, request

    async def _call(self, method: str, params: BaseModel) -> Any:
        rpc, request = self._build(method, params)
        with _tracer.start_as_current_span("a2a.call") as span:
            span.set_attribute(ATTR_METHOD, method)
            span.set_attribute(ATTR_REQUEST_ID, str(rpc.id))
            span.set_attribute(ATTR_TASK_ID, str(getattr(params, "id", "")))

            try:
                response = await self._http().send(request)
            except httpx.TransportError as exc:
                self._log.error("Network error during RPC call %s: %s", method, exc)
                span.set_attribute(ATTR_ERROR_CODE, INTERNAL_ERROR)
                raise NetworkError(str(exc) or type(exc).__name__, data=type(exc).__name__) from exc

            span.set_attribute(ATTR_HTTP_STATUS, response.status_code)
            try:
                return await decode_response(response, method=method, log=self._log)
            except RpcError as exc:
                span.set_attribute(ATTR_ERROR_CODE, exc.code)
                raise

    def _stream(self, method: str, params: BaseModel) -> TaskEventStream:
        rpc, request = self._build(method, params)
        return TaskEventStream(
            self._http(), request, method=method, request_id=rpc.id, log=self._log
        )


def _coerce(params: BaseModel | Mapping[str, Any], model: type[_ModelT]) -> _ModelT:
    """Validate *params* into *model* so required ids are present before any I/O."""
    if isinstance(params, model):
        return params
    if isinstance(params, BaseModel):
        params = params.model_dump(by_alias=True, exclude_none=True)
    return model.model_validate(params)
