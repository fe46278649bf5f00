"""TaskEventStream — the lazy, cancellable result sequence of a streaming call.

Nothing goes over the wire until the first item is requested. Abandoning the
stream (``aclose()`` or leaving an ``async with`` block) closes the HTTP
response right away; no decoding happens afterwards. A stream dropped
mid-iteration without either is closed once it is garbage collected.

Usage::

    async with client.send_task_subscribe(params) as events:
        async for event in events:
            ...
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncGenerator
from enum import Enum
from typing import Any

import httpx

from a2alink.protocol.decoding import decode_response, raise_for_http_status
from a2alink.protocol.errors import NetworkError
from a2alink.protocol.sse import iter_stream_results
from a2alink.utils.telemetry import (
    ATTR_HTTP_STATUS,
    ATTR_METHOD,
    ATTR_REQUEST_ID,
    ATTR_STREAMING,
    get_tracer,
)

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class StreamState(str, Enum):
    """Lifecycle of one streaming call."""

    PENDING = "pending"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


_TERMINAL = frozenset({StreamState.COMPLETED, StreamState.FAILED, StreamState.CANCELLED})


class TaskEventStream:
    """Async iterator over the results of ``tasks/sendSubscribe`` or ``tasks/resubscribe``.

    Yields each frame's ``result`` in arrival order. The first error ends the
    sequence; a finished or cancelled stream cannot be restarted.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        request: httpx.Request,
        *,
        method: str,
        request_id: str | int,
        log: logging.Logger | None = None,
    ) -> None:
        self._client = client
        self._request = request
        self.method = method
        self.request_id = request_id
        self._log = log or logger
        self._state = StreamState.PENDING
        self._response: httpx.Response | None = None
        self._results: AsyncGenerator[Any, None] | None = None
        self._count = 0

    @property
    def state(self) -> StreamState:
        return self._state

    def __aiter__(self) -> TaskEventStream:
        return self

    async def __aenter__(self) -> TaskEventStream:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    async def __anext__(self) -> Any:
        if self._state in _TERMINAL:
            raise StopAsyncIteration
        try:
            if self._results is None:
                self._results = await self._open()
                self._state = StreamState.STREAMING
            item = await self._results.__anext__()
        except StopAsyncIteration:
            self._state = StreamState.COMPLETED
            await self._release()
            raise
        except asyncio.CancelledError:
            self._state = StreamState.CANCELLED
            await self._release()
            raise
        except httpx.TransportError as exc:
            self._state = StreamState.FAILED
            await self._release()
            self._log.error("Error reading SSE stream for method %s: %s", self.method, exc)
            raise NetworkError(str(exc), data=type(exc).__name__) from exc
        except Exception:
            self._state = StreamState.FAILED
            await self._release()
            raise
        self._count += 1
        return item

    async def aclose(self) -> None:
        """Stop consuming and release the connection. Safe to call repeatedly."""
        if self._state not in _TERMINAL:
            self._state = StreamState.CANCELLED
        await self._release()

    async def _open(self) -> AsyncGenerator[Any, None]:
        with _tracer.start_as_current_span("a2a.stream.open") as span:
            span.set_attribute(ATTR_METHOD, self.method)
            span.set_attribute(ATTR_REQUEST_ID, str(self.request_id))
            span.set_attribute(ATTR_STREAMING, True)

            response = await self._client.send(self._request, stream=True)
            self._response = response
            span.set_attribute(ATTR_HTTP_STATUS, response.status_code)

            if not response.is_success:
                await response.aread()
                self._log.error(
                    "HTTP error %s received for streaming method %s. Response: %s",
                    response.status_code,
                    self.method,
                    response.text,
                )
                raise_for_http_status(response, response.text)

            content_type = response.headers.get("content-type", "")
            if content_type.startswith("application/json"):
                # The peer answered with a plain envelope instead of a stream.
                result = await decode_response(response, method=self.method, log=self._log)
                return _single(result)

            return _consume(response, method=self.method, log=self._log)

    async def _release(self) -> None:
        results, self._results = self._results, None
        response, self._response = self._response, None
        if results is not None:
            await results.aclose()
        if response is not None:
            await response.aclose()
            self._log.debug(
                "SSE stream finished for method %s (%s, %d results).",
                self.method,
                self._state.value,
                self._count,
            )


async def _consume(
    response: httpx.Response, *, method: str, log: logging.Logger
) -> AsyncGenerator[Any, None]:
    # Owns the response: an abandoned stream is closed by the event loop's
    # async generator finalizer once it is garbage collected.
    try:
        async for result in iter_stream_results(response, method=method, log=log):
            yield result
    finally:
        await response.aclose()


async def _single(result: Any) -> AsyncGenerator[Any, None]:
    if result is not None:
        yield result
