"""Server-Sent Events decoding for streaming JSON-RPC responses.

A streaming call answers with a ``text/event-stream`` body whose events each
carry a JSON-RPC response envelope in their ``data`` field. Framing (line
endings, reads that split an event, multi-line ``data``) is handled by
``httpx_sse``; this module decides what each event's payload means.

Event-level failures (bad JSON, bad envelope shape, no payload) are logged and
skipped. An event carrying an ``error`` ends the sequence with
:class:`~a2alink.protocol.errors.RemoteError`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncGenerator
from typing import Any

import httpx
from httpx_sse import EventSource, SSEError

from a2alink.protocol.errors import MalformedResponseError
from a2alink.protocol.jsonrpc import parse_envelope

logger = logging.getLogger(__name__)


def decode_frame(
    data: str,
    *,
    method: str | None = None,
    log: logging.Logger | None = None,
) -> Any:
    """Decode one event's ``data`` payload.

    Returns the envelope's ``result``, or ``None`` when the event is skipped.

    Raises:
        RemoteError: The envelope carries an ``error``.
    """
    log = log or logger
    payload = data.strip()
    if not payload:
        return None
    try:
        raw = json.loads(payload)
    except ValueError as exc:
        log.warning("Failed to parse SSE data line for method %s: %s (%s)", method, payload, exc)
        return None
    try:
        envelope = parse_envelope(raw)
    except MalformedResponseError:
        log.warning("Invalid SSE data structure received for method %s: %s", method, payload)
        return None

    if envelope.error is not None:
        log.error("Error received in SSE stream for method %s: %s", method, envelope.error)
        envelope.raise_for_error()
    if envelope.result is None:
        log.warning("SSE data for %s has neither result nor error: %s", method, payload)
        return None
    return envelope.result


async def iter_stream_results(
    response: httpx.Response,
    *,
    method: str | None = None,
    log: logging.Logger | None = None,
) -> AsyncGenerator[Any, None]:
    """Yield the ``result`` of every event in *response*, in arrival order.

    Ends when the body is exhausted; an event the peer never terminated is
    dropped. Transport errors raised while reading propagate unchanged.

    Raises:
        MalformedResponseError: The response is not an event stream.
        RemoteError: An event carries an ``error``.
    """
    log = log or logger
    try:
        async for sse in EventSource(response).aiter_sse():
            result = decode_frame(sse.data, method=method, log=log)
            if result is not None:
                yield result
    except SSEError as exc:
        msg = f"Expected an event stream for method {method}: {exc}"
        raise MalformedResponseError(msg, data=response.headers.get("content-type")) from exc
