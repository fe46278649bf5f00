"""Unary response decoding — one completed HTTP response to one result."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from a2alink.protocol.errors import (
    HttpStatusError,
    MalformedResponseError,
    NetworkError,
    RemoteError,
    RpcError,
)
from a2alink.protocol.jsonrpc import JsonRpcError, parse_envelope

logger = logging.getLogger(__name__)


def raise_for_http_status(response: httpx.Response, body: str) -> None:
    """Raise if *response* has a non-success status.

    A body carrying a JSON-RPC ``error`` object is raised as that error;
    anything else becomes an :class:`HttpStatusError` with the status and
    raw body.
    """
    if response.is_success:
        return
    try:
        payload: Any = json.loads(body)
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("error") is not None:
        try:
            error = JsonRpcError.model_validate(payload["error"])
        except ValidationError:
            pass
        else:
            raise RemoteError.from_error_object(error)
    raise HttpStatusError(response.status_code, response.reason_phrase, body)


async def decode_response(
    response: httpx.Response,
    *,
    method: str | None = None,
    log: logging.Logger | None = None,
) -> Any:
    """Read and validate a unary JSON-RPC response, returning its ``result``.

    Returns ``None`` when the peer answers with ``"result": null``.

    Raises:
        RemoteError: The peer returned an ``error`` object.
        HttpStatusError: Non-2xx status without a JSON-RPC error body.
        NetworkError: The connection failed while reading the body.
        MalformedResponseError: The body is not a valid envelope or could not
            be parsed.
    """
    log = log or logger
    body: str | None = None
    try:
        await response.aread()
        body = response.text
        raise_for_http_status(response, body)

        envelope = parse_envelope(json.loads(body))
        envelope.raise_for_error()
        if not envelope.has_result:
            msg = "JSON-RPC response carries neither 'result' nor 'error'."
            raise MalformedResponseError(msg, data=envelope.model_dump())
        return envelope.result
    except Exception as exc:
        log.error(
            "Error processing RPC response for method %s: %s%s",
            method or "unknown",
            exc,
            f"\nResponse Body: {body}" if body else "",
        )
        if isinstance(exc, RpcError):
            raise
        if isinstance(exc, httpx.TransportError):
            raise NetworkError(str(exc)) from exc
        raise MalformedResponseError(f"Failed to process response: {exc}", data=str(exc)) from exc
