"""JSON-RPC 2.0 envelope models and the request builder."""

from __future__ import annotations

import time
import uuid
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, StrictInt, StrictStr, ValidationError

from a2alink.protocol.errors import MalformedResponseError, RemoteError

JSONRPC_VERSION = "2.0"

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message."""

    jsonrpc: Literal["2.0"] = JSONRPC_VERSION
    id: int | str
    method: str
    params: dict[str, Any] = {}


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: StrictInt
    message: StrictStr
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message.

    ``result`` is kept as raw JSON: its shape belongs to the method that was
    called. Use ``"result" in envelope.model_fields_set`` to tell an explicit
    ``null`` result from a missing one.
    """

    jsonrpc: Literal["2.0"]
    id: int | float | str | None = None
    result: Any = None
    error: JsonRpcError | None = None

    @property
    def has_result(self) -> bool:
        return "result" in self.model_fields_set

    def raise_for_error(self) -> None:
        """Raise the peer's error verbatim as a :class:`RemoteError`."""
        if self.error is not None:
            raise RemoteError.from_error_object(self.error)


def parse_envelope(payload: Any) -> JsonRpcResponse:
    """Validate decoded JSON as a response envelope.

    Raises:
        MalformedResponseError: If *payload* is not an object tagged
            ``"jsonrpc": "2.0"`` or its ``error`` member is not a valid error
            object.
    """
    if not isinstance(payload, dict):
        raise MalformedResponseError(
            "Invalid JSON-RPC response structure received from server.", data=payload
        )
    try:
        return JsonRpcResponse.model_validate(payload)
    except ValidationError as exc:
        raise MalformedResponseError(
            "Invalid JSON-RPC response structure received from server.",
            data=str(exc),
        ) from exc


# ---------------------------------------------------------------------------
# Request building
# ---------------------------------------------------------------------------


def generate_request_id() -> str | int:
    """Return a fresh correlation id for a request.

    A random UUID when the platform has a randomness source, otherwise the
    current time in milliseconds. Timestamp ids are not unique for calls made
    within the same millisecond.
    """
    try:
        return str(uuid.uuid4())
    except NotImplementedError:
        return int(time.time() * 1000)


def build_request(
    method: str,
    params: BaseModel | Mapping[str, Any] | None = None,
    *,
    request_id: str | int | None = None,
) -> JsonRpcRequest:
    """Wrap *method* and *params* in a request envelope with a new id."""
    if isinstance(params, BaseModel):
        payload = params.model_dump(mode="json", by_alias=True, exclude_none=True)
    else:
        payload = dict(params or {})
    return JsonRpcRequest(
        id=request_id if request_id is not None else generate_request_id(),
        method=method,
        params=payload,
    )
