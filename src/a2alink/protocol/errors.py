"""Error types for the A2A protocol layer.

Every failure a client call can produce is an :class:`RpcError` carrying the
JSON-RPC ``(code, message, data)`` triple, whether it originated in the
network, the HTTP layer, or was returned by the remote agent.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Self

# ---------------------------------------------------------------------------
# Reserved JSON-RPC 2.0 codes
# ---------------------------------------------------------------------------

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# ---------------------------------------------------------------------------
# A2A task codes
# ---------------------------------------------------------------------------

TASK_NOT_FOUND = -32001
TASK_NOT_CANCELABLE = -32002
PUSH_NOTIFICATION_NOT_SUPPORTED = -32003
UNSUPPORTED_OPERATION = -32004


class RpcError(Exception):
    """Base error for all protocol-layer failures."""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        self.code = code
        self.message = message
        self.data = data
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-RPC error object for this error."""
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error

    @classmethod
    def from_error_object(cls, obj: Mapping[str, Any] | Any) -> Self:
        """Build an error from a JSON-RPC error object.

        *obj* is either a decoded mapping or a model exposing ``code``,
        ``message`` and ``data`` attributes.
        """
        if not isinstance(obj, Mapping):
            return cls(obj.code, obj.message, getattr(obj, "data", None))
        try:
            code, message = obj["code"], obj["message"]
        except KeyError as exc:
            msg = f"JSON-RPC error object is missing {exc}"
            raise MalformedResponseError(msg, data=dict(obj)) from exc
        return cls(code, message, obj.get("data"))


class NetworkError(RpcError):
    """No response was received (connection refused, timeout, DNS...)."""

    def __init__(self, detail: str, data: Any = None) -> None:
        self.detail = detail
        super().__init__(INTERNAL_ERROR, f"Network error: {detail}", data)


class MalformedResponseError(RpcError):
    """A response arrived but is not a valid JSON-RPC envelope."""

    def __init__(self, message: str, data: Any = None) -> None:
        super().__init__(INTERNAL_ERROR, message, data)


class HttpStatusError(MalformedResponseError):
    """Non-success HTTP status whose body carries no JSON-RPC error."""

    def __init__(self, status_code: int, reason: str = "", body: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body
        msg = f"HTTP error {status_code}"
        if reason:
            msg += f": {reason}"
        if body:
            msg += f" - {body}"
        super().__init__(msg, data={"status": status_code, "body": body})


class RemoteError(RpcError):
    """An ``error`` object returned by the remote agent, passed through verbatim."""
