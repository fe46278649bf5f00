"""Protocol layer — JSON-RPC envelopes, response decoding, SSE streaming, clients."""

from a2alink.protocol.client import A2AClient
from a2alink.protocol.errors import (
    HttpStatusError,
    MalformedResponseError,
    NetworkError,
    RemoteError,
    RpcError,
)
from a2alink.protocol.http import HttpA2AClient
from a2alink.protocol.streaming import StreamState, TaskEventStream

__all__ = [
    "A2AClient",
    "HttpA2AClient",
    "HttpStatusError",
    "MalformedResponseError",
    "NetworkError",
    "RemoteError",
    "RpcError",
    "StreamState",
    "TaskEventStream",
]
