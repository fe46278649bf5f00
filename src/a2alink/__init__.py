"""a2alink — JSON-RPC over HTTP client for delegating tasks to remote agents."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from a2alink.protocol.errors import RpcError as RpcError
    from a2alink.protocol.http import HttpA2AClient as HttpA2AClient
    from a2alink.protocol.streaming import TaskEventStream as TaskEventStream

_LAZY_EXPORTS = {
    "HttpA2AClient": "a2alink.protocol.http",
    "RpcError": "a2alink.protocol.errors",
    "TaskEventStream": "a2alink.protocol.streaming",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'a2alink' has no attribute {name!r}")
