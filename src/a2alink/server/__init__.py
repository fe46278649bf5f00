"""Server-side boundary — lifecycle protocol and task persistence."""

from a2alink.server.base import A2AServer, ServerOptions
from a2alink.server.store import InMemoryTaskStore, TaskAndHistory, TaskStore

__all__ = [
    "A2AServer",
    "InMemoryTaskStore",
    "ServerOptions",
    "TaskAndHistory",
    "TaskStore",
]
