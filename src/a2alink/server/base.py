"""A2AServer protocol — the lifecycle contract of an agent server.

Concrete servers (HTTP routing, CORS handling, task execution) live outside
this package; they implement :class:`A2AServer` and are configured with
:class:`ServerOptions`.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, model_validator

from a2alink.protocol.models import AgentCard  # noqa: TC001
from a2alink.server.store import TaskStore  # noqa: TC001


class ServerOptions(BaseModel):
    """Construction options shared by server implementations.

    ``cors`` is ``True`` (allow all origins), ``False``, a single origin, or a
    mapping of CORS settings understood by the concrete server.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    task_store: TaskStore | None = None
    cors: bool | str | dict[str, Any] = True
    base_path: str = "/"
    card: AgentCard | None = None

    @model_validator(mode="after")
    def _require_store(self) -> ServerOptions:
        if self.task_store is None:
            msg = "task_store is required"
            raise ValueError(msg)
        return self


@runtime_checkable
class A2AServer(Protocol):
    """Serves one agent over the A2A protocol."""

    async def start(self) -> None:
        """Begin accepting requests."""
        ...

    async def stop(self) -> None:
        """Stop accepting requests and release resources."""
        ...

    async def process_task(self, task_id: str) -> None:
        """Run (or continue) the task with the given id."""
        ...

    async def handle_request(self, request: Any) -> Any:
        """Handle one raw JSON-RPC request and return the raw response."""
        ...

    def stream_task(self, task_id: str) -> AsyncIterator[Any]:
        """Yield the updates of a task as they happen."""
        ...

    async def get_well_known_json(self) -> Any:
        """Return the metadata document served at the well-known path."""
        ...
