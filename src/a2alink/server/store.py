"""Task persistence for agent servers.

A task and the full message history exchanged for it are saved and loaded as
one :class:`TaskAndHistory` record through the :class:`TaskStore` protocol.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from a2alink.protocol.models import Message, Task


class TaskAndHistory(BaseModel):
    """A task together with every message exchanged for it."""

    task: Task
    history: list[Message] = []


@runtime_checkable
class TaskStore(Protocol):
    """Async persistence protocol for tasks and their history."""

    async def save(self, data: TaskAndHistory) -> None:
        """Persist *data* under ``data.task.id``, overwriting any previous record."""
        ...

    async def load(self, task_id: str) -> TaskAndHistory | None:
        """Load a task and its history, or return ``None`` if it does not exist."""
        ...


class InMemoryTaskStore:
    """Process-local :class:`TaskStore` keyed by task id.

    Records are kept as JSON text; mutating a loaded record never changes
    what is stored.
    """

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    async def save(self, data: TaskAndHistory) -> None:
        self._store[data.task.id] = data.model_dump_json(by_alias=True)

    async def load(self, task_id: str) -> TaskAndHistory | None:
        raw = self._store.get(task_id)
        if raw is None:
            return None
        return TaskAndHistory.model_validate_json(raw)

    def __len__(self) -> int:
        return len(self._store)
