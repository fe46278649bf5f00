"""A2AClient protocol — the operations every A2A client transport offers.

:class:`~a2alink.protocol.http.HttpA2AClient` implements it over JSON-RPC on
HTTP. Code that only needs to talk to an agent should depend on this protocol
rather than on a concrete transport.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from a2alink.protocol.models import (
        AgentCard,
        TaskIdParams,
        TaskPushNotificationConfig,
        TaskQueryParams,
        TaskSendParams,
    )

Params = Mapping[str, Any]

# JSON-RPC method names
SEND_TASK = "tasks/send"
GET_TASK = "tasks/get"
CANCEL_TASK = "tasks/cancel"
SEND_TASK_SUBSCRIBE = "tasks/sendSubscribe"
RESUBSCRIBE_TASK = "tasks/resubscribe"
SET_TASK_PUSH_NOTIFICATION = "tasks/pushNotification/set"
GET_TASK_PUSH_NOTIFICATION = "tasks/pushNotification/get"

STREAMING_METHODS = frozenset({SEND_TASK_SUBSCRIBE, RESUBSCRIBE_TASK})


@runtime_checkable
class A2AClient(Protocol):
    """Delegates tasks to one remote agent.

    Unary operations return the peer's decoded ``result`` (``None`` when the
    peer sends no payload) or raise exactly one
    :class:`~a2alink.protocol.errors.RpcError`. Streaming operations return an
    async iterator of results that ends on the first error.
    """

    async def agent_card(self) -> AgentCard:
        """Return the agent's card, fetching it on first use only."""
        ...

    async def send_task(self, params: TaskSendParams | Params) -> Any:
        """``tasks/send`` — start or continue a task."""
        ...

    def send_task_subscribe(self, params: TaskSendParams | Params) -> AsyncIterator[Any]:
        """``tasks/sendSubscribe`` — start a task and stream its updates."""
        ...

    async def get_task(self, params: TaskQueryParams | Params) -> Any:
        """``tasks/get`` — current state of a task."""
        ...

    async def cancel_task(self, params: TaskIdParams | Params) -> Any:
        """``tasks/cancel`` — cancel a running task."""
        ...

    async def set_task_push_notification(
        self, params: TaskPushNotificationConfig | Params
    ) -> Any:
        """``tasks/pushNotification/set`` — set the push target of a task."""
        ...

    async def get_task_push_notification(self, params: TaskIdParams | Params) -> Any:
        """``tasks/pushNotification/get`` — read the push target of a task."""
        ...

    def resubscribe_task(self, params: TaskQueryParams | Params) -> AsyncIterator[Any]:
        """``tasks/resubscribe`` — reattach to the update stream of a task."""
        ...

    async def supports(self, capability: str) -> bool:
        """Whether the agent card advertises *capability*; ``False`` on failure."""
        ...
