"""A2A models — task-domain payloads exchanged over JSON-RPC.

Field names are snake_case in Python and camelCase on the wire
(``session_id`` ↔ ``sessionId``). Models accept either spelling on input.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class A2AModel(BaseModel):
    """Base for every wire model: camelCase aliases, snake_case attributes.

    Unknown keys are kept and written back unchanged, so payloads from newer
    peers survive a round trip.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_wire(self) -> dict[str, Any]:
        """Dump as JSON-compatible wire data (aliases, no ``None`` fields)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Messages and parts
# ---------------------------------------------------------------------------


class TaskState(str, Enum):
    SUBMITTED = "submitted"
    WORKING = "working"
    INPUT_REQUIRED = "input-required"
    COMPLETED = "completed"
    CANCELED = "canceled"
    FAILED = "failed"
    UNKNOWN = "unknown"


class TextPart(A2AModel):
    type: Literal["text"] = "text"
    text: str
    metadata: dict[str, Any] | None = None


class FileContent(A2AModel):
    """File payload, either inline base64 ``bytes`` or a ``uri``."""

    name: str | None = None
    mime_type: str | None = None
    bytes: str | None = None
    uri: str | None = None


class FilePart(A2AModel):
    type: Literal["file"] = "file"
    file: FileContent
    metadata: dict[str, Any] | None = None


class DataPart(A2AModel):
    type: Literal["data"] = "data"
    data: dict[str, Any]
    metadata: dict[str, Any] | None = None


Part = Annotated[TextPart | FilePart | DataPart, Field(discriminator="type")]


class Message(A2AModel):
    """A message exchanged between a user and an agent."""

    role: Literal["user", "agent"] = "user"
    parts: list[Part] = []
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_text(cls, text: str, *, role: Literal["user", "agent"] = "user") -> Message:
        return cls(role=role, parts=[TextPart(text=text)])


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


class TaskStatus(A2AModel):
    state: TaskState
    message: Message | None = None
    timestamp: str | None = None


class Artifact(A2AModel):
    """An output artifact produced by a task."""

    name: str | None = None
    description: str | None = None
    parts: list[Part] = []
    index: int = 0
    append: bool | None = None
    last_chunk: bool | None = None
    metadata: dict[str, Any] | None = None


class Task(A2AModel):
    id: str
    session_id: str | None = None
    status: TaskStatus
    artifacts: list[Artifact] | None = None
    history: list[Message] | None = None
    metadata: dict[str, Any] | None = None


class TaskStatusUpdateEvent(A2AModel):
    """Streaming payload: the task moved to a new status."""

    id: str
    status: TaskStatus
    final: bool = False
    metadata: dict[str, Any] | None = None


class TaskArtifactUpdateEvent(A2AModel):
    """Streaming payload: the task produced (part of) an artifact."""

    id: str
    artifact: Artifact
    final: bool = False
    metadata: dict[str, Any] | None = None


TaskEvent = TaskStatusUpdateEvent | TaskArtifactUpdateEvent


# ---------------------------------------------------------------------------
# Push notifications
# ---------------------------------------------------------------------------


class AuthenticationInfo(A2AModel):
    schemes: list[str] = []
    credentials: str | None = None


class PushNotificationConfig(A2AModel):
    url: str
    token: str | None = None
    authentication: AuthenticationInfo | None = None


class TaskPushNotificationConfig(A2AModel):
    """Push-notification target for one task, set and fetched as a unit."""

    id: str
    push_notification_config: PushNotificationConfig


# ---------------------------------------------------------------------------
# Request parameters
# ---------------------------------------------------------------------------


class TaskIdParams(A2AModel):
    id: str
    metadata: dict[str, Any] | None = None


class TaskQueryParams(TaskIdParams):
    history_length: int | None = None


class TaskSendParams(A2AModel):
    """Parameters for ``tasks/send`` and ``tasks/sendSubscribe``."""

    id: str
    session_id: str | None = None
    message: Message
    accepted_output_modes: list[str] | None = None
    push_notification: PushNotificationConfig | None = None
    history_length: int | None = None
    metadata: dict[str, Any] | None = None


# ---------------------------------------------------------------------------
# Agent discovery
# ---------------------------------------------------------------------------


class AgentCapabilities(A2AModel):
    streaming: bool = False
    push_notifications: bool = False
    state_transition_history: bool = False


class AgentProvider(A2AModel):
    organization: str = ""
    url: str | None = None


class AgentAuthentication(A2AModel):
    schemes: list[str] = []
    credentials: str | None = None


class AgentSkill(A2AModel):
    """A single skill advertised by a remote agent."""

    id: str
    name: str
    description: str | None = None
    tags: list[str] = []
    examples: list[str] | None = None
    input_modes: list[str] | None = None
    output_modes: list[str] | None = None


class AgentCard(A2AModel):
    """Static capability and metadata descriptor of a remote agent.

    Every field is defaulted, so any JSON object served by the agent decodes.
    """

    name: str = ""
    description: str | None = None
    url: str = ""
    provider: AgentProvider | None = None
    version: str = ""
    documentation_url: str | None = None
    capabilities: AgentCapabilities = Field(default_factory=AgentCapabilities)
    authentication: AgentAuthentication | None = None
    default_input_modes: list[str] = ["text"]
    default_output_modes: list[str] = ["text"]
    skills: list[AgentSkill] = []


# ---------------------------------------------------------------------------
# Typed views over raw results
# ---------------------------------------------------------------------------

_EVENT_ADAPTER: TypeAdapter[TaskEvent] = TypeAdapter(TaskEvent)


def parse_task(result: Any) -> Task:
    """Validate a ``tasks/send``, ``tasks/get`` or ``tasks/cancel`` result."""
    return Task.model_validate(result)


def parse_push_config(result: Any) -> TaskPushNotificationConfig:
    """Validate a ``tasks/pushNotification/*`` result."""
    return TaskPushNotificationConfig.model_validate(result)


def parse_event(result: Any) -> TaskEvent:
    """Validate one streamed result as a status or artifact update.

    Status updates carry ``status``, artifact updates carry ``artifact``.
    """
    if isinstance(result, dict) and "artifact" in result:
        return TaskArtifactUpdateEvent.model_validate(result)
    if isinstance(result, dict) and "status" in result:
        return TaskStatusUpdateEvent.model_validate(result)
    return _EVENT_ADAPTER.validate_python(result)
