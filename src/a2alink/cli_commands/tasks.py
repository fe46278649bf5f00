"""``a2alink task`` — send, inspect, cancel and follow tasks."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any

import click

from a2alink.cli_commands._client import run_client
from a2alink.cli_commands._output import console, print_event, print_task

if TYPE_CHECKING:
    from a2alink.config import ClientConfig
    from a2alink.protocol.http import HttpA2AClient
    from a2alink.protocol.streaming import TaskEventStream


@click.group()
def task() -> None:
    """Send and manage tasks."""


def _send_params(
    text: str, task_id: str | None, session_id: str | None, history_length: int | None = None
) -> dict[str, Any]:
    from a2alink.protocol.models import Message

    params: dict[str, Any] = {
        "id": task_id or uuid.uuid4().hex,
        "message": Message.from_text(text).to_wire(),
    }
    if session_id:
        params["sessionId"] = session_id
    if history_length is not None:
        params["historyLength"] = history_length
    return params


async def _follow(events: TaskEventStream) -> int:
    count = 0
    async with events:
        async for event in events:
            print_event(event)
            count += 1
    return count


@task.command("send")
@click.argument("text")
@click.option("--task-id", default=None, help="Task id (default: a new random id).")
@click.option("--session-id", default=None, help="Session to group the task into.")
@click.option("--history-length", type=int, default=None, help="Messages of history to return.")
@click.option("--json", "as_json", is_flag=True, help="Print the raw result as JSON.")
@click.pass_obj
def send(
    config: ClientConfig,
    text: str,
    task_id: str | None,
    session_id: str | None,
    history_length: int | None,
    as_json: bool,
) -> None:
    """Send TEXT to the agent as a new task (or continue --task-id)."""
    params = _send_params(text, task_id, session_id, history_length)
    result = run_client(config, lambda client: client.send_task(params))
    print_task(result, as_json=as_json)


@task.command("get")
@click.argument("task_id")
@click.option("--history-length", type=int, default=None, help="Messages of history to return.")
@click.option("--json", "as_json", is_flag=True, help="Print the raw result as JSON.")
@click.pass_obj
def get(config: ClientConfig, task_id: str, history_length: int | None, as_json: bool) -> None:
    """Show the current state of TASK_ID."""
    params: dict[str, Any] = {"id": task_id}
    if history_length is not None:
        params["historyLength"] = history_length
    result = run_client(config, lambda client: client.get_task(params))
    print_task(result, as_json=as_json)


@task.command("cancel")
@click.argument("task_id")
@click.option("--json", "as_json", is_flag=True, help="Print the raw result as JSON.")
@click.pass_obj
def cancel(config: ClientConfig, task_id: str, as_json: bool) -> None:
    """Cancel TASK_ID."""
    result = run_client(config, lambda client: client.cancel_task({"id": task_id}))
    print_task(result, as_json=as_json)


@task.command("subscribe")
@click.argument("text")
@click.option("--task-id", default=None, help="Task id (default: a new random id).")
@click.option("--session-id", default=None, help="Session to group the task into.")
@click.pass_obj
def subscribe(
    config: ClientConfig, text: str, task_id: str | None, session_id: str | None
) -> None:
    """Send TEXT as a new task and follow its updates as they arrive."""
    params = _send_params(text, task_id, session_id)

    async def _run(client: HttpA2AClient) -> int:
        return await _follow(client.send_task_subscribe(params))

    if run_client(config, _run) == 0:
        console.print("[yellow]Stream ended without events.[/yellow]")


@task.command("resubscribe")
@click.argument("task_id")
@click.option("--history-length", type=int, default=None, help="Messages of history to return.")
@click.pass_obj
def resubscribe(config: ClientConfig, task_id: str, history_length: int | None) -> None:
    """Reattach to the update stream of TASK_ID."""
    params: dict[str, Any] = {"id": task_id}
    if history_length is not None:
        params["historyLength"] = history_length

    async def _run(client: HttpA2AClient) -> int:
        return await _follow(client.resubscribe_task(params))

    if run_client(config, _run) == 0:
        console.print("[yellow]Stream ended without events.[/yellow]")
