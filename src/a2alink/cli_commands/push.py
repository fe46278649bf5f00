"""``a2alink push`` — read and set a task's push-notification target."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from a2alink.cli_commands._client import run_client
from a2alink.cli_commands._output import console, print_json

if TYPE_CHECKING:
    from a2alink.config import ClientConfig


@click.group()
def push() -> None:
    """Manage push notifications."""


@push.command("get")
@click.argument("task_id")
@click.pass_obj
def get_push(config: ClientConfig, task_id: str) -> None:
    """Show the push-notification config of TASK_ID."""
    result = run_client(config, lambda client: client.get_task_push_notification({"id": task_id}))
    if result is None:
        console.print("[yellow]No push notification config.[/yellow]")
        return
    print_json(result)


@push.command("set")
@click.argument("task_id")
@click.option("--webhook", required=True, help="URL the agent posts task updates to.")
@click.option("--token", default=None, help="Token the agent sends with each notification.")
@click.pass_obj
def set_push(config: ClientConfig, task_id: str, webhook: str, token: str | None) -> None:
    """Point the push notifications of TASK_ID at WEBHOOK."""
    from a2alink.protocol.models import PushNotificationConfig, TaskPushNotificationConfig

    params = TaskPushNotificationConfig(
        id=task_id,
        push_notification_config=PushNotificationConfig(url=webhook, token=token),
    )
    result = run_client(config, lambda client: client.set_task_push_notification(params))
    if result is None:
        console.print("[green]Push notification config set.[/green]")
        return
    print_json(result)
