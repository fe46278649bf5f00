"""Shared CLI output formatters."""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from a2alink.protocol.models import (
    AgentCard,
    DataPart,
    FilePart,
    Message,
    Part,
    TaskStatusUpdateEvent,
    TextPart,
    parse_event,
    parse_task,
)

console = Console()
err_console = Console(stderr=True)


def print_json(data: Any) -> None:
    console.print_json(json.dumps(data, default=str))


def print_card(card: AgentCard, *, as_json: bool = False) -> None:
    """Pretty-print an agent card and its skills."""
    if as_json:
        print_json(card.to_wire())
        return

    console.print(f"\n[bold]{escape(card.name or '(unnamed agent)')}[/bold] {escape(card.version)}")
    if card.description:
        console.print(f"  {escape(card.description)}")
    console.print(f"  URL: {escape(card.url or '-')}")
    if card.provider is not None:
        console.print(f"  Provider: {escape(card.provider.organization)}")

    caps = card.capabilities
    console.print("\n[bold]Capabilities:[/bold]")
    console.print(f"  streaming: {_yes_no(caps.streaming)}")
    console.print(f"  pushNotifications: {_yes_no(caps.push_notifications)}")
    console.print(f"  stateTransitionHistory: {_yes_no(caps.state_transition_history)}")

    if not card.skills:
        return

    table = Table(title="Skills")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Description")
    for skill in card.skills:
        table.add_row(
            escape(skill.id),
            escape(skill.name),
            escape(_truncate(skill.description or "")),
        )
    console.print(table)


def print_task(result: Any, *, as_json: bool = False) -> None:
    """Pretty-print a task result; anything that is not a task is shown as JSON."""
    if result is None:
        console.print("[yellow]No task returned.[/yellow]")
        return
    if as_json:
        print_json(result)
        return

    try:
        task = parse_task(result)
    except ValidationError:
        print_json(result)
        return

    console.print(f"\n[bold]Task {escape(task.id)}[/bold]")
    if task.session_id:
        console.print(f"  Session: {escape(task.session_id)}")
    console.print(f"  State: {task.status.state.value}")
    text = message_text(task.status.message)
    if text:
        console.print(f"  Message: {escape(_truncate(text))}")

    for artifact in task.artifacts or []:
        name = artifact.name or f"artifact {artifact.index}"
        console.print(f"  [cyan]{escape(name)}[/cyan]: {escape(_truncate(parts_text(artifact.parts)))}")


def print_event(result: Any) -> None:
    """Print one streamed result as a single line."""
    try:
        event = parse_event(result)
    except ValidationError:
        console.print(escape(json.dumps(result, default=str)))
        return

    if isinstance(event, TaskStatusUpdateEvent):
        line = f"[cyan]{escape(event.id)}[/cyan] status [bold]{event.status.state.value}[/bold]"
        if event.final:
            line += " (final)"
        text = message_text(event.status.message)
        if text:
            line += f" {escape(text)}"
        console.print(line)
        return

    name = event.artifact.name or f"artifact {event.artifact.index}"
    console.print(
        f"[cyan]{escape(event.id)}[/cyan] {escape(name)}: {escape(parts_text(event.artifact.parts))}"
    )


def message_text(message: Message | None) -> str:
    if message is None:
        return ""
    return parts_text(message.parts)


def parts_text(parts: list[Part]) -> str:
    """Render message/artifact parts as one line of text."""
    rendered: list[str] = []
    for part in parts:
        if isinstance(part, TextPart):
            rendered.append(part.text)
        elif isinstance(part, FilePart):
            rendered.append(f"<file {part.file.name or part.file.uri or '?'}>")
        elif isinstance(part, DataPart):
            rendered.append(json.dumps(part.data, default=str))
    return " ".join(rendered)


def _yes_no(flag: bool) -> str:
    return "[green]yes[/green]" if flag else "[yellow]no[/yellow]"


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
