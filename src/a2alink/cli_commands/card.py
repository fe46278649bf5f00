"""``a2alink card`` and ``a2alink supports`` — agent discovery."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from a2alink.cli_commands._client import run_client
from a2alink.cli_commands._output import console, print_card

if TYPE_CHECKING:
    from a2alink.config import ClientConfig


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print the raw card as JSON.")
@click.pass_obj
def card(config: ClientConfig, as_json: bool) -> None:
    """Fetch and show the remote agent's card."""
    agent_card = run_client(config, lambda client: client.agent_card())
    print_card(agent_card, as_json=as_json)


@click.command()
@click.argument("capability")
@click.pass_obj
def supports(config: ClientConfig, capability: str) -> None:
    """Check whether the agent advertises CAPABILITY.

    Known capabilities: streaming, pushNotifications, stateTransitionHistory.
    """
    supported = run_client(config, lambda client: client.supports(capability))
    if supported:
        console.print(f"[green]yes[/green] {capability}")
    else:
        console.print(f"[yellow]no[/yellow] {capability}")
