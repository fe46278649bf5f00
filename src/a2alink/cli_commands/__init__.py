"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from a2alink.cli_commands.card import card, supports
    from a2alink.cli_commands.push import push
    from a2alink.cli_commands.tasks import task

    cli.add_command(card)
    cli.add_command(supports)
    cli.add_command(task)
    cli.add_command(push)
