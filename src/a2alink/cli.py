"""a2alink CLI entrypoint."""

from __future__ import annotations

import logging
import sys

import click

from a2alink import __version__


@click.group()
@click.version_option(version=__version__, prog_name="a2alink")
@click.option("--url", envvar="A2A_AGENT_URL", default=None, help="Base URL of the remote agent.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="YAML client config file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option("--telemetry", is_flag=True, help="Print trace spans to the console.")
@click.pass_context
def main(
    ctx: click.Context,
    url: str | None,
    config_path: str | None,
    verbose: bool,
    telemetry: bool,
) -> None:
    """a2alink — delegate tasks to remote A2A agents."""
    from rich.logging import RichHandler

    from a2alink.cli_commands._output import console, err_console
    from a2alink.config import ClientConfig, ConfigError, load_config

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )

    try:
        config = load_config(config_path) if config_path else ClientConfig()
    except ConfigError as exc:
        console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(1)

    if url:
        config = config.model_copy(update={"base_url": url.rstrip("/")})

    if telemetry:
        from a2alink.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(export_to_console=True)
        except ImportError as exc:
            console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    ctx.obj = config


# Register subcommands
from a2alink.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
