"""Runs one client operation for a CLI command."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, TypeVar

from rich.markup import escape

from a2alink.cli_commands._output import console

if TYPE_CHECKING:
    from a2alink.config import ClientConfig
    from a2alink.protocol.http import HttpA2AClient

T = TypeVar("T")


def run_client(config: ClientConfig, action: Callable[[HttpA2AClient], Awaitable[T]]) -> T:
    """Open a client for *config*, await *action* with it, and return its result.

    Exits with status 1 when no agent URL is configured or the call raises
    an :class:`~a2alink.protocol.errors.RpcError`.
    """
    from a2alink.protocol.errors import RpcError
    from a2alink.protocol.http import HttpA2AClient

    if not config.base_url:
        console.print("[red]No agent URL:[/red] pass --url or set A2A_AGENT_URL")
        sys.exit(1)

    async def _run() -> T:
        async with HttpA2AClient(config=config) as client:
            return await action(client)

    try:
        return asyncio.run(_run())
    except RpcError as exc:
        console.print(f"[red]Error {exc.code}:[/red] {escape(str(exc))}")
        sys.exit(1)
