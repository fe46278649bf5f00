"""Shared fixtures for CLI tests: a CliRunner and a mocked remote agent."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Any
from unittest.mock import patch

import httpx
import pytest
from click.testing import CliRunner

from a2alink.protocol.http import HttpA2AClient

Handler = Callable[[httpx.Request], httpx.Response]


@contextmanager
def _mock_agent(handler: Handler) -> Iterator[list[httpx.Request]]:
    """Route every client the CLI opens to *handler*; yields the recorded requests."""
    requests: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    def factory(*args: Any, **kwargs: Any) -> HttpA2AClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(record))
        return HttpA2AClient(*args, http_client=http, **kwargs)

    with patch("a2alink.protocol.http.HttpA2AClient", side_effect=factory):
        yield requests


@pytest.fixture
def mock_agent() -> Callable[[Handler], AbstractContextManager[list[httpx.Request]]]:
    return _mock_agent


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner(env={"A2A_AGENT_URL": None})
