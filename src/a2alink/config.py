"""Client configuration — endpoint, timeouts, agent-card location, headers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError, field_validator

DEFAULT_AGENT_CARD_PATH = "/agent-card"


class ConfigError(Exception):
    """Raised when a config file cannot be read, parsed or validated."""


class ClientConfig(BaseModel):
    """Settings for :class:`~a2alink.protocol.http.HttpA2AClient`.

    ``timeout`` bounds connect/read/write for unary calls and connect/write for
    streams (stream reads wait indefinitely for the next event). ``None``
    disables timeouts entirely.
    """

    base_url: str = ""
    timeout: float | None = 30.0
    agent_card_path: str = DEFAULT_AGENT_CARD_PATH
    headers: dict[str, str] = {}

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("agent_card_path")
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        return value if value.startswith("/") else f"/{value}"


def load_config(path: str | Path) -> ClientConfig:
    """Read a YAML config file, interpolate env vars, and validate.

    Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
    using :func:`os.path.expandvars` before YAML parsing. An empty file yields
    the defaults.

    Raises:
        ConfigError: On read errors, YAML parse errors or schema failures.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc

    try:
        data: Any = yaml.safe_load(os.path.expandvars(raw))
    except yaml.YAMLError as exc:
        raise ConfigError(f"YAML parse error: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Config YAML must be a mapping")

    try:
        return ClientConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
