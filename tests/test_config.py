"""Tests for ClientConfig and the YAML loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from a2alink.config import DEFAULT_AGENT_CARD_PATH, ClientConfig, ConfigError, load_config


class TestClientConfig:
    def test_defaults(self) -> None:
        config = ClientConfig()
        assert config.base_url == ""
        assert config.timeout == 30.0
        assert config.agent_card_path == DEFAULT_AGENT_CARD_PATH == "/agent-card"
        assert config.headers == {}

    def test_normalises_paths(self) -> None:
        config = ClientConfig(base_url="https://agent.example.com/", agent_card_path="card.json")
        assert config.base_url == "https://agent.example.com"
        assert config.agent_card_path == "/card.json"


class TestLoadConfig:
    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "a2a.yaml"
        path.write_text(
            "base_url: https://agent.example.com\n"
            "timeout: 5\n"
            "headers:\n"
            "  X-Team: search\n"
        )
        config = load_config(path)
        assert config.base_url == "https://agent.example.com"
        assert config.timeout == 5.0
        assert config.headers == {"X-Team": "search"}

    def test_env_interpolation(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AGENT_HOST", "agent.internal")
        path = tmp_path / "a2a.yaml"
        path.write_text("base_url: https://${AGENT_HOST}:8443\n")
        assert load_config(path).base_url == "https://agent.internal:8443"

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == ClientConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path / "missing.yaml")

    def test_yaml_error(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("base_url: [unclosed\n")
        with pytest.raises(ConfigError, match="YAML parse error"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="must be a mapping"):
            load_config(path)

    def test_schema_error(self, tmp_path: Path) -> None:
        path = tmp_path / "schema.yaml"
        path.write_text("timeout: soon\n")
        with pytest.raises(ConfigError):
            load_config(path)
