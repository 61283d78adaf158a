"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() precedence and error mapping
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from covremap.config.loader import _deep_merge, _load_yaml, load_config
from covremap.core.errors import ConfigError, ErrorCode


@pytest.fixture
def global_config(tmp_path: Path) -> Iterator[Path]:
    """Point the global config at a file inside tmp_path."""
    path = tmp_path / "global" / "config.yaml"
    with patch("covremap.config.loader.GLOBAL_CONFIG_PATH", path):
        yield path


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        yaml_file = _write(tmp_path / "config.yaml", "collector:\n  store: tmp\n")

        assert _load_yaml(yaml_file) == {"collector": {"store": "tmp"}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        assert _load_yaml(_write(tmp_path / "empty.yaml", "")) == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        yaml_file = _write(tmp_path / "invalid.yaml", "logging:\n  level:\n    - [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)

        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_raises_config_error_for_non_mapping(self, tmp_path: Path) -> None:
        yaml_file = _write(tmp_path / "list.yaml", "- a\n- b\n")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)

        assert "mapping" in exc_info.value.details["reason"]


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_nested_merge(self) -> None:
        base = {"compiler": {"timeout_sec": 10, "allow_jsx": True}}
        override = {"compiler": {"timeout_sec": 30}}

        assert _deep_merge(base, override) == {
            "compiler": {"timeout_sec": 30, "allow_jsx": True}
        }

    def test_override_replaces_non_dict(self) -> None:
        base: dict[str, Any] = {"a": {"nested": 1}}
        override: dict[str, Any] = {"a": "simple"}

        assert _deep_merge(base, override) == {"a": "simple"}

    def test_does_not_mutate_base(self) -> None:
        base = {"a": 1}

        _deep_merge(base, {"b": 2})

        assert base == {"a": 1}


class TestLoadConfig:
    """Tests for load_config function."""

    def test_returns_default_config_when_no_files(
        self, tmp_path: Path, global_config: Path
    ) -> None:
        config = load_config(tmp_path)

        assert config.logging.level == "INFO"
        assert config.collector.store == "memory"
        assert config.compiler.command == ["npx", "babel"]

    def test_repo_yaml_overrides_global(self, tmp_path: Path, global_config: Path) -> None:
        _write(global_config, "compiler:\n  timeout_sec: 10\n  allow_jsx: false\n")
        _write(tmp_path / ".covremap" / "config.yaml", "compiler:\n  timeout_sec: 30\n")

        config = load_config(tmp_path)

        assert config.compiler.timeout_sec == 30
        assert config.compiler.allow_jsx is False

    def test_explicit_config_path(self, tmp_path: Path, global_config: Path) -> None:
        path = _write(tmp_path / "custom.yaml", "collector:\n  store: tmp\n")

        config = load_config(tmp_path, config_path=path)

        assert config.collector.store == "tmp"

    def test_env_overrides_yaml(
        self, tmp_path: Path, global_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write(tmp_path / ".covremap" / "config.yaml", "logging:\n  level: WARNING\n")
        monkeypatch.setenv("COVREMAP__LOGGING__LEVEL", "DEBUG")

        config = load_config(tmp_path)

        assert config.logging.level == "DEBUG"

    def test_kwargs_override_env(
        self, tmp_path: Path, global_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("COVREMAP__COLLECTOR__STORE", "tmp")

        config = load_config(tmp_path, collector={"store": "memory"})

        assert config.collector.store == "memory"

    def test_invalid_value_names_field(self, tmp_path: Path, global_config: Path) -> None:
        _write(tmp_path / ".covremap" / "config.yaml", "compiler:\n  timeout_sec: -5\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert exc_info.value.details["field"] == "compiler.timeout_sec"

    def test_invalid_yaml_in_repo_config(self, tmp_path: Path, global_config: Path) -> None:
        _write(tmp_path / ".covremap" / "config.yaml", "collector: [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)

        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR
