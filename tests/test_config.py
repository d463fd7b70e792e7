"""Tests for routedoc.config -- project config files, env vars, precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from routedoc.config import (
    apply_server_overrides,
    empty_document,
    find_project_config,
    load_project_config,
    make_info,
    resolve_config,
)
from routedoc.exceptions import ConfigError
from routedoc.models import DocumentConfig, Info, OutputFormat


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> None:
    """Write a dict as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# Project config
# ---------------------------------------------------------------------------


class TestProjectConfig:
    def test_missing_returns_empty(self, isolated_config: Path) -> None:
        assert find_project_config() is None
        assert load_project_config() == {}

    def test_json_file(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "routedoc.json", {"title": "Pets"})
        assert find_project_config() == isolated_config / "routedoc.json"
        assert load_project_config() == {"title": "Pets"}

    def test_yaml_file(self, isolated_config: Path) -> None:
        (isolated_config / "routedoc.yaml").write_text("title: Pets\nversion: '2.0'\n")
        assert load_project_config() == {"title": "Pets", "version": "2.0"}

    def test_yml_file(self, isolated_config: Path) -> None:
        (isolated_config / "routedoc.yml").write_text("host: api.example.com\n")
        assert load_project_config() == {"host": "api.example.com"}

    def test_json_preferred_over_yaml(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "routedoc.json", {"title": "json"})
        (isolated_config / "routedoc.yaml").write_text("title: yaml\n")
        assert load_project_config()["title"] == "json"

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("title: Custom\n")
        assert load_project_config(path) == {"title": "Custom"}

    def test_explicit_missing_path_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_project_config(tmp_path / "nope.json")

    def test_invalid_json_raises(self, isolated_config: Path) -> None:
        (isolated_config / "routedoc.json").write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config()

    def test_non_mapping_raises(self, isolated_config: Path) -> None:
        (isolated_config / "routedoc.yaml").write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="must be a mapping"):
            load_project_config()

    def test_empty_file_is_empty_config(self, isolated_config: Path) -> None:
        (isolated_config / "routedoc.yaml").write_text("")
        assert load_project_config() == {}


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestResolveConfig:
    def test_defaults(self, isolated_config: Path) -> None:
        assert resolve_config() == DocumentConfig()

    def test_file_over_defaults(self, isolated_config: Path) -> None:
        _write_json(
            isolated_config / "routedoc.json",
            {"title": "Pets", "output_format": "yaml", "schemes": ["https"]},
        )
        config = resolve_config()
        assert config.title == "Pets"
        assert config.output_format == OutputFormat.YAML
        assert config.schemes == ["https"]

    def test_env_over_file(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_json(isolated_config / "routedoc.json", {"title": "File", "version": "1"})
        monkeypatch.setenv("ROUTEDOC_TITLE", "Env")
        config = resolve_config()
        assert config.title == "Env"
        assert config.version == "1"

    def test_cli_over_env(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ROUTEDOC_TITLE", "Env")
        monkeypatch.setenv("ROUTEDOC_HOST", "env.example.com")
        config = resolve_config({"title": "Cli", "host": None})
        assert config.title == "Cli"
        assert config.host == "env.example.com"

    @pytest.mark.parametrize(("raw", "expected"), [("1", True), ("true", True), ("no", False)])
    def test_strict_env(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool
    ) -> None:
        monkeypatch.setenv("ROUTEDOC_STRICT", raw)
        assert resolve_config().strict_schema_names is expected

    def test_format_env(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ROUTEDOC_FORMAT", "yaml")
        assert resolve_config().output_format == OutputFormat.YAML

    def test_invalid_value_raises(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config({"output_format": "xml"})

    def test_explicit_config_path(self, isolated_config: Path, tmp_path: Path) -> None:
        path = tmp_path / "elsewhere" / "api.json"
        _write_json(path, {"routes": "myapp.routes:ROUTES"})
        assert resolve_config(config_path=path).routes == "myapp.routes:ROUTES"


# ---------------------------------------------------------------------------
# Seeding
# ---------------------------------------------------------------------------


class TestEmptyDocument:
    def test_carries_top_level_fields(self) -> None:
        config = DocumentConfig(
            title="Pets",
            version="3",
            description="Pet store",
            host="api.example.com",
            base_path="/v1",
            schemes=["https"],
            produces=["application/json"],
        )
        doc = empty_document(config)
        assert doc.info == Info(title="Pets", version="3", description="Pet store")
        assert doc.host == "api.example.com"
        assert doc.base_path == "/v1"
        assert doc.schemes == ["https"]
        assert doc.produces == ["application/json"]
        assert doc.paths == {}
        assert doc.definitions == {}

    def test_make_info_defaults(self) -> None:
        assert make_info(DocumentConfig()) == Info(title="API", version="1.0.0")


class TestApplyServerOverrides:
    def test_overrides_host_and_base_path(self) -> None:
        seed = empty_document(DocumentConfig(host="old.example.com", base_path="/v1"))
        doc = apply_server_overrides(seed, DocumentConfig(host="new.example.com", base_path="/v2"))
        assert doc.host == "new.example.com"
        assert doc.base_path == "/v2"
        assert seed.host == "old.example.com"

    def test_unset_values_keep_document(self) -> None:
        seed = empty_document(DocumentConfig(host="old.example.com", base_path="/v1"))
        assert apply_server_overrides(seed, DocumentConfig()) is seed

    def test_partial_override(self) -> None:
        seed = empty_document(DocumentConfig(host="old.example.com", base_path="/v1"))
        doc = apply_server_overrides(seed, DocumentConfig(base_path="/v2"))
        assert doc.host == "old.example.com"
        assert doc.base_path == "/v2"
