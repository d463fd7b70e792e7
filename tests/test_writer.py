"""Tests for routedoc.writer -- JSON/YAML rendering and atomic writes."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from sample_api import ROUTES

from routedoc.builder import build_document
from routedoc.models import OutputFormat
from routedoc.writer import _atomic_write, dump_document, format_for_path, write_document


@pytest.fixture
def document():
    return build_document(ROUTES)


class TestDumpDocument:
    def test_json(self, document) -> None:
        text = dump_document(document)
        assert text.endswith("}\n")
        assert json.loads(text) == document.to_dict()

    def test_json_is_indented(self, document) -> None:
        assert '\n  "swagger": "2.0"' in dump_document(document, OutputFormat.JSON)

    def test_yaml(self, document) -> None:
        text = dump_document(document, OutputFormat.YAML)
        assert yaml.safe_load(text) == document.to_dict()

    def test_yaml_keeps_key_order(self, document) -> None:
        text = dump_document(document, OutputFormat.YAML)
        assert text.startswith("swagger: '2.0'\ninfo:")

    def test_format_given_as_string(self, document) -> None:
        assert dump_document(document, "yaml").startswith("swagger:")  # type: ignore[arg-type]


class TestFormatForPath:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("swagger.json", OutputFormat.JSON),
            ("swagger.yaml", OutputFormat.YAML),
            ("swagger.YML", OutputFormat.YAML),
            ("swagger.txt", None),
            ("swagger", None),
        ],
    )
    def test_suffixes(self, name: str, expected) -> None:
        assert format_for_path(Path(name)) == expected


class TestWriteDocument:
    def test_writes_file(self, document, tmp_path: Path) -> None:
        target = tmp_path / "out" / "swagger.yaml"
        write_document(document, target, OutputFormat.YAML)
        assert yaml.safe_load(target.read_text(encoding="utf-8")) == document.to_dict()


class TestAtomicWrite:
    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "test.txt"
        target.write_text("old content", encoding="utf-8")
        _atomic_write(target, "new content")
        assert target.read_text(encoding="utf-8") == "new content"

    def test_no_temp_files_left_on_success(self, tmp_path: Path) -> None:
        target = tmp_path / "test.txt"
        _atomic_write(target, "content")
        assert list(tmp_path.iterdir()) == [target]

    def test_no_temp_files_left_on_error(self, tmp_path: Path) -> None:
        target = tmp_path / "test.txt"
        with patch("routedoc.writer.os.fsync", side_effect=OSError("disk error")):
            with pytest.raises(OSError, match="disk error"):
                _atomic_write(target, "will fail")
        assert list(tmp_path.iterdir()) == []

    def test_unicode_content(self, tmp_path: Path) -> None:
        target = tmp_path / "unicode.txt"
        content = "Hello 世界 éàüñ"
        _atomic_write(target, content)
        assert target.read_text(encoding="utf-8") == content
