"""Serialise documents to JSON or YAML text and files."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

import yaml

from routedoc.models import OutputFormat, Swagger


def dump_document(document: Swagger, fmt: OutputFormat = OutputFormat.JSON) -> str:
    """Render *document* as JSON (indented) or YAML, preserving key order."""
    data = document.to_dict()
    if OutputFormat(fmt) == OutputFormat.YAML:
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def format_for_path(path: Path) -> Optional[OutputFormat]:
    """Guess the output format from a file extension."""
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return OutputFormat.YAML
    if suffix == ".json":
        return OutputFormat.JSON
    return None


def write_document(
    document: Swagger, path: Path, fmt: OutputFormat = OutputFormat.JSON
) -> None:
    """Write *document* to *path* atomically."""
    _atomic_write(path, dump_document(document, fmt))


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise
