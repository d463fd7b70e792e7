"""Configuration resolution for document builds.

Settings come from four layers, highest precedence first:

1. CLI flags passed to :func:`resolve_config` as ``overrides``.
2. ``ROUTEDOC_*`` environment variables (see :data:`ENV_VARS`).
3. The project config file: ``./routedoc.json``, ``./routedoc.yaml`` or
   ``./routedoc.yml`` (first one found), or an explicit path.
4. :class:`~routedoc.models.DocumentConfig` defaults.

The resolved config also seeds an empty document through
:func:`empty_document`.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from routedoc.exceptions import ConfigError
from routedoc.models import DocumentConfig, Info, Swagger

_PROJECT_CONFIG_FILENAMES = ("routedoc.json", "routedoc.yaml", "routedoc.yml")

ENV_VARS: dict[str, str] = {
    "ROUTEDOC_TITLE": "title",
    "ROUTEDOC_VERSION": "version",
    "ROUTEDOC_HOST": "host",
    "ROUTEDOC_BASE_PATH": "base_path",
    "ROUTEDOC_FORMAT": "output_format",
    "ROUTEDOC_ROUTES": "routes",
    "ROUTEDOC_STRICT": "strict_schema_names",
}
"""Environment variable -> :class:`~routedoc.models.DocumentConfig` field."""


# --- Project config ---


def find_project_config(directory: Optional[Path] = None) -> Optional[Path]:
    """Return the first project config file in *directory* (default: cwd)."""
    base = directory or Path.cwd()
    for name in _PROJECT_CONFIG_FILENAMES:
        path = base / name
        if path.is_file():
            return path
    return None


def load_project_config(path: Optional[Path] = None) -> dict[str, Any]:
    """Load the project config file as a dict.

    Args:
        path: Explicit config file.  When ``None`` the current directory is
            searched and a missing file yields an empty dict.

    Raises:
        ConfigError: If an explicit *path* does not exist, or the file is
            not a JSON/YAML mapping.
    """
    if path is None:
        path = find_project_config()
        if path is None:
            return {}
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Project config at {path} must be a mapping (got {type(data).__name__})"
        )
    return data


def _env_overrides() -> dict[str, Any]:
    values: dict[str, Any] = {}
    for var, field_name in ENV_VARS.items():
        raw = os.environ.get(var)
        if not raw:
            continue
        if field_name == "strict_schema_names":
            values[field_name] = raw.strip().lower() in ("1", "true", "yes", "on")
        else:
            values[field_name] = raw
    return values


# --- Precedence resolution ---


def resolve_config(
    overrides: Optional[dict[str, Any]] = None,
    config_path: Optional[Path] = None,
) -> DocumentConfig:
    """Resolve the effective :class:`~routedoc.models.DocumentConfig`.

    Args:
        overrides: CLI-supplied values.  ``None`` entries are ignored so
            unset flags do not mask lower layers.
        config_path: Explicit project config file.

    Raises:
        ConfigError: If the config file is invalid or the merged values
            fail validation.
    """
    data = load_project_config(config_path)
    data.update(_env_overrides())
    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return DocumentConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def make_info(config: DocumentConfig) -> Info:
    return Info(title=config.title, version=config.version, description=config.description)


def empty_document(config: DocumentConfig) -> Swagger:
    """Return a document with no paths, carrying the config's top-level fields."""
    return Swagger(
        info=make_info(config),
        host=config.host,
        base_path=config.base_path,
        schemes=list(config.schemes),
        consumes=list(config.consumes),
        produces=list(config.produces),
    )


def apply_server_overrides(document: Swagger, config: DocumentConfig) -> Swagger:
    """Return *document* with the config's ``host`` and ``base_path`` applied.

    Unset config values leave the document's own values alone, so a
    previously written document keeps its server fields unless overridden.
    """
    update = {
        name: value
        for name, value in (("host", config.host), ("base_path", config.base_path))
        if value is not None
    }
    return document.model_copy(update=update) if update else document
