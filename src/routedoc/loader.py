"""Load route actions and previously built documents.

* :func:`load_routes` imports a ``module:attribute`` target and returns the
  :class:`~routedoc.routing.action.RouteAction` objects it exposes.
* :func:`load_document` reads a JSON or YAML Swagger document written by
  an earlier build, so new routes can be merged into it.
"""

from __future__ import annotations

import importlib
import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from routedoc.exceptions import DocumentLoadError, RouteLoadError
from routedoc.models import Swagger
from routedoc.routing.action import RouteAction


def load_routes(target: str) -> list[RouteAction]:
    """Import *target* and return its route actions.

    *target* has the form ``package.module:attribute``.  The attribute may
    be an iterable of :class:`~routedoc.routing.action.RouteAction`, a
    single action, or a zero-argument callable returning either.

    Raises:
        RouteLoadError: If the target is malformed, cannot be imported, or
            does not yield route actions.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise RouteLoadError(f"Route target must look like 'module:attribute', got '{target}'")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise RouteLoadError(f"Cannot import module '{module_name}': {exc}") from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise RouteLoadError(f"'{module_name}' has no attribute '{attr_path}'") from exc

    if callable(obj) and not isinstance(obj, RouteAction):
        obj = obj()
    if isinstance(obj, RouteAction):
        return [obj]
    if not isinstance(obj, Iterable) or isinstance(obj, (str, bytes, dict)):
        raise RouteLoadError(f"'{target}' is not a collection of route actions")

    actions = list(obj)
    for item in actions:
        if not isinstance(item, RouteAction):
            raise RouteLoadError(
                f"'{target}' contains {type(item).__name__}, expected RouteAction"
            )
    return actions


def load_document(path: str | Path) -> Swagger:
    """Load a Swagger document from a JSON or YAML file.

    Raises:
        DocumentLoadError: If the file is missing, unparsable, or not a
            valid document.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise DocumentLoadError(f"Document not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentLoadError(f"Failed to read document {path}: {exc}") from exc

    suffix = file_path.suffix.lower()
    hint = "yaml" if suffix in (".yaml", ".yml") else "json" if suffix == ".json" else ""
    data = _parse_content(content, hint=hint)

    definitions = data.get("definitions")
    if isinstance(definitions, dict):
        # Schemas written without a title take their key as name.
        data["definitions"] = {
            name: ({"title": name, **schema} if isinstance(schema, dict) else schema)
            for name, schema in definitions.items()
        }

    try:
        return Swagger.model_validate(data)
    except ValidationError as exc:
        raise DocumentLoadError(f"Invalid document at {path}: {exc}") from exc


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.

    Raises:
        DocumentLoadError: If the content is not a JSON/YAML mapping.
    """
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise DocumentLoadError(f"Invalid JSON: {exc}") from exc
            json_error = exc
        else:
            return _require_mapping(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        msg = "Failed to parse document as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise DocumentLoadError(msg) from exc
    return _require_mapping(result)


def _require_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise DocumentLoadError(f"Document must be a JSON/YAML object (got {kind})")
    return result
