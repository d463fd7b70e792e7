"""Assemble route actions into a Swagger document.

The document is an immutable value.  Each step takes a document and a
route action and returns a new document:

* :func:`make_operation` builds the :class:`~routedoc.models.Operation`
  for one path template.
* :func:`action_contribution` computes everything one action adds (its
  operations per path and verb, and its schema models) without looking at
  any document, so contributions can be computed independently.
* :func:`apply_contribution` / :func:`merge_action` fold a contribution
  into a document.  A later operation for the same path and verb replaces
  the earlier one; a later model for the same schema name replaces the
  earlier one.
* :func:`build_document` folds a sequence of actions in registration order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Optional

from routedoc.builder.linearize import collect_summary, make_path_strings
from routedoc.builder.naming import make_operation_id, operation_tags
from routedoc.builder.params import collect_operation_params
from routedoc.builder.schemas import (
    DEFAULT_FORMATS,
    SwaggerFormats,
    collect_models,
    find_name_collisions,
    type_to_property,
)
from routedoc.exceptions import SchemaCollisionError, UnsupportedMethodError
from routedoc.models import Info, Operation, PathItem, Response, SchemaModel, Swagger
from routedoc.routing.action import (
    EmptyResult,
    RouteAction,
    StatusAndType,
    StatusOnly,
    TypeOnly,
)

logger = logging.getLogger(__name__)

# HTTP verb -> PathItem field holding its operation
_VERB_FIELDS: dict[str, str] = {
    "GET": "get",
    "PUT": "put",
    "POST": "post",
    "DELETE": "delete",
    "PATCH": "patch",
    "OPTIONS": "options",
}


def verb_field(method: str) -> str:
    """Return the :class:`~routedoc.models.PathItem` field for *method*.

    Raises:
        UnsupportedMethodError: If *method* has no slot on a path item.
    """
    try:
        return _VERB_FIELDS[method.upper()]
    except KeyError:
        raise UnsupportedMethodError(method) from None


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def collect_responses(
    action: RouteAction, formats: SwaggerFormats = DEFAULT_FORMATS
) -> dict[str, Response]:
    """Return one response per declared result, keyed by status code string.

    A bare type is documented as ``200 OK``.  Results declaring neither
    status nor type produce no entry.
    """
    responses: dict[str, Response] = {}
    for result in action.result_info:
        if isinstance(result, TypeOnly):
            responses["200"] = Response(
                description=HTTPStatus.OK.phrase, schema=type_to_property(result.type, formats)
            )
        elif isinstance(result, StatusAndType):
            responses[str(int(result.status))] = Response(
                description=status_phrase(result.status),
                schema=type_to_property(result.type, formats),
            )
        elif isinstance(result, StatusOnly):
            responses[str(int(result.status))] = Response(description=status_phrase(result.status))
        elif not isinstance(result, EmptyResult):
            raise TypeError(f"Unknown result info: {result!r}")
    return responses


def status_phrase(status: int) -> str:
    """Return the reason phrase for *status*, or ``Status <code>`` for unregistered codes."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return f"Status {int(status)}"


def make_operation(
    path_str: str, action: RouteAction, formats: SwaggerFormats = DEFAULT_FORMATS
) -> Operation:
    """Build the operation documenting *action* at the template *path_str*."""
    return Operation(
        tags=operation_tags(path_str),
        summary=collect_summary(action.path),
        consumes=list(action.valid_media),
        produces=list(action.response_encodings),
        operation_id=make_operation_id(path_str, action.method),
        parameters=collect_operation_params(action, path_str, formats),
        responses=collect_responses(action, formats),
    )


# ---------------------------------------------------------------------------
# Schema types
# ---------------------------------------------------------------------------


def collect_result_types(action: RouteAction) -> list[Any]:
    """Return the body types of the declared results, without repeats."""
    types: list[Any] = []
    for result in action.result_info:
        if isinstance(result, (TypeOnly, StatusAndType)) and result.type not in types:
            types.append(result.type)
    return types


def collect_codec_types(action: RouteAction) -> list[Any]:
    """Return the request body type, if the action reads one."""
    return [] if action.body_type is None else [action.body_type]


def collect_action_models(
    action: RouteAction,
    known: Optional[Mapping[str, SchemaModel]] = None,
    formats: SwaggerFormats = DEFAULT_FORMATS,
) -> dict[str, SchemaModel]:
    """Return *known* extended with the models of the action's result and body types."""
    models = dict(known or {})
    for tp in collect_result_types(action) + collect_codec_types(action):
        models = collect_models(tp, models, formats)
    return models


# ---------------------------------------------------------------------------
# Folding
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ActionContribution:
    """What a single action adds to a document.

    Attributes:
        operations: ``(path template, path item field, operation)`` triples
            in linearisation order.
        models: Schema models keyed by identity.
    """

    operations: tuple[tuple[str, str, Operation], ...]
    models: Mapping[str, SchemaModel]


def action_contribution(
    action: RouteAction, formats: SwaggerFormats = DEFAULT_FORMATS
) -> ActionContribution:
    """Compute the operations and models *action* contributes.

    Raises:
        UnsupportedMethodError: If the action's verb cannot be documented.
    """
    field_name = verb_field(action.method)
    operations = tuple(
        (path_str, field_name, make_operation(path_str, action, formats))
        for path_str in make_path_strings(action.path)
    )
    return ActionContribution(operations=operations, models=collect_action_models(action, None, formats))


def apply_contribution(
    document: Swagger, contribution: ActionContribution, strict: bool = False
) -> Swagger:
    """Return *document* with *contribution* folded in.

    Args:
        document: The document built so far.  It is not modified.
        contribution: Output of :func:`action_contribution`.
        strict: Raise instead of overwriting when a new model takes a
            schema name already held by a different type.

    Raises:
        SchemaCollisionError: In strict mode, on a schema name collision.
    """
    paths = dict(document.paths)
    for path_str, field_name, operation in contribution.operations:
        item = paths.get(path_str, PathItem())
        paths[path_str] = item.model_copy(update={field_name: operation})

    definitions = dict(document.definitions)
    known = {model.identity for model in definitions.values()}
    for identity, model in contribution.models.items():
        if identity in known:
            continue
        existing = definitions.get(model.name)
        if existing is not None:
            collisions = find_name_collisions([existing, model])
            if collisions:
                if strict:
                    raise SchemaCollisionError(collisions)
                logger.warning(
                    "Schema name '%s' already used by %s; replaced by %s",
                    model.name,
                    existing.identity,
                    identity,
                )
        definitions[model.name] = model
        known.add(identity)

    return document.model_copy(update={"paths": paths, "definitions": definitions})


def merge_action(
    document: Swagger,
    action: RouteAction,
    formats: SwaggerFormats = DEFAULT_FORMATS,
    strict: bool = False,
) -> Swagger:
    """Return *document* with *action* documented in it."""
    merged = apply_contribution(document, action_contribution(action, formats), strict)
    logger.debug("Merged %s %s", action.method, ", ".join(make_path_strings(action.path)))
    return merged


def fold_contributions(
    document: Swagger, contributions: Iterable[ActionContribution], strict: bool = False
) -> Swagger:
    """Fold precomputed contributions into *document*, in iteration order."""
    for contribution in contributions:
        document = apply_contribution(document, contribution, strict)
    return document


def build_document(
    actions: Iterable[RouteAction],
    info: Optional[Info] = None,
    previous: Optional[Swagger] = None,
    formats: SwaggerFormats = DEFAULT_FORMATS,
    strict: bool = False,
) -> Swagger:
    """Document every action in *actions*, in registration order.

    Args:
        actions: Route actions to document.
        info: Document info.  Replaces the info of *previous* when both
            are given.
        previous: A document to extend.  Defaults to an empty document.
        formats: Schema expansion settings.
        strict: Fail on schema name collisions instead of overwriting.

    Returns:
        The new document.  With no actions and no *info*, *previous* is
        returned unchanged.

    Example::

        doc = build_document(
            [RouteAction("GET", root() / "users" / path_var("id", int))],
            info=Info(title="Users", version="1"),
        )
        sorted(doc.paths)  # ['/users/{id}']
    """
    if previous is None:
        document = Swagger(info=info or Info(title="API", version="1.0.0"))
    elif info is not None:
        document = previous.model_copy(update={"info": info})
    else:
        document = previous

    for action in actions:
        document = merge_action(document, action, formats, strict)
    return document


def find_schema_collisions(
    actions: Iterable[RouteAction], formats: SwaggerFormats = DEFAULT_FORMATS
) -> dict[str, list[str]]:
    """Report schema names that distinct types would fight over.

    Runs the same expansion as :func:`build_document` without building
    anything, so it can be used as a post-build diagnostic.
    """
    models: dict[str, SchemaModel] = {}
    for action in actions:
        models = collect_action_models(action, models, formats)
    return find_name_collisions(models.values())
