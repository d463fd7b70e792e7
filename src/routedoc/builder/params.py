"""Collect Swagger parameters from path, query and header rule trees.

Query and header trees fold the same way:

* AND nodes contribute their left side's parameters, then their right
  side's.
* OR nodes contribute both sides.  Swagger has no "exactly one of", so
  when both sides yield parameters each side's descriptions are extended
  with ``Optional if the following <kind> are satisfied: [names]`` naming
  the other side.  If one side yields nothing the other is returned as is.
* A capture wrapped in :class:`~routedoc.routing.meta.TextMetaData` takes
  the text as its description.  Other metadata is transparent.

Path parameters come from the linearised path sequences instead; see
:func:`collect_path_params`.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Callable, Optional, TypeVar

from routedoc.builder.linearize import linearize_stack, make_path_string
from routedoc.builder.schemas import DEFAULT_FORMATS, SwaggerFormats, type_to_property
from routedoc.models import (
    BodyParameter,
    HeaderParameter,
    Parameter,
    PathParameter,
    PrimitiveProperty,
    QueryParameter,
    RefModel,
)
from routedoc.reflection import data_type, is_primitive
from routedoc.routing.action import RouteAction
from routedoc.routing.headers import (
    HeaderAnd,
    HeaderCapture,
    HeaderMapper,
    HeaderOr,
    HeaderRequire,
    HeaderRule,
)
from routedoc.routing.meta import MetaCons, TextMetaData
from routedoc.routing.path import CaptureTail, PathCapture, PathRule
from routedoc.routing.query import QueryAnd, QueryCapture, QueryOr, QueryRule

logger = logging.getLogger(__name__)

P = TypeVar("P", QueryParameter, HeaderParameter)

TAIL_PARAMETER_NAME = "tail..."


# ---------------------------------------------------------------------------
# OR handling
# ---------------------------------------------------------------------------


def add_or_descriptions(params: list[P], others: list[P], kind: str) -> list[P]:
    """Annotate *params* as optional when *others* are satisfied.

    Returns *params* untouched when *others* is empty, and *others* when
    *params* is empty.
    """
    if not others:
        return params
    if not params:
        return others

    names = ", ".join(p.name for p in others if p.name)
    note = f"Optional if the following {kind} are satisfied: [{names}]"
    return [_append_description(p, note) for p in params]


def or_parameters(left: list[P], right: list[P], kind: str) -> list[P]:
    """Combine the parameters of two alternatives.

    Example::

        >>> a, b = QueryParameter(name="a"), QueryParameter(name="b")
        >>> [p.description for p in or_parameters([a], [b], "params")]
        ['Optional if the following params are satisfied: [b]',
         'Optional if the following params are satisfied: [a]']
    """
    if not left or not right:
        return left or right
    return add_or_descriptions(left, right, kind) + add_or_descriptions(right, left, kind)


def _append_description(param: P, note: str) -> P:
    description = f"{param.description} {note}" if param.description else note
    return param.model_copy(update={"description": description})


def _fold_rules(
    rule: Any,
    and_type: type,
    or_type: type,
    make_param: Callable[[Any], Optional[P]],
    kind: str,
) -> list[P]:
    """Fold a query or header tree into its parameter list."""
    params: list[P] = []
    stack = [rule]

    while stack:
        node = stack.pop()
        if isinstance(node, and_type):
            stack.append(node.right)
            stack.append(node.left)
        elif isinstance(node, or_type):
            left = _fold_rules(node.left, and_type, or_type, make_param, kind)
            right = _fold_rules(node.right, and_type, or_type, make_param, kind)
            params.extend(or_parameters(left, right, kind))
        elif isinstance(node, MetaCons):
            wrapped = make_param(node.rule)
            if wrapped is not None and isinstance(node.meta, TextMetaData):
                params.append(wrapped.model_copy(update={"description": node.meta.msg}))
            else:
                stack.append(node.rule)
        else:
            param = make_param(node)
            if param is not None:
                params.append(param)

    return params


# ---------------------------------------------------------------------------
# Query
# ---------------------------------------------------------------------------


def collect_query_params(rule: QueryRule) -> list[QueryParameter]:
    """Return the query parameters described by *rule*, in traversal order."""
    return _fold_rules(rule, QueryAnd, QueryOr, _query_param, "params")


def make_query_param(capture: QueryCapture) -> QueryParameter:
    dt = data_type(capture.type)
    items, collection_format = _array_items(capture.type, "multi")
    return QueryParameter(
        name=capture.name,
        type=dt.name,
        format=dt.format,
        required=capture.is_required,
        default=_default_value(capture.default),
        items=items,
        collection_format=collection_format,
    )


def _query_param(node: Any) -> Optional[QueryParameter]:
    if isinstance(node, QueryCapture):
        return make_query_param(node)
    return None


# ---------------------------------------------------------------------------
# Headers
# ---------------------------------------------------------------------------


def collect_header_params(rule: HeaderRule) -> list[HeaderParameter]:
    """Return the header parameters described by *rule*, in traversal order."""
    return _fold_rules(rule, HeaderAnd, HeaderOr, _header_param, "headers")


def make_header_param(name: str, tp: Any = str) -> HeaderParameter:
    dt = data_type(tp)
    return HeaderParameter(name=name, type=dt.name, format=dt.format, required=True)


def _header_param(node: Any) -> Optional[HeaderParameter]:
    if isinstance(node, HeaderCapture):
        return make_header_param(node.name, node.type)
    if isinstance(node, (HeaderRequire, HeaderMapper)):
        return make_header_param(node.name)
    return None


# ---------------------------------------------------------------------------
# Path
# ---------------------------------------------------------------------------


def collect_path_params(path: PathRule, path_str: Optional[str] = None) -> list[PathParameter]:
    """Return the path parameters of the sequences through *path*.

    When *path_str* is given only the sequences rendering to that template
    contribute, so each documented path lists exactly its own captures.
    Otherwise all sequences contribute and repeated names are kept once.

    A tail capture becomes a single ``tail...`` string parameter and ends
    collection for its sequence: operations after it are not converted.
    """
    params: list[PathParameter] = []
    seen: set[str] = set()

    for sequence in linearize_stack([path]):
        if path_str is not None and make_path_string(sequence) != path_str:
            continue
        for op in sequence:
            if isinstance(op, PathCapture):
                param = make_path_param(op)
            elif isinstance(op, CaptureTail):
                param = PathParameter(name=TAIL_PARAMETER_NAME, type="string", required=True)
            else:
                continue
            if param.name not in seen:
                seen.add(param.name)
                params.append(param)
            if isinstance(op, CaptureTail):
                break

    return params


def make_path_param(capture: PathCapture) -> PathParameter:
    dt = data_type(capture.type)
    return PathParameter(
        name=capture.name,
        type=dt.name,
        format=dt.format,
        required=True,
        description=capture.description,
    )


# ---------------------------------------------------------------------------
# Body
# ---------------------------------------------------------------------------


def collect_body_param(
    action: RouteAction, formats: SwaggerFormats = DEFAULT_FORMATS
) -> Optional[BodyParameter]:
    """Return the body parameter of *action*, or ``None`` if it reads no body."""
    if action.body_type is None:
        return None

    reflector = formats.reflector
    tp = action.body_type
    if reflector.is_model(tp):
        schema: Any = RefModel(ref=reflector.simple_name(tp), id=reflector.full_name(tp))
    else:
        schema = type_to_property(tp, formats)
    return BodyParameter(
        name="body",
        description=reflector.simple_name(tp),
        required=True,
        schema=schema,
    )


def collect_operation_params(
    action: RouteAction,
    path_str: Optional[str] = None,
    formats: SwaggerFormats = DEFAULT_FORMATS,
) -> list[Parameter]:
    """Return path, query, header and body parameters, in that order."""
    params: list[Parameter] = []
    params.extend(collect_path_params(action.path, path_str))
    params.extend(collect_query_params(action.query))
    params.extend(collect_header_params(action.headers))
    body = collect_body_param(action, formats)
    if body is not None:
        params.append(body)
    return params


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _array_items(
    tp: Any, collection_format: str
) -> tuple[Optional[PrimitiveProperty], Optional[str]]:
    """Return ``items`` and ``collectionFormat`` for array-typed parameters."""
    if data_type(tp).name != "array":
        return None, None
    reflector = DEFAULT_FORMATS.reflector
    if reflector.is_optional(tp):
        tp = reflector.unwrap_optional(tp)
    element = reflector.element_type(tp)
    if is_primitive(element):
        dt = data_type(element)
    else:
        logger.debug("Array parameter of non-primitive %r documented as strings", element)
        dt = data_type(str)
    return PrimitiveProperty(type=dt.name, format=dt.format), collection_format


def _default_value(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_default_value(v) for v in value]
    return str(value)
