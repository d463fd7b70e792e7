"""Expand Python types into Swagger schema models.

:func:`collect_models` walks a type and every type reachable from its
fields, container elements and optional wrappers, producing one
:class:`~routedoc.models.SchemaModel` per model type.  Models are keyed by
their fully-qualified identity; a type whose identity is already known is
never expanded again, which is what makes self-referential and mutually
recursive types terminate.

Fields that refer to other models become
:class:`~routedoc.models.RefProperty` references rather than embedded
copies, so the definitions stay flat.

Applications can override the default expansion through
:class:`SwaggerFormats`:

* ``serializers`` -- a type maps directly to the models describing it.
* ``field_serializers`` -- a type maps directly to the property used
  wherever a field has that type.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from routedoc.models import (
    ArrayProperty,
    MapProperty,
    PrimitiveProperty,
    Property,
    RefProperty,
    SchemaModel,
)
from routedoc.reflection import DEFAULT_REFLECTOR, TypeReflector, data_type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwaggerFormats:
    """Configuration consulted while expanding types.

    Attributes:
        serializers: Types whose models are supplied by the application
            instead of being derived from their fields.
        field_serializers: Types documented with a fixed property wherever
            they appear as a field, element or response body.
        reflector: How types are inspected.
    """

    serializers: Mapping[Any, tuple[SchemaModel, ...]] = field(default_factory=dict)
    field_serializers: Mapping[Any, Property] = field(default_factory=dict)
    reflector: TypeReflector = DEFAULT_REFLECTOR

    def with_serializers(self, tp: Any, *models: SchemaModel) -> "SwaggerFormats":
        """Return a copy that documents *tp* with *models*."""
        return replace(self, serializers={**self.serializers, tp: tuple(models)})

    def with_field_serializer(self, tp: Any, prop: Property) -> "SwaggerFormats":
        """Return a copy that documents fields of type *tp* as *prop*."""
        return replace(self, field_serializers={**self.field_serializers, tp: prop})


DEFAULT_FORMATS = SwaggerFormats()


def collect_models(
    tp: Any,
    known: Mapping[str, SchemaModel],
    formats: SwaggerFormats = DEFAULT_FORMATS,
) -> dict[str, SchemaModel]:
    """Return *known* extended with every model needed to describe *tp*.

    Args:
        tp: The type to describe.
        known: Models already registered, keyed by identity.  They are
            neither expanded again nor replaced.
        formats: Custom serializers and the type reflector.

    Returns:
        A new dict keyed by model identity.  Insertion order is *known*
        first, then new models in the order they were reached.

    Example::

        @dataclass
        class Node:
            value: int
            children: list[Node]

        collect_models(Node, {})
        # {"mymodule.Node": SchemaModel(name="Node", ...)}
    """
    reflector = formats.reflector
    models = dict(known)
    pending = [tp]

    while pending:
        current = pending.pop()
        if current is None or _lookup(formats.field_serializers, current) is not None:
            continue

        custom = _lookup(formats.serializers, current)
        if custom is not None:
            for model in custom:
                models.setdefault(model.identity, model)
            continue

        if reflector.is_optional(current):
            pending.append(reflector.unwrap_optional(current))
            continue
        members = reflector.union_members(current)
        if len(members) > 1:
            pending.extend(reversed(members))
            continue
        if reflector.is_container(current):
            pending.append(reflector.element_type(current))
            continue
        if reflector.is_mapping(current):
            pending.append(reflector.value_type(current))
            continue
        if not reflector.is_model(current):
            continue

        identity = reflector.full_name(current)
        if identity in models:
            continue

        fields = reflector.fields(current)
        models[identity] = make_model(current, fields, formats)
        logger.debug("Registered schema model %s", identity)
        pending.extend(ftype for _, ftype in reversed(fields))

    return models


def make_model(
    tp: Any,
    fields: Optional[list[tuple[str, Any]]] = None,
    formats: SwaggerFormats = DEFAULT_FORMATS,
) -> SchemaModel:
    """Build the :class:`~routedoc.models.SchemaModel` for a single model type.

    Optional fields are left out of ``required``.
    """
    reflector = formats.reflector
    if fields is None:
        fields = reflector.fields(tp)

    properties = {name: type_to_property(ftype, formats) for name, ftype in fields}
    required = [name for name, ftype in fields if not reflector.is_optional(ftype)]
    return SchemaModel(
        id=reflector.full_name(tp),
        name=reflector.simple_name(tp),
        description=reflector.description(tp),
        properties=properties,
        required=required or None,
    )


def type_to_property(tp: Any, formats: SwaggerFormats = DEFAULT_FORMATS) -> Property:
    """Return the property describing a field, element or body of type *tp*."""
    reflector = formats.reflector

    custom = _lookup(formats.field_serializers, tp)
    if custom is not None:
        return custom
    if reflector.is_optional(tp):
        return type_to_property(reflector.unwrap_optional(tp), formats)

    if reflector.is_enum(tp):
        dt = data_type(tp, reflector)
        return PrimitiveProperty(type=dt.name, format=dt.format, enum=[m.value for m in tp])
    if len(reflector.union_members(tp)) > 1:
        return PrimitiveProperty(type="object")
    if reflector.is_container(tp):
        return ArrayProperty(
            items=type_to_property(reflector.element_type(tp), formats),
            unique_items=True if reflector.is_unique_container(tp) else None,
        )
    if reflector.is_mapping(tp):
        return MapProperty(additional_properties=type_to_property(reflector.value_type(tp), formats))
    if reflector.is_model(tp):
        return RefProperty(ref=reflector.simple_name(tp))

    dt = data_type(tp, reflector)
    return PrimitiveProperty(type=dt.name, format=dt.format)


def definitions_by_name(models: Iterable[SchemaModel]) -> dict[str, SchemaModel]:
    """Key *models* by short name.  A later model replaces an earlier namesake."""
    return {model.name: model for model in models}


def find_name_collisions(models: Iterable[SchemaModel]) -> dict[str, list[str]]:
    """Return short names claimed by more than one model identity.

    Models without an explicit identity (loaded back from a file) never
    count as colliding.

    Returns:
        A dict mapping each contested name to the identities claiming it,
        in the order they were seen.
    """
    claims: dict[str, list[str]] = {}
    for model in models:
        if model.id is None:
            continue
        ids = claims.setdefault(model.name, [])
        if model.id not in ids:
            ids.append(model.id)
    return {name: ids for name, ids in claims.items() if len(ids) > 1}


def _lookup(mapping: Mapping[Any, Any], tp: Any) -> Any:
    try:
        return mapping.get(tp)
    except TypeError:
        # Unhashable annotation metadata.
        return None
