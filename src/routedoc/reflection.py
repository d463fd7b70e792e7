"""Runtime type reflection for schema generation.

The builder never inspects Python types directly.  It asks a
:class:`TypeReflector` a handful of structural questions (what are this
type's fields, is it optional, what does this container hold) so that
applications with their own model layer can plug in a reflector of their
own.

:class:`PythonTypeReflector` is the default and understands:

* dataclasses, pydantic v2 ``BaseModel`` subclasses, ``TypedDict`` and
  ``NamedTuple`` classes as *models*;
* ``list``/``set``/``frozenset``/``tuple`` and the ``collections.abc``
  sequence and set ABCs as *containers*;
* ``dict`` and ``Mapping`` as *mappings*;
* ``Optional[X]``, ``X | None`` and ``Annotated[X, ...]`` as wrappers.

:func:`data_type` maps a type to the Swagger primitive it is documented as.
Types it cannot classify are documented as ``string``.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import datetime
import decimal
import enum
import logging
import types
import typing
import uuid
from dataclasses import dataclass
from typing import Annotated, Any, Optional, Protocol, Union, get_args, get_origin

from pydantic import BaseModel

logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)

_SEQUENCE_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Collection,
    collections.abc.Iterable,
)
_UNIQUE_ORIGINS = (set, frozenset, collections.abc.Set, collections.abc.MutableSet)
_MAPPING_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)


@dataclass(frozen=True)
class DataType:
    """A Swagger primitive: ``type`` name plus optional ``format``."""

    name: str
    format: Optional[str] = None


STRING = DataType("string")

_PRIMITIVES: dict[Any, DataType] = {
    str: STRING,
    bool: DataType("boolean"),
    int: DataType("integer", "int64"),
    float: DataType("number", "double"),
    decimal.Decimal: DataType("number"),
    bytes: DataType("string", "byte"),
    bytearray: DataType("string", "byte"),
    datetime.datetime: DataType("string", "date-time"),
    datetime.date: DataType("string", "date"),
    datetime.time: DataType("string", "time"),
    uuid.UUID: DataType("string", "uuid"),
}


class TypeReflector(Protocol):
    """Structural questions the schema expander asks about a type."""

    def fields(self, tp: Any) -> list[tuple[str, Any]]: ...

    def is_optional(self, tp: Any) -> bool: ...

    def unwrap_optional(self, tp: Any) -> Any: ...

    def union_members(self, tp: Any) -> list[Any]: ...

    def is_container(self, tp: Any) -> bool: ...

    def is_unique_container(self, tp: Any) -> bool: ...

    def element_type(self, tp: Any) -> Any: ...

    def is_mapping(self, tp: Any) -> bool: ...

    def value_type(self, tp: Any) -> Any: ...

    def is_model(self, tp: Any) -> bool: ...

    def is_enum(self, tp: Any) -> bool: ...

    def simple_name(self, tp: Any) -> str: ...

    def full_name(self, tp: Any) -> str: ...

    def description(self, tp: Any) -> Optional[str]: ...


class PythonTypeReflector:
    """Default :class:`TypeReflector` for standard Python type annotations."""

    def fields(self, tp: Any) -> list[tuple[str, Any]]:
        """Return the ``(name, type)`` pairs of a model, in declaration order."""
        tp = _strip_annotated(tp)
        if isinstance(tp, type) and issubclass(tp, BaseModel):
            return [(name, info.annotation) for name, info in tp.model_fields.items()]

        hints = _type_hints(tp)
        if dataclasses.is_dataclass(tp):
            return [(f.name, hints.get(f.name, Any)) for f in dataclasses.fields(tp)]
        return list(hints.items())

    def is_optional(self, tp: Any) -> bool:
        tp = _strip_annotated(tp)
        return _is_union(tp) and _NONE_TYPE in get_args(tp)

    def unwrap_optional(self, tp: Any) -> Any:
        """Strip ``None`` from a union; a single remaining member is returned bare."""
        tp = _strip_annotated(tp)
        if not self.is_optional(tp):
            return tp
        rest = tuple(a for a in get_args(tp) if a is not _NONE_TYPE)
        if len(rest) == 1:
            return rest[0]
        return Union[rest]

    def union_members(self, tp: Any) -> list[Any]:
        """Return the members of a union, or ``[tp]`` for anything else."""
        tp = _strip_annotated(tp)
        if _is_union(tp):
            return list(get_args(tp))
        return [tp]

    def is_container(self, tp: Any) -> bool:
        tp = _strip_annotated(tp)
        if tp in (list, tuple, set, frozenset):
            return True
        return get_origin(tp) in _SEQUENCE_ORIGINS

    def is_unique_container(self, tp: Any) -> bool:
        tp = _strip_annotated(tp)
        return tp in (set, frozenset) or get_origin(tp) in _UNIQUE_ORIGINS

    def element_type(self, tp: Any) -> Any:
        args = get_args(_strip_annotated(tp))
        return args[0] if args else Any

    def is_mapping(self, tp: Any) -> bool:
        tp = _strip_annotated(tp)
        return tp is dict or get_origin(tp) in _MAPPING_ORIGINS

    def value_type(self, tp: Any) -> Any:
        args = get_args(_strip_annotated(tp))
        return args[1] if len(args) == 2 else Any

    def is_model(self, tp: Any) -> bool:
        tp = _strip_annotated(tp)
        if not _is_class(tp):
            return False
        if issubclass(tp, BaseModel):
            return True
        if dataclasses.is_dataclass(tp):
            return True
        if typing.is_typeddict(tp):
            return True
        return issubclass(tp, tuple) and hasattr(tp, "_fields")

    def is_enum(self, tp: Any) -> bool:
        tp = _strip_annotated(tp)
        return _is_class(tp) and issubclass(tp, enum.Enum)

    def simple_name(self, tp: Any) -> str:
        tp = _strip_annotated(tp)
        return getattr(tp, "__name__", None) or str(tp)

    def full_name(self, tp: Any) -> str:
        tp = _strip_annotated(tp)
        qualname = getattr(tp, "__qualname__", None)
        if qualname is None:
            return str(tp)
        return f"{tp.__module__}.{qualname}"

    def description(self, tp: Any) -> Optional[str]:
        """Return the first paragraph of the type's own docstring, if any."""
        tp = _strip_annotated(tp)
        doc = tp.__dict__.get("__doc__") if isinstance(tp, type) else None
        if not doc or dataclasses.is_dataclass(tp) and doc.startswith(f"{tp.__name__}("):
            return None
        return doc.strip().split("\n\n", 1)[0].strip() or None


DEFAULT_REFLECTOR = PythonTypeReflector()


def data_type(tp: Any, reflector: TypeReflector = DEFAULT_REFLECTOR) -> DataType:
    """Return the :class:`DataType` *tp* is documented as.

    Optional wrappers are unwrapped.  Containers become ``array``,
    mappings ``object``, models their simple name.  Missing or
    unrecognised types become ``string``.

    Example::

        >>> data_type(int)
        DataType(name='integer', format='int64')
        >>> data_type(Optional[list[str]])
        DataType(name='array', format=None)
    """
    if tp is None or tp is Any:
        return STRING
    if reflector.is_optional(tp):
        tp = reflector.unwrap_optional(tp)
    tp = _strip_annotated(tp)

    if reflector.is_enum(tp):
        values = [member.value for member in tp]
        if values and all(isinstance(v, int) and not isinstance(v, bool) for v in values):
            return DataType("integer", "int64")
        return STRING
    primitive = _PRIMITIVES.get(tp)
    if primitive is not None:
        return primitive
    if reflector.is_container(tp):
        return DataType("array")
    if reflector.is_mapping(tp):
        return DataType("object")
    if reflector.is_model(tp):
        return DataType(reflector.simple_name(tp))

    logger.debug("No data type known for %r, documenting as string", tp)
    return STRING


def is_primitive(tp: Any, reflector: TypeReflector = DEFAULT_REFLECTOR) -> bool:
    """Return ``True`` if *tp* is documented inline rather than as a model."""
    if tp is None or tp is Any:
        return True
    if reflector.is_optional(tp):
        tp = reflector.unwrap_optional(tp)
    tp = _strip_annotated(tp)
    return tp in _PRIMITIVES or reflector.is_enum(tp)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _strip_annotated(tp: Any) -> Any:
    while get_origin(tp) is Annotated:
        tp = get_args(tp)[0]
    return tp


def _is_class(tp: Any) -> bool:
    # Parameterised generics such as list[int] pass isinstance(..., type) on 3.10.
    return isinstance(tp, type) and get_origin(tp) is None


def _is_union(tp: Any) -> bool:
    origin = get_origin(tp)
    return origin is Union or origin is types.UnionType


def _type_hints(tp: Any) -> dict[str, Any]:
    """Resolve annotations on *tp*, leaving unresolvable ones as ``Any``."""
    try:
        return typing.get_type_hints(tp)
    except (NameError, TypeError) as exc:
        logger.debug("Could not resolve annotations on %r: %s", tp, exc)
        raw = getattr(tp, "__annotations__", {})
        return {name: (Any if isinstance(hint, str) else hint) for name, hint in raw.items()}
