"""Canonical Pydantic models shared across all routedoc modules.

The models fall into two groups:

**Configuration models** -- loaded from ``routedoc.json``/``routedoc.yaml``
and the environment:
    :class:`DocumentConfig`.

**Document models** -- the Swagger 2.0 document the builder produces:
    :class:`Info`, :class:`PrimitiveProperty`, :class:`RefProperty`,
    :class:`ArrayProperty`, :class:`MapProperty`, :class:`SchemaModel`,
    :class:`RefModel`, :class:`PathParameter`, :class:`QueryParameter`,
    :class:`HeaderParameter`, :class:`BodyParameter`, :class:`Response`,
    :class:`Operation`, :class:`PathItem` and :class:`Swagger`.

Document models are frozen.  Builder operations return new values built
with ``model_copy(update=...)`` and never mutate a model they were given,
so a document can be shared between builds.  Field names follow Python
conventions; aliases carry the Swagger spelling (``in``, ``$ref``,
``operationId``) and are used by :meth:`Swagger.to_dict`.
"""

from __future__ import annotations

import enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

_DEFINITIONS_PREFIX = "#/definitions/"

_DOCUMENT_CONFIG = ConfigDict(frozen=True, populate_by_name=True)
_PROPERTY_CONFIG = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


# --- Configuration ---


class OutputFormat(str, enum.Enum):
    """Serialisation formats for a built document."""

    JSON = "json"
    YAML = "yaml"


class DocumentConfig(BaseModel):
    """Settings for a document build.

    Resolved by :func:`~routedoc.config.resolve_config` from CLI flags,
    ``ROUTEDOC_*`` environment variables and the project config file.
    """

    title: str = Field(default="API", description="Document info title")
    version: str = Field(default="1.0.0", description="Document info version")
    description: Optional[str] = None
    host: Optional[str] = Field(default=None, description="Host serving the API")
    base_path: Optional[str] = Field(default=None, description="Path prefix of every route")
    schemes: list[str] = Field(default_factory=list)
    consumes: list[str] = Field(default_factory=list)
    produces: list[str] = Field(default_factory=list)
    output_format: OutputFormat = Field(default=OutputFormat.JSON)
    strict_schema_names: bool = Field(
        default=False,
        description="Fail the build when distinct types share a schema name",
    )
    routes: Optional[str] = Field(
        default=None, description="Default module:attribute route target"
    )


# --- Schema properties ---


class PrimitiveProperty(BaseModel):
    """An inline scalar property (``string``, ``integer``, ...)."""

    model_config = _PROPERTY_CONFIG

    type: str
    format: Optional[str] = None
    description: Optional[str] = None
    enum: Optional[list[Any]] = None


class RefProperty(BaseModel):
    """A property pointing at a model registered under ``definitions``.

    ``ref`` holds the bare schema name; it is written as a JSON reference.
    """

    model_config = _PROPERTY_CONFIG

    ref: str = Field(alias="$ref")
    description: Optional[str] = None

    @field_validator("ref", mode="before")
    @classmethod
    def _strip_prefix(cls, value: Any) -> Any:
        if isinstance(value, str) and value.startswith(_DEFINITIONS_PREFIX):
            return value[len(_DEFINITIONS_PREFIX) :]
        return value

    @field_serializer("ref")
    def _serialize_ref(self, ref: str) -> str:
        return _DEFINITIONS_PREFIX + ref


class ArrayProperty(BaseModel):
    """A list-like property; ``unique_items`` marks set semantics."""

    model_config = _PROPERTY_CONFIG

    type: Literal["array"] = "array"
    items: Property
    unique_items: Optional[bool] = Field(default=None, alias="uniqueItems")
    description: Optional[str] = None


class MapProperty(BaseModel):
    """A string-keyed mapping whose values are described by ``additional_properties``."""

    model_config = _PROPERTY_CONFIG

    type: Literal["object"] = "object"
    additional_properties: Property = Field(alias="additionalProperties")
    description: Optional[str] = None


Property = Union[RefProperty, ArrayProperty, MapProperty, PrimitiveProperty]

ArrayProperty.model_rebuild()
MapProperty.model_rebuild()


# --- Schema models ---


class SchemaModel(BaseModel):
    """A named object type registered under ``definitions``.

    ``id`` is the fully-qualified identity used to deduplicate expansion.
    It is not serialised; a model loaded back from a file falls back to its
    name as identity.
    """

    model_config = _DOCUMENT_CONFIG

    id: Optional[str] = Field(default=None, exclude=True)
    name: str = Field(alias="title")
    type: str = "object"
    description: Optional[str] = None
    properties: dict[str, Property] = Field(default_factory=dict)
    required: Optional[list[str]] = None

    @property
    def identity(self) -> str:
        return self.id or self.name


class RefModel(BaseModel):
    """A request body schema pointing at a registered model."""

    model_config = _DOCUMENT_CONFIG

    ref: str = Field(alias="$ref")
    id: Optional[str] = Field(default=None, exclude=True)

    @field_validator("ref", mode="before")
    @classmethod
    def _strip_prefix(cls, value: Any) -> Any:
        if isinstance(value, str) and value.startswith(_DEFINITIONS_PREFIX):
            return value[len(_DEFINITIONS_PREFIX) :]
        return value

    @field_serializer("ref")
    def _serialize_ref(self, ref: str) -> str:
        return _DEFINITIONS_PREFIX + ref


# --- Parameters ---


class _SimpleParameter(BaseModel):
    """Fields shared by non-body parameters."""

    model_config = _DOCUMENT_CONFIG

    name: Optional[str] = None
    description: Optional[str] = None
    required: bool = False
    type: str = "string"
    format: Optional[str] = None
    default: Any = None
    items: Optional[PrimitiveProperty] = None
    collection_format: Optional[str] = Field(default=None, alias="collectionFormat")


class PathParameter(_SimpleParameter):
    location: Literal["path"] = Field(default="path", alias="in")
    required: bool = True


class QueryParameter(_SimpleParameter):
    location: Literal["query"] = Field(default="query", alias="in")


class HeaderParameter(_SimpleParameter):
    location: Literal["header"] = Field(default="header", alias="in")


class BodyParameter(BaseModel):
    """The request body of an operation."""

    model_config = _DOCUMENT_CONFIG

    location: Literal["body"] = Field(default="body", alias="in")
    name: Optional[str] = "body"
    description: Optional[str] = None
    required: bool = True
    schema_: Optional[Union[RefModel, ArrayProperty, MapProperty, PrimitiveProperty]] = Field(
        default=None, alias="schema"
    )


Parameter = Union[PathParameter, QueryParameter, HeaderParameter, BodyParameter]


# --- Operations and paths ---


class Response(BaseModel):
    """A documented response for one status code."""

    model_config = _DOCUMENT_CONFIG

    description: str
    schema_: Optional[Property] = Field(default=None, alias="schema")


class Operation(BaseModel):
    """The documented behaviour of one HTTP verb at one path."""

    model_config = _DOCUMENT_CONFIG

    tags: list[str] = Field(default_factory=list)
    summary: Optional[str] = None
    description: Optional[str] = None
    consumes: list[str] = Field(default_factory=list)
    produces: list[str] = Field(default_factory=list)
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    parameters: list[Parameter] = Field(default_factory=list)
    responses: dict[str, Response] = Field(default_factory=dict)


class PathItem(BaseModel):
    """All operations documented at one path template."""

    model_config = _DOCUMENT_CONFIG

    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    patch: Optional[Operation] = None
    options: Optional[Operation] = None
    parameters: list[Parameter] = Field(default_factory=list)

    def operations(self) -> dict[str, Operation]:
        """Return the operations present on this path, keyed by lower-case verb."""
        verbs = ("get", "put", "post", "delete", "patch", "options")
        return {verb: getattr(self, verb) for verb in verbs if getattr(self, verb) is not None}


# --- Document ---


class Info(BaseModel):
    """Document metadata (Swagger *Info Object*)."""

    model_config = _DOCUMENT_CONFIG

    title: str
    version: str
    description: Optional[str] = None


class Swagger(BaseModel):
    """A complete Swagger 2.0 document.

    ``paths`` maps a path template (``/users/{id}``) to its
    :class:`PathItem`; ``definitions`` maps a schema's short name to its
    :class:`SchemaModel`.
    """

    model_config = _DOCUMENT_CONFIG

    swagger: str = "2.0"
    info: Info
    host: Optional[str] = None
    base_path: Optional[str] = Field(default=None, alias="basePath")
    schemes: list[str] = Field(default_factory=list)
    consumes: list[str] = Field(default_factory=list)
    produces: list[str] = Field(default_factory=list)
    paths: dict[str, PathItem] = Field(default_factory=dict)
    definitions: dict[str, SchemaModel] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the document as plain JSON-compatible data with Swagger keys."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
