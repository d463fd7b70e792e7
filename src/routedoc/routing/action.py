"""Registered route actions and the result types they declare."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Optional, Union

from routedoc.routing.headers import EmptyHeaderRule, HeaderRule
from routedoc.routing.path import PathRule, as_path_rule
from routedoc.routing.query import EmptyQuery, QueryRule


@dataclass(frozen=True)
class TypeOnly:
    """A successful result carrying a body of *type* (documented as 200 OK)."""

    type: Any


@dataclass(frozen=True)
class StatusAndType:
    """A result with an explicit *status* and a body of *type*."""

    status: Union[HTTPStatus, int]
    type: Any


@dataclass(frozen=True)
class StatusOnly:
    """A result with an explicit *status* and no body."""

    status: Union[HTTPStatus, int]


@dataclass(frozen=True)
class EmptyResult:
    """A result that declares neither status nor body."""


ResultInfo = Union[TypeOnly, StatusAndType, StatusOnly, EmptyResult]


@dataclass(frozen=True)
class RouteAction:
    """One registered endpoint as seen by the document builder.

    Attributes:
        method: HTTP verb, normalised to upper case.
        path: Path rule tree.  Strings are accepted and coerced.
        query: Query rule tree.
        headers: Header rule tree.
        result_info: Declared results, in declaration order.
        body_type: Type decoded from the request body, or ``None`` when the
            route does not read a body.
        valid_media: Media types the route accepts (``consumes``).
        response_encodings: Media types the route can produce (``produces``).
    """

    method: str
    path: PathRule
    query: QueryRule = EmptyQuery
    headers: HeaderRule = EmptyHeaderRule
    result_info: tuple[ResultInfo, ...] = ()
    body_type: Optional[Any] = None
    valid_media: tuple[str, ...] = ()
    response_encodings: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", str(self.method).upper())
        object.__setattr__(self, "path", as_path_rule(self.path))
        object.__setattr__(self, "result_info", tuple(self.result_info))
        object.__setattr__(self, "valid_media", tuple(self.valid_media))
        object.__setattr__(self, "response_encodings", tuple(self.response_encodings))
