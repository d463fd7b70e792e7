"""Query rule grammar: captures combined with ``&`` (AND) and ``|`` (OR)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from routedoc.routing.meta import MetaCons, Metadata, TextMetaData


class QueryRule:
    """Combinator operators shared by every node in the query grammar."""

    def __and__(self, other: "QueryRule") -> "QueryAnd":
        return QueryAnd(self, other)

    def __or__(self, other: "QueryRule") -> "QueryOr":
        return QueryOr(self, other)

    def describe(self, text: str) -> "QueryMeta":
        """Attach a parameter description to this rule."""
        return QueryMeta(self, TextMetaData(text))

    def with_meta(self, meta: Metadata) -> "QueryMeta":
        return QueryMeta(self, meta)


@dataclass(frozen=True)
class QueryAnd(QueryRule):
    left: QueryRule
    right: QueryRule


@dataclass(frozen=True)
class QueryOr(QueryRule):
    left: QueryRule
    right: QueryRule


@dataclass(frozen=True)
class QueryCapture(QueryRule):
    """A named query parameter decoded as *type*.

    The parameter is required when *required* is ``True``, or when
    *required* is left as ``None`` and no *default* is given.
    """

    name: str
    type: Any = str
    default: Any = None
    required: Optional[bool] = None

    @property
    def is_required(self) -> bool:
        if self.required is not None:
            return self.required
        return self.default is None


@dataclass(frozen=True)
class _EmptyQuery(QueryRule):
    """Matches any query string without capturing anything."""


EmptyQuery = _EmptyQuery()


@dataclass(frozen=True)
class QueryMeta(MetaCons, QueryRule):
    """A query rule annotated with metadata."""


def param(
    name: str,
    type: Any = str,
    default: Any = None,
    required: Optional[bool] = None,
) -> QueryCapture:
    """Return a capture for the query parameter *name*."""
    return QueryCapture(name, type, default, required)
