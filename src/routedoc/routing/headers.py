"""Header rule grammar.

Every header leaf documents a required ``header`` parameter; the three
leaf kinds only differ in what the runtime does with the value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from routedoc.routing.meta import MetaCons, Metadata, TextMetaData


class HeaderRule:
    """Combinator operators shared by every node in the header grammar."""

    def __and__(self, other: "HeaderRule") -> "HeaderAnd":
        return HeaderAnd(self, other)

    def __or__(self, other: "HeaderRule") -> "HeaderOr":
        return HeaderOr(self, other)

    def describe(self, text: str) -> "HeaderMeta":
        return HeaderMeta(self, TextMetaData(text))

    def with_meta(self, meta: Metadata) -> "HeaderMeta":
        return HeaderMeta(self, meta)


@dataclass(frozen=True)
class HeaderAnd(HeaderRule):
    left: HeaderRule
    right: HeaderRule


@dataclass(frozen=True)
class HeaderOr(HeaderRule):
    left: HeaderRule
    right: HeaderRule


@dataclass(frozen=True)
class HeaderCapture(HeaderRule):
    """Extracts the header *name* decoded as *type*."""

    name: str
    type: Any = str


@dataclass(frozen=True)
class HeaderRequire(HeaderRule):
    """Requires the header *name* to satisfy *predicate*."""

    name: str
    predicate: Callable[[str], bool]


@dataclass(frozen=True)
class HeaderMapper(HeaderRule):
    """Extracts the header *name* and transforms it with *mapper*."""

    name: str
    mapper: Callable[[str], Any]


@dataclass(frozen=True)
class _EmptyHeaderRule(HeaderRule):
    """Matches any set of headers without capturing anything."""


EmptyHeaderRule = _EmptyHeaderRule()


@dataclass(frozen=True)
class HeaderMeta(MetaCons, HeaderRule):
    """A header rule annotated with metadata."""


def header(name: str, type: Any = str) -> HeaderCapture:
    """Return a capture for the header *name*."""
    return HeaderCapture(name, type)
