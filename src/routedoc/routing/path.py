"""Path rule grammar: literal segments, captures, tails, AND and OR.

Rules are immutable tagged variants built with Python operators::

    from routedoc.routing import path_var, root

    users = root() / "users"
    user = users / path_var("id", int)
    either = (users | root() / "people").describe("List people")

``/`` composes sequentially (:class:`PathAnd`), ``|`` composes
alternatives (:class:`PathOr`), ``^ "text"`` is shorthand for
``describe("text")``.  Plain strings are coerced into
:class:`PathMatch` segments, splitting on ``/`` so ``"api/v1"`` becomes two
literal segments.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from routedoc.routing.meta import MetaCons, Metadata, RouteDesc


class PathRule:
    """Combinator operators shared by every node in the path grammar."""

    def __truediv__(self, other: Union["PathRule", str]) -> "PathAnd":
        return PathAnd(self, as_path_rule(other))

    def __rtruediv__(self, other: str) -> "PathAnd":
        return PathAnd(as_path_rule(other), self)

    def __or__(self, other: Union["PathRule", str]) -> "PathOr":
        return PathOr(self, as_path_rule(other))

    def __ror__(self, other: str) -> "PathOr":
        return PathOr(as_path_rule(other), self)

    def describe(self, summary: str) -> "PathMeta":
        """Attach a route summary to this rule."""
        return PathMeta(self, RouteDesc(summary))

    def __xor__(self, summary: str) -> "PathMeta":
        return self.describe(summary)

    def with_meta(self, meta: Metadata) -> "PathMeta":
        """Wrap this rule with arbitrary metadata."""
        return PathMeta(self, meta)


class PathOperation(PathRule):
    """Marker base for the leaves a linearised sequence is made of."""


@dataclass(frozen=True)
class PathAnd(PathRule):
    """Sequential composition: *left* then *right*."""

    left: PathRule
    right: PathRule


@dataclass(frozen=True)
class PathOr(PathRule):
    """Alternative composition: either *left* or *right* matches."""

    left: PathRule
    right: PathRule


@dataclass(frozen=True)
class PathMatch(PathOperation):
    """A literal path segment.  The empty segment contributes nothing."""

    segment: str


@dataclass(frozen=True)
class PathCapture(PathOperation):
    """A named segment decoded as *type*.

    ``type=None`` means the decoding type is unknown and the parameter is
    documented as a string.
    """

    name: str
    type: Any = None
    description: Optional[str] = None


@dataclass(frozen=True)
class CaptureTail(PathOperation):
    """Captures the remainder of the path.  Nothing may follow it."""


@dataclass(frozen=True)
class PathMeta(MetaCons, PathOperation):
    """A path rule annotated with :class:`~routedoc.routing.meta.Metadata`.

    Kept in linearised sequences so summary extraction can see it.
    """


def as_path_rule(value: Union[PathRule, str]) -> PathRule:
    """Coerce *value* into a :class:`PathRule`.

    Strings are split on ``/``; each non-empty piece becomes a
    :class:`PathMatch`.  A string with no pieces becomes the empty match.

    Raises:
        TypeError: If *value* is neither a rule nor a string.
    """
    if isinstance(value, PathRule):
        return value
    if not isinstance(value, str):
        raise TypeError(f"Cannot use {type(value).__name__} as a path rule")

    segments = [s for s in value.split("/") if s]
    if not segments:
        return PathMatch("")
    rule: PathRule = PathMatch(segments[0])
    for segment in segments[1:]:
        rule = PathAnd(rule, PathMatch(segment))
    return rule


def root() -> PathMatch:
    """Return the empty path, the usual starting point of a route."""
    return PathMatch("")


def path_var(name: str, type: Any = str, description: Optional[str] = None) -> PathCapture:
    """Return a capture for the segment *name* decoded as *type*."""
    return PathCapture(name, type, description)


def tail() -> CaptureTail:
    """Return a capture for the remainder of the path."""
    return CaptureTail()
