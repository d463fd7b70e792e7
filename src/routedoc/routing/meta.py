"""Metadata annotations shared by the path, query and header grammars.

A :class:`MetaCons` node wraps a sub-rule together with a piece of
:class:`Metadata`.  The compiler only understands two kinds of metadata:

* :class:`RouteDesc` -- a human-readable route summary, picked up while
  scanning linearised path sequences.
* :class:`TextMetaData` -- free text attached to a single capture, which
  becomes that parameter's description.

Any other :class:`Metadata` subclass is carried along but ignored, so
applications can tag rules with their own annotations without breaking
document generation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Metadata:
    """Base class for annotations attached to a rule via :class:`MetaCons`."""


@dataclass(frozen=True)
class TextMetaData(Metadata):
    """Free text describing the wrapped rule."""

    msg: str


@dataclass(frozen=True)
class RouteDesc(TextMetaData):
    """Summary for the route the wrapped path rule belongs to."""


@dataclass(frozen=True)
class MetaCons:
    """A rule wrapped with a piece of metadata.

    Each grammar subclasses this together with its own rule base so the
    wrapped node keeps the grammar's combinator operators.
    """

    rule: Any
    meta: Metadata
