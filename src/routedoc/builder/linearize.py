"""Flatten path rule trees into the concrete sequences they denote.

Every :class:`~routedoc.routing.path.PathOr` doubles the number of
sequences reachable through it, :class:`~routedoc.routing.path.PathAnd`
never branches.  Metadata wrappers are kept in the sequence next to the
operations they wrap so that :func:`collect_summary` can find route
descriptions positionally.

Traversal uses an explicit work stack so long AND chains do not hit the
interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from typing import Optional

from routedoc.routing.meta import MetaCons, RouteDesc
from routedoc.routing.path import (
    CaptureTail,
    PathAnd,
    PathCapture,
    PathMatch,
    PathOperation,
    PathOr,
    PathRule,
)

logger = logging.getLogger(__name__)


def linearize_stack(rules: list[PathRule]) -> list[list[PathOperation]]:
    """Return every linear operation sequence described by *rules*.

    *rules* is processed front to back as if sequentially composed.
    Sequences are returned in traversal order: for an OR node, every
    sequence through its left branch precedes every sequence through its
    right branch.  A :class:`~routedoc.routing.path.CaptureTail` ends its
    sequence; anything still pending on the stack is dropped.

    Example::

        >>> rule = PathMatch("a") / (PathMatch("b") | PathMatch("c"))
        >>> [[op.segment for op in seq] for seq in linearize_stack([rule])]
        [['a', 'b'], ['a', 'c']]
    """
    results: list[list[PathOperation]] = []
    # Each pending entry is (work stack with the next rule last, accumulator).
    pending: list[tuple[list[PathRule], list[PathOperation]]] = [
        (list(reversed(rules)), [])
    ]

    while pending:
        stack, acc = pending.pop()
        while stack:
            rule = stack.pop()
            if isinstance(rule, PathOr):
                pending.append((stack + [rule.right], list(acc)))
                pending.append((stack + [rule.left], list(acc)))
                break
            if isinstance(rule, PathAnd):
                stack.append(rule.right)
                stack.append(rule.left)
            elif isinstance(rule, MetaCons):
                acc.append(rule)
                stack.append(rule.rule)
            elif isinstance(rule, CaptureTail):
                acc.append(rule)
                if stack:
                    logger.warning("Dropping %d rule(s) after tail capture", len(stack))
                results.append(acc)
                break
            elif isinstance(rule, PathOperation):
                acc.append(rule)
            else:
                raise TypeError(f"Not a path rule: {rule!r}")
        else:
            results.append(acc)

    return results


def make_path_string(sequence: list[PathOperation]) -> str:
    """Render one linearised sequence as a path template.

    Empty literal segments and metadata contribute nothing; captures render
    as ``{name}``; a tail renders as ``{tail...}`` and ends the path.
    """
    parts: list[str] = []
    for op in sequence:
        if isinstance(op, MetaCons):
            continue
        if isinstance(op, PathMatch):
            segment = op.segment.strip("/")
            if segment:
                parts.append(segment)
        elif isinstance(op, PathCapture):
            parts.append(f"{{{op.name}}}")
        elif isinstance(op, CaptureTail):
            parts.append("{tail...}")
            break
    return "/" + "/".join(parts)


def make_path_strings(path: PathRule) -> list[str]:
    """Return the path template of every sequence through *path*.

    Example::

        >>> make_path_strings(root() / "users" / path_var("id", int))
        ['/users/{id}']
    """
    return [make_path_string(seq) for seq in linearize_stack([path])]


def collect_summary(path: PathRule) -> Optional[str]:
    """Return the first route description found on any sequence through *path*.

    Sequences are scanned in linearisation order, so a description on a
    left alternative wins over one on a right alternative.  Within a
    sequence, scanning stops at a tail capture.
    """
    for sequence in linearize_stack([path]):
        summary = _sequence_summary(sequence)
        if summary is not None:
            return summary
    return None


def _sequence_summary(sequence: list[PathOperation]) -> Optional[str]:
    for op in sequence:
        if isinstance(op, CaptureTail):
            return None
        if isinstance(op, MetaCons) and isinstance(op.meta, RouteDesc):
            return op.meta.msg
    return None
