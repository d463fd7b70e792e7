"""Derive tags and operation ids from path templates."""

from __future__ import annotations


def split_segments(path: str) -> list[str]:
    """Split a path template into its non-empty segments."""
    return [s for s in path.split("/") if s]


def is_capture_segment(segment: str) -> bool:
    """Return ``True`` if *segment* is a capture placeholder such as ``{id}``."""
    return segment.startswith("{") and segment.endswith("}")


def operation_tags(path: str) -> list[str]:
    """Return the tag list for an operation: its first segment, or ``/``."""
    segments = split_segments(path)
    return [segments[0] if segments else "/"]


def make_operation_id(path: str, method: str) -> str:
    """Return the operation id for *method* at *path*.

    The lower-cased method is followed by every literal segment with its
    first letter upper-cased.  Capture segments are skipped.

    Example::

        >>> make_operation_id("/users/{id}/posts", "GET")
        'getUsersPosts'
        >>> make_operation_id("/userId/x", "POST")
        'postUserIdX'
    """
    literals = [s for s in split_segments(path) if not is_capture_segment(s)]
    return method.lower() + "".join(s[:1].upper() + s[1:] for s in literals)
