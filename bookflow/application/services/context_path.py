"""Dot-path resolution into an event context.

Shared by condition evaluation and template substitution so both read the
context the same way.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Final


class _Missing:
    """Marker for a path that does not resolve (distinct from an explicit None)."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def resolve_path(context: Any, path: Any) -> Any:
    """Return the value at a dot-path such as "payment.amount", or MISSING.

    Mapping segments are looked up by key; list/tuple segments accept a
    non-negative integer index ("items.0.sku"). Anything malformed (non-string
    path, empty segment, index out of range, traversal into a scalar) is MISSING.
    """
    if not isinstance(path, str) or not path:
        return MISSING
    current = context
    for segment in path.split("."):
        if not segment:
            return MISSING
        if isinstance(current, Mapping):
            if segment not in current:
                return MISSING
            current = current[segment]
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            if not segment.isdigit():
                return MISSING
            index = int(segment)
            if index >= len(current):
                return MISSING
            current = current[index]
        else:
            return MISSING
    return current
