"""DTOs for workflow store commands and filters (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

# Sentinel for "field not present in the patch" (None is a valid description).
UNSET: Any = object()


@dataclass(frozen=True)
class WorkflowCreate:
    """Raw create command; WorkflowStore validates and normalizes it."""

    name: str
    event_type: str
    actions: list[dict[str, Any]]
    conditions: list[dict[str, Any]] = field(default_factory=list)
    description: str | None = None
    is_active: bool = True


@dataclass(frozen=True)
class WorkflowPatch:
    """Field-level update; fields left UNSET keep their current value."""

    name: Any = UNSET
    description: Any = UNSET
    event_type: Any = UNSET
    is_active: Any = UNSET
    conditions: Any = UNSET
    actions: Any = UNSET

    def changed_fields(self) -> dict[str, Any]:
        """Return only the fields that were explicitly set."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }


@dataclass(frozen=True)
class WorkflowFilter:
    """Listing filter. None means "any"."""

    is_active: bool | None = None
    event_type: str | None = None
