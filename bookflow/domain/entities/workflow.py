"""Workflow definition entity.

A workflow binds one event type to ANDed conditions and an ordered list of
actions. Instances are frozen; WorkflowStore replaces them wholesale on update
and hands the trigger pipeline deep-copied snapshots.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from bookflow.shared.enums import WorkflowEventType


@dataclass(frozen=True)
class Condition:
    """Comparison of the value at a dot-path in the event context against a literal."""

    field: str
    operator: str
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "operator": self.operator, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Condition:
        return cls(
            field=data.get("field", ""),
            operator=data.get("operator", ""),
            value=data.get("value"),
        )


@dataclass(frozen=True)
class Action:
    """One side effect; string leaves of config may hold {{dot.path}} placeholders."""

    type: str
    config: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "config": copy.deepcopy(self.config)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Action:
        return cls(type=data.get("type", ""), config=dict(data.get("config") or {}))


@dataclass(frozen=True)
class WorkflowDefinition:
    """Domain entity for a workflow rule (trigger event + conditions + actions)."""

    id: str
    name: str
    description: str | None
    event_type: WorkflowEventType
    is_active: bool
    conditions: tuple[Condition, ...]
    actions: tuple[Action, ...]
    created_at: datetime
    updated_at: datetime

    def can_trigger_on(self, event_type: WorkflowEventType) -> bool:
        """Return whether this workflow is active and bound to the event type."""
        return self.is_active and self.event_type == event_type

    def snapshot(self) -> WorkflowDefinition:
        """Deep copy, so action configs cannot be shared with a later edit."""
        return replace(
            self,
            conditions=tuple(copy.deepcopy(c) for c in self.conditions),
            actions=tuple(
                Action(type=a.type, config=copy.deepcopy(a.config))
                for a in self.actions
            ),
        )
