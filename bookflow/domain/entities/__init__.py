"""Domain entities (no ORM dependency)."""

from bookflow.domain.entities.execution import (
    ActionResult,
    ExecutionRecord,
    derive_status,
)
from bookflow.domain.entities.workflow import Action, Condition, WorkflowDefinition

__all__ = [
    "Action",
    "ActionResult",
    "Condition",
    "ExecutionRecord",
    "WorkflowDefinition",
    "derive_status",
]
