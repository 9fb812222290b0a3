"""Application DTOs (no ORM dependency)."""

from bookflow.application.dtos.execution import (
    ActionTypeStats,
    ExecutionFilter,
    ExecutionPage,
    TopWorkflow,
    TriggerError,
    TriggerResult,
    WorkflowMetrics,
    WorkflowStats,
)
from bookflow.application.dtos.workflow import (
    UNSET,
    WorkflowCreate,
    WorkflowFilter,
    WorkflowPatch,
)

__all__ = [
    "UNSET",
    "ActionTypeStats",
    "ExecutionFilter",
    "ExecutionPage",
    "TopWorkflow",
    "TriggerError",
    "TriggerResult",
    "WorkflowCreate",
    "WorkflowFilter",
    "WorkflowMetrics",
    "WorkflowPatch",
    "WorkflowStats",
]
