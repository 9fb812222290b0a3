"""DTOs for trigger results, execution history queries and statistics."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime

from bookflow.domain.entities.execution import ExecutionRecord


@dataclass(frozen=True)
class TriggerError:
    """One failed action (or engine fault) reported back to the event producer."""

    workflow_id: str | None
    action_type: str | None
    error: str


@dataclass(frozen=True)
class TriggerResult:
    """Summary returned by TriggerPipeline.trigger()."""

    success: bool
    triggered_workflow_ids: list[str]
    executed_actions_count: int
    errors: list[TriggerError] = field(default_factory=list)
    execution_ids: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ExecutionFilter:
    """History filter; time bounds are inclusive start, exclusive end."""

    workflow_id: str | None = None
    event_type: str | None = None
    status: str | None = None
    start: datetime | None = None
    end: datetime | None = None


@dataclass(frozen=True)
class ExecutionPage:
    """One page of execution history (newest first)."""

    data: list[ExecutionRecord]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


@dataclass(frozen=True)
class ActionTypeStats:
    total: int = 0
    successful: int = 0
    failed: int = 0


@dataclass(frozen=True)
class TopWorkflow:
    workflow_id: str
    name: str | None
    execution_count: int
    success_rate: float


@dataclass(frozen=True)
class WorkflowStats:
    """Aggregate statistics derived from the execution log."""

    total_workflows: int
    active_workflows: int
    total_executions: int
    successful_executions: int
    partial_executions: int
    failed_executions: int
    success_rate: float
    average_execution_time: float
    executions_by_status: dict[str, int]
    executions_by_event_type: dict[str, int]
    action_type_breakdown: dict[str, ActionTypeStats]
    top_workflows: list[TopWorkflow]


@dataclass(frozen=True)
class WorkflowMetrics:
    """Per-workflow metrics derived from the execution log."""

    workflow_id: str
    total_executions: int
    successful_executions: int
    partial_executions: int
    failed_executions: int
    success_rate: float
    average_execution_time: float
    last_executed: datetime | None
