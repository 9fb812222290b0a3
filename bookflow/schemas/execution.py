"""Trigger, execution history and statistics API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from bookflow.shared.enums import ExecutionStatus, WorkflowEventType


class TriggerRequest(BaseModel):
    """Request body for POST /events/trigger."""

    event_type: str = Field(..., max_length=64)
    context: dict[str, Any] = Field(
        default_factory=dict, description="Named facts: customer, appointment, payment, ..."
    )


class TriggerErrorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    workflow_id: str | None
    action_type: str | None
    error: str


class TriggerResponse(BaseModel):
    """Outcome of one trigger call."""

    model_config = ConfigDict(from_attributes=True)

    success: bool
    triggered_workflow_ids: list[str]
    executed_actions_count: int
    errors: list[TriggerErrorResponse]
    execution_ids: list[str]


class ActionResultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    action_type: str
    success: bool
    error: str | None
    duration_ms: float
    output: dict[str, Any]


class ExecutionRecordResponse(BaseModel):
    """Execution record response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    workflow_id: str
    event_type: WorkflowEventType
    triggered_at: datetime
    status: ExecutionStatus
    action_results: list[ActionResultResponse]
    total_duration_ms: float
    errors: list[str]


class PaginationResponse(BaseModel):
    page: int
    limit: int
    total_pages: int


class ExecutionHistoryResponse(BaseModel):
    """One page of execution history."""

    data: list[ExecutionRecordResponse]
    total: int
    pagination: PaginationResponse


class ActionTypeStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    successful: int
    failed: int


class TopWorkflowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    workflow_id: str
    name: str | None
    execution_count: int
    success_rate: float


class WorkflowStatsResponse(BaseModel):
    """Aggregate statistics response."""

    model_config = ConfigDict(from_attributes=True)

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
    action_type_breakdown: dict[str, ActionTypeStatsResponse]
    top_workflows: list[TopWorkflowResponse]


class WorkflowMetricsResponse(BaseModel):
    """Per-workflow metrics response."""

    model_config = ConfigDict(from_attributes=True)

    workflow_id: str
    total_executions: int
    successful_executions: int
    partial_executions: int
    failed_executions: int
    success_rate: float
    average_execution_time: float
    last_executed: datetime | None
