"""Workflow API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from bookflow.shared.enums import WorkflowEventType


class ConditionSchema(BaseModel):
    """Single condition: dot-path field, operator, literal value."""

    model_config = ConfigDict(from_attributes=True)

    field: str = Field(..., max_length=255, description="Dot-path into the event context")
    operator: str = Field(..., max_length=32, description="equals, not_equals, greater_than, less_than, contains, in")
    value: Any = None


class ActionSchema(BaseModel):
    """Single action; config string leaves may contain {{dot.path}} placeholders."""

    model_config = ConfigDict(from_attributes=True)

    type: str = Field(..., max_length=64, description="Action type")
    config: dict[str, Any] = Field(default_factory=dict)


class WorkflowCreateRequest(BaseModel):
    """Request body for creating a workflow.

    Domain rules (non-empty name, known event type, at least one action) are
    enforced by WorkflowStore and reported as 400 VALIDATION_ERROR.
    """

    name: str = Field(..., max_length=255)
    event_type: str = Field(..., max_length=64)
    actions: list[ActionSchema]
    conditions: list[ConditionSchema] = Field(default_factory=list)
    description: str | None = None
    is_active: bool = True


class WorkflowUpdate(BaseModel):
    """Request body for updating a workflow (partial; only sent fields change)."""

    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    event_type: str | None = Field(default=None, max_length=64)
    is_active: bool | None = None
    conditions: list[ConditionSchema] | None = None
    actions: list[ActionSchema] | None = None


class WorkflowResponse(BaseModel):
    """Workflow response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None
    event_type: WorkflowEventType
    is_active: bool
    conditions: list[ConditionSchema]
    actions: list[ActionSchema]
    created_at: datetime
    updated_at: datetime


class StarterTemplateResponse(BaseModel):
    """Starter template response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    category: str
    event_type: WorkflowEventType
    conditions: list[dict[str, Any]]
    actions: list[dict[str, Any]]


class CreateFromTemplateRequest(BaseModel):
    """Request body for creating a workflow from a starter template."""

    template_id: str = Field(..., min_length=1, max_length=128)
    name: str = Field(..., max_length=255)
    customizations: dict[str, Any] = Field(
        default_factory=dict, description="Optional is_active and description overrides"
    )
