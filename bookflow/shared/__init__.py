"""Shared enums, telemetry and helpers used across every layer. No business logic."""

from bookflow.shared.enums import (
    ActionType,
    ConditionOperator,
    ExecutionStatus,
    WorkflowEventType,
)
from bookflow.shared.utils import elapsed_ms, ensure_utc, generate_cuid, utc_now

__all__ = [
    "ActionType",
    "ConditionOperator",
    "ExecutionStatus",
    "WorkflowEventType",
    "elapsed_ms",
    "ensure_utc",
    "generate_cuid",
    "utc_now",
]
