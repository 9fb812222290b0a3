"""Execution audit entities: per-action results and per-workflow execution records.

Records are append-only. Nothing in the engine mutates or deletes one after
ExecutionRecorder has stored it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from bookflow.shared.enums import ExecutionStatus, WorkflowEventType


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a single action execution."""

    action_type: str
    success: bool
    duration_ms: float
    error: str | None = None
    output: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "action_type": self.action_type,
            "success": self.success,
            "error": self.error,
            "duration_ms": self.duration_ms,
            "output": dict(self.output),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ActionResult:
        return cls(
            action_type=data["action_type"],
            success=bool(data["success"]),
            duration_ms=float(data.get("duration_ms") or 0.0),
            error=data.get("error"),
            output=dict(data.get("output") or {}),
        )


def derive_status(results: tuple[ActionResult, ...] | list[ActionResult]) -> ExecutionStatus:
    """success if every action succeeded, failed if none did, partial otherwise.

    A workflow with no actions counts as success.
    """
    succeeded = sum(1 for r in results if r.success)
    if succeeded == len(results):
        return ExecutionStatus.SUCCESS
    if succeeded == 0:
        return ExecutionStatus.FAILED
    return ExecutionStatus.PARTIAL


@dataclass(frozen=True)
class ExecutionRecord:
    """Audit entry for one matched workflow in one trigger call."""

    id: str
    workflow_id: str
    event_type: WorkflowEventType
    triggered_at: datetime
    status: ExecutionStatus
    action_results: tuple[ActionResult, ...]
    total_duration_ms: float

    @property
    def errors(self) -> list[str]:
        """Error messages of the failed actions, in declared order."""
        return [
            f"{r.action_type}: {r.error}" for r in self.action_results if not r.success
        ]
