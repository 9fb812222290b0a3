"""Repository interfaces (ports) for the application layer.

Both the SQL and the in-memory backends implement these. Implementations
must allow concurrent readers and make each single-record write atomic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from bookflow.application.dtos.execution import ExecutionFilter
    from bookflow.application.dtos.workflow import WorkflowFilter
    from bookflow.domain.entities import ExecutionRecord, WorkflowDefinition


class IWorkflowRepository(Protocol):
    """Protocol for workflow definition persistence."""

    async def add(self, definition: WorkflowDefinition) -> WorkflowDefinition:
        """Persist a new definition and return it."""

    async def get(self, workflow_id: str) -> WorkflowDefinition | None:
        """Return the definition by id, or None."""

    async def list(self, filters: WorkflowFilter | None = None) -> list[WorkflowDefinition]:
        """Return definitions matching the filter, oldest first."""

    async def replace(self, definition: WorkflowDefinition) -> WorkflowDefinition | None:
        """Overwrite an existing definition; return None if the id is unknown."""

    async def delete(self, workflow_id: str) -> bool:
        """Delete by id; return False if the id is unknown."""


class IExecutionRecordRepository(Protocol):
    """Protocol for the append-only execution log."""

    async def append(self, record: ExecutionRecord) -> None:
        """Store a new record. Records are never updated or deleted."""

    async def query(
        self,
        filters: ExecutionFilter | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[list[ExecutionRecord], int]:
        """Return one page of matching records (newest first) and the total match count."""

    async def list_all(self, filters: ExecutionFilter | None = None) -> list[ExecutionRecord]:
        """Return every matching record (for aggregation)."""
