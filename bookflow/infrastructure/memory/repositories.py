"""In-process repositories (memory backend).

Writers are serialized by an asyncio.Lock and replace whole entries; readers
take no lock and get copies, so a reader never observes a half-applied write.
Entities are frozen dataclasses; copies of definitions are made with snapshot().
"""

from __future__ import annotations

import asyncio

from bookflow.application.dtos.collaborators import NotificationCreate
from bookflow.application.dtos.execution import ExecutionFilter
from bookflow.application.dtos.workflow import WorkflowFilter
from bookflow.domain.entities.execution import ExecutionRecord
from bookflow.domain.entities.workflow import WorkflowDefinition
from bookflow.shared.telemetry.logging import get_logger
from bookflow.shared.utils.datetime import ensure_utc, utc_now
from bookflow.shared.utils.generators import generate_cuid

logger = get_logger(__name__)


class InMemoryWorkflowRepository:
    """Workflow definitions keyed by id, in insertion order."""

    def __init__(self) -> None:
        self._items: dict[str, WorkflowDefinition] = {}
        self._lock = asyncio.Lock()

    async def add(self, definition: WorkflowDefinition) -> WorkflowDefinition:
        async with self._lock:
            if definition.id in self._items:
                raise ValueError(f"Duplicate workflow id: {definition.id}")
            self._items[definition.id] = definition.snapshot()
        return definition.snapshot()

    async def get(self, workflow_id: str) -> WorkflowDefinition | None:
        item = self._items.get(workflow_id)
        return item.snapshot() if item else None

    async def list(self, filters: WorkflowFilter | None = None) -> list[WorkflowDefinition]:
        items = list(self._items.values())
        if filters is not None:
            if filters.is_active is not None:
                items = [d for d in items if d.is_active == filters.is_active]
            if filters.event_type is not None:
                items = [d for d in items if d.event_type.value == filters.event_type]
        return [d.snapshot() for d in items]

    async def replace(self, definition: WorkflowDefinition) -> WorkflowDefinition | None:
        async with self._lock:
            if definition.id not in self._items:
                return None
            self._items[definition.id] = definition.snapshot()
        return definition.snapshot()

    async def delete(self, workflow_id: str) -> bool:
        async with self._lock:
            return self._items.pop(workflow_id, None) is not None


def _matches(record: ExecutionRecord, filters: ExecutionFilter | None) -> bool:
    if filters is None:
        return True
    if filters.workflow_id is not None and record.workflow_id != filters.workflow_id:
        return False
    if filters.event_type is not None and record.event_type.value != filters.event_type:
        return False
    if filters.status is not None and record.status.value != filters.status:
        return False
    if filters.start is not None and record.triggered_at < ensure_utc(filters.start):
        return False
    if filters.end is not None and record.triggered_at >= ensure_utc(filters.end):
        return False
    return True


class InMemoryExecutionRecordRepository:
    """Append-only list of execution records."""

    def __init__(self) -> None:
        self._records: list[ExecutionRecord] = []
        self._lock = asyncio.Lock()

    async def append(self, record: ExecutionRecord) -> None:
        async with self._lock:
            self._records.append(record)

    async def query(
        self,
        filters: ExecutionFilter | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[list[ExecutionRecord], int]:
        matching = await self.list_all(filters)
        return matching[skip : skip + limit], len(matching)

    async def list_all(self, filters: ExecutionFilter | None = None) -> list[ExecutionRecord]:
        # Reverse insertion order breaks ties between equal timestamps.
        records = [r for r in reversed(self._records) if _matches(r, filters)]
        records.sort(key=lambda r: r.triggered_at, reverse=True)
        return records


class InMemoryNotificationStore:
    """INotificationStore that keeps notifications in a list."""

    def __init__(self) -> None:
        self.notifications: list[dict[str, object]] = []
        self._lock = asyncio.Lock()

    async def create(self, notification: NotificationCreate) -> str:
        notification_id = generate_cuid()
        async with self._lock:
            self.notifications.append(
                {
                    "id": notification_id,
                    "title": notification.title,
                    "message": notification.message,
                    "type": notification.type,
                    "priority": notification.priority,
                    "user_id": notification.user_id,
                    "created_at": utc_now(),
                }
            )
        logger.info(
            "Notification stored: id=%s type=%s priority=%s",
            notification_id,
            notification.type,
            notification.priority,
        )
        return notification_id
