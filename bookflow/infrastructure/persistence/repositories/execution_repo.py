"""SQL repository for the execution log (implements IExecutionRecordRepository)."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select

from bookflow.application.dtos.execution import ExecutionFilter
from bookflow.domain.entities.execution import ActionResult, ExecutionRecord
from bookflow.infrastructure.persistence.models.workflow import ExecutionRecordModel
from bookflow.infrastructure.persistence.repositories.base import SessionRepository
from bookflow.shared.enums import ExecutionStatus, WorkflowEventType
from bookflow.shared.utils.datetime import ensure_utc


def _to_entity(row: ExecutionRecordModel) -> ExecutionRecord:
    return ExecutionRecord(
        id=row.id,
        workflow_id=row.workflow_id,
        event_type=WorkflowEventType(row.event_type),
        triggered_at=ensure_utc(row.triggered_at),
        status=ExecutionStatus(row.status),
        action_results=tuple(ActionResult.from_dict(r) for r in row.action_results or []),
        total_duration_ms=row.total_duration_ms,
    )


def _conditions(filters: ExecutionFilter | None) -> list[Any]:
    if filters is None:
        return []
    clauses: list[Any] = []
    if filters.workflow_id is not None:
        clauses.append(ExecutionRecordModel.workflow_id == filters.workflow_id)
    if filters.event_type is not None:
        clauses.append(ExecutionRecordModel.event_type == filters.event_type)
    if filters.status is not None:
        clauses.append(ExecutionRecordModel.status == filters.status)
    if filters.start is not None:
        clauses.append(ExecutionRecordModel.triggered_at >= ensure_utc(filters.start))
    if filters.end is not None:
        clauses.append(ExecutionRecordModel.triggered_at < ensure_utc(filters.end))
    return clauses


class SqlExecutionRecordRepository(SessionRepository):
    """Execution records in table workflow_execution_record. Insert-only."""

    async def append(self, record: ExecutionRecord) -> None:
        row = ExecutionRecordModel(
            id=record.id,
            workflow_id=record.workflow_id,
            event_type=record.event_type.value,
            triggered_at=record.triggered_at,
            status=record.status.value,
            action_results=[r.to_dict() for r in record.action_results],
            total_duration_ms=record.total_duration_ms,
        )
        async with self._transaction() as session:
            session.add(row)

    async def query(
        self,
        filters: ExecutionFilter | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[list[ExecutionRecord], int]:
        clauses = _conditions(filters)
        async with self._transaction() as session:
            total = (
                await session.execute(
                    select(func.count(ExecutionRecordModel.id)).where(*clauses)
                )
            ).scalar_one()
            result = await session.execute(
                select(ExecutionRecordModel)
                .where(*clauses)
                .order_by(
                    ExecutionRecordModel.triggered_at.desc(),
                    ExecutionRecordModel.id.desc(),
                )
                .offset(skip)
                .limit(limit)
            )
            return [_to_entity(row) for row in result.scalars().all()], total or 0

    async def list_all(self, filters: ExecutionFilter | None = None) -> list[ExecutionRecord]:
        async with self._transaction() as session:
            result = await session.execute(
                select(ExecutionRecordModel)
                .where(*_conditions(filters))
                .order_by(ExecutionRecordModel.triggered_at.desc())
            )
            return [_to_entity(row) for row in result.scalars().all()]
