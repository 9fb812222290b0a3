"""SQL repository for workflow definitions (implements IWorkflowRepository)."""

from __future__ import annotations

from sqlalchemy import delete, select

from bookflow.application.dtos.workflow import WorkflowFilter
from bookflow.domain.entities.workflow import Action, Condition, WorkflowDefinition
from bookflow.infrastructure.persistence.models.workflow import WorkflowDefinitionModel
from bookflow.infrastructure.persistence.repositories.base import SessionRepository
from bookflow.shared.enums import WorkflowEventType
from bookflow.shared.utils.datetime import ensure_utc


def _to_entity(row: WorkflowDefinitionModel) -> WorkflowDefinition:
    return WorkflowDefinition(
        id=row.id,
        name=row.name,
        description=row.description,
        event_type=WorkflowEventType(row.event_type),
        is_active=row.is_active,
        conditions=tuple(Condition.from_dict(c) for c in row.conditions or []),
        actions=tuple(Action.from_dict(a) for a in row.actions or []),
        created_at=ensure_utc(row.created_at),
        updated_at=ensure_utc(row.updated_at),
    )


def _apply(row: WorkflowDefinitionModel, definition: WorkflowDefinition) -> None:
    row.name = definition.name
    row.description = definition.description
    row.event_type = definition.event_type.value
    row.is_active = definition.is_active
    row.conditions = [c.to_dict() for c in definition.conditions]
    row.actions = [a.to_dict() for a in definition.actions]
    row.updated_at = definition.updated_at


class SqlWorkflowRepository(SessionRepository):
    """Workflow definitions in table workflow_definition."""

    async def add(self, definition: WorkflowDefinition) -> WorkflowDefinition:
        row = WorkflowDefinitionModel(id=definition.id, created_at=definition.created_at)
        _apply(row, definition)
        async with self._transaction() as session:
            session.add(row)
            await session.flush()
            await session.refresh(row)
            return _to_entity(row)

    async def get(self, workflow_id: str) -> WorkflowDefinition | None:
        async with self._transaction() as session:
            row = await session.get(WorkflowDefinitionModel, workflow_id)
            return _to_entity(row) if row else None

    async def list(self, filters: WorkflowFilter | None = None) -> list[WorkflowDefinition]:
        q = select(WorkflowDefinitionModel)
        if filters is not None:
            if filters.is_active is not None:
                q = q.where(WorkflowDefinitionModel.is_active.is_(filters.is_active))
            if filters.event_type is not None:
                q = q.where(WorkflowDefinitionModel.event_type == filters.event_type)
        q = q.order_by(WorkflowDefinitionModel.created_at.asc(), WorkflowDefinitionModel.id)
        async with self._transaction() as session:
            result = await session.execute(q)
            return [_to_entity(row) for row in result.scalars().all()]

    async def replace(self, definition: WorkflowDefinition) -> WorkflowDefinition | None:
        async with self._transaction() as session:
            row = await session.get(
                WorkflowDefinitionModel, definition.id, with_for_update=True
            )
            if row is None:
                return None
            _apply(row, definition)
            await session.flush()
            await session.refresh(row)
            return _to_entity(row)

    async def delete(self, workflow_id: str) -> bool:
        async with self._transaction() as session:
            result = await session.execute(
                delete(WorkflowDefinitionModel).where(
                    WorkflowDefinitionModel.id == workflow_id
                )
            )
            return (result.rowcount or 0) > 0
