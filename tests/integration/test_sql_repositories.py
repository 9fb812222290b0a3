"""SQL repository integration tests. Require Postgres; each test deletes the rows it creates."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import delete

from bookflow.application.dtos.collaborators import NotificationCreate
from bookflow.application.dtos.execution import ExecutionFilter
from bookflow.application.dtos.workflow import WorkflowFilter
from bookflow.domain.entities.execution import ActionResult, ExecutionRecord
from bookflow.domain.entities.workflow import Action, Condition, WorkflowDefinition
from bookflow.infrastructure.persistence.models import (
    ExecutionRecordModel,
    NotificationModel,
    WorkflowDefinitionModel,
)
from bookflow.infrastructure.persistence.repositories import (
    NotificationRepository,
    SqlExecutionRecordRepository,
    SqlWorkflowRepository,
)
from bookflow.shared.enums import ExecutionStatus, WorkflowEventType
from bookflow.shared.utils.generators import generate_cuid

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def _definition(**overrides) -> WorkflowDefinition:
    data = {
        "id": generate_cuid(),
        "name": "sql repo test",
        "description": None,
        "event_type": WorkflowEventType.SYSTEM_MAINTENANCE,
        "is_active": True,
        "conditions": (Condition("system.level", "in", ["high", "critical"]),),
        "actions": (Action("webhook", {"url": "https://x.test", "headers": {"a": "b"}}),),
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return WorkflowDefinition(**data)


@pytest.fixture
async def cleanup(session_factory):
    """Collects (model, id) pairs and deletes them after the test."""
    created: list[tuple[type, str]] = []
    yield created
    async with session_factory() as session:
        for model, row_id in created:
            await session.execute(delete(model).where(model.id == row_id))
        await session.commit()


@pytest.mark.requires_db
async def test_workflow_round_trip(session_factory, cleanup) -> None:
    repo = SqlWorkflowRepository(session_factory)
    definition = _definition()
    cleanup.append((WorkflowDefinitionModel, definition.id))

    await repo.add(definition)
    found = await repo.get(definition.id)

    assert found is not None
    assert found.event_type == WorkflowEventType.SYSTEM_MAINTENANCE
    assert found.conditions == definition.conditions
    assert found.actions[0].config == {"url": "https://x.test", "headers": {"a": "b"}}
    assert found.created_at == NOW


@pytest.mark.requires_db
async def test_workflow_list_replace_delete(session_factory, cleanup) -> None:
    repo = SqlWorkflowRepository(session_factory)
    active = _definition()
    inactive = _definition(is_active=False, created_at=NOW + timedelta(seconds=1))
    for d in (active, inactive):
        cleanup.append((WorkflowDefinitionModel, d.id))
        await repo.add(d)

    listed = await repo.list(
        WorkflowFilter(is_active=True, event_type=WorkflowEventType.SYSTEM_MAINTENANCE.value)
    )
    ids = [d.id for d in listed]
    assert active.id in ids
    assert inactive.id not in ids

    replaced = await repo.replace(_definition(id=active.id, name="renamed", is_active=False))
    assert replaced is not None
    assert (await repo.get(active.id)).name == "renamed"
    assert await repo.replace(_definition(id="missing")) is None

    assert await repo.delete(active.id) is True
    assert await repo.delete(active.id) is False
    assert await repo.get(active.id) is None


@pytest.mark.requires_db
async def test_execution_records_query(session_factory, cleanup) -> None:
    repo = SqlExecutionRecordRepository(session_factory)
    workflow_id = generate_cuid()
    records = [
        ExecutionRecord(
            id=generate_cuid(),
            workflow_id=workflow_id,
            event_type=WorkflowEventType.PAYMENT_RECEIVED,
            triggered_at=NOW + timedelta(minutes=n),
            status=ExecutionStatus.SUCCESS if n % 2 == 0 else ExecutionStatus.FAILED,
            action_results=(
                ActionResult(
                    action_type="webhook",
                    success=n % 2 == 0,
                    duration_ms=1.5,
                    error=None if n % 2 == 0 else "webhook returned HTTP 500",
                ),
            ),
            total_duration_ms=2.0,
        )
        for n in range(3)
    ]
    for record in records:
        cleanup.append((ExecutionRecordModel, record.id))
        await repo.append(record)

    page, total = await repo.query(ExecutionFilter(workflow_id=workflow_id), skip=0, limit=2)
    assert total == 3
    assert [r.id for r in page] == [records[2].id, records[1].id]
    assert page[1].action_results[0].error == "webhook returned HTTP 500"

    failed = await repo.list_all(ExecutionFilter(workflow_id=workflow_id, status="failed"))
    assert [r.id for r in failed] == [records[1].id]

    window = await repo.list_all(
        ExecutionFilter(workflow_id=workflow_id, start=NOW + timedelta(minutes=1))
    )
    assert len(window) == 2


@pytest.mark.requires_db
async def test_notification_create(session_factory, cleanup) -> None:
    repo = NotificationRepository(session_factory)
    notification_id = await repo.create(
        NotificationCreate(title="t", message="m", priority="high")
    )
    cleanup.append((NotificationModel, notification_id))
    assert notification_id
