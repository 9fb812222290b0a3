"""In-memory repositories: isolation, filtering and notifications."""

from datetime import UTC, datetime

import pytest

from bookflow.application.dtos.collaborators import NotificationCreate
from bookflow.application.dtos.workflow import WorkflowFilter
from bookflow.domain.entities.workflow import Action, WorkflowDefinition
from bookflow.infrastructure.memory import (
    InMemoryNotificationStore,
    InMemoryWorkflowRepository,
)
from bookflow.shared.enums import WorkflowEventType

NOW = datetime(2026, 1, 1, tzinfo=UTC)


def _definition(workflow_id: str, **overrides) -> WorkflowDefinition:
    data = {
        "id": workflow_id,
        "name": workflow_id,
        "description": None,
        "event_type": WorkflowEventType.PAYMENT_RECEIVED,
        "is_active": True,
        "conditions": (),
        "actions": (Action("webhook", {"url": "https://x.test"}),),
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return WorkflowDefinition(**data)


async def test_add_rejects_duplicate_id() -> None:
    repo = InMemoryWorkflowRepository()
    await repo.add(_definition("wf_1"))
    with pytest.raises(ValueError, match="Duplicate"):
        await repo.add(_definition("wf_1"))


async def test_stored_definition_is_isolated_from_caller() -> None:
    repo = InMemoryWorkflowRepository()
    original = _definition("wf_1")
    await repo.add(original)
    original.actions[0].config["url"] = "https://changed.test"

    fetched = await repo.get("wf_1")
    assert fetched.actions[0].config["url"] == "https://x.test"
    fetched.actions[0].config["url"] = "https://changed-again.test"
    assert (await repo.get("wf_1")).actions[0].config["url"] == "https://x.test"


async def test_list_filters_and_keeps_insertion_order() -> None:
    repo = InMemoryWorkflowRepository()
    await repo.add(_definition("wf_b"))
    await repo.add(_definition("wf_a", is_active=False))
    await repo.add(_definition("wf_c", event_type=WorkflowEventType.PAYMENT_FAILED))

    assert [d.id for d in await repo.list()] == ["wf_b", "wf_a", "wf_c"]
    assert [d.id for d in await repo.list(WorkflowFilter(is_active=False))] == ["wf_a"]
    assert [
        d.id for d in await repo.list(WorkflowFilter(event_type="PAYMENT_FAILED"))
    ] == ["wf_c"]


async def test_replace_and_delete_unknown() -> None:
    repo = InMemoryWorkflowRepository()
    assert await repo.replace(_definition("ghost")) is None
    assert await repo.delete("ghost") is False


async def test_notification_store() -> None:
    store = InMemoryNotificationStore()
    notification_id = await store.create(
        NotificationCreate(title="t", message="m", priority="high", user_id="u1")
    )
    assert notification_id
    stored = store.notifications[0]
    assert stored["id"] == notification_id
    assert stored["priority"] == "high"
    assert stored["type"] == "system_alert"
    assert stored["user_id"] == "u1"
