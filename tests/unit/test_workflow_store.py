"""WorkflowStore: validation, CRUD and snapshot isolation over the memory repository."""

import pytest

from bookflow.application.dtos.workflow import WorkflowCreate, WorkflowFilter, WorkflowPatch
from bookflow.application.services.workflow_store import WorkflowStore, parse_event_type
from bookflow.domain.exceptions import ResourceNotFoundException, ValidationException
from bookflow.infrastructure.memory import InMemoryWorkflowRepository
from bookflow.shared.enums import WorkflowEventType


def _create(**overrides) -> WorkflowCreate:
    data = {
        "name": "Consultation Confirmation",
        "event_type": "APPOINTMENT_CREATED",
        "conditions": [
            {"field": "appointment.type", "operator": "equals", "value": "consultation"}
        ],
        "actions": [
            {"type": "send_email", "config": {"templateId": "t", "to": "{{customer.email}}"}}
        ],
    }
    data.update(overrides)
    return WorkflowCreate(**data)


@pytest.fixture
def store() -> WorkflowStore:
    return WorkflowStore(InMemoryWorkflowRepository())


async def test_create_assigns_id_and_timestamps(store: WorkflowStore) -> None:
    created = await store.create(_create(name="  Welcome  "))
    assert created.id
    assert created.name == "Welcome"
    assert created.event_type == WorkflowEventType.APPOINTMENT_CREATED
    assert created.is_active is True
    assert created.created_at == created.updated_at
    assert created.created_at.tzinfo is not None
    assert created.conditions[0].operator == "equals"
    assert created.actions[0].type == "send_email"


async def test_event_type_is_case_insensitive(store: WorkflowStore) -> None:
    created = await store.create(_create(event_type="payment_received"))
    assert created.event_type == WorkflowEventType.PAYMENT_RECEIVED


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"name": "   "}, "name"),
        ({"event_type": "INVOICE_SENT"}, "event_type"),
        ({"actions": []}, "actions"),
        ({"actions": [{"type": "send_sms", "config": {}}]}, "actions"),
        ({"actions": [{"type": "webhook", "config": "https://x"}]}, "actions"),
        ({"conditions": [{"field": "a", "operator": "matches", "value": 1}]}, "conditions"),
        ({"conditions": [{"field": "", "operator": "equals", "value": 1}]}, "conditions"),
        ({"conditions": ["a == 1"]}, "conditions"),
        ({"is_active": "yes"}, "is_active"),
    ],
)
async def test_create_rejects_invalid_definitions(store: WorkflowStore, overrides, field) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await store.create(_create(**overrides))
    assert exc_info.value.details["field"] == field
    assert await store.list() == []


async def test_get_unknown_raises_not_found(store: WorkflowStore) -> None:
    with pytest.raises(ResourceNotFoundException):
        await store.get("missing")


async def test_list_filters_by_event_type_and_active(store: WorkflowStore) -> None:
    a = await store.create(_create())
    await store.create(_create(event_type="PAYMENT_RECEIVED"))
    c = await store.create(_create(is_active=False))

    appointment = await store.list(WorkflowFilter(event_type="appointment_created"))
    assert [w.id for w in appointment] == [a.id, c.id]
    active = await store.list(WorkflowFilter(is_active=True, event_type="APPOINTMENT_CREATED"))
    assert [w.id for w in active] == [a.id]


async def test_update_merges_only_set_fields(store: WorkflowStore) -> None:
    created = await store.create(_create(description="first"))
    updated = await store.update(created.id, WorkflowPatch(is_active=False))
    assert updated.is_active is False
    assert updated.name == created.name
    assert updated.description == "first"
    assert updated.conditions == created.conditions
    assert updated.created_at == created.created_at
    assert updated.updated_at >= created.updated_at


async def test_update_can_clear_description(store: WorkflowStore) -> None:
    created = await store.create(_create(description="first"))
    updated = await store.update(created.id, WorkflowPatch(description=None))
    assert updated.description is None


async def test_update_revalidates(store: WorkflowStore) -> None:
    created = await store.create(_create())
    with pytest.raises(ValidationException):
        await store.update(created.id, WorkflowPatch(actions=[]))
    assert (await store.get(created.id)).actions == created.actions


async def test_update_unknown_raises_not_found(store: WorkflowStore) -> None:
    with pytest.raises(ResourceNotFoundException):
        await store.update("missing", WorkflowPatch(name="x"))


async def test_delete(store: WorkflowStore) -> None:
    created = await store.create(_create())
    await store.delete(created.id)
    with pytest.raises(ResourceNotFoundException):
        await store.get(created.id)
    with pytest.raises(ResourceNotFoundException):
        await store.delete(created.id)


async def test_find_active_returns_isolated_snapshots(store: WorkflowStore) -> None:
    created = await store.create(_create())
    await store.create(_create(is_active=False))

    snapshots = await store.find_active_by_event_type("APPOINTMENT_CREATED")
    assert [s.id for s in snapshots] == [created.id]

    snapshots[0].actions[0].config["to"] = "attacker@example.com"
    await store.update(created.id, WorkflowPatch(name="Renamed"))

    fresh = await store.get(created.id)
    assert fresh.actions[0].config["to"] == "{{customer.email}}"
    assert snapshots[0].name == "Consultation Confirmation"


def test_parse_event_type() -> None:
    assert parse_event_type("customer_created") is WorkflowEventType.CUSTOMER_CREATED
    assert parse_event_type(WorkflowEventType.PAYMENT_FAILED) is WorkflowEventType.PAYMENT_FAILED
    with pytest.raises(ValidationException):
        parse_event_type(42)
