"""API tests for POST /api/v1/events/trigger."""

from httpx import AsyncClient

TRIGGER = "/api/v1/events/trigger"


async def test_trigger_with_no_workflows(client: AsyncClient) -> None:
    response = await client.post(TRIGGER, json={"event_type": "CUSTOMER_CREATED", "context": {}})
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "triggered_workflow_ids": [],
        "executed_actions_count": 0,
        "errors": [],
        "execution_ids": [],
    }


async def test_trigger_unknown_event_type(client: AsyncClient) -> None:
    response = await client.post(TRIGGER, json={"event_type": "INVOICE_SENT"})
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is False
    assert data["errors"][0]["workflow_id"] is None


async def test_consultation_booking(client: AsyncClient) -> None:
    created = await client.post(
        "/api/v1/workflows/from-template",
        json={"template_id": "consultation_confirmation", "name": "Consultations"},
    )
    workflow_id = created.json()["id"]

    response = await client.post(
        TRIGGER,
        json={
            "event_type": "appointment_created",
            "context": {
                "appointment": {"type": "consultation", "startTime": "2026-03-01T10:00:00Z"},
                "customer": {"name": "Jane", "email": "jane@example.com"},
            },
        },
    )

    data = response.json()
    assert data["success"] is True
    assert data["triggered_workflow_ids"] == [workflow_id]
    assert data["executed_actions_count"] == 2
    assert data["errors"] == []
    assert len(data["execution_ids"]) == 1


async def test_action_failure_is_reported_not_raised(client: AsyncClient) -> None:
    await client.post(
        "/api/v1/workflows",
        json={
            "name": "Tag customer",
            "event_type": "CUSTOMER_CREATED",
            "actions": [
                {
                    "type": "update_customer",
                    "config": {"customerId": "{{customer.id}}", "updates": {"tag": "new"}},
                },
                {"type": "create_notification", "config": {}},
            ],
        },
    )

    response = await client.post(
        TRIGGER, json={"event_type": "CUSTOMER_CREATED", "context": {"customer": {"id": "c1"}}}
    )

    data = response.json()
    assert data["success"] is True
    assert data["executed_actions_count"] == 2
    assert len(data["errors"]) == 1
    assert data["errors"][0]["action_type"] == "update_customer"
    assert "not configured" in data["errors"][0]["error"]

    history = (await client.get("/api/v1/workflows/executions")).json()
    assert history["data"][0]["status"] == "partial"


async def test_trigger_body_is_validated(client: AsyncClient) -> None:
    response = await client.post(TRIGGER, json={"context": {}})
    assert response.status_code == 422


async def test_trigger_bursts_are_not_rate_limited(client: AsyncClient) -> None:
    # Well past the 120/minute applied to admin writes from the same address.
    statuses = set()
    for _ in range(605):
        response = await client.post(TRIGGER, json={"event_type": "CUSTOMER_CREATED", "context": {}})
        statuses.add(response.status_code)
    assert statuses == {200}
