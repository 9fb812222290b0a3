"""Tests for domain entities (WorkflowDefinition, ExecutionRecord) and enums."""

from datetime import UTC, datetime

from bookflow.domain.entities.execution import ActionResult, ExecutionRecord, derive_status
from bookflow.domain.entities.workflow import Action, Condition, WorkflowDefinition
from bookflow.shared.enums import (
    ActionType,
    ConditionOperator,
    ExecutionStatus,
    WorkflowEventType,
)

NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)


def _definition(**overrides) -> WorkflowDefinition:
    data = {
        "id": "wf_1",
        "name": "rule",
        "description": None,
        "event_type": WorkflowEventType.PAYMENT_RECEIVED,
        "is_active": True,
        "conditions": (Condition("payment.amount", "greater_than", 100),),
        "actions": (Action("webhook", {"url": "https://x.test", "headers": {"a": "b"}}),),
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return WorkflowDefinition(**data)


def _result(success: bool, action_type: str = "webhook", error: str | None = None) -> ActionResult:
    return ActionResult(action_type=action_type, success=success, duration_ms=1.0, error=error)


class TestEnums:
    """Enum values and the .values() helper."""

    def test_event_types(self) -> None:
        assert len(WorkflowEventType.values()) == 8
        assert "APPOINTMENT_CREATED" in WorkflowEventType.values()

    def test_event_type_lookup_is_case_insensitive(self) -> None:
        assert WorkflowEventType("payment_received") is WorkflowEventType.PAYMENT_RECEIVED
        assert WorkflowEventType(" Customer_Created ") is WorkflowEventType.CUSTOMER_CREATED

    def test_action_and_operator_values(self) -> None:
        assert ActionType.values() == [
            "send_email",
            "create_notification",
            "update_customer",
            "webhook",
        ]
        assert ConditionOperator.values() == [
            "equals",
            "not_equals",
            "greater_than",
            "less_than",
            "contains",
            "in",
        ]
        assert ExecutionStatus.values() == ["success", "partial", "failed"]


class TestWorkflowDefinition:
    """can_trigger_on and snapshot isolation."""

    def test_can_trigger_on(self) -> None:
        definition = _definition()
        assert definition.can_trigger_on(WorkflowEventType.PAYMENT_RECEIVED)
        assert not definition.can_trigger_on(WorkflowEventType.PAYMENT_FAILED)
        assert not _definition(is_active=False).can_trigger_on(WorkflowEventType.PAYMENT_RECEIVED)

    def test_snapshot_deep_copies_action_config(self) -> None:
        definition = _definition()
        snapshot = definition.snapshot()
        snapshot.actions[0].config["headers"]["a"] = "changed"
        assert definition.actions[0].config["headers"]["a"] == "b"
        assert snapshot.id == definition.id

    def test_condition_and_action_dict_round_trip(self) -> None:
        condition = Condition.from_dict({"field": "a.b", "operator": "in", "value": [1, 2]})
        assert condition.to_dict() == {"field": "a.b", "operator": "in", "value": [1, 2]}
        action = Action.from_dict({"type": "webhook"})
        assert action.config == {}


class TestExecutionRecord:
    """derive_status and the errors view."""

    def test_all_succeeded_is_success(self) -> None:
        assert derive_status([_result(True), _result(True)]) == ExecutionStatus.SUCCESS

    def test_none_succeeded_is_failed(self) -> None:
        assert derive_status([_result(False), _result(False)]) == ExecutionStatus.FAILED

    def test_mixed_is_partial(self) -> None:
        assert derive_status([_result(True), _result(False)]) == ExecutionStatus.PARTIAL

    def test_no_actions_is_success(self) -> None:
        assert derive_status([]) == ExecutionStatus.SUCCESS

    def test_errors_lists_failed_actions_in_order(self) -> None:
        record = ExecutionRecord(
            id="ex_1",
            workflow_id="wf_1",
            event_type=WorkflowEventType.PAYMENT_RECEIVED,
            triggered_at=NOW,
            status=ExecutionStatus.PARTIAL,
            action_results=(
                _result(False, "send_email", "no recipient"),
                _result(True),
                _result(False, "webhook", "webhook returned HTTP 500"),
            ),
            total_duration_ms=3.0,
        )
        assert record.errors == [
            "send_email: no recipient",
            "webhook: webhook returned HTTP 500",
        ]

    def test_action_result_dict_round_trip(self) -> None:
        result = ActionResult(
            action_type="create_notification",
            success=True,
            duration_ms=2.5,
            output={"notification_id": "n1"},
        )
        assert ActionResult.from_dict(result.to_dict()) == result
