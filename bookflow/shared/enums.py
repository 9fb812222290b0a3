"""Shared enumerations for the automation engine.

Event types, action kinds, condition operators and execution statuses are
used by the domain, application and persistence layers alike, so they live
here rather than in any one of them.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class WorkflowEventType(_ValuesMixin, str, Enum):
    """Domain events a workflow can be bound to.

    Producers elsewhere in the system emit these; new kinds are added here.
    Lookup is case-insensitive so "appointment_created" resolves too.
    """

    APPOINTMENT_CREATED = "APPOINTMENT_CREATED"
    APPOINTMENT_UPDATED = "APPOINTMENT_UPDATED"
    APPOINTMENT_CANCELLED = "APPOINTMENT_CANCELLED"
    PAYMENT_RECEIVED = "PAYMENT_RECEIVED"
    PAYMENT_FAILED = "PAYMENT_FAILED"
    CUSTOMER_CREATED = "CUSTOMER_CREATED"
    REQUEST_SUBMITTED = "REQUEST_SUBMITTED"
    SYSTEM_MAINTENANCE = "SYSTEM_MAINTENANCE"

    @classmethod
    def _missing_(cls, value: object) -> "WorkflowEventType | None":
        if isinstance(value, str):
            upper = value.strip().upper()
            for member in cls:
                if member.value == upper:
                    return member
        return None


class ActionType(_ValuesMixin, str, Enum):
    """Side-effecting action kinds. Each member must have a dispatcher handler."""

    SEND_EMAIL = "send_email"
    CREATE_NOTIFICATION = "create_notification"
    UPDATE_CUSTOMER = "update_customer"
    WEBHOOK = "webhook"


class ConditionOperator(_ValuesMixin, str, Enum):
    """Comparison operators supported in workflow conditions (ANDed)."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    CONTAINS = "contains"
    IN = "in"


class ExecutionStatus(_ValuesMixin, str, Enum):
    """Outcome of one workflow's actions for one trigger call."""

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"
