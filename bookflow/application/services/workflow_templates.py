"""Starter workflow templates and creation of definitions from them."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from bookflow.application.dtos.workflow import WorkflowCreate
from bookflow.application.services.workflow_store import WorkflowStore
from bookflow.domain.entities.workflow import WorkflowDefinition
from bookflow.domain.exceptions import ResourceNotFoundException, ValidationException
from bookflow.shared.enums import ActionType, WorkflowEventType
from bookflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_CUSTOMIZABLE = frozenset({"is_active", "description"})


@dataclass(frozen=True)
class StarterTemplate:
    """Read-only blueprint for a common workflow."""

    id: str
    name: str
    description: str
    category: str
    event_type: WorkflowEventType
    conditions: tuple[dict[str, Any], ...]
    actions: tuple[dict[str, Any], ...]


STARTER_TEMPLATES: tuple[StarterTemplate, ...] = (
    StarterTemplate(
        id="consultation_confirmation",
        name="Consultation Confirmation",
        description="Email the customer and notify the studio when a consultation is booked",
        category="appointments",
        event_type=WorkflowEventType.APPOINTMENT_CREATED,
        conditions=(
            {"field": "appointment.type", "operator": "equals", "value": "consultation"},
        ),
        actions=(
            {
                "type": ActionType.SEND_EMAIL.value,
                "config": {
                    "templateId": "appointment_confirmation",
                    "to": "{{customer.email}}",
                    "variables": {
                        "customerName": "{{customer.name}}",
                        "appointmentDate": "{{appointment.startTime}}",
                    },
                },
            },
            {
                "type": ActionType.CREATE_NOTIFICATION.value,
                "config": {
                    "title": "New Consultation Booked",
                    "message": "Consultation appointment created for {{customer.name}}",
                    "type": "appointment_created",
                },
            },
        ),
    ),
    StarterTemplate(
        id="payment_receipt",
        name="Payment Receipt",
        description="Send a receipt for payments over $100",
        category="payments",
        event_type=WorkflowEventType.PAYMENT_RECEIVED,
        conditions=(
            {"field": "payment.amount", "operator": "greater_than", "value": 100},
        ),
        actions=(
            {
                "type": ActionType.SEND_EMAIL.value,
                "config": {
                    "templateId": "payment_receipt",
                    "to": "{{customer.email}}",
                    "variables": {
                        "customerName": "{{customer.name}}",
                        "amount": "{{payment.amount}}",
                    },
                },
            },
        ),
    ),
    StarterTemplate(
        id="vip_payment",
        name="VIP Payment Handling",
        description="Receipt, staff alert and customer tagging for VIP payments over $500",
        category="payments",
        event_type=WorkflowEventType.PAYMENT_RECEIVED,
        conditions=(
            {"field": "payment.amount", "operator": "greater_than", "value": 500},
            {"field": "customer.isVip", "operator": "equals", "value": True},
        ),
        actions=(
            {
                "type": ActionType.SEND_EMAIL.value,
                "config": {
                    "templateId": "vip_payment_receipt",
                    "to": "{{customer.email}}",
                    "variables": {
                        "customerName": "{{customer.name}}",
                        "amount": "{{payment.amount}}",
                    },
                },
            },
            {
                "type": ActionType.CREATE_NOTIFICATION.value,
                "config": {
                    "title": "VIP Payment Received",
                    "message": "VIP customer {{customer.name}} paid ${{payment.amount}}",
                    "type": "payment_received",
                    "priority": "high",
                },
            },
            {
                "type": ActionType.UPDATE_CUSTOMER.value,
                "config": {
                    "customerId": "{{customer.id}}",
                    "updates": {"lastVipPaymentAt": "{{payment.createdAt}}"},
                },
            },
        ),
    ),
    StarterTemplate(
        id="payment_failed_alert",
        name="Failed Payment Alert",
        description="Alert the studio when a payment fails",
        category="payments",
        event_type=WorkflowEventType.PAYMENT_FAILED,
        conditions=(),
        actions=(
            {
                "type": ActionType.CREATE_NOTIFICATION.value,
                "config": {
                    "title": "Payment Failed",
                    "message": "Payment of ${{payment.amount}} from {{customer.name}} failed",
                    "type": "payment_failed",
                    "priority": "high",
                },
            },
        ),
    ),
    StarterTemplate(
        id="cancellation_follow_up",
        name="Cancellation Follow-up",
        description="Let the customer know their appointment was cancelled",
        category="appointments",
        event_type=WorkflowEventType.APPOINTMENT_CANCELLED,
        conditions=(),
        actions=(
            {
                "type": ActionType.SEND_EMAIL.value,
                "config": {
                    "templateId": "appointment_cancelled",
                    "to": "{{customer.email}}",
                    "variables": {"customerName": "{{customer.name}}"},
                },
            },
        ),
    ),
    StarterTemplate(
        id="new_customer_welcome",
        name="New Customer Welcome",
        description="Welcome email for newly registered customers",
        category="customers",
        event_type=WorkflowEventType.CUSTOMER_CREATED,
        conditions=(
            {"field": "customer.email", "operator": "not_equals", "value": None},
        ),
        actions=(
            {
                "type": ActionType.SEND_EMAIL.value,
                "config": {
                    "templateId": "customer_welcome",
                    "to": "{{customer.email}}",
                    "variables": {"customerName": "{{customer.name}}"},
                },
            },
        ),
    ),
)


class WorkflowTemplateService:
    """Lists starter templates and instantiates workflows from them."""

    def __init__(
        self,
        store: WorkflowStore,
        templates: tuple[StarterTemplate, ...] = STARTER_TEMPLATES,
    ) -> None:
        self._store = store
        self._templates = {t.id: t for t in templates}

    def list_templates(self) -> list[StarterTemplate]:
        return list(self._templates.values())

    def get_template(self, template_id: str) -> StarterTemplate:
        template = self._templates.get(template_id)
        if template is None:
            raise ResourceNotFoundException("Workflow template", template_id)
        return template

    async def create_from_template(
        self,
        template_id: str,
        name: str,
        customizations: Mapping[str, Any] | None = None,
    ) -> WorkflowDefinition:
        """Create a workflow with the template's event type, conditions and actions.

        Only is_active and description may be customized.
        """
        template = self.get_template(template_id)
        overrides = dict(customizations or {})
        unknown = sorted(set(overrides) - _CUSTOMIZABLE)
        if unknown:
            raise ValidationException(
                f"Unsupported customizations: {unknown}", field="customizations"
            )
        definition = await self._store.create(
            WorkflowCreate(
                name=name,
                event_type=template.event_type.value,
                conditions=copy.deepcopy(list(template.conditions)),
                actions=copy.deepcopy(list(template.actions)),
                description=overrides.get("description", template.description),
                is_active=overrides.get("is_active", True),
            )
        )
        logger.info("Workflow %s created from template %s", definition.id, template_id)
        return definition
