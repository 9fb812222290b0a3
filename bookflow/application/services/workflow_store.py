"""Workflow store: validated CRUD over workflow definitions.

All mutations go through here. The trigger pipeline only ever reads deep-copied
snapshots from find_active_by_event_type, so an edit or delete that lands while
a trigger is running cannot change what that trigger evaluates.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from bookflow.application.dtos.workflow import WorkflowCreate, WorkflowFilter, WorkflowPatch
from bookflow.application.interfaces.repositories import IWorkflowRepository
from bookflow.domain.entities.workflow import Action, Condition, WorkflowDefinition
from bookflow.domain.exceptions import ResourceNotFoundException, ValidationException
from bookflow.shared.enums import ActionType, ConditionOperator, WorkflowEventType
from bookflow.shared.telemetry.logging import get_logger
from bookflow.shared.utils.datetime import utc_now
from bookflow.shared.utils.generators import generate_cuid

logger = get_logger(__name__)

RESOURCE_TYPE = "Workflow"


def parse_event_type(value: Any) -> WorkflowEventType:
    """Return the event type for value (case-insensitive) or raise ValidationException."""
    if isinstance(value, WorkflowEventType):
        return value
    if isinstance(value, str):
        try:
            return WorkflowEventType(value)
        except ValueError:
            pass
    raise ValidationException(
        f"Unknown event type: {value!r}. Expected one of {WorkflowEventType.values()}",
        field="event_type",
    )


def _validate_name(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationException("Workflow name must not be empty", field="name")
    return value.strip()


def _validate_description(value: Any) -> str | None:
    if value is not None and not isinstance(value, str):
        raise ValidationException("description must be a string", field="description")
    return value


def _validate_is_active(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValidationException("is_active must be a boolean", field="is_active")
    return value


def _parse_conditions(raw: Any) -> tuple[Condition, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, (list, tuple)):
        raise ValidationException("conditions must be a list", field="conditions")
    conditions: list[Condition] = []
    for index, item in enumerate(raw):
        if isinstance(item, Condition):
            condition = item
        elif isinstance(item, Mapping):
            condition = Condition.from_dict(dict(item))
        else:
            raise ValidationException(
                f"conditions[{index}] must be an object", field="conditions"
            )
        if not isinstance(condition.field, str) or not condition.field.strip():
            raise ValidationException(
                f"conditions[{index}].field must not be empty", field="conditions"
            )
        if condition.operator not in ConditionOperator.values():
            raise ValidationException(
                f"conditions[{index}].operator {condition.operator!r} is not one of "
                f"{ConditionOperator.values()}",
                field="conditions",
            )
        conditions.append(
            Condition(
                field=condition.field.strip(),
                operator=str(ConditionOperator(condition.operator).value),
                value=condition.value,
            )
        )
    return tuple(conditions)


def _parse_actions(raw: Any) -> tuple[Action, ...]:
    if not isinstance(raw, (list, tuple)) or not raw:
        raise ValidationException("A workflow needs at least one action", field="actions")
    actions: list[Action] = []
    for index, item in enumerate(raw):
        if isinstance(item, Action):
            action = item
        elif isinstance(item, Mapping):
            config = item.get("config")
            if config is not None and not isinstance(config, Mapping):
                raise ValidationException(
                    f"actions[{index}].config must be an object", field="actions"
                )
            action = Action.from_dict(dict(item))
        else:
            raise ValidationException(
                f"actions[{index}] must be an object", field="actions"
            )
        if action.type not in ActionType.values():
            raise ValidationException(
                f"actions[{index}].type {action.type!r} is not one of {ActionType.values()}",
                field="actions",
            )
        actions.append(
            Action(type=str(ActionType(action.type).value), config=dict(action.config))
        )
    return tuple(actions)


class WorkflowStore:
    """CRUD and filtered listing of workflow definitions."""

    def __init__(self, repo: IWorkflowRepository) -> None:
        self._repo = repo

    async def create(self, data: WorkflowCreate) -> WorkflowDefinition:
        """Validate and persist a new definition.

        Raises:
            ValidationException: empty name, unknown event type, no actions,
                unknown action type, or a malformed condition.
        """
        now = utc_now()
        definition = WorkflowDefinition(
            id=generate_cuid(),
            name=_validate_name(data.name),
            description=_validate_description(data.description),
            event_type=parse_event_type(data.event_type),
            is_active=_validate_is_active(data.is_active),
            conditions=_parse_conditions(data.conditions),
            actions=_parse_actions(data.actions),
            created_at=now,
            updated_at=now,
        )
        created = await self._repo.add(definition)
        logger.info(
            "Workflow created: id=%s event_type=%s actions=%d",
            created.id,
            created.event_type.value,
            len(created.actions),
        )
        return created

    async def list(self, filters: WorkflowFilter | None = None) -> list[WorkflowDefinition]:
        if filters is not None and filters.event_type is not None:
            filters = WorkflowFilter(
                is_active=filters.is_active,
                event_type=parse_event_type(filters.event_type).value,
            )
        return await self._repo.list(filters)

    async def get(self, workflow_id: str) -> WorkflowDefinition:
        definition = await self._repo.get(workflow_id)
        if definition is None:
            raise ResourceNotFoundException(RESOURCE_TYPE, workflow_id)
        return definition

    async def update(self, workflow_id: str, patch: WorkflowPatch) -> WorkflowDefinition:
        """Merge the set fields of patch into the definition and re-validate."""
        current = await self.get(workflow_id)
        changes = patch.changed_fields()
        merged = replace(
            current,
            name=_validate_name(changes.get("name", current.name)),
            description=_validate_description(
                changes.get("description", current.description)
            ),
            event_type=parse_event_type(changes.get("event_type", current.event_type)),
            is_active=_validate_is_active(changes.get("is_active", current.is_active)),
            conditions=_parse_conditions(changes.get("conditions", current.conditions)),
            actions=_parse_actions(changes.get("actions", current.actions)),
            updated_at=utc_now(),
        )
        updated = await self._repo.replace(merged)
        if updated is None:
            raise ResourceNotFoundException(RESOURCE_TYPE, workflow_id)
        logger.info("Workflow updated: id=%s fields=%s", workflow_id, sorted(changes))
        return updated

    async def delete(self, workflow_id: str) -> None:
        if not await self._repo.delete(workflow_id):
            raise ResourceNotFoundException(RESOURCE_TYPE, workflow_id)
        logger.info("Workflow deleted: id=%s", workflow_id)

    async def find_active_by_event_type(
        self, event_type: WorkflowEventType | str
    ) -> list[WorkflowDefinition]:
        """Deep-copied snapshot of the active definitions bound to event_type."""
        parsed = parse_event_type(event_type)
        definitions = await self._repo.list(
            WorkflowFilter(is_active=True, event_type=parsed.value)
        )
        return [d.snapshot() for d in definitions if d.can_trigger_on(parsed)]
