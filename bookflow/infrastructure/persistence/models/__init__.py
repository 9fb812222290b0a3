"""ORM models. Import here so Alembic autogenerate sees every table."""

from bookflow.infrastructure.persistence.models.notification import NotificationModel
from bookflow.infrastructure.persistence.models.workflow import (
    ExecutionRecordModel,
    WorkflowDefinitionModel,
)

__all__ = [
    "ExecutionRecordModel",
    "NotificationModel",
    "WorkflowDefinitionModel",
]
