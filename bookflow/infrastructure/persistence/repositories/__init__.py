"""SQL repositories (postgres backend)."""

from bookflow.infrastructure.persistence.repositories.execution_repo import (
    SqlExecutionRecordRepository,
)
from bookflow.infrastructure.persistence.repositories.notification_repo import (
    NotificationRepository,
)
from bookflow.infrastructure.persistence.repositories.workflow_repo import (
    SqlWorkflowRepository,
)

__all__ = [
    "NotificationRepository",
    "SqlExecutionRecordRepository",
    "SqlWorkflowRepository",
]
