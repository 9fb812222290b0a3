"""In-process repositories for the memory backend."""

from bookflow.infrastructure.memory.repositories import (
    InMemoryExecutionRecordRepository,
    InMemoryNotificationStore,
    InMemoryWorkflowRepository,
)

__all__ = [
    "InMemoryExecutionRecordRepository",
    "InMemoryNotificationStore",
    "InMemoryWorkflowRepository",
]
