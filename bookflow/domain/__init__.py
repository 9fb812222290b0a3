"""Domain layer: entities and exceptions.

No dependencies on infrastructure or presentation.
"""

from bookflow.domain.entities import (
    Action,
    ActionResult,
    Condition,
    ExecutionRecord,
    WorkflowDefinition,
)
from bookflow.domain.exceptions import (
    ActionExecutionException,
    BookflowException,
    ResourceNotFoundException,
    TransientCollaboratorException,
    ValidationException,
)

__all__ = [
    "Action",
    "ActionExecutionException",
    "ActionResult",
    "BookflowException",
    "Condition",
    "ExecutionRecord",
    "ResourceNotFoundException",
    "TransientCollaboratorException",
    "ValidationException",
    "WorkflowDefinition",
]
