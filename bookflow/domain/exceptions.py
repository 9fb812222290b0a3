"""Domain exceptions for the automation engine.

Store-level errors (validation, not found) propagate to the caller and are
mapped to HTTP responses by bookflow.core.exception_handlers. Action-level
errors are raised by handlers and collaborators and are always caught at the
action boundary by the dispatcher.
"""

from typing import Any


class BookflowException(Exception):
    """Base exception for all engine errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(BookflowException):
    """Raised when a workflow definition is malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field that failed validation (e.g. "event_type").
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(BookflowException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'workflow', 'workflow_template').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ActionExecutionException(BookflowException):
    """Raised by an action handler when its side effect cannot be performed."""

    def __init__(self, action_type: str, message: str) -> None:
        super().__init__(
            message,
            "ACTION_EXECUTION_ERROR",
            {"action_type": action_type},
        )


class TransientCollaboratorException(BookflowException):
    """Raised when an external collaborator times out or is unreachable."""

    def __init__(self, collaborator: str, message: str) -> None:
        super().__init__(
            f"{collaborator}: {message}",
            "TRANSIENT_COLLABORATOR_ERROR",
            {"collaborator": collaborator},
        )


class SqlNotConfiguredException(BookflowException):
    """Raised when a SQL repository is used but the postgres backend is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
