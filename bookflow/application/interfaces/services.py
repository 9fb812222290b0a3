"""Collaborator interfaces (ports) consumed by action handlers.

Implementations live in bookflow.infrastructure. Each call may raise
ActionExecutionException or TransientCollaboratorException; the dispatcher
turns those into failed ActionResults.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from bookflow.application.dtos.collaborators import HttpResponse, NotificationCreate


class IEmailSender(Protocol):
    """Protocol for sending an email from a template id or a literal body."""

    async def send(
        self,
        to: str,
        subject: str | None,
        template_id_or_body: str,
        variables: dict[str, Any],
    ) -> bool:
        """Send (or queue) the email; return False when the transport rejected it."""


class INotificationStore(Protocol):
    """Protocol for persisting in-app notifications."""

    async def create(self, notification: NotificationCreate) -> str:
        """Store the notification and return its id."""


class ICustomerRecordStore(Protocol):
    """Protocol for patching customer records in the booking data store."""

    async def update(self, customer_id: str, patch: dict[str, Any]) -> bool:
        """Apply the patch; return False when the customer does not exist."""


class IHttpClient(Protocol):
    """Protocol for outbound HTTP calls (webhook actions)."""

    async def request(
        self,
        url: str,
        method: str,
        headers: dict[str, str],
        body: Any,
        timeout: float,
    ) -> HttpResponse:
        """Perform the request with the given deadline and return status and body."""
