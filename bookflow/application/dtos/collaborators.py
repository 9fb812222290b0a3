"""Values exchanged with external collaborators (notification store, HTTP)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class NotificationCreate:
    """In-app notification produced by a create_notification action."""

    title: str
    message: str
    type: str = "system_alert"
    priority: str = "medium"
    user_id: str | None = None


@dataclass(frozen=True)
class HttpResponse:
    """Status and decoded body of an outbound HTTP call."""

    status_code: int
    body: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
