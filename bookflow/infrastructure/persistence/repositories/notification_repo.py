"""SQL notification store (implements INotificationStore)."""

from bookflow.application.dtos.collaborators import NotificationCreate
from bookflow.infrastructure.persistence.models.notification import NotificationModel
from bookflow.infrastructure.persistence.repositories.base import SessionRepository


class NotificationRepository(SessionRepository):
    """Persists in-app notifications in table notification."""

    async def create(self, notification: NotificationCreate) -> str:
        row = NotificationModel(
            title=notification.title,
            message=notification.message,
            type=notification.type,
            priority=notification.priority,
            user_id=notification.user_id,
        )
        async with self._transaction() as session:
            session.add(row)
            await session.flush()
            return row.id
