"""
services/notification_service.py
---------------------------------
Business logic for sending and listing notifications.
"""

from db.connection import transaction as db_transaction
from models.notification import Notification
from models.user import UserRole
from repositories.notification_repo import NotificationRepository
from repositories.user_repo import UserRepository
from utils.errors import DomainError
from utils.logger import get_logger

logger = get_logger(__name__)


class NotificationService:
    def __init__(self, notification_repo=None, user_repo=None, transaction=None):
        self.notification_repo = notification_repo or NotificationRepository()
        self.user_repo = user_repo or UserRepository()
        self.transaction = transaction or db_transaction

    def notifications(self, user_id: int) -> list[Notification]:
        return self.notification_repo.get_for_user(user_id)

    def send(self, user_id: int, notification: Notification) -> int:
        self._require_title(notification)
        return self.notification_repo.add(user_id, notification)

    def broadcast(self, role: UserRole, notification: Notification) -> list[int]:
        """
        Send one notification to every user with the given role.

        All inserts share one transaction: either everybody gets the
        notification or nobody does.

        Returns:
            The IDs of the created notifications.
        """
        self._require_title(notification)
        with self.transaction() as conn:
            recipients = self.user_repo.get_by_role(UserRole(role), conn=conn)
            ids = [self.notification_repo.add(user.id, notification, conn=conn) for user in recipients]
        logger.info(f"Broadcasted \"{notification.title}\" to {len(ids)} users with role {UserRole(role).value}")
        return ids

    @staticmethod
    def _require_title(notification: Notification) -> None:
        if not notification.title or not notification.title.strip():
            raise DomainError("notification title must not be empty")
