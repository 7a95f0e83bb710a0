"""
repositories/notification_repo.py
----------------------------------
Data access layer for user notifications.
"""

from models.notification import Notification
from repositories.base import BaseRepository
from repositories.mappers import row_to_notification


class NotificationRepository(BaseRepository):
    """Repository for the notifications table."""

    def add(self, user_id: int, notification: Notification, conn=None) -> int:
        sql = """
            INSERT INTO notifications (user_id, sent_time, title, description)
            VALUES (%s, CURRENT_TIMESTAMP, %s, %s)
            RETURNING id;
        """
        return self._insert(sql, (user_id, notification.title, notification.description), conn)

    def get_for_user(self, user_id: int) -> list[Notification]:
        """Newest notifications first."""
        sql = """
            SELECT id, user_id, sent_time, title, description FROM notifications
            WHERE user_id = %s
            ORDER BY sent_time DESC, id DESC;
        """
        return self._fetch_all(sql, (user_id,), row_to_notification)
