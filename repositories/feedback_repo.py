"""
repositories/feedback_repo.py
------------------------------
Data access layer for order feedback.
"""

from typing import Iterable, Optional

from models.order import Feedback
from repositories.base import BaseRepository
from repositories.mappers import row_to_feedback
from utils.logger import get_logger

logger = get_logger(__name__)


class FeedbackRepository(BaseRepository):
    """Repository for the feedbacks table."""

    def add(self, customer_id: int, feedback: Feedback) -> Optional[int]:
        """
        Attach feedback to an order in one conditional statement.

        The row is inserted only if the order belongs to the customer, is
        completed and has no feedback yet.

        Returns:
            The new feedback ID, or None if no eligible order matched.
        """
        sql = """
            INSERT INTO feedbacks (order_id, rating, comment)
            SELECT orders.id, %s, %s FROM orders
            WHERE orders.id = %s
              AND orders.customer_id = %s
              AND orders.completed_time IS NOT NULL
            ON CONFLICT (order_id) DO NOTHING
            RETURNING id;
        """
        feedback_id = self._insert(sql, (
            feedback.rating, feedback.comment, feedback.order_id, customer_id,
        ))
        if feedback_id is not None:
            logger.info(f"User {customer_id} left feedback #{feedback_id} on order #{feedback.order_id}")
        return feedback_id

    def get_for_orders(self, order_ids: Iterable[int], conn=None) -> list[Feedback]:
        ids = list(set(order_ids))
        if not ids:
            return []
        sql = "SELECT id, order_id, rating, comment FROM feedbacks WHERE order_id = ANY(%s);"
        return self._fetch_all(sql, (ids,), row_to_feedback, conn)
