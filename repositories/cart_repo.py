"""
repositories/cart_repo.py
--------------------------
Data access layer for cart lines.
A user holds at most one line per food (constraint 'food_per_customer').
"""

from typing import Iterable

from models.cart import CartItem
from repositories.base import BaseRepository
from repositories.mappers import row_to_cart_item
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, customer_id, food_id, count, add_time"


class CartRepository(BaseRepository):
    """Repository for CRUD operations on the cart table."""

    def add(self, user_id: int, food_id: int, count: int = 1) -> int:
        """
        Put food into the user's cart.

        Adding food that is already in the cart does not create a second
        line: the existing line takes the new quantity and keeps its ID.

        Returns:
            The cart line ID.
        """
        sql = """
            INSERT INTO cart (customer_id, food_id, count, add_time)
            VALUES (%s, %s, %s, CURRENT_TIMESTAMP)
            ON CONFLICT (customer_id, food_id) DO UPDATE SET count = EXCLUDED.count
            RETURNING id;
        """
        item_id = self._insert(sql, (user_id, food_id, count))
        logger.info(f"User {user_id} put food #{food_id} x{count} into cart line #{item_id}")
        return item_id

    def get_for_user(self, user_id: int, conn=None, lock: bool = False) -> list[CartItem]:
        """
        Fetch the user's cart lines.

        Args:
            user_id: Owner of the cart.
            conn: Optional transaction connection.
            lock: Lock the returned rows until the transaction ends
                (only meaningful together with ``conn``).
        """
        sql = f"SELECT {_COLUMNS} FROM cart WHERE customer_id = %s ORDER BY id"
        if lock:
            sql += " FOR UPDATE"
        return self._fetch_all(sql + ";", (user_id,), row_to_cart_item, conn)

    def contains(self, user_id: int, food_id: int) -> bool:
        sql = "SELECT EXISTS (SELECT 1 FROM cart WHERE customer_id = %s AND food_id = %s) AS found;"
        return bool(self._fetch_value(sql, (user_id, food_id)))

    def update_count(self, user_id: int, item_id: int, count: int) -> bool:
        sql = "UPDATE cart SET count = %s WHERE id = %s AND customer_id = %s;"
        return self._execute(sql, (count, item_id, user_id)) > 0

    def delete(self, user_id: int, item_id: int) -> bool:
        sql = "DELETE FROM cart WHERE id = %s AND customer_id = %s;"
        deleted = self._execute(sql, (item_id, user_id)) > 0
        if deleted:
            logger.info(f"Deleted cart line #{item_id} for user {user_id}")
        return deleted

    def delete_many(self, user_id: int, item_ids: Iterable[int], conn=None) -> int:
        """Delete the given lines of the user's cart and return how many went away."""
        ids = list(item_ids)
        if not ids:
            return 0
        sql = "DELETE FROM cart WHERE customer_id = %s AND id = ANY(%s);"
        return self._execute(sql, (user_id, ids), conn)
