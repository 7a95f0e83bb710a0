"""
repositories/order_repo.py
---------------------------
Data access layer for order headers and their line items.

Lifecycle transitions are single conditional UPDATE/DELETE statements:
the WHERE clause carries the ownership and state guard, and the result is
whether a row matched.
"""

from decimal import Decimal
from typing import Iterable, Optional

from models.order import Order, OrderItem
from repositories.base import BaseRepository
from repositories.mappers import row_to_order, row_to_order_item
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, customer_id, address_id, create_time, rider_id, completed_time"


class OrderRepository(BaseRepository):
    """Repository for the orders and orders_food tables."""

    # ── CREATE ────────────────────────────────────────────

    def create(self, customer_id: int, address_id: int, conn=None) -> int:
        sql = """
            INSERT INTO orders (customer_id, address_id, create_time)
            VALUES (%s, %s, CURRENT_TIMESTAMP)
            RETURNING id;
        """
        order_id = self._insert(sql, (customer_id, address_id), conn)
        logger.info(f"Created order #{order_id} for user {customer_id}")
        return order_id

    def add_item(self, order_id: int, food_id: int, count: int, price: Decimal, conn=None) -> int:
        sql = """
            INSERT INTO orders_food (order_id, food_id, count, price)
            VALUES (%s, %s, %s, %s)
            RETURNING id;
        """
        return self._insert(sql, (order_id, food_id, count, price), conn)

    # ── READ ──────────────────────────────────────────────

    def get_all(self) -> list[Order]:
        sql = f"SELECT {_COLUMNS} FROM orders ORDER BY create_time DESC, id DESC;"
        return self._fetch_all(sql, (), row_to_order)

    def get_for_user(self, customer_id: int) -> list[Order]:
        sql = f"SELECT {_COLUMNS} FROM orders WHERE customer_id = %s ORDER BY create_time DESC, id DESC;"
        return self._fetch_all(sql, (customer_id,), row_to_order)

    def get_for_user_by_id(self, customer_id: int, order_id: int) -> Optional[Order]:
        sql = f"SELECT {_COLUMNS} FROM orders WHERE id = %s AND customer_id = %s;"
        return self._fetch_one(sql, (order_id, customer_id), row_to_order)

    def get_items(self, order_ids: Iterable[int], conn=None) -> list[OrderItem]:
        ids = list(set(order_ids))
        if not ids:
            return []
        sql = """
            SELECT id, order_id, food_id, count, price FROM orders_food
            WHERE order_id = ANY(%s)
            ORDER BY order_id, id;
        """
        return self._fetch_all(sql, (ids,), row_to_order_item, conn)

    # ── UPDATE ────────────────────────────────────────────

    def take(self, rider_id: int, order_id: int) -> bool:
        """Assign a rider to an order nobody has taken yet."""
        sql = """
            UPDATE orders SET rider_id = %s
            WHERE id = %s AND rider_id IS NULL AND completed_time IS NULL;
        """
        taken = self._execute(sql, (rider_id, order_id)) > 0
        if taken:
            logger.info(f"Rider {rider_id} took order #{order_id}")
        return taken

    def complete(self, rider_id: int, order_id: int) -> bool:
        """Mark an order completed, only by the rider who took it."""
        sql = """
            UPDATE orders SET completed_time = CURRENT_TIMESTAMP
            WHERE id = %s AND rider_id = %s AND completed_time IS NULL;
        """
        completed = self._execute(sql, (order_id, rider_id)) > 0
        if completed:
            logger.info(f"Rider {rider_id} completed order #{order_id}")
        return completed

    # ── DELETE ────────────────────────────────────────────

    def delete_untaken(self, customer_id: int, order_id: int) -> bool:
        """Cancel the customer's own order while no rider has taken it."""
        sql = "DELETE FROM orders WHERE id = %s AND customer_id = %s AND rider_id IS NULL;"
        deleted = self._execute(sql, (order_id, customer_id)) > 0
        if deleted:
            logger.info(f"User {customer_id} cancelled order #{order_id}")
        return deleted
