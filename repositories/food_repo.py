"""
repositories/food_repo.py
--------------------------
Data access layer for food items.

The various ``get_*`` selections return bare Food rows; the category of
each row is resolved afterwards by the assembly step.
"""

from typing import Iterable, Optional

from models.catalog import Food
from repositories.base import BaseRepository
from repositories.mappers import row_to_food
from utils.logger import get_logger

logger = get_logger(__name__)

# Never select 'preview' here: it holds the whole image.
_COLUMNS = "food.id, food.title, food.description, food.category_id, food.count, food.is_alcohol, food.price"


class FoodRepository(BaseRepository):
    """Repository for CRUD operations on the food table."""

    # ── CREATE ────────────────────────────────────────────

    def add(self, food: Food, preview: Optional[bytes] = None) -> int:
        sql = """
            INSERT INTO food (title, description, preview, category_id, count, is_alcohol, price)
            VALUES (%s, %s, %s, %s, %s, %s, %s)
            RETURNING id;
        """
        food_id = self._insert(sql, (
            food.title, food.description, preview, food.category_id,
            food.count, food.is_alcohol, food.price,
        ))
        logger.info(f"Added food \"{food.title}\" #{food_id}")
        return food_id

    # ── READ ──────────────────────────────────────────────

    def get_by_id(self, food_id: int) -> Optional[Food]:
        sql = f"SELECT {_COLUMNS} FROM food WHERE id = %s;"
        return self._fetch_one(sql, (food_id,), row_to_food)

    def get_in_category(self, category_id: int) -> list[Food]:
        sql = f"SELECT {_COLUMNS} FROM food WHERE category_id = %s;"
        return self._fetch_all(sql, (category_id,), row_to_food)

    def get_in_cart(self, user_id: int, conn=None) -> list[Food]:
        sql = f"""
            SELECT {_COLUMNS}
            FROM cart JOIN food ON cart.food_id = food.id
            WHERE cart.customer_id = %s;
        """
        return self._fetch_all(sql, (user_id,), row_to_food, conn)

    def get_in_favorites(self, user_id: int) -> list[Food]:
        sql = f"""
            SELECT {_COLUMNS}
            FROM favorites JOIN food ON favorites.food_id = food.id
            WHERE favorites.user_id = %s;
        """
        return self._fetch_all(sql, (user_id,), row_to_food)

    def get_in_orders(self, order_ids: Iterable[int], conn=None) -> list[Food]:
        """Distinct food referenced by any of the given orders."""
        ids = list(set(order_ids))
        if not ids:
            return []
        sql = f"""
            SELECT DISTINCT {_COLUMNS}
            FROM orders_food JOIN food ON orders_food.food_id = food.id
            WHERE orders_food.order_id = ANY(%s);
        """
        return self._fetch_all(sql, (ids,), row_to_food, conn)

    def get_preview(self, food_id: int) -> Optional[bytes]:
        preview = self._fetch_value("SELECT preview FROM food WHERE id = %s;", (food_id,))
        return bytes(preview) if preview is not None else None

    # ── UPDATE ────────────────────────────────────────────

    def update(self, food: Food, preview: Optional[bytes] = None) -> bool:
        """
        Update every catalog field. The stored preview is replaced only
        when a new one is given.

        Returns:
            True if a row was updated, False otherwise.
        """
        sql = """
            UPDATE food
            SET title = %s, description = %s, category_id = %s, count = %s,
                is_alcohol = %s, price = %s, preview = COALESCE(%s, preview)
            WHERE id = %s;
        """
        return self._execute(sql, (
            food.title, food.description, food.category_id, food.count,
            food.is_alcohol, food.price, preview, food.id,
        )) > 0

    # ── DELETE ────────────────────────────────────────────

    def delete(self, food_id: int) -> bool:
        deleted = self._execute("DELETE FROM food WHERE id = %s;", (food_id,)) > 0
        if deleted:
            logger.info(f"Deleted food #{food_id}")
        return deleted
