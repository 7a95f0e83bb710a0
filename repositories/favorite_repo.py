"""
repositories/favorite_repo.py
------------------------------
Data access layer for favorite food.
A user marks a food as favorite at most once (constraint 'food_per_user').
"""

from models.cart import Favorite
from repositories.base import BaseRepository
from repositories.mappers import row_to_favorite
from utils.logger import get_logger

logger = get_logger(__name__)


class FavoriteRepository(BaseRepository):
    """Repository for CRUD operations on the favorites table."""

    def add(self, user_id: int, food_id: int) -> int:
        """
        Mark food as favorite. Repeating it returns the existing favorite's ID.
        """
        sql = """
            INSERT INTO favorites (user_id, food_id, add_time)
            VALUES (%s, %s, CURRENT_TIMESTAMP)
            ON CONFLICT (user_id, food_id) DO UPDATE SET food_id = EXCLUDED.food_id
            RETURNING id;
        """
        favorite_id = self._insert(sql, (user_id, food_id))
        logger.info(f"User {user_id} added food #{food_id} to favorites")
        return favorite_id

    def get_for_user(self, user_id: int) -> list[Favorite]:
        sql = """
            SELECT id, user_id, food_id, add_time FROM favorites
            WHERE user_id = %s
            ORDER BY add_time DESC, id DESC;
        """
        return self._fetch_all(sql, (user_id,), row_to_favorite)

    def contains(self, user_id: int, food_id: int) -> bool:
        sql = "SELECT EXISTS (SELECT 1 FROM favorites WHERE user_id = %s AND food_id = %s) AS found;"
        return bool(self._fetch_value(sql, (user_id, food_id)))

    def delete(self, user_id: int, favorite_id: int) -> bool:
        sql = "DELETE FROM favorites WHERE id = %s AND user_id = %s;"
        return self._execute(sql, (favorite_id, user_id)) > 0

    def delete_by_food(self, user_id: int, food_id: int) -> bool:
        sql = "DELETE FROM favorites WHERE user_id = %s AND food_id = %s;"
        return self._execute(sql, (user_id, food_id)) > 0
