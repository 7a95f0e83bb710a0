"""
services/favorite_service.py
-----------------------------
Business logic for a user's favorite food.
"""

from models.cart import Favorite
from repositories.category_repo import CategoryRepository
from repositories.favorite_repo import FavoriteRepository
from repositories.food_repo import FoodRepository
from services.assembly import assemble_favorites, attach_categories, index_by_id


class FavoriteService:
    def __init__(self, favorite_repo=None, food_repo=None, category_repo=None):
        self.favorite_repo = favorite_repo or FavoriteRepository()
        self.food_repo = food_repo or FoodRepository()
        self.category_repo = category_repo or CategoryRepository()

    def favorites(self, user_id: int) -> list[Favorite]:
        """List favorites (newest first), each with its food and category."""
        food = self.food_repo.get_in_favorites(user_id)
        favorites = self.favorite_repo.get_for_user(user_id)
        categories = index_by_id(self.category_repo.get_all())
        return assemble_favorites(favorites, attach_categories(food, categories))

    def is_favorite(self, user_id: int, food_id: int) -> bool:
        return self.favorite_repo.contains(user_id, food_id)

    def add(self, user_id: int, food_id: int) -> int:
        return self.favorite_repo.add(user_id, food_id)

    def delete(self, user_id: int, favorite_id: int) -> bool:
        return self.favorite_repo.delete(user_id, favorite_id)

    def toggle(self, user_id: int, food_id: int) -> bool:
        """
        Flip the favorite mark of a food.

        Returns:
            True if the food is a favorite afterwards.
        """
        if self.favorite_repo.delete_by_food(user_id, food_id):
            return False
        self.favorite_repo.add(user_id, food_id)
        return True
