"""
services/catalog_service.py
----------------------------
Business logic for the catalog: categories, food and their previews.
"""

from decimal import Decimal
from typing import Optional

from models.catalog import Category, Food, PreviewOf
from models.filters import SortFoodBy, SortOrder, sort_food
from repositories.category_repo import CategoryRepository
from repositories.food_repo import FoodRepository
from services.assembly import attach_categories, index_by_id
from utils.errors import DomainError
from utils.logger import get_logger

logger = get_logger(__name__)


class CatalogService:
    """Reads and edits categories and food."""

    def __init__(self, category_repo=None, food_repo=None):
        self.category_repo = category_repo or CategoryRepository()
        self.food_repo = food_repo or FoodRepository()

    # ── Categories ────────────────────────────────────────

    def categories(self) -> list[Category]:
        return self.category_repo.get_all()

    def add_category(self, category: Category, preview: Optional[bytes] = None) -> int:
        self._require_title(category.title)
        return self.category_repo.add(category, preview)

    def update_category(self, category: Category, preview: Optional[bytes] = None) -> bool:
        self._require_title(category.title)
        return self.category_repo.update(category, preview)

    def delete_category(self, category_id: int) -> bool:
        return self.category_repo.delete(category_id)

    # ── Food ──────────────────────────────────────────────

    def food(self, food_id: int) -> Optional[Food]:
        """Fetch one food item with its category, or None if it doesn't exist."""
        item = self.food_repo.get_by_id(food_id)
        if item is None:
            return None
        categories = index_by_id(self.category_repo.get_all())
        return attach_categories([item], categories)[item.id]

    def food_in_category(
        self,
        category_id: int,
        sort_by: SortFoodBy = SortFoodBy.TITLE,
        sort_order: SortOrder = SortOrder.ASCENDING,
    ) -> list[Food]:
        """
        List the food of a category, each with its category resolved.

        Raises:
            ConsistencyError: If a food's category vanished between the reads.
        """
        food = self.food_repo.get_in_category(category_id)
        categories = index_by_id(self.category_repo.get_all())
        return sort_food(attach_categories(food, categories).values(), sort_by, sort_order)

    def add_food(self, food: Food, preview: Optional[bytes] = None) -> int:
        self._validate_food(food)
        return self.food_repo.add(food, preview)

    def update_food(self, food: Food, preview: Optional[bytes] = None) -> bool:
        self._validate_food(food)
        return self.food_repo.update(food, preview)

    def delete_food(self, food_id: int) -> bool:
        return self.food_repo.delete(food_id)

    # ── Previews ──────────────────────────────────────────

    def preview(self, of: PreviewOf, entity_id: int) -> Optional[bytes]:
        """Return the stored JPEG bytes, or None when there is no image."""
        if PreviewOf(of) == PreviewOf.CATEGORY:
            return self.category_repo.get_preview(entity_id)
        return self.food_repo.get_preview(entity_id)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _require_title(title: str) -> None:
        if not title or not title.strip():
            raise DomainError("title must not be empty")

    def _validate_food(self, food: Food) -> None:
        self._require_title(food.title)
        if not isinstance(food.price, Decimal):
            raise TypeError("food price must be a Decimal")
        if food.price < 0:
            raise DomainError("price must not be negative")
        if food.count < 0:
            raise DomainError("count must not be negative")
