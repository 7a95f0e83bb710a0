"""
services/cart_service.py
-------------------------
Business logic for a user's cart.
"""

from models.cart import Cart
from models.filters import SortCartBy, SortOrder
from repositories.cart_repo import CartRepository
from repositories.category_repo import CategoryRepository
from repositories.food_repo import FoodRepository
from services.assembly import assemble_cart, attach_categories, index_by_id
from utils.errors import DomainError
from utils.logger import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Reads and edits a user's cart.

    Loading a cart takes three independent reads (cart lines, the food they
    reference, all categories) and stitches them, computing each line's
    total and the cart's grand total in Decimal.
    """

    def __init__(self, cart_repo=None, food_repo=None, category_repo=None):
        self.cart_repo = cart_repo or CartRepository()
        self.food_repo = food_repo or FoodRepository()
        self.category_repo = category_repo or CategoryRepository()

    def load_cart(
        self,
        user_id: int,
        sort_by: SortCartBy = SortCartBy.ADD_TIME,
        sort_order: SortOrder = SortOrder.ASCENDING,
        conn=None,
        lock: bool = False,
    ) -> Cart:
        """
        Assemble the user's cart.

        Args:
            user_id: Owner of the cart.
            sort_by: Line ordering.
            sort_order: Direction applied after sorting.
            conn: Optional transaction connection shared by all reads.
            lock: Lock the cart lines until ``conn``'s transaction ends.

        Raises:
            ConsistencyError: If a line's food or a food's category vanished
                between the reads.
        """
        items = self.cart_repo.get_for_user(user_id, conn=conn, lock=lock)
        food = self.food_repo.get_in_cart(user_id, conn=conn)
        categories = index_by_id(self.category_repo.get_all(conn=conn))
        return assemble_cart(items, attach_categories(food, categories), sort_by, sort_order)

    def contains(self, user_id: int, food_id: int) -> bool:
        return self.cart_repo.contains(user_id, food_id)

    def add_item(self, user_id: int, food_id: int, count: int = 1) -> int:
        self._require_positive(count)
        return self.cart_repo.add(user_id, food_id, count)

    def update_count(self, user_id: int, item_id: int, count: int) -> bool:
        self._require_positive(count)
        return self.cart_repo.update_count(user_id, item_id, count)

    def delete_item(self, user_id: int, item_id: int) -> bool:
        return self.cart_repo.delete(user_id, item_id)

    @staticmethod
    def _require_positive(count: int) -> None:
        if count <= 0:
            raise DomainError("quantity must be positive")
