"""
services/order_service.py
--------------------------
Business logic for reading orders and moving them through their lifecycle.
"""

from typing import Optional

from models.filters import OrdersFilter, filter_orders
from models.order import MAX_RATING, MIN_RATING, Feedback, Order
from repositories.address_repo import AddressRepository
from repositories.category_repo import CategoryRepository
from repositories.feedback_repo import FeedbackRepository
from repositories.food_repo import FoodRepository
from repositories.order_repo import OrderRepository
from repositories.user_repo import UserRepository
from services.assembly import assemble_orders, attach_categories, index_by, index_by_id
from utils.errors import InvalidFeedbackError, InvalidStateError
from utils.logger import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Handles order listing and lifecycle transitions.

    Listing filters the bare order headers by status first and only then
    hydrates the survivors. Hydration issues one batched read per related
    table (users, addresses, line items, food, categories, feedback) and
    stitches the results through keyed lookups.
    """

    def __init__(
        self,
        order_repo=None,
        user_repo=None,
        address_repo=None,
        food_repo=None,
        category_repo=None,
        feedback_repo=None,
    ):
        self.order_repo = order_repo or OrderRepository()
        self.user_repo = user_repo or UserRepository()
        self.address_repo = address_repo or AddressRepository()
        self.food_repo = food_repo or FoodRepository()
        self.category_repo = category_repo or CategoryRepository()
        self.feedback_repo = feedback_repo or FeedbackRepository()

    # ── READ ──────────────────────────────────────────────

    def orders(self, status: OrdersFilter = OrdersFilter.ALL) -> list[Order]:
        return self._hydrate(filter_orders(self.order_repo.get_all(), status))

    def user_orders(self, user_id: int, status: OrdersFilter = OrdersFilter.ALL) -> list[Order]:
        return self._hydrate(filter_orders(self.order_repo.get_for_user(user_id), status))

    def user_order(self, user_id: int, order_id: int) -> Optional[Order]:
        order = self.order_repo.get_for_user_by_id(user_id, order_id)
        if order is None:
            return None
        return self._hydrate([order])[0]

    # ── TRANSITIONS ───────────────────────────────────────

    def take(self, rider_id: int, order_id: int) -> bool:
        return self.order_repo.take(rider_id, order_id)

    def complete(self, rider_id: int, order_id: int) -> bool:
        return self.order_repo.complete(rider_id, order_id)

    def cancel(self, customer_id: int, order_id: int) -> bool:
        return self.order_repo.delete_untaken(customer_id, order_id)

    def add_feedback(self, customer_id: int, feedback: Feedback) -> int:
        """
        Leave feedback on the customer's own completed order.

        Raises:
            InvalidFeedbackError: If both rating and comment are missing,
                or the rating is outside 0..5.
            InvalidStateError: If the order is not the customer's, is not
                completed, or already has feedback.
        """
        if not feedback.has_content():
            raise InvalidFeedbackError("either rating or comment must be provided")
        if feedback.rating is not None and not MIN_RATING <= feedback.rating <= MAX_RATING:
            raise InvalidFeedbackError(f"rating must be between {MIN_RATING} and {MAX_RATING}")

        feedback_id = self.feedback_repo.add(customer_id, feedback)
        if feedback_id is None:
            raise InvalidStateError(
                "there is no completed order without feedback with such ID owned by the user"
            )
        return feedback_id

    # ── HELPERS ───────────────────────────────────────────

    def _hydrate(self, orders: list[Order]) -> list[Order]:
        if not orders:
            return []
        order_ids = [order.id for order in orders]
        user_ids = {order.customer_id for order in orders}
        user_ids.update(order.rider_id for order in orders if order.rider_id is not None)

        users = index_by_id(self.user_repo.get_by_ids(user_ids))
        addresses = index_by_id(self.address_repo.get_by_ids(order.address_id for order in orders))
        items = self.order_repo.get_items(order_ids)
        food = self.food_repo.get_in_orders(order_ids)
        categories = index_by_id(self.category_repo.get_all())
        feedbacks = index_by(self.feedback_repo.get_for_orders(order_ids), lambda f: f.order_id)

        return assemble_orders(
            orders, users, addresses, items, attach_categories(food, categories), feedbacks,
        )
