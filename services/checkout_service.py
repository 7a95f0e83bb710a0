"""
services/checkout_service.py
-----------------------------
Turns a user's cart into an order.

Workflow (one database transaction):
    1. Lock and load the cart through the cart assembly.
    2. Reject an empty cart.
    3. Check the delivery address belongs to the user.
    4. Insert the order header.
    5. Insert one line per cart line, freezing quantity and unit price.
    6. Delete exactly the cart lines that were consumed.

Any failure rolls every step back. A concurrent checkout by the same user
waits on the row locks and then sees an empty cart.
"""

from db.connection import transaction as db_transaction
from models.filters import SortCartBy, SortOrder
from repositories.address_repo import AddressRepository
from repositories.cart_repo import CartRepository
from repositories.order_repo import OrderRepository
from services.cart_service import CartService
from utils.errors import EmptyCartError, InvalidStateError
from utils.logger import get_logger

logger = get_logger(__name__)


class CheckoutService:
    def __init__(
        self,
        cart_service=None,
        cart_repo=None,
        order_repo=None,
        address_repo=None,
        transaction=None,
    ):
        self.cart_repo = cart_repo or CartRepository()
        self.cart_service = cart_service or CartService(cart_repo=self.cart_repo)
        self.order_repo = order_repo or OrderRepository()
        self.address_repo = address_repo or AddressRepository()
        self.transaction = transaction or db_transaction

    def checkout(self, user_id: int, address_id: int) -> int:
        """
        Place an order from the user's cart and empty the cart.

        Args:
            user_id: The acting customer.
            address_id: Delivery address; must be one of the user's.

        Returns:
            The new order's ID.

        Raises:
            EmptyCartError: If the cart has no lines.
            InvalidStateError: If the address isn't the user's.
            ConsistencyError: If the cart could not be assembled.
        """
        with self.transaction() as conn:
            cart = self.cart_service.load_cart(
                user_id, SortCartBy.ADD_TIME, SortOrder.ASCENDING, conn=conn, lock=True,
            )
            if cart.is_empty():
                raise EmptyCartError()
            if self.address_repo.get_for_user_by_id(user_id, address_id, conn=conn) is None:
                raise InvalidStateError("there is no address with such ID owned by the user")

            order_id = self.order_repo.create(user_id, address_id, conn=conn)
            for item in cart.items:
                self.order_repo.add_item(order_id, item.food_id, item.count, item.food.price, conn=conn)
            self.cart_repo.delete_many(user_id, [item.id for item in cart.items], conn=conn)

        logger.info(
            f"User {user_id} placed order #{order_id} with {len(cart)} lines, total {cart.total_price}"
        )
        return order_id
