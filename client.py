"""
client.py
---------
Public operation surface of the delivery core.

One ``async`` method per use case. Callers pass the already-authenticated
username and validated arguments; the client resolves the acting user,
applies the authorization policy and runs the blocking service call on a
shared worker pool, so concurrent operations never block each other.

Usage:
    init_pool()
    async with DeliveryClient() as client:
        cart = await client.user_cart("alice")
"""

import asyncio
import functools
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from config import WORKER_THREADS
from models.address import Address
from models.cart import Cart, Favorite
from models.catalog import Category, Food, PreviewOf
from models.filters import OrdersFilter, SortCartBy, SortFoodBy, SortOrder, SortUsersBy
from models.notification import Notification
from models.order import Feedback, Order
from models.user import User, UserRole
from security.policy import Action, authorize
from services.cart_service import CartService
from services.catalog_service import CatalogService
from services.checkout_service import CheckoutService
from services.favorite_service import FavoriteService
from services.notification_service import NotificationService
from services.order_service import OrderService
from services.user_service import UserService
from utils.logger import get_logger
from utils.uploads import Upload, read_preview

logger = get_logger(__name__)


class DeliveryClient:
    """
    Async façade over the services.

    Services can be injected (tests pass fakes); by default each one talks
    to PostgreSQL through the pool in ``db.connection``.
    """

    def __init__(
        self,
        user_service: Optional[UserService] = None,
        catalog_service: Optional[CatalogService] = None,
        cart_service: Optional[CartService] = None,
        favorite_service: Optional[FavoriteService] = None,
        order_service: Optional[OrderService] = None,
        checkout_service: Optional[CheckoutService] = None,
        notification_service: Optional[NotificationService] = None,
        max_workers: int = WORKER_THREADS,
    ):
        self.user_service = user_service or UserService()
        self.catalog_service = catalog_service or CatalogService()
        self.cart_service = cart_service or CartService()
        self.favorite_service = favorite_service or FavoriteService()
        self.order_service = order_service or OrderService()
        self.checkout_service = checkout_service or CheckoutService()
        self.notification_service = notification_service or NotificationService()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="delivery-db")

    async def __aenter__(self) -> "DeliveryClient":
        return self

    async def __aexit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        """Wait for running operations and stop the worker pool."""
        self._executor.shutdown(wait=True)

    # ── HELPERS ───────────────────────────────────────────

    async def _run(self, func, *args, **kwargs):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, functools.partial(func, *args, **kwargs))

    async def _actor(self, username: str, action: Action, **kwargs) -> User:
        user = await self._run(self.user_service.user_by_name, username)
        authorize(user, action, **kwargs)
        return user

    # ── Accounts ──────────────────────────────────────────

    async def is_credentials_valid(self, username: str, password: str) -> bool:
        valid = await self._run(self.user_service.credentials_valid, username, password)
        if not valid:
            logger.warning(f"User {username} failed to authenticate")
        return valid

    async def sign_up(self, user: User, password: str) -> int:
        user_id = await self._run(self.user_service.sign_up, user, password)
        logger.info(f"User \"{user.username}\" signed up with ID {user_id}")
        return user_id

    async def current_user(self, username: str) -> User:
        return await self._run(self.user_service.user_by_name, username)

    async def user_by_id(self, user_id: int) -> User:
        return await self._run(self.user_service.user_by_id, user_id)

    async def users(
        self,
        username: str,
        sort_by: SortUsersBy = SortUsersBy.USERNAME,
        sort_order: SortOrder = SortOrder.ASCENDING,
    ) -> list[User]:
        await self._actor(username, Action.LIST_USERS)
        return await self._run(self.user_service.users, sort_by, sort_order)

    async def set_user_role(self, username: str, target_username: str, role: UserRole) -> bool:
        manager = await self._actor(username, Action.SET_USER_ROLE, target=target_username)
        changed = await self._run(self.user_service.set_role, target_username, role)
        if changed:
            logger.info(f"Manager \"{manager.username}\" set role {UserRole(role).value} for user \"{target_username}\"")
        return changed

    # ── Addresses ─────────────────────────────────────────

    async def user_addresses(self, username: str) -> list[Address]:
        user = await self._actor(username, Action.MANAGE_OWN_DATA)
        return await self._run(self.user_service.addresses, user.id)

    async def add_user_address(self, username: str, address: Address) -> int:
        user = await self._actor(username, Action.MANAGE_OWN_DATA)
        address_id = await self._run(self.user_service.add_address, user.id, address)
        logger.info(f"User \"{username}\" added new address with ID {address_id}")
        return address_id

    async def update_user_address(self, username: str, address: Address) -> bool:
        user = await self._actor(username, Action.MANAGE_OWN_DATA)
        return await self._run(self.user_service.update_address, user.id, address)

    async def delete_user_address(self, username: str, address_id: int) -> bool:
        user = await self._actor(username, Action.MANAGE_OWN_DATA)
        deleted = await self._run(self.user_service.delete_address, user.id, address_id)
        if deleted:
            logger.info(f"User \"{username}\" deleted address with ID {address_id}")
        return deleted

    # ── Catalog ───────────────────────────────────────────

    async def categories(self) -> list[Category]:
        return await self._run(self.catalog_service.categories)

    async def add_category(self, username: str, category: Category, preview: Optional[Upload] = None) -> int:
        manager = await self._actor(username, Action.MANAGE_CATALOG)
        category_id = await self._run(self.catalog_service.add_category, category, read_preview(preview))
        logger.info(f"Manager \"{manager.username}\" added new category \"{category.title}\"")
        return category_id

    async def update_category(self, username: str, category: Category, preview: Optional[Upload] = None) -> bool:
        await self._actor(username, Action.MANAGE_CATALOG)
        return await self._run(self.catalog_service.update_category, category, read_preview(preview))

    async def delete_category(self, username: str, category_id: int) -> bool:
        manager = await self._actor(username, Action.MANAGE_CATALOG)
        deleted = await self._run(self.catalog_service.delete_category, category_id)
        if deleted:
            logger.info(f"Manager \"{manager.username}\" deleted category with ID {category_id}")
        return deleted

    async def food(self, food_id: int) -> Optional[Food]:
        return await self._run(self.catalog_service.food, food_id)

    async def food_in_category(
        self,
        category_id: int,
        sort_by: SortFoodBy = SortFoodBy.TITLE,
        sort_order: SortOrder = SortOrder.ASCENDING,
    ) -> list[Food]:
        return await self._run(self.catalog_service.food_in_category, category_id, sort_by, sort_order)

    async def add_food(self, username: str, food: Food, preview: Optional[Upload] = None) -> int:
        manager = await self._actor(username, Action.MANAGE_CATALOG)
        food_id = await self._run(self.catalog_service.add_food, food, read_preview(preview))
        logger.info(f"Manager \"{manager.username}\" added new food \"{food.title}\"")
        return food_id

    async def update_food(self, username: str, food: Food, preview: Optional[Upload] = None) -> bool:
        await self._actor(username, Action.MANAGE_CATALOG)
        return await self._run(self.catalog_service.update_food, food, read_preview(preview))

    async def delete_food(self, username: str, food_id: int) -> bool:
        manager = await self._actor(username, Action.MANAGE_CATALOG)
        deleted = await self._run(self.catalog_service.delete_food, food_id)
        if deleted:
            logger.info(f"Manager \"{manager.username}\" deleted food with ID {food_id}")
        return deleted

    async def preview(self, of: PreviewOf, entity_id: int) -> Optional[bytes]:
        return await self._run(self.catalog_service.preview, of, entity_id)

    # ── Favorites ─────────────────────────────────────────

    async def is_user_favorite(self, username: str, food_id: int) -> bool:
        user = await self._actor(username, Action.MANAGE_OWN_DATA)
        return await self._run(self.favorite_service.is_favorite, user.id, food_id)

    async def user_favorites(self, username: str) -> list[Favorite]:
        user = await self._actor(username, Action.MANAGE_OWN_DATA)
        return await self._run(self.favorite_service.favorites, user.id)

    async def add_user_favorite(self, username: str, food_id: int) -> int:
        user = await self._actor(username, Action.MANAGE_OWN_DATA)
        favorite_id = await self._run(self.favorite_service.add, user.id, food_id)
        logger.info(f"User \"{username}\" added food with ID {food_id} to favorites")
        return favorite_id

    async def delete_user_favorite(self, username: str, favorite_id: int) -> bool:
        user = await self._actor(username, Action.MANAGE_OWN_DATA)
        return await self._run(self.favorite_service.delete, user.id, favorite_id)

    async def toggle_user_favorite(self, username: str, food_id: int) -> bool:
        user = await self._actor(username, Action.MANAGE_OWN_DATA)
        return await self._run(self.favorite_service.toggle, user.id, food_id)

    # ── Cart ──────────────────────────────────────────────

    async def is_in_user_cart(self, username: str, food_id: int) -> bool:
        user = await self._actor(username, Action.MANAGE_OWN_DATA)
        return await self._run(self.cart_service.contains, user.id, food_id)

    async def user_cart(
        self,
        username: str,
        sort_by: SortCartBy = SortCartBy.ADD_TIME,
        sort_order: SortOrder = SortOrder.ASCENDING,
    ) -> Cart:
        user = await self._actor(username, Action.MANAGE_OWN_DATA)
        return await self._run(self.cart_service.load_cart, user.id, sort_by, sort_order)

    async def add_user_cart_item(self, username: str, food_id: int, count: int = 1) -> int:
        user = await self._actor(username, Action.MANAGE_OWN_DATA)
        item_id = await self._run(self.cart_service.add_item, user.id, food_id, count)
        logger.info(f"User \"{username}\" added food with ID {food_id} into the cart")
        return item_id

    async def update_user_cart_item(self, username: str, item_id: int, count: int) -> bool:
        user = await self._actor(username, Action.MANAGE_OWN_DATA)
        return await self._run(self.cart_service.update_count, user.id, item_id, count)

    async def delete_user_cart_item(self, username: str, item_id: int) -> bool:
        user = await self._actor(username, Action.MANAGE_OWN_DATA)
        deleted = await self._run(self.cart_service.delete_item, user.id, item_id)
        if deleted:
            logger.info(f"User \"{username}\" deleted cart item with ID {item_id}")
        return deleted

    # ── Orders ────────────────────────────────────────────

    async def make_order_from_user_cart(self, username: str, address_id: int) -> int:
        user = await self._actor(username, Action.PLACE_ORDER)
        return await self._run(self.checkout_service.checkout, user.id, address_id)

    async def orders(self, username: str, status: OrdersFilter = OrdersFilter.ALL) -> list[Order]:
        await self._actor(username, Action.LIST_ALL_ORDERS)
        return await self._run(self.order_service.orders, status)

    async def user_orders(self, username: str, status: OrdersFilter = OrdersFilter.ALL) -> list[Order]:
        user = await self._actor(username, Action.MANAGE_OWN_DATA)
        return await self._run(self.order_service.user_orders, user.id, status)

    async def user_order(self, username: str, order_id: int) -> Optional[Order]:
        user = await self._actor(username, Action.MANAGE_OWN_DATA)
        return await self._run(self.order_service.user_order, user.id, order_id)

    async def take_order(self, username: str, order_id: int) -> bool:
        rider = await self._actor(username, Action.TAKE_ORDER)
        return await self._run(self.order_service.take, rider.id, order_id)

    async def complete_order(self, username: str, order_id: int) -> bool:
        rider = await self._actor(username, Action.COMPLETE_ORDER)
        return await self._run(self.order_service.complete, rider.id, order_id)

    async def cancel_order(self, username: str, order_id: int) -> bool:
        user = await self._actor(username, Action.CANCEL_ORDER)
        return await self._run(self.order_service.cancel, user.id, order_id)

    async def add_feedback(
        self,
        username: str,
        order_id: int,
        rating: Optional[int] = None,
        comment: Optional[str] = None,
    ) -> int:
        user = await self._actor(username, Action.LEAVE_FEEDBACK)
        feedback = Feedback(order_id=order_id, rating=rating, comment=comment)
        return await self._run(self.order_service.add_feedback, user.id, feedback)

    # ── Notifications ─────────────────────────────────────

    async def user_notifications(self, username: str) -> list[Notification]:
        user = await self._actor(username, Action.MANAGE_OWN_DATA)
        return await self._run(self.notification_service.notifications, user.id)

    async def send_direct_notification(self, username: str, target_user_id: int, notification: Notification) -> int:
        sender = await self._actor(username, Action.SEND_DIRECT_NOTIFICATION)
        notification_id = await self._run(self.notification_service.send, target_user_id, notification)
        logger.info(f"User \"{sender.username}\" sent direct notification to user with ID {target_user_id}")
        return notification_id

    async def broadcast_notification(self, username: str, role: UserRole, notification: Notification) -> list[int]:
        manager = await self._actor(username, Action.BROADCAST_NOTIFICATION)
        ids = await self._run(self.notification_service.broadcast, role, notification)
        logger.info(f"Manager \"{manager.username}\" broadcasted a notification")
        return ids
