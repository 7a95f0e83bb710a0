"""
models/filters.py
-----------------
User-selectable sort orders and order-status filters.

Everything here is pure: it works on already-loaded entities and performs
no I/O. Sorting is stable, and the direction is applied after the
comparator by reversing the ascending result, so a descending list is
always the exact reverse of the ascending one.
"""

from enum import Enum
from typing import Callable, Iterable, TypeVar

from models.cart import CartItem
from models.catalog import Food
from models.order import Order
from models.user import User

T = TypeVar("T")


class SortOrder(str, Enum):
    ASCENDING = "Ascending"
    DESCENDING = "Descending"


class SortFoodBy(str, Enum):
    TITLE = "Title"
    COUNT = "Count"
    PRICE = "Price"


class SortCartBy(str, Enum):
    COUNT = "Count"
    ADD_TIME = "AddTime"


class SortUsersBy(str, Enum):
    USERNAME = "Username"
    FIRST_NAME = "FirstName"
    LAST_NAME = "LastName"


class OrdersFilter(str, Enum):
    ALL = "All"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"


def _optional(value):
    # Missing values sort before present ones.
    return (value is not None, value if value is not None else "")


_FOOD_KEYS: dict[SortFoodBy, Callable[[Food], object]] = {
    SortFoodBy.TITLE: lambda food: food.title,
    SortFoodBy.COUNT: lambda food: food.count,
    SortFoodBy.PRICE: lambda food: food.price,
}

_CART_KEYS: dict[SortCartBy, Callable[[CartItem], object]] = {
    SortCartBy.COUNT: lambda item: item.count,
    SortCartBy.ADD_TIME: lambda item: item.add_time,
}

_USER_KEYS: dict[SortUsersBy, Callable[[User], object]] = {
    SortUsersBy.USERNAME: lambda user: user.username,
    SortUsersBy.FIRST_NAME: lambda user: _optional(user.first_name),
    SortUsersBy.LAST_NAME: lambda user: _optional(user.last_name),
}


def _sorted(items: Iterable[T], key: Callable[[T], object], order: SortOrder) -> list[T]:
    result = sorted(items, key=key)
    if SortOrder(order) == SortOrder.DESCENDING:
        result.reverse()
    return result


def sort_food(food: Iterable[Food], by: SortFoodBy, order: SortOrder = SortOrder.ASCENDING) -> list[Food]:
    """Sort food by title (lexicographic), stock count or exact-decimal price."""
    return _sorted(food, _FOOD_KEYS[SortFoodBy(by)], order)


def sort_cart_items(
    items: Iterable[CartItem], by: SortCartBy, order: SortOrder = SortOrder.ASCENDING
) -> list[CartItem]:
    """Sort cart lines by quantity or by the time they were added."""
    return _sorted(items, _CART_KEYS[SortCartBy(by)], order)


def sort_users(users: Iterable[User], by: SortUsersBy, order: SortOrder = SortOrder.ASCENDING) -> list[User]:
    """Sort users by username, first name or last name."""
    return _sorted(users, _USER_KEYS[SortUsersBy(by)], order)


def order_fits(order: Order, status: OrdersFilter) -> bool:
    """
    Check an order against a status filter.

    ALL accepts everything, IN_PROGRESS accepts taken but not completed
    orders, COMPLETED accepts orders with a completion timestamp.
    """
    status = OrdersFilter(status)
    if status == OrdersFilter.IN_PROGRESS:
        return order.is_in_progress()
    if status == OrdersFilter.COMPLETED:
        return order.is_completed()
    return True


def filter_orders(orders: Iterable[Order], status: OrdersFilter) -> list[Order]:
    return [order for order in orders if order_fits(order, status)]
