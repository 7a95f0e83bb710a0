"""
services/assembly.py
--------------------
Load-then-stitch assembly of nested domain objects.

Services fetch each piece with its own query, build keyed lookups once per
call, and hand everything to the functions below. A reference that cannot
be resolved against its lookup means the store changed between the reads;
it raises ConsistencyError instead of silently dropping the record.

All money arithmetic stays in Decimal.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Callable, Hashable, Iterable, Mapping, Optional, TypeVar

from models.address import Address
from models.cart import Cart, CartItem, Favorite
from models.catalog import Category, Food
from models.filters import SortCartBy, SortOrder, sort_cart_items
from models.order import Feedback, Order, OrderItem
from models.user import User
from utils.errors import ConsistencyError

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

Lookup = Mapping[K, V]


def index_by(items: Iterable[V], key: Callable[[V], K]) -> dict[K, V]:
    """Build a lookup from an iterable of entities."""
    return {key(item): item for item in items}


def index_by_id(items: Iterable[V]) -> dict[int, V]:
    return index_by(items, lambda item: item.id)


def resolve(lookup: Lookup, key, what: str):
    """Fetch ``key`` from ``lookup`` or raise ConsistencyError naming ``what``."""
    try:
        return lookup[key]
    except KeyError:
        raise ConsistencyError(what, key) from None


def line_total(price: Decimal, count: int) -> Decimal:
    return price * Decimal(count)


def grand_total(lines: Iterable) -> Decimal:
    return sum((line.total_price for line in lines), Decimal("0"))


def attach_categories(food: Iterable[Food], categories: Lookup[int, Category]) -> dict[int, Food]:
    """
    Resolve the category of every food row.

    Returns:
        The food keyed by ID, each with ``category`` filled in.
    """
    result = {}
    for item in food:
        item.category = resolve(categories, item.category_id, "category")
        result[item.id] = item
    return result


def assemble_cart(
    items: Iterable[CartItem],
    food: Lookup[int, Food],
    sort_by: SortCartBy = SortCartBy.ADD_TIME,
    sort_order: SortOrder = SortOrder.ASCENDING,
) -> Cart:
    """
    Stitch cart lines with their food and compute line and cart totals.

    Each food appears at most once per cart; a repeat means the rows came
    from a store state that violates 'food_per_customer'.
    """
    lines = []
    seen = set()
    for item in sort_cart_items(items, sort_by, sort_order):
        if item.food_id in seen:
            raise ConsistencyError("unique cart food", item.food_id)
        seen.add(item.food_id)
        item.food = resolve(food, item.food_id, "food")
        item.total_price = line_total(item.food.price, item.count)
        lines.append(item)
    return Cart(items=lines, total_price=grand_total(lines))


def assemble_favorites(favorites: Iterable[Favorite], food: Lookup[int, Food]) -> list[Favorite]:
    result = []
    for favorite in favorites:
        favorite.food = resolve(food, favorite.food_id, "food")
        result.append(favorite)
    return result


def assemble_order_items(items: Iterable[OrderItem], food: Lookup[int, Food]) -> list[OrderItem]:
    """
    Stitch order lines with their food. Line totals use the unit price
    captured at checkout, not the food's current price.
    """
    lines = []
    seen = set()
    for item in items:
        key = (item.order_id, item.food_id)
        if key in seen:
            raise ConsistencyError("unique order food", key)
        seen.add(key)
        item.food = resolve(food, item.food_id, "food")
        item.total_price = line_total(item.price, item.count)
        lines.append(item)
    return lines


def assemble_orders(
    orders: Iterable[Order],
    users: Lookup[int, User],
    addresses: Lookup[int, Address],
    items: Iterable[OrderItem],
    food: Lookup[int, Food],
    feedbacks: Lookup[int, Feedback],
) -> list[Order]:
    """
    Hydrate order headers with customer, address, optional rider, line
    items, totals and optional feedback.

    Args:
        orders: Order headers, already filtered by status.
        users: Customers and riders keyed by user ID.
        addresses: Delivery addresses keyed by ID.
        items: Every line item of the given orders.
        food: Food (with categories) keyed by ID.
        feedbacks: Feedback keyed by order ID; missing means none was left.
    """
    lines_by_order: dict[int, list[OrderItem]] = defaultdict(list)
    for item in assemble_order_items(items, food):
        lines_by_order[item.order_id].append(item)

    result = []
    for order in orders:
        order.customer = resolve(users, order.customer_id, "customer")
        order.address = resolve(addresses, order.address_id, "address")
        order.rider = _resolve_optional(users, order.rider_id, "rider")
        order.items = lines_by_order.get(order.id, [])
        order.total_price = grand_total(order.items)
        order.feedback = feedbacks.get(order.id)
        result.append(order)
    return result


def _resolve_optional(lookup: Lookup, key, what: str) -> Optional[object]:
    return None if key is None else resolve(lookup, key, what)
