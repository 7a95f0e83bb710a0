from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from models.cart import CartItem
from models.catalog import Food
from models.filters import (
    OrdersFilter,
    SortCartBy,
    SortFoodBy,
    SortOrder,
    SortUsersBy,
    filter_orders,
    sort_cart_items,
    sort_food,
    sort_users,
)
from models.order import Order
from models.user import User


def _food(food_id, title, count, price):
    return Food(id=food_id, title=title, category_id=1, count=count, is_alcohol=False, price=Decimal(price))


FOOD = [
    _food(1, "Pasta", 5, "7.10"),
    _food(2, "Borscht", 12, "4.90"),
    _food(3, "Draniki", 1, "10.00"),
    _food(4, "Apple pie", 7, "4.09"),
]


@pytest.mark.parametrize("by, expected", [
    (SortFoodBy.TITLE, [4, 2, 3, 1]),
    (SortFoodBy.COUNT, [3, 1, 4, 2]),
    (SortFoodBy.PRICE, [4, 2, 1, 3]),
])
def test_sort_food_ascending(by, expected):
    assert [f.id for f in sort_food(FOOD, by)] == expected


@pytest.mark.parametrize("by", list(SortFoodBy))
def test_descending_is_exact_reverse_of_ascending(by):
    ascending = sort_food(FOOD, by, SortOrder.ASCENDING)
    descending = sort_food(FOOD, by, SortOrder.DESCENDING)
    assert descending == list(reversed(ascending))


def test_price_sort_is_numeric_not_textual():
    food = [_food(1, "a", 1, "10.00"), _food(2, "b", 1, "9.99")]
    assert [f.id for f in sort_food(food, SortFoodBy.PRICE)] == [2, 1]


def test_sort_does_not_modify_input():
    before = list(FOOD)
    sort_food(FOOD, SortFoodBy.PRICE, SortOrder.DESCENDING)
    assert FOOD == before


def test_sort_cart_items():
    start = datetime(2024, 1, 1)
    items = [
        CartItem(id=1, food_id=1, count=3, add_time=start + timedelta(minutes=2)),
        CartItem(id=2, food_id=2, count=1, add_time=start),
        CartItem(id=3, food_id=3, count=2, add_time=start + timedelta(minutes=1)),
    ]
    assert [i.id for i in sort_cart_items(items, SortCartBy.ADD_TIME)] == [2, 3, 1]
    assert [i.id for i in sort_cart_items(items, SortCartBy.COUNT, SortOrder.DESCENDING)] == [1, 3, 2]


def test_sort_users_puts_missing_names_first():
    users = [
        User(id=1, username="zed", password="", birth_date=date(2000, 1, 1), first_name="Anna"),
        User(id=2, username="amy", password="", birth_date=date(2000, 1, 1)),
        User(id=3, username="kim", password="", birth_date=date(2000, 1, 1), first_name="Boris"),
    ]
    assert [u.id for u in sort_users(users, SortUsersBy.USERNAME)] == [2, 3, 1]
    assert [u.id for u in sort_users(users, SortUsersBy.FIRST_NAME)] == [2, 1, 3]
    assert [u.id for u in sort_users(users, SortUsersBy.LAST_NAME)] == [1, 2, 3]


def test_sort_accepts_plain_string_values():
    assert [f.id for f in sort_food(FOOD, "Count", "Descending")] == [2, 4, 1, 3]


def test_orders_filter():
    now = datetime(2024, 1, 1)
    waiting = Order(id=1, customer_id=1, address_id=1)
    taken = Order(id=2, customer_id=1, address_id=1, rider_id=5)
    done = Order(id=3, customer_id=1, address_id=1, rider_id=5, completed_time=now)
    orders = [waiting, taken, done]

    assert filter_orders(orders, OrdersFilter.ALL) == orders
    assert filter_orders(orders, OrdersFilter.IN_PROGRESS) == [taken]
    assert filter_orders(orders, OrdersFilter.COMPLETED) == [done]
