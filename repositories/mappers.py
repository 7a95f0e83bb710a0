"""
repositories/mappers.py
-----------------------
Row mappers: each turns one database record (a dict keyed by column name,
as produced by RealDictCursor) into exactly one domain object.

Mappers are total for well-formed rows. A missing column raises KeyError,
which is an integration bug rather than a recoverable condition.
"""

from models.address import Address
from models.cart import CartItem, Favorite
from models.catalog import Category, Food
from models.notification import Notification
from models.order import Feedback, Order, OrderItem
from models.user import User, UserRole


def row_to_user(row) -> User:
    return User(
        id=row["id"],
        username=row["username"],
        password=row["password"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        birth_date=row["birth_date"],
        role=UserRole(row["role"]),
    )


def row_to_address(row) -> Address:
    return Address(
        id=row["id"],
        customer_id=row["customer_id"],
        locality=row["locality"],
        street=row["street"],
        house=row["house"],
        corps=row["corps"],
        apartment=row["apartment"],
    )


def row_to_category(row) -> Category:
    return Category(
        id=row["id"],
        title=row["title"],
        description=row["description"],
    )


def row_to_food(row) -> Food:
    return Food(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        category_id=row["category_id"],
        count=row["count"],
        is_alcohol=row["is_alcohol"],
        price=row["price"],
    )


def row_to_cart_item(row) -> CartItem:
    return CartItem(
        id=row["id"],
        customer_id=row["customer_id"],
        food_id=row["food_id"],
        count=row["count"],
        add_time=row["add_time"],
    )


def row_to_favorite(row) -> Favorite:
    return Favorite(
        id=row["id"],
        user_id=row["user_id"],
        food_id=row["food_id"],
        add_time=row["add_time"],
    )


def row_to_order(row) -> Order:
    return Order(
        id=row["id"],
        customer_id=row["customer_id"],
        address_id=row["address_id"],
        create_time=row["create_time"],
        rider_id=row["rider_id"],
        completed_time=row["completed_time"],
    )


def row_to_order_item(row) -> OrderItem:
    return OrderItem(
        id=row["id"],
        order_id=row["order_id"],
        food_id=row["food_id"],
        count=row["count"],
        price=row["price"],
    )


def row_to_feedback(row) -> Feedback:
    return Feedback(
        id=row["id"],
        order_id=row["order_id"],
        rating=row["rating"],
        comment=row["comment"],
    )


def row_to_notification(row) -> Notification:
    return Notification(
        id=row["id"],
        user_id=row["user_id"],
        sent_time=row["sent_time"],
        title=row["title"],
        description=row["description"],
    )
