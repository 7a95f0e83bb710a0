from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from client import DeliveryClient
from models.address import Address
from models.catalog import Category, Food
from models.user import User, UserRole
from security.auth import hash_password
from services.cart_service import CartService
from services.catalog_service import CatalogService
from services.checkout_service import CheckoutService
from services.favorite_service import FavoriteService
from services.notification_service import NotificationService
from services.order_service import OrderService
from services.user_service import UserService
from tests.fakes import (
    FakeAddressRepository,
    FakeCartRepository,
    FakeCategoryRepository,
    FakeFavoriteRepository,
    FakeFeedbackRepository,
    FakeFoodRepository,
    FakeNotificationRepository,
    FakeOrderRepository,
    FakeUserRepository,
    Store,
    make_transaction,
)

PASSWORD = "secret"


@pytest.fixture
def store():
    return Store()


@pytest.fixture
def repos(store):
    return SimpleNamespace(
        users=FakeUserRepository(store),
        addresses=FakeAddressRepository(store),
        categories=FakeCategoryRepository(store),
        food=FakeFoodRepository(store),
        cart=FakeCartRepository(store),
        favorites=FakeFavoriteRepository(store),
        orders=FakeOrderRepository(store),
        feedbacks=FakeFeedbackRepository(store),
        notifications=FakeNotificationRepository(store),
    )


@pytest.fixture
def services(store, repos):
    transaction = make_transaction(store)
    cart = CartService(cart_repo=repos.cart, food_repo=repos.food, category_repo=repos.categories)
    return SimpleNamespace(
        users=UserService(user_repo=repos.users, address_repo=repos.addresses),
        catalog=CatalogService(category_repo=repos.categories, food_repo=repos.food),
        cart=cart,
        favorites=FavoriteService(
            favorite_repo=repos.favorites, food_repo=repos.food, category_repo=repos.categories,
        ),
        orders=OrderService(
            order_repo=repos.orders,
            user_repo=repos.users,
            address_repo=repos.addresses,
            food_repo=repos.food,
            category_repo=repos.categories,
            feedback_repo=repos.feedbacks,
        ),
        checkout=CheckoutService(
            cart_service=cart,
            cart_repo=repos.cart,
            order_repo=repos.orders,
            address_repo=repos.addresses,
            transaction=transaction,
        ),
        notifications=NotificationService(
            notification_repo=repos.notifications, user_repo=repos.users, transaction=transaction,
        ),
    )


def _user(username, role, first_name=None, last_name=None):
    return User(
        username=username,
        password=hash_password(PASSWORD),
        birth_date=date(1990, 1, 1),
        role=role,
        first_name=first_name,
        last_name=last_name,
    )


@pytest.fixture
def world(repos):
    """Seed a small catalog, one user of every role and a customer address."""
    alice = repos.users.add(_user("alice", UserRole.CUSTOMER, "Alice", "Smith"))
    carol = repos.users.add(_user("carol", UserRole.CUSTOMER, "Carol"))
    mike = repos.users.add(_user("mike", UserRole.MANAGER, "Mike", "Brown"))
    rita = repos.users.add(_user("rita", UserRole.RIDER, "Rita", "Adams"))
    rob = repos.users.add(_user("rob", UserRole.RIDER))

    pizza = repos.categories.add(Category(title="Pizza"))
    drinks = repos.categories.add(Category(title="Drinks", description="Cold"))
    margherita = repos.food.add(Food(
        title="Margherita", category_id=pizza, count=10, is_alcohol=False, price=Decimal("5.00"),
    ))
    pepperoni = repos.food.add(Food(
        title="Pepperoni", category_id=pizza, count=3, is_alcohol=False, price=Decimal("3.50"),
    ))
    beer = repos.food.add(Food(
        title="Beer", category_id=drinks, count=20, is_alcohol=True, price=Decimal("2.25"),
    ))
    home = repos.addresses.add(alice, Address(locality="Minsk", street="Lenina", house=1))
    office = repos.addresses.add(carol, Address(locality="Minsk", street="Nezavisimosti", house=4))

    return SimpleNamespace(
        alice=alice, carol=carol, mike=mike, rita=rita, rob=rob,
        pizza=pizza, drinks=drinks,
        margherita=margherita, pepperoni=pepperoni, beer=beer,
        home=home, office=office,
    )


@pytest.fixture
def client(services):
    delivery = DeliveryClient(
        user_service=services.users,
        catalog_service=services.catalog,
        cart_service=services.cart,
        favorite_service=services.favorites,
        order_service=services.orders,
        checkout_service=services.checkout,
        notification_service=services.notifications,
        max_workers=2,
    )
    yield delivery
    delivery.close()
