import asyncio
import io
from datetime import date
from decimal import Decimal

import pytest

from models.catalog import Category, Food, PreviewOf
from models.filters import OrdersFilter, SortCartBy, SortOrder, SortUsersBy
from models.notification import Notification
from models.user import User, UserRole
from tests.conftest import PASSWORD
from utils.errors import AccessDeniedError, EmptyCartError, InvalidFeedbackError, NotFoundError


async def test_credentials(client, world):
    assert await client.is_credentials_valid("alice", PASSWORD)
    assert not await client.is_credentials_valid("alice", "nope")
    assert not await client.is_credentials_valid("ghost", PASSWORD)


async def test_sign_up_then_log_in(client):
    user = User(username="newbie", password="", birth_date=date(1999, 9, 9))
    user_id = await client.sign_up(user, "pa55")
    assert (await client.current_user("newbie")).id == user_id
    assert await client.is_credentials_valid("newbie", "pa55")


async def test_unknown_user_is_not_found(client, world):
    with pytest.raises(NotFoundError):
        await client.user_cart("ghost")


async def test_only_managers_edit_the_catalog(client, world):
    food = Food(title="Kvass", category_id=world.drinks, count=3, is_alcohol=False, price=Decimal("1.20"))
    with pytest.raises(AccessDeniedError):
        await client.add_food("alice", food)
    with pytest.raises(AccessDeniedError):
        await client.delete_category("rita", world.drinks)

    food_id = await client.add_food("mike", food, preview=io.BytesIO(b"jpeg"))
    assert await client.preview(PreviewOf.FOOD, food_id) == b"jpeg"
    titles = [f.title for f in await client.food_in_category(world.drinks)]
    assert titles == ["Beer", "Kvass"]

    category_id = await client.add_category("mike", Category(title="Salads"))
    assert "Salads" in [c.title for c in await client.categories()]
    assert await client.delete_category("mike", category_id)


async def test_user_administration(client, world):
    with pytest.raises(AccessDeniedError):
        await client.users("alice")
    users = await client.users("mike", SortUsersBy.USERNAME)
    assert [u.username for u in users][:2] == ["alice", "carol"]

    with pytest.raises(AccessDeniedError):
        await client.set_user_role("mike", "mike", UserRole.CUSTOMER)
    with pytest.raises(AccessDeniedError):
        await client.set_user_role("alice", "carol", UserRole.MANAGER)
    assert await client.set_user_role("mike", "carol", UserRole.RIDER)
    assert (await client.user_by_id(world.carol)).role == UserRole.RIDER


async def test_set_role_for_unknown_user(client, world):
    assert await client.set_user_role("mike", "nobody", UserRole.RIDER) is False
    with pytest.raises(AccessDeniedError):
        await client.set_user_role("alice", "nobody", UserRole.MANAGER)
    with pytest.raises(AccessDeniedError):
        await client.set_user_role("rita", "nobody", UserRole.MANAGER)


async def test_full_order_lifecycle(client, world):
    await client.add_user_cart_item("alice", world.margherita, 2)
    await client.add_user_cart_item("alice", world.pepperoni, 1)
    assert await client.is_in_user_cart("alice", world.pepperoni)

    cart = await client.user_cart("alice", SortCartBy.COUNT, SortOrder.DESCENDING)
    assert cart.total_price == Decimal("13.50")
    assert cart.items[0].count == 2

    order_id = await client.make_order_from_user_cart("alice", world.home)
    assert (await client.user_cart("alice")).is_empty()
    with pytest.raises(EmptyCartError):
        await client.make_order_from_user_cart("alice", world.home)

    with pytest.raises(AccessDeniedError):
        await client.orders("alice")
    with pytest.raises(AccessDeniedError):
        await client.take_order("mike", order_id)

    assert await client.take_order("rita", order_id)
    assert not await client.take_order("rob", order_id)
    assert not await client.cancel_order("alice", order_id)

    in_progress = await client.orders("mike", OrdersFilter.IN_PROGRESS)
    assert [o.id for o in in_progress] == [order_id]

    with pytest.raises(InvalidFeedbackError):
        await client.add_feedback("alice", order_id)
    assert not await client.complete_order("rob", order_id)
    assert await client.complete_order("rita", order_id)

    await client.add_feedback("alice", order_id, rating=5, comment="Great")
    [order] = await client.user_orders("alice", OrdersFilter.COMPLETED)
    assert order.total_price == Decimal("13.50")
    assert order.feedback.rating == 5
    assert order.rider.username == "rita"


async def test_cancel_unclaimed_order(client, world):
    await client.add_user_cart_item("alice", world.beer, 1)
    order_id = await client.make_order_from_user_cart("alice", world.home)
    order = await client.user_order("alice", order_id)
    assert [item.food.title for item in order.items] == ["Beer"]
    assert await client.user_order("carol", order_id) is None

    assert not await client.cancel_order("carol", order_id)
    assert await client.cancel_order("alice", order_id)
    assert await client.user_orders("alice") == []


async def test_favorites_and_addresses(client, world):
    assert await client.toggle_user_favorite("carol", world.beer)
    assert await client.is_user_favorite("carol", world.beer)
    [favorite] = await client.user_favorites("carol")
    assert favorite.food.title == "Beer"
    assert await client.delete_user_favorite("carol", favorite.id)

    addresses = await client.user_addresses("carol")
    assert [a.id for a in addresses] == [world.office]
    assert not await client.delete_user_address("carol", world.home)


async def test_notifications(client, world):
    with pytest.raises(AccessDeniedError):
        await client.send_direct_notification("alice", world.carol, Notification(title="Hi"))
    await client.send_direct_notification("rita", world.alice, Notification(title="Arriving soon"))
    assert [n.title for n in await client.user_notifications("alice")] == ["Arriving soon"]

    with pytest.raises(AccessDeniedError):
        await client.broadcast_notification("rita", UserRole.CUSTOMER, Notification(title="Sale"))
    ids = await client.broadcast_notification("mike", UserRole.CUSTOMER, Notification(title="Sale"))
    assert len(ids) == 2
    assert [n.title for n in await client.user_notifications("carol")] == ["Sale"]


async def test_operations_run_concurrently(client, world):
    await client.add_user_cart_item("alice", world.beer, 2)
    results = await asyncio.gather(
        client.user_cart("alice"),
        client.categories(),
        client.food_in_category(world.pizza),
        client.user_addresses("alice"),
    )
    cart, categories, pizza, addresses = results
    assert cart.total_price == Decimal("4.50")
    assert len(categories) == 2
    assert len(pizza) == 2
    assert len(addresses) == 1
