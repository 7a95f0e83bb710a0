from datetime import date

import pytest

from models.address import Address
from models.filters import SortOrder, SortUsersBy
from models.notification import Notification
from models.user import User, UserRole
from tests.conftest import PASSWORD
from utils.errors import DomainError, NotFoundError


def test_sign_up_stores_digest_and_customer_role(services, repos):
    user = User(username="dave", password="", birth_date=date(2001, 2, 3), role=UserRole.MANAGER)
    user_id = services.users.sign_up(user, "hunter2")

    stored = repos.users.get_by_id(user_id)
    assert stored.role == UserRole.CUSTOMER
    assert stored.password != "hunter2"
    assert len(stored.password) == 64
    assert services.users.credentials_valid("dave", "hunter2")
    assert not services.users.credentials_valid("dave", "wrong")


def test_sign_up_requires_username_and_password(services):
    with pytest.raises(DomainError):
        services.users.sign_up(User(username="", password="", birth_date=date(2000, 1, 1)), "x")
    with pytest.raises(DomainError):
        services.users.sign_up(User(username="eve", password="", birth_date=date(2000, 1, 1)), "")


def test_lookup_by_name_and_id(services, world):
    assert services.users.user_by_name("alice").id == world.alice
    assert services.users.user_by_id(world.rita).username == "rita"
    assert services.users.credentials_valid("alice", PASSWORD)
    with pytest.raises(NotFoundError):
        services.users.user_by_name("nobody")
    with pytest.raises(NotFoundError):
        services.users.user_by_id(9999)


def test_users_sorting(services, world):
    names = [u.username for u in services.users.users(SortUsersBy.USERNAME, SortOrder.DESCENDING)]
    assert names == ["rob", "rita", "mike", "carol", "alice"]
    by_last = [u.username for u in services.users.users(SortUsersBy.LAST_NAME)]
    assert by_last[-3:] == ["rita", "mike", "alice"]


def test_set_role(services, repos, world):
    assert services.users.set_role("carol", UserRole.RIDER)
    assert repos.users.get_by_id(world.carol).role == UserRole.RIDER
    assert not services.users.set_role("nobody", UserRole.RIDER)


def test_addresses_are_scoped_to_owner(services, world):
    address_id = services.users.add_address(world.alice, Address(locality="Brest", street="Sovetskaya", house=9))
    assert [a.id for a in services.users.addresses(world.alice)] == [address_id, world.home]

    moved = Address(id=address_id, locality="Brest", street="Gogolya", house=3, apartment="12")
    assert not services.users.update_address(world.carol, moved)
    assert services.users.update_address(world.alice, moved)
    assert services.users.addresses(world.alice)[0].street == "Gogolya"

    assert not services.users.delete_address(world.carol, address_id)
    assert services.users.delete_address(world.alice, address_id)


def test_direct_notification(services, world):
    notification_id = services.notifications.send(world.alice, Notification(title="Your order is on its way"))
    notifications = services.notifications.notifications(world.alice)
    assert [n.id for n in notifications] == [notification_id]
    assert services.notifications.notifications(world.carol) == []
    with pytest.raises(DomainError):
        services.notifications.send(world.alice, Notification(title=""))


def test_broadcast_reaches_every_user_of_a_role(services, world):
    ids = services.notifications.broadcast(UserRole.RIDER, Notification(title="Rain", description="Drive safe"))
    assert len(ids) == 2
    assert len(services.notifications.notifications(world.rita)) == 1
    assert len(services.notifications.notifications(world.rob)) == 1
    assert services.notifications.notifications(world.alice) == []


def test_broadcast_is_all_or_nothing(services, repos, world, store, monkeypatch):
    real_add = repos.notifications.add
    calls = []

    def flaky_add(user_id, notification, conn=None):
        calls.append(user_id)
        if len(calls) == 2:
            raise RuntimeError("connection reset")
        return real_add(user_id, notification, conn=conn)

    monkeypatch.setattr(repos.notifications, "add", flaky_add)
    with pytest.raises(RuntimeError):
        services.notifications.broadcast(UserRole.RIDER, Notification(title="Rain"))
    assert store.notifications == {}
