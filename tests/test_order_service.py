import pytest

from models.filters import OrdersFilter
from models.order import Feedback
from utils.errors import ConsistencyError, InvalidFeedbackError, InvalidStateError


@pytest.fixture
def placed(services, world):
    """Three orders by alice: one waiting, one in progress, one completed."""
    ids = []
    for food in (world.margherita, world.pepperoni, world.beer):
        services.cart.add_item(world.alice, food, 1)
        ids.append(services.checkout.checkout(world.alice, world.home))
    waiting, in_progress, completed = ids
    assert services.orders.take(world.rita, in_progress)
    assert services.orders.take(world.rita, completed)
    assert services.orders.complete(world.rita, completed)
    return waiting, in_progress, completed


def _ids(orders):
    return sorted(order.id for order in orders)


def test_status_filters(services, placed):
    waiting, in_progress, completed = placed
    assert _ids(services.orders.orders(OrdersFilter.ALL)) == sorted(placed)
    assert _ids(services.orders.orders(OrdersFilter.IN_PROGRESS)) == [in_progress]
    assert _ids(services.orders.orders(OrdersFilter.COMPLETED)) == [completed]


def test_user_orders_are_scoped(services, world, placed):
    assert _ids(services.orders.user_orders(world.alice)) == sorted(placed)
    assert services.orders.user_orders(world.carol) == []


def test_hydrated_order_has_rider_and_items(services, world, placed):
    _, in_progress, _ = placed
    order = services.orders.user_order(world.alice, in_progress)
    assert order.rider.username == "rita"
    assert order.address.street == "Lenina"
    assert [item.food.title for item in order.items] == ["Pepperoni"]
    assert order.items[0].food.category.title == "Pizza"


def test_take_only_once(services, world, placed):
    waiting, in_progress, _ = placed
    assert services.orders.take(world.rob, waiting)
    assert not services.orders.take(world.rita, waiting)
    assert not services.orders.take(world.rob, in_progress)


def test_complete_only_by_assignee_and_once(services, world, placed):
    waiting, in_progress, completed = placed
    assert not services.orders.complete(world.rob, in_progress)
    assert not services.orders.complete(world.rita, waiting)
    assert not services.orders.complete(world.rita, completed)
    assert services.orders.complete(world.rita, in_progress)


def test_cancel_only_own_unclaimed(services, world, placed):
    waiting, in_progress, _ = placed
    assert not services.orders.cancel(world.carol, waiting)
    assert not services.orders.cancel(world.alice, in_progress)
    assert services.orders.cancel(world.alice, waiting)
    assert services.orders.user_order(world.alice, waiting) is None


def test_feedback_needs_content(services, world, placed):
    _, _, completed = placed
    with pytest.raises(InvalidFeedbackError):
        services.orders.add_feedback(world.alice, Feedback(order_id=completed))
    with pytest.raises(InvalidFeedbackError):
        services.orders.add_feedback(world.alice, Feedback(order_id=completed, rating=6))


def test_feedback_rejected_for_ineligible_orders(services, world, placed):
    waiting, in_progress, completed = placed
    for order_id in (waiting, in_progress):
        with pytest.raises(InvalidStateError):
            services.orders.add_feedback(world.alice, Feedback(order_id=order_id, rating=4))
    with pytest.raises(InvalidStateError):
        services.orders.add_feedback(world.carol, Feedback(order_id=completed, rating=4))


def test_feedback_succeeds_exactly_once(services, world, placed):
    _, _, completed = placed
    feedback_id = services.orders.add_feedback(world.alice, Feedback(order_id=completed, comment="Hot and fast"))
    assert feedback_id is not None
    with pytest.raises(InvalidStateError):
        services.orders.add_feedback(world.alice, Feedback(order_id=completed, rating=5))

    order = services.orders.user_order(world.alice, completed)
    assert order.feedback.comment == "Hot and fast"
    assert order.feedback.rating is None


def test_missing_address_is_a_consistency_fault(services, store, world, placed):
    del store.addresses[world.home]
    with pytest.raises(ConsistencyError):
        services.orders.user_orders(world.alice)


def test_filter_runs_before_hydration(services, store, world, placed):
    waiting, in_progress, completed = placed
    # Break only the waiting order; filtered-out orders are never hydrated.
    store.orders[waiting].address_id = 9999
    assert _ids(services.orders.orders(OrdersFilter.COMPLETED)) == [completed]
    with pytest.raises(ConsistencyError):
        services.orders.orders(OrdersFilter.ALL)
