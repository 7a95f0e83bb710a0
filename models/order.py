"""
models/order.py
---------------
Domain models for orders, their line items and customer feedback.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from models.address import Address
from models.catalog import Food
from models.user import User

MIN_RATING = 0
MAX_RATING = 5


@dataclass
class Feedback:
    """
    Customer feedback on a completed order.

    At least one of ``rating`` (0..5) and ``comment`` must be present.
    """
    order_id: int
    rating: Optional[int] = None
    comment: Optional[str] = None
    id: Optional[int] = None

    def has_content(self) -> bool:
        return self.rating is not None or bool(self.comment)


@dataclass
class OrderItem:
    """
    One order line. ``count`` and ``price`` are frozen at checkout, so
    later catalog changes never reprice a placed order.
    """
    order_id: int
    food_id: int
    count: int
    price: Decimal
    id: Optional[int] = None
    food: Optional[Food] = None
    total_price: Decimal = Decimal("0")


@dataclass
class Order:
    """
    An order header plus, after assembly, every related record.

    Attributes:
        id: Database primary key.
        customer_id: Owner of the order.
        address_id: Delivery address.
        create_time: When checkout happened.
        rider_id: Rider who took the order, if any.
        completed_time: When the rider completed it, if ever.
        customer, address, rider, items, feedback: Resolved by assembly.
        total_price: Sum of the line totals.
    """
    customer_id: int
    address_id: int
    create_time: Optional[datetime] = None
    rider_id: Optional[int] = None
    completed_time: Optional[datetime] = None
    id: Optional[int] = None
    customer: Optional[User] = None
    address: Optional[Address] = None
    rider: Optional[User] = None
    items: list[OrderItem] = field(default_factory=list)
    total_price: Decimal = Decimal("0")
    feedback: Optional[Feedback] = None

    def is_taken(self) -> bool:
        return self.rider_id is not None

    def is_completed(self) -> bool:
        return self.completed_time is not None

    def is_in_progress(self) -> bool:
        return self.is_taken() and not self.is_completed()

    def __str__(self) -> str:
        if self.is_completed():
            status = "completed"
        elif self.is_taken():
            status = "in progress"
        else:
            status = "waiting for rider"
        return f"Order #{self.id} ({status}): {self.total_price:.2f}"
