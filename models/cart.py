"""
models/cart.py
--------------
Domain models for a user's cart and favorites.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from models.catalog import Food


@dataclass
class CartItem:
    """
    One cart line: a food reference and the wanted quantity.

    ``food`` and ``total_price`` are filled in by assembly.
    """
    food_id: int
    count: int
    add_time: Optional[datetime] = None
    customer_id: Optional[int] = None
    id: Optional[int] = None
    food: Optional[Food] = None
    total_price: Decimal = Decimal("0")


@dataclass
class Cart:
    items: list[CartItem] = field(default_factory=list)
    total_price: Decimal = Decimal("0")

    def is_empty(self) -> bool:
        return not self.items

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class Favorite:
    food_id: int
    add_time: Optional[datetime] = None
    user_id: Optional[int] = None
    id: Optional[int] = None
    food: Optional[Food] = None
