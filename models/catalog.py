"""
models/catalog.py
-----------------
Domain models for the catalog: categories and the food inside them.
Prices are exact decimals, never floats.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class PreviewOf(str, Enum):
    """Kind of entity a preview image belongs to."""
    CATEGORY = "category"
    FOOD = "food"


@dataclass
class Category:
    """
    A catalog section.

    The preview image is stored alongside but never loaded with the
    category; it is fetched separately by (PreviewOf.CATEGORY, id).
    """
    title: str
    description: Optional[str] = None
    id: Optional[int] = None

    def __str__(self) -> str:
        return self.title


@dataclass
class Food:
    """
    A purchasable item.

    Attributes:
        id: Database primary key (None for new records).
        title: Display name.
        category_id: Owning category.
        count: Items in stock.
        is_alcohol: Whether the item is an alcoholic drink.
        price: Unit price.
        description: Optional human-readable description.
        category: The resolved Category, filled in by assembly.
    """
    title: str
    category_id: int
    count: int
    is_alcohol: bool
    price: Decimal
    description: Optional[str] = None
    id: Optional[int] = None
    category: Optional[Category] = None

    def __str__(self) -> str:
        return f"{self.title}: {self.price:.2f} ({self.count} left)"
