"""
models/address.py
-----------------
Domain model for a user's delivery address.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Address:
    locality: str
    street: str
    house: int
    corps: Optional[str] = None
    apartment: Optional[str] = None
    customer_id: Optional[int] = None
    id: Optional[int] = None

    def __str__(self) -> str:
        line = f"{self.locality}, {self.street} {self.house}"
        if self.corps:
            line += f" k{self.corps}"
        if self.apartment:
            line += f", apt. {self.apartment}"
        return line
