"""
models/user.py
--------------
Domain model for users and their roles.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    CUSTOMER = "Customer"
    MANAGER = "Manager"
    RIDER = "Rider"


@dataclass
class User:
    """
    Represents a registered user.

    Attributes:
        id: Database primary key (None for new records).
        username: Unique login name.
        password: SHA-256 hex digest of the password, never the plain text.
        birth_date: Date of birth.
        role: Customer, Manager or Rider.
        first_name: Optional first name.
        last_name: Optional last name.
    """
    username: str
    password: str
    birth_date: date
    role: UserRole = UserRole.CUSTOMER
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    id: Optional[int] = None

    def is_manager(self) -> bool:
        return self.role == UserRole.MANAGER

    def is_rider(self) -> bool:
        return self.role == UserRole.RIDER

    def __str__(self) -> str:
        return f"{self.username} ({self.role.value})"
