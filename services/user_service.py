"""
services/user_service.py
-------------------------
Business logic for accounts, roles and delivery addresses.
"""

from models.address import Address
from models.filters import SortOrder, SortUsersBy, sort_users
from models.user import User, UserRole
from repositories.address_repo import AddressRepository
from repositories.user_repo import UserRepository
from security.auth import hash_password
from utils.errors import DomainError, NotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)


class UserService:
    """Handles sign-up, credential checks, user lookup and addresses."""

    def __init__(self, user_repo=None, address_repo=None):
        self.user_repo = user_repo or UserRepository()
        self.address_repo = address_repo or AddressRepository()

    # ── Accounts ──────────────────────────────────────────

    def credentials_valid(self, username: str, password: str) -> bool:
        return self.user_repo.credentials_valid(username, hash_password(password))

    def sign_up(self, user: User, password: str) -> int:
        """
        Register a new customer.

        The stored password is the SHA-256 digest of ``password``; any role
        on ``user`` is ignored, new accounts are always customers.
        """
        if not user.username or not user.username.strip():
            raise DomainError("username must not be empty")
        if not password:
            raise DomainError("password must not be empty")
        user.password = hash_password(password)
        user.role = UserRole.CUSTOMER
        return self.user_repo.add(user)

    def user_by_name(self, username: str) -> User:
        """
        Raises:
            NotFoundError: If no user has this username.
        """
        user = self.user_repo.get_by_name(username)
        if user is None:
            raise NotFoundError(f"there is no user \"{username}\"")
        return user

    def user_by_id(self, user_id: int) -> User:
        user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"there is no user with ID {user_id}")
        return user

    def users(
        self,
        sort_by: SortUsersBy = SortUsersBy.USERNAME,
        sort_order: SortOrder = SortOrder.ASCENDING,
    ) -> list[User]:
        return sort_users(self.user_repo.get_all(), sort_by, sort_order)

    def set_role(self, username: str, role: UserRole) -> bool:
        return self.user_repo.set_role(username, UserRole(role))

    # ── Addresses ─────────────────────────────────────────

    def addresses(self, user_id: int) -> list[Address]:
        return self.address_repo.get_for_user(user_id)

    def add_address(self, user_id: int, address: Address) -> int:
        return self.address_repo.add(user_id, address)

    def update_address(self, user_id: int, address: Address) -> bool:
        return self.address_repo.update(user_id, address)

    def delete_address(self, user_id: int, address_id: int) -> bool:
        return self.address_repo.delete(user_id, address_id)
