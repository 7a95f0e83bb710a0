"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from typing import Iterable, Optional

from models.user import User, UserRole
from repositories.base import BaseRepository
from repositories.mappers import row_to_user
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, username, password, first_name, last_name, birth_date, role"


class UserRepository(BaseRepository):
    """Repository for CRUD operations on the users table."""

    # ── CREATE ────────────────────────────────────────────

    def add(self, user: User) -> int:
        """
        Insert a new user.

        Args:
            user: The User to persist; ``password`` must already be a digest.

        Returns:
            The new user's ID.

        Raises:
            psycopg2.errors.UniqueViolation: If the username is taken.
        """
        sql = """
            INSERT INTO users (username, password, first_name, last_name, birth_date, role)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING id;
        """
        user_id = self._insert(sql, (
            user.username, user.password, user.first_name,
            user.last_name, user.birth_date, UserRole(user.role).value,
        ))
        logger.info(f"Added user \"{user.username}\" #{user_id}")
        return user_id

    # ── READ ──────────────────────────────────────────────

    def credentials_valid(self, username: str, password_digest: str) -> bool:
        sql = "SELECT EXISTS (SELECT 1 FROM users WHERE username = %s AND password = %s) AS valid;"
        return bool(self._fetch_value(sql, (username, password_digest)))

    def get_by_name(self, username: str) -> Optional[User]:
        sql = f"SELECT {_COLUMNS} FROM users WHERE username = %s;"
        return self._fetch_one(sql, (username,), row_to_user)

    def get_by_id(self, user_id: int) -> Optional[User]:
        sql = f"SELECT {_COLUMNS} FROM users WHERE id = %s;"
        return self._fetch_one(sql, (user_id,), row_to_user)

    def get_by_ids(self, user_ids: Iterable[int], conn=None) -> list[User]:
        ids = list(set(user_ids))
        if not ids:
            return []
        sql = f"SELECT {_COLUMNS} FROM users WHERE id = ANY(%s);"
        return self._fetch_all(sql, (ids,), row_to_user, conn)

    def get_all(self, conn=None) -> list[User]:
        sql = f"SELECT {_COLUMNS} FROM users ORDER BY id;"
        return self._fetch_all(sql, (), row_to_user, conn)

    def get_by_role(self, role: UserRole, conn=None) -> list[User]:
        sql = f"SELECT {_COLUMNS} FROM users WHERE role = %s ORDER BY id;"
        return self._fetch_all(sql, (UserRole(role).value,), row_to_user, conn)

    # ── UPDATE ────────────────────────────────────────────

    def set_role(self, username: str, role: UserRole) -> bool:
        """
        Change the role of the user with this username.

        Returns:
            True if a row was updated, False if there is no such user.
        """
        sql = "UPDATE users SET role = %s WHERE username = %s;"
        return self._execute(sql, (UserRole(role).value, username)) > 0
