"""
repositories/address_repo.py
-----------------------------
Data access layer for delivery addresses. Every query is scoped
to the owning user except the batch lookup used by order assembly.
"""

from typing import Iterable, Optional

from models.address import Address
from repositories.base import BaseRepository
from repositories.mappers import row_to_address
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, customer_id, locality, street, house, corps, apartment"


class AddressRepository(BaseRepository):
    """Repository for CRUD operations on the addresses table."""

    def add(self, user_id: int, address: Address) -> int:
        sql = """
            INSERT INTO addresses (customer_id, locality, street, house, corps, apartment)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING id;
        """
        address_id = self._insert(sql, (
            user_id, address.locality, address.street,
            address.house, address.corps, address.apartment,
        ))
        logger.info(f"Added address #{address_id} for user {user_id}")
        return address_id

    def get_for_user(self, user_id: int) -> list[Address]:
        """Newest addresses first."""
        sql = f"SELECT {_COLUMNS} FROM addresses WHERE customer_id = %s ORDER BY id DESC;"
        return self._fetch_all(sql, (user_id,), row_to_address)

    def get_for_user_by_id(self, user_id: int, address_id: int, conn=None) -> Optional[Address]:
        sql = f"SELECT {_COLUMNS} FROM addresses WHERE id = %s AND customer_id = %s;"
        return self._fetch_one(sql, (address_id, user_id), row_to_address, conn)

    def get_by_ids(self, address_ids: Iterable[int], conn=None) -> list[Address]:
        ids = list(set(address_ids))
        if not ids:
            return []
        sql = f"SELECT {_COLUMNS} FROM addresses WHERE id = ANY(%s);"
        return self._fetch_all(sql, (ids,), row_to_address, conn)

    def update(self, user_id: int, address: Address) -> bool:
        """
        Update an address owned by the user.

        Returns:
            True if a row was updated, False otherwise.
        """
        sql = """
            UPDATE addresses
            SET locality = %s, street = %s, house = %s, corps = %s, apartment = %s
            WHERE id = %s AND customer_id = %s;
        """
        return self._execute(sql, (
            address.locality, address.street, address.house,
            address.corps, address.apartment, address.id, user_id,
        )) > 0

    def delete(self, user_id: int, address_id: int) -> bool:
        sql = "DELETE FROM addresses WHERE id = %s AND customer_id = %s;"
        deleted = self._execute(sql, (address_id, user_id)) > 0
        if deleted:
            logger.info(f"Deleted address #{address_id} for user {user_id}")
        return deleted
