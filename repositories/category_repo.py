"""
repositories/category_repo.py
------------------------------
Data access layer for catalog categories.
The ``preview`` column holds a JPEG image and is only read on demand.
"""

from typing import Optional

from models.catalog import Category
from repositories.base import BaseRepository
from repositories.mappers import row_to_category
from utils.logger import get_logger

logger = get_logger(__name__)


class CategoryRepository(BaseRepository):
    """Repository for CRUD operations on the categories table."""

    def add(self, category: Category, preview: Optional[bytes] = None) -> int:
        sql = """
            INSERT INTO categories (title, description, preview)
            VALUES (%s, %s, %s)
            RETURNING id;
        """
        category_id = self._insert(sql, (category.title, category.description, preview))
        logger.info(f"Added category \"{category.title}\" #{category_id}")
        return category_id

    def get_all(self, conn=None) -> list[Category]:
        sql = "SELECT id, title, description FROM categories ORDER BY title;"
        return self._fetch_all(sql, (), row_to_category, conn)

    def get_preview(self, category_id: int) -> Optional[bytes]:
        preview = self._fetch_value("SELECT preview FROM categories WHERE id = %s;", (category_id,))
        return bytes(preview) if preview is not None else None

    def update(self, category: Category, preview: Optional[bytes] = None) -> bool:
        """
        Update title and description. The stored preview is replaced only
        when a new one is given.
        """
        sql = """
            UPDATE categories
            SET title = %s, description = %s, preview = COALESCE(%s, preview)
            WHERE id = %s;
        """
        return self._execute(sql, (category.title, category.description, preview, category.id)) > 0

    def delete(self, category_id: int) -> bool:
        """
        Raises:
            psycopg2.errors.ForeignKeyViolation: If food still belongs to it.
        """
        deleted = self._execute("DELETE FROM categories WHERE id = %s;", (category_id,)) > 0
        if deleted:
            logger.info(f"Deleted category #{category_id}")
        return deleted
