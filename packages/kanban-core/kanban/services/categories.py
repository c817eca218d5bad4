"""
Category Service.
"""

import logging

from kanban.models.board import Category
from kanban.services.base import BaseService

logger = logging.getLogger(__name__)


class CategoryService(BaseService):
    """Create categories and resolve them by name."""

    TABLE = "project_has_categories"

    async def create(self, project_id: int, name: str, description: str = "", color_id: str = "") -> int:
        category_id = await self.adapter.insert(
            self._query(f"""
                INSERT INTO {self._table_name()} (name, project_id, description, color_id)
                VALUES ($1, $2, $3, $4)
            """),
            name, project_id, description, color_id,
        )
        logger.info(f"Created category: {category_id} - {name} (project {project_id})")
        return category_id

    async def get_by_id(self, category_id: int) -> Category | None:
        row = await self.adapter.fetchrow(
            self._query(f"SELECT * FROM {self._table_name()} WHERE id = $1"),
            category_id,
        )
        return Category.from_dict(row) if row else None

    async def get_all(self, project_id: int) -> list[Category]:
        rows = await self.adapter.fetch(
            self._query(f"SELECT * FROM {self._table_name()} WHERE project_id = $1 ORDER BY name ASC"),
            project_id,
        )
        return [Category.from_dict(row) for row in rows]

    async def get_name_by_id(self, category_id: int) -> str | None:
        return await self.adapter.fetchval(
            self._query(f"SELECT name FROM {self._table_name()} WHERE id = $1"),
            category_id,
        )

    async def get_id_by_name(self, project_id: int, name: str | None) -> int:
        """Find a category of the project by name; 0 when there is none."""
        if name is None:
            return 0

        category_id = await self.adapter.fetchval(
            self._query(f"SELECT id FROM {self._table_name()} WHERE project_id = $1 AND name = $2"),
            project_id, name,
        )
        return category_id or 0
