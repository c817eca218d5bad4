"""
Column Service.

Columns are ordered by position within a project.
"""

import logging

from kanban.models.board import Column
from kanban.services.base import BaseService

logger = logging.getLogger(__name__)


class ColumnService(BaseService):
    """Create columns and resolve them by title."""

    TABLE = "columns"

    async def create(self, project_id: int, title: str, task_limit: int = 0, description: str = "") -> int:
        """
        Append a column to the end of a project's board.

        Returns:
            New column id
        """
        table = self._table_name()
        position = await self.adapter.fetchval(
            self._query(f"SELECT COALESCE(MAX(position), 0) FROM {table} WHERE project_id = $1"),
            project_id,
        )

        column_id = await self.adapter.insert(
            self._query(f"""
                INSERT INTO {table} (title, position, project_id, task_limit, description)
                VALUES ($1, $2, $3, $4, $5)
            """),
            title, int(position or 0) + 1, project_id, task_limit, description,
        )
        logger.info(f"Created column: {column_id} - {title} (project {project_id})")
        return column_id

    async def get_by_id(self, column_id: int) -> Column | None:
        row = await self.adapter.fetchrow(
            self._query(f"SELECT * FROM {self._table_name()} WHERE id = $1"),
            column_id,
        )
        return Column.from_dict(row) if row else None

    async def get_all(self, project_id: int) -> list[Column]:
        """Get the columns of a project in board order."""
        rows = await self.adapter.fetch(
            self._query(f"""
                SELECT * FROM {self._table_name()}
                WHERE project_id = $1
                ORDER BY position ASC
            """),
            project_id,
        )
        return [Column.from_dict(row) for row in rows]

    async def get_title_by_id(self, column_id: int) -> str | None:
        return await self.adapter.fetchval(
            self._query(f"SELECT title FROM {self._table_name()} WHERE id = $1"),
            column_id,
        )

    async def get_id_by_title(self, project_id: int, title: str | None) -> int:
        """Find a column of the project by title; 0 when there is none."""
        if title is None:
            return 0

        column_id = await self.adapter.fetchval(
            self._query(f"SELECT id FROM {self._table_name()} WHERE project_id = $1 AND title = $2"),
            project_id, title,
        )
        return column_id or 0

    async def get_first_column_id(self, project_id: int) -> int:
        """Get the left-most column of a project; 0 when the project has none."""
        column_id = await self.adapter.fetchval(
            self._query(f"""
                SELECT id FROM {self._table_name()}
                WHERE project_id = $1
                ORDER BY position ASC
                LIMIT 1
            """),
            project_id,
        )
        return column_id or 0
