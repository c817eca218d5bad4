"""
Swimlane Service.
"""

import logging

from kanban.db.interface import rows_affected
from kanban.models.board import Swimlane
from kanban.services.base import BaseService

logger = logging.getLogger(__name__)


class SwimlaneService(BaseService):
    """Create swimlanes and resolve them by name."""

    TABLE = "swimlanes"

    async def create(self, project_id: int, name: str, description: str = "") -> int:
        """Add an active swimlane below the existing ones."""
        table = self._table_name()
        position = await self.adapter.fetchval(
            self._query(f"SELECT COALESCE(MAX(position), 0) FROM {table} WHERE project_id = $1"),
            project_id,
        )

        swimlane_id = await self.adapter.insert(
            self._query(f"""
                INSERT INTO {table} (name, position, is_active, project_id, description)
                VALUES ($1, $2, 1, $3, $4)
            """),
            name, int(position or 0) + 1, project_id, description,
        )
        logger.info(f"Created swimlane: {swimlane_id} - {name} (project {project_id})")
        return swimlane_id

    async def get_by_id(self, swimlane_id: int) -> Swimlane | None:
        row = await self.adapter.fetchrow(
            self._query(f"SELECT * FROM {self._table_name()} WHERE id = $1"),
            swimlane_id,
        )
        return Swimlane.from_dict(row) if row else None

    async def get_name_by_id(self, swimlane_id: int) -> str | None:
        return await self.adapter.fetchval(
            self._query(f"SELECT name FROM {self._table_name()} WHERE id = $1"),
            swimlane_id,
        )

    async def get_id_by_name(self, project_id: int, name: str | None) -> int:
        """Find a swimlane of the project by name; 0 when there is none."""
        if name is None:
            return 0

        swimlane_id = await self.adapter.fetchval(
            self._query(f"SELECT id FROM {self._table_name()} WHERE project_id = $1 AND name = $2"),
            project_id, name,
        )
        return swimlane_id or 0

    async def get_first_active_swimlane_id(self, project_id: int) -> int:
        swimlane_id = await self.adapter.fetchval(
            self._query(f"""
                SELECT id FROM {self._table_name()}
                WHERE project_id = $1 AND is_active = 1
                ORDER BY position ASC
                LIMIT 1
            """),
            project_id,
        )
        return swimlane_id or 0

    async def disable(self, project_id: int, swimlane_id: int) -> bool:
        """Hide a swimlane from the board without deleting its tasks."""
        status = await self.adapter.execute(
            self._query(f"UPDATE {self._table_name()} SET is_active = 0 WHERE id = $1 AND project_id = $2"),
            swimlane_id, project_id,
        )
        return rows_affected(status) > 0
