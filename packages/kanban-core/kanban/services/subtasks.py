"""
Subtask Service.
"""

import logging

from kanban.models.subtask import Subtask, SubtaskStatus
from kanban.services.base import BaseService

logger = logging.getLogger(__name__)


class SubtaskService(BaseService):
    """Service for the checklist items of a task."""

    TABLE = "subtasks"

    async def create(
        self,
        task_id: int,
        title: str,
        user_id: int = 0,
        time_estimated: float = 0,
        status: int = SubtaskStatus.TODO,
    ) -> int:
        """
        Append a subtask to a task.

        Returns:
            New subtask id
        """
        table = self._table_name()
        position = await self.adapter.fetchval(
            self._query(f"SELECT COALESCE(MAX(position), 0) FROM {table} WHERE task_id = $1"),
            task_id,
        )

        subtask_id = await self.adapter.insert(
            self._query(f"""
                INSERT INTO {table} (title, status, time_estimated, task_id, user_id, position)
                VALUES ($1, $2, $3, $4, $5, $6)
            """),
            title, int(status), float(time_estimated), task_id, user_id, int(position or 0) + 1,
        )
        logger.debug(f"Created subtask {subtask_id} on task {task_id}")
        return subtask_id

    async def get_all(self, task_id: int) -> list[Subtask]:
        """Get the subtasks of a task in position order."""
        rows = await self.adapter.fetch(
            self._query(f"SELECT * FROM {self._table_name()} WHERE task_id = $1 ORDER BY position ASC, id ASC"),
            task_id,
        )
        return [Subtask.from_dict(row) for row in rows]

    async def duplicate(self, src_task_id: int, dst_task_id: int) -> bool:
        """
        Copy every subtask of one task onto another.

        Title, assignee, estimate and position are kept; status and time
        spent start over.

        Returns:
            False as soon as one insert fails, True otherwise
        """
        table = self._table_name()
        rows = await self.adapter.fetch(
            self._query(f"""
                SELECT title, user_id, time_estimated, position FROM {table}
                WHERE task_id = $1
                ORDER BY position ASC, id ASC
            """),
            src_task_id,
        )

        for row in rows:
            subtask_id = await self.adapter.insert(
                self._query(f"""
                    INSERT INTO {table} (title, status, time_estimated, task_id, user_id, position)
                    VALUES ($1, $2, $3, $4, $5, $6)
                """),
                row["title"], int(SubtaskStatus.TODO), row["time_estimated"] or 0.0,
                dst_task_id, row["user_id"] or 0, row["position"],
            )
            if not subtask_id:
                logger.warning(f"Subtask copy from task {src_task_id} to {dst_task_id} stopped early")
                return False

        logger.debug(f"Copied {len(rows)} subtask(s) from task {src_task_id} to {dst_task_id}")
        return True
