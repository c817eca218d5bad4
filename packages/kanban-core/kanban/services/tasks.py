"""
Task Service.

Lookup, creation and raw updates for tasks, on PostgreSQL or SQLite.
"""

import logging
import time

from kanban.config import get_config
from kanban.db.interface import rows_affected
from kanban.events import EVENT_CREATE, TaskEvent, get_dispatcher
from kanban.models.task import TASK_COLUMNS, Task
from kanban.services.base import BaseService
from kanban.services.columns import ColumnService
from kanban.services.projects import ProjectService
from kanban.services.swimlanes import SwimlaneService

logger = logging.getLogger(__name__)

# Assigned by the database
_GENERATED = ("id",)


class TaskService(BaseService):
    """
    Service for reading and writing task rows.

    Task rows are exchanged as plain dicts keyed by column name so callers
    can copy and overlay field sets freely.
    """

    TABLE = "tasks"

    def __init__(self, adapter=None, dispatcher=None, default_color=None):
        """
        Initialize task service.

        Args:
            adapter: Optional DatabaseAdapter. If not provided, uses global adapter.
            dispatcher: Optional EventDispatcher for task.create.
            default_color: Color used when a task has none; defaults to config.
        """
        super().__init__(adapter)
        self._dispatcher = dispatcher
        self._default_color = default_color

    @property
    def dispatcher(self):
        if self._dispatcher is None:
            self._dispatcher = get_dispatcher()
        return self._dispatcher

    @property
    def default_color(self) -> str:
        if self._default_color is None:
            self._default_color = get_config().default_color
        return self._default_color

    async def get_by_id(self, task_id: int) -> dict | None:
        """Get the raw task row, or None when it does not exist."""
        row = await self.adapter.fetchrow(
            self._query(f"SELECT * FROM {self._table_name()} WHERE id = $1"),
            task_id,
        )
        return row

    async def get(self, task_id: int) -> Task | None:
        """Get a task by ID."""
        row = await self.get_by_id(task_id)
        if row:
            return Task.from_dict(row)
        return None

    async def count_by_column(self, project_id: int, column_id: int) -> int:
        """Count the active tasks in a column of a project."""
        count = await self.adapter.fetchval(
            self._query(f"""
                SELECT COUNT(*) FROM {self._table_name()}
                WHERE project_id = $1 AND column_id = $2 AND is_active = 1
            """),
            project_id, column_id,
        )
        return int(count or 0)

    async def list_by_column(self, project_id: int, column_id: int) -> list[Task]:
        """List the active tasks of a column ordered by position."""
        rows = await self.adapter.fetch(
            self._query(f"""
                SELECT * FROM {self._table_name()}
                WHERE project_id = $1 AND column_id = $2 AND is_active = 1
                ORDER BY position ASC, id ASC
            """),
            project_id, column_id,
        )
        return [Task.from_dict(row) for row in rows]

    async def create(self, values: dict) -> int:
        """
        Create a task.

        Missing column, swimlane, color and position are filled with board
        defaults. Keys that are not task columns are ignored.

        Args:
            values: Field map for the new task

        Returns:
            New task id, or 0 when the title is empty or the project is unknown
        """
        project_id = values.get("project_id")

        if not values.get("title") or not project_id:
            logger.debug("Task creation rejected: title and project are required")
            return 0

        if not await ProjectService(self.adapter).exists(project_id):
            logger.warning(f"Task creation rejected: project {project_id} not found")
            return 0

        task = await self._prepare(dict(values))
        columns = [name for name in TASK_COLUMNS if name in task and name not in _GENERATED]
        placeholders = ", ".join(f"${i + 1}" for i in range(len(columns)))

        task_id = await self.adapter.insert(
            self._query(f"""
                INSERT INTO {self._table_name()} ({", ".join(columns)})
                VALUES ({placeholders})
            """),
            *[task[name] for name in columns],
        )

        logger.info(f"Created task: {task_id} - {task['title']}")

        task["id"] = task_id
        task["task_id"] = task_id
        await self.dispatcher.dispatch(EVENT_CREATE, TaskEvent(task))

        return task_id

    async def _prepare(self, values: dict) -> dict:
        """Fill the defaults of a new task row."""
        project_id = values["project_id"]
        now = int(time.time())

        if not values.get("column_id"):
            values["column_id"] = await ColumnService(self.adapter).get_first_column_id(project_id)

        if not values.get("swimlane_id"):
            values["swimlane_id"] = await SwimlaneService(self.adapter).get_first_active_swimlane_id(project_id)

        if not values.get("color_id"):
            values["color_id"] = self.default_color

        for name in ("date_due", "owner_id", "category_id", "creator_id", "score",
                     "time_estimated", "recurrence_status", "recurrence_trigger",
                     "recurrence_factor", "recurrence_timeframe", "recurrence_basedate"):
            values[name] = values.get(name) or 0

        values["time_estimated"] = float(values["time_estimated"])
        values["description"] = values.get("description") or ""
        values["position"] = await self.count_by_column(project_id, values["column_id"]) + 1
        values["is_active"] = 1
        values["date_creation"] = now
        values["date_modification"] = now
        values["date_moved"] = now

        return values

    async def update(self, task_id: int, values: dict) -> bool:
        """
        Write the given columns of a task as-is.

        Args:
            task_id: Task ID
            values: Column/value pairs; unknown keys are ignored

        Returns:
            True when a row was updated
        """
        columns = [name for name in values if name in TASK_COLUMNS and name not in _GENERATED]
        if not columns:
            return False

        set_clause = ", ".join(f"{name} = ${i + 1}" for i, name in enumerate(columns))
        status = await self.adapter.execute(
            self._query(f"""
                UPDATE {self._table_name()}
                SET {set_clause}
                WHERE id = ${len(columns) + 1}
            """),
            *[values[name] for name in columns], task_id,
        )

        return rows_affected(status) > 0
