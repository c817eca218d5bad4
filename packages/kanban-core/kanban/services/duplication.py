"""
Task Duplication Service.

Copies tasks inside a project, spawns the next occurrence of recurring
tasks, and copies or moves tasks to another project while remapping the
project-scoped references (assignee, category, swimlane, column).

None of the multi-step writes here run in a transaction. Creating a
recurring child and linking its parent are two statements, as are moving a
task and announcing the move; concurrent calls on the same task rely on the
database to serialise them.
"""

import logging
import time
from datetime import datetime
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

from kanban.config import get_config
from kanban.events import EVENT_MOVE_PROJECT, TaskEvent, get_dispatcher
from kanban.models.task import (
    FIELDS_TO_DUPLICATE,
    RecurrenceBasedate,
    RecurrenceStatus,
    RecurrenceTimeframe,
)
from kanban.services.categories import CategoryService
from kanban.services.columns import ColumnService
from kanban.services.projects import ProjectPermissionService
from kanban.services.subtasks import SubtaskService
from kanban.services.swimlanes import SwimlaneService
from kanban.services.tasks import TaskService

logger = logging.getLogger(__name__)


class TaskDuplicationService:
    """
    Service for duplicating and migrating tasks.

    Collaborators default to services built on the shared adapter; pass them
    explicitly to swap any of them out.
    """

    def __init__(
        self,
        adapter=None,
        dispatcher=None,
        timezone: str | None = None,
        tasks: TaskService | None = None,
        subtasks: SubtaskService | None = None,
        columns: ColumnService | None = None,
        swimlanes: SwimlaneService | None = None,
        categories: CategoryService | None = None,
        permissions: ProjectPermissionService | None = None,
    ):
        """
        Initialize duplication service.

        Args:
            adapter: Optional DatabaseAdapter. If not provided, uses global adapter.
            dispatcher: Optional EventDispatcher. If not provided, uses global dispatcher.
            timezone: IANA zone for due date arithmetic; defaults to config.
        """
        self._dispatcher = dispatcher
        self._timezone = timezone
        self.tasks = tasks or TaskService(adapter, dispatcher=dispatcher)
        self.subtasks = subtasks or SubtaskService(adapter)
        self.columns = columns or ColumnService(adapter)
        self.swimlanes = swimlanes or SwimlaneService(adapter)
        self.categories = categories or CategoryService(adapter)
        self.permissions = permissions or ProjectPermissionService(adapter)

    @property
    def dispatcher(self):
        if self._dispatcher is None:
            self._dispatcher = get_dispatcher()
        return self._dispatcher

    @property
    def timezone(self) -> ZoneInfo:
        if self._timezone is None:
            self._timezone = get_config().timezone
        return ZoneInfo(self._timezone)

    async def duplicate(self, task_id: int) -> int:
        """
        Duplicate a task within its project.

        Subtasks are copied too, but a failed subtask copy does not change
        the result.

        Returns:
            New task id, or 0 when creation failed
        """
        return await self._save(task_id, await self._copy_fields(task_id))

    async def duplicate_recurring_task(self, task_id: int) -> int | bool:
        """
        Create the next occurrence of a recurring task.

        The occurrence goes to the first column with a recalculated due date.
        The parent is then marked processed and linked to it.

        Returns:
            New task id, or False when the task is not pending recurrence,
            creation failed, or the parent could not be linked. In the last
            case the new task exists but is not linked.
        """
        values = await self._copy_fields(task_id)

        if values["recurrence_status"] != RecurrenceStatus.PENDING:
            return False

        values["recurrence_parent"] = task_id
        values["column_id"] = await self.columns.get_first_column_id(values["project_id"])
        self.calculate_recurring_task_due_date(values)

        recurring_task_id = await self._save(task_id, values)

        if recurring_task_id > 0:
            parent_update = await self.tasks.update(task_id, {
                "recurrence_status": int(RecurrenceStatus.PROCESSED),
                "recurrence_child": recurring_task_id,
            })

            if parent_update:
                logger.info(f"Recurring task {task_id} spawned {recurring_task_id}")
                return recurring_task_id

            logger.warning(
                f"Recurring task {recurring_task_id} created but parent {task_id} was not updated"
            )

        return False

    async def duplicate_to_project(
        self,
        task_id: int,
        project_id: int,
        swimlane_id: int | None = None,
        column_id: int | None = None,
        category_id: int | None = None,
        owner_id: int | None = None,
    ) -> int:
        """
        Duplicate a task into another project.

        Args:
            task_id: Source task
            project_id: Destination project
            swimlane_id: Destination swimlane; None keeps the source one
            column_id: Destination column; None keeps the source one
            category_id: Destination category; None keeps the source one
            owner_id: Assignee; None keeps the source one

        References that do not exist in the destination are remapped by
        check_destination_project_values().

        Returns:
            New task id, or 0 when creation failed
        """
        values = await self._copy_fields(task_id)
        values["project_id"] = project_id
        values["column_id"] = column_id if column_id is not None else values["column_id"]
        values["swimlane_id"] = swimlane_id if swimlane_id is not None else values["swimlane_id"]
        values["category_id"] = category_id if category_id is not None else values["category_id"]
        values["owner_id"] = owner_id if owner_id is not None else values["owner_id"]

        await self.check_destination_project_values(values)

        return await self._save(task_id, values)

    async def move_to_project(
        self,
        task_id: int,
        project_id: int,
        swimlane_id: int | None = None,
        column_id: int | None = None,
        category_id: int | None = None,
        owner_id: int | None = None,
    ) -> bool:
        """
        Move a task into another project.

        The task is reopened and appended to the end of its destination
        column. Arguments left as None keep the task's current value before
        remapping. A task.move.project event is dispatched only when the row
        was actually updated.

        Returns:
            Always True, whether or not a row was updated
        """
        task = await self.tasks.get_by_id(task_id) or {}

        values = {}
        values["is_active"] = 1
        values["project_id"] = project_id
        values["column_id"] = column_id if column_id is not None else task.get("column_id")
        values["position"] = await self.tasks.count_by_column(project_id, values["column_id"]) + 1
        values["swimlane_id"] = swimlane_id if swimlane_id is not None else task.get("swimlane_id")
        values["category_id"] = category_id if category_id is not None else task.get("category_id")
        values["owner_id"] = owner_id if owner_id is not None else task.get("owner_id")

        await self.check_destination_project_values(values)

        if await self.tasks.update(task.get("id"), values):
            logger.info(f"Moved task {task_id} to project {project_id}")
            await self.dispatcher.dispatch(
                EVENT_MOVE_PROJECT,
                TaskEvent({**task, **values, "task_id": task.get("id")}),
            )

        return True

    async def check_destination_project_values(self, values: dict) -> dict:
        """
        Make the references in values valid for values["project_id"].

        - An assignee without access to the project is unassigned.
        - Category and swimlane are matched by name; no match gives 0.
        - Column is matched by title, falling back to the first column.

        values is modified in place and also returned.
        """
        project_id = values["project_id"]

        if (values.get("owner_id") or 0) > 0 and not await self.permissions.is_user_allowed(
            project_id, values["owner_id"]
        ):
            logger.debug(f"User {values['owner_id']} not allowed on project {project_id}, unassigning")
            values["owner_id"] = 0

        if (values.get("category_id") or 0) > 0:
            values["category_id"] = await self.categories.get_id_by_name(
                project_id,
                await self.categories.get_name_by_id(values["category_id"]),
            )

        if (values.get("swimlane_id") or 0) > 0:
            values["swimlane_id"] = await self.swimlanes.get_id_by_name(
                project_id,
                await self.swimlanes.get_name_by_id(values["swimlane_id"]),
            )

        if (values.get("column_id") or 0) > 0:
            values["column_id"] = await self.columns.get_id_by_title(
                project_id,
                await self.columns.get_title_by_id(values["column_id"]),
            )

            values["column_id"] = values["column_id"] or await self.columns.get_first_column_id(project_id)

        return values

    def calculate_recurring_task_due_date(self, values: dict) -> dict:
        """
        Shift the due date of a new occurrence by the recurrence interval.

        Nothing happens without a due date or with a zero factor. With the
        trigger date as base, the interval is counted from now. Month and
        year steps clamp to the end of shorter months.

        values is modified in place and also returned.
        """
        factor = values.get("recurrence_factor") or 0

        if values.get("date_due") and factor != 0:
            if values.get("recurrence_basedate") == RecurrenceBasedate.TRIGGERDATE:
                values["date_due"] = int(time.time())

            timeframe = values.get("recurrence_timeframe")
            if timeframe == RecurrenceTimeframe.MONTHS:
                interval = relativedelta(months=abs(factor))
            elif timeframe == RecurrenceTimeframe.YEARS:
                interval = relativedelta(years=abs(factor))
            else:
                interval = relativedelta(days=abs(factor))

            date_due = datetime.fromtimestamp(values["date_due"], tz=self.timezone)
            date_due = date_due - interval if factor < 0 else date_due + interval

            values["date_due"] = int(date_due.timestamp())

        return values

    async def _copy_fields(self, task_id: int) -> dict:
        """Project the source task onto FIELDS_TO_DUPLICATE (all None if missing)."""
        task = await self.tasks.get_by_id(task_id) or {}
        return {field: task.get(field) for field in FIELDS_TO_DUPLICATE}

    async def _save(self, task_id: int, values: dict) -> int:
        """Create the new task, then copy the subtasks onto it."""
        new_task_id = await self.tasks.create(values)

        if new_task_id:
            await self.subtasks.duplicate(task_id, new_task_id)

        return new_task_id
