"""
Task model for the kanban board.

Tasks live in a column of a project, optionally inside a swimlane and a
category, and may recur.
"""

from dataclasses import dataclass, fields
from enum import IntEnum
from typing import Optional


class RecurrenceStatus(IntEnum):
    NONE = 0
    PENDING = 1
    PROCESSED = 2


class RecurrenceTrigger(IntEnum):
    FIRST_COLUMN = 0
    LAST_COLUMN = 1
    CLOSE = 2


class RecurrenceTimeframe(IntEnum):
    DAYS = 0
    MONTHS = 1
    YEARS = 2


class RecurrenceBasedate(IntEnum):
    DUEDATE = 0
    TRIGGERDATE = 1


# Fields copied verbatim when a task is duplicated
FIELDS_TO_DUPLICATE = (
    "title",
    "description",
    "date_due",
    "color_id",
    "project_id",
    "column_id",
    "owner_id",
    "score",
    "category_id",
    "time_estimated",
    "swimlane_id",
    "recurrence_status",
    "recurrence_trigger",
    "recurrence_factor",
    "recurrence_timeframe",
    "recurrence_basedate",
)


@dataclass
class Task:
    """
    A card on the board.

    Attributes:
        id: Integer primary key
        title: Task title
        project_id: Owning project
        column_id: Column the task sits in
        swimlane_id: Swimlane (0 when none)
        category_id: Category (0 when none)
        owner_id: Assignee (0 when unassigned)
        position: 1-based position inside the column
        date_due: Due date as epoch seconds (0 when none)
        recurrence_*: Recurrence settings and parent/child links
    """

    title: str
    project_id: int
    column_id: int
    id: Optional[int] = None
    description: str = ""
    reference: str = ""
    color_id: str = ""
    swimlane_id: int = 0
    category_id: int = 0
    owner_id: int = 0
    creator_id: int = 0
    position: int = 0
    is_active: int = 1
    score: int = 0
    priority: int = 0
    time_estimated: float = 0
    time_spent: float = 0
    date_creation: int = 0
    date_modification: int = 0
    date_completed: int = 0
    date_moved: int = 0
    date_due: int = 0
    recurrence_status: int = RecurrenceStatus.NONE
    recurrence_trigger: int = RecurrenceTrigger.FIRST_COLUMN
    recurrence_factor: int = 0
    recurrence_timeframe: int = RecurrenceTimeframe.DAYS
    recurrence_basedate: int = RecurrenceBasedate.DUEDATE
    recurrence_parent: Optional[int] = None
    recurrence_child: Optional[int] = None

    @property
    def is_open(self) -> bool:
        """Check if task is still open."""
        return self.is_active == 1

    @property
    def is_recurring(self) -> bool:
        """Check if the task will spawn a new occurrence."""
        return self.recurrence_status == RecurrenceStatus.PENDING

    def to_dict(self) -> dict:
        """Convert to dictionary for storage/serialization."""
        return {name: getattr(self, name) for name in TASK_COLUMNS}

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create Task from dictionary (e.g., database row)."""
        known = {k: v for k, v in data.items() if k in TASK_COLUMNS}
        known.setdefault("title", "")
        known.setdefault("project_id", 0)
        known.setdefault("column_id", 0)
        return cls(**known)


TASK_COLUMNS = tuple(f.name for f in fields(Task))
