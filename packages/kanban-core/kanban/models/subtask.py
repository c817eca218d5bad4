"""
Subtask model.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class SubtaskStatus(IntEnum):
    TODO = 0
    IN_PROGRESS = 1
    DONE = 2


@dataclass
class Subtask:
    """
    A checklist item attached to a task.

    Attributes:
        id: Integer primary key
        title: Subtask title
        task_id: Parent task
        user_id: Assignee (0 when unassigned)
        status: TODO, IN_PROGRESS or DONE
        time_estimated: Estimated hours
        time_spent: Hours logged
        position: 1-based order within the task
    """

    title: str
    task_id: int
    id: Optional[int] = None
    user_id: int = 0
    status: int = SubtaskStatus.TODO
    time_estimated: float = 0
    time_spent: float = 0
    position: int = 1

    @property
    def is_done(self) -> bool:
        return self.status == SubtaskStatus.DONE

    @classmethod
    def from_dict(cls, data: dict) -> "Subtask":
        """Create Subtask from a database row."""
        return cls(
            id=data.get("id"),
            title=data.get("title", ""),
            task_id=data.get("task_id"),
            user_id=data.get("user_id") or 0,
            status=data.get("status") or SubtaskStatus.TODO,
            time_estimated=data.get("time_estimated") or 0,
            time_spent=data.get("time_spent") or 0,
            position=data.get("position", 1),
        )
