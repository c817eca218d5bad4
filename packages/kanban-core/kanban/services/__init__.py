"""
Business logic services for the kanban board.
"""

from kanban.services.categories import CategoryService
from kanban.services.columns import ColumnService
from kanban.services.duplication import TaskDuplicationService
from kanban.services.projects import ProjectPermissionService, ProjectService
from kanban.services.subtasks import SubtaskService
from kanban.services.swimlanes import SwimlaneService
from kanban.services.tasks import TaskService

__all__ = [
    "TaskService",
    "TaskDuplicationService",
    "SubtaskService",
    "ColumnService",
    "SwimlaneService",
    "CategoryService",
    "ProjectService",
    "ProjectPermissionService",
]
