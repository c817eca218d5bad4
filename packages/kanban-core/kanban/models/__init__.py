"""
Core data models for the kanban board.
"""

from kanban.models.board import Category, Column, Project, Swimlane
from kanban.models.subtask import Subtask, SubtaskStatus
from kanban.models.task import (
    FIELDS_TO_DUPLICATE,
    RecurrenceBasedate,
    RecurrenceStatus,
    RecurrenceTimeframe,
    RecurrenceTrigger,
    Task,
)

__all__ = [
    "Task",
    "Subtask",
    "SubtaskStatus",
    "Project",
    "Column",
    "Swimlane",
    "Category",
    "FIELDS_TO_DUPLICATE",
    "RecurrenceStatus",
    "RecurrenceTrigger",
    "RecurrenceTimeframe",
    "RecurrenceBasedate",
]
