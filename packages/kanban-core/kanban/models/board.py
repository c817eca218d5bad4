"""
Board structure models: projects, columns, swimlanes and categories.

Columns, swimlanes and categories are scoped to one project. They are
matched across projects by title/name.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Project:
    """A board."""

    name: str
    id: Optional[int] = None
    description: str = ""
    is_active: int = 1
    is_everybody_allowed: int = 0
    last_modified: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "Project":
        return cls(
            id=data.get("id"),
            name=data.get("name", ""),
            description=data.get("description") or "",
            is_active=data.get("is_active", 1),
            is_everybody_allowed=data.get("is_everybody_allowed", 0),
            last_modified=data.get("last_modified", 0),
        )


@dataclass
class Column:
    """A workflow step within a project."""

    title: str
    project_id: int
    position: int
    id: Optional[int] = None
    task_limit: int = 0
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Column":
        return cls(
            id=data.get("id"),
            title=data.get("title", ""),
            project_id=data.get("project_id"),
            position=data.get("position", 0),
            task_limit=data.get("task_limit", 0),
            description=data.get("description") or "",
        )


@dataclass
class Swimlane:
    """A horizontal lane within a project."""

    name: str
    project_id: int
    id: Optional[int] = None
    position: int = 1
    is_active: int = 1
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Swimlane":
        return cls(
            id=data.get("id"),
            name=data.get("name", ""),
            project_id=data.get("project_id"),
            position=data.get("position", 1),
            is_active=data.get("is_active", 1),
            description=data.get("description") or "",
        )


@dataclass
class Category:
    """A project-specific task category."""

    name: str
    project_id: int
    id: Optional[int] = None
    description: str = ""
    color_id: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Category":
        return cls(
            id=data.get("id"),
            name=data.get("name", ""),
            project_id=data.get("project_id"),
            description=data.get("description") or "",
            color_id=data.get("color_id") or "",
        )


# Columns created with every new project, in board order
DEFAULT_COLUMNS = ("Backlog", "Ready", "Work in progress", "Done")

DEFAULT_SWIMLANE = "Default swimlane"

# Project membership roles
PROJECT_ROLES = ("project-manager", "project-member", "project-viewer")
