"""
Project and Project Permission Services.

A new project starts with the default columns and one swimlane. Users
reach a project through membership, or through the project being open to
everybody.
"""

import logging
import time

from kanban.models.board import DEFAULT_COLUMNS, DEFAULT_SWIMLANE, PROJECT_ROLES, Project
from kanban.services.base import BaseService
from kanban.services.columns import ColumnService
from kanban.services.swimlanes import SwimlaneService

logger = logging.getLogger(__name__)


class ProjectService(BaseService):
    """Service for creating and looking up projects."""

    TABLE = "projects"

    async def create(self, name: str, description: str = "", is_everybody_allowed: bool = False) -> int:
        """
        Create a project with its default board layout.

        Args:
            name: Project name
            description: Optional description
            is_everybody_allowed: Open the project to every user

        Returns:
            New project id
        """
        project_id = await self.adapter.insert(
            self._query(f"""
                INSERT INTO {self._table_name()} (name, description, is_active, is_everybody_allowed, last_modified)
                VALUES ($1, $2, 1, $3, $4)
            """),
            name, description, 1 if is_everybody_allowed else 0, int(time.time()),
        )

        columns = ColumnService(self.adapter)
        for title in DEFAULT_COLUMNS:
            await columns.create(project_id, title)

        await SwimlaneService(self.adapter).create(project_id, DEFAULT_SWIMLANE)

        logger.info(f"Created project: {project_id} - {name}")
        return project_id

    async def get_by_id(self, project_id: int) -> Project | None:
        row = await self.adapter.fetchrow(
            self._query(f"SELECT * FROM {self._table_name()} WHERE id = $1"),
            project_id,
        )
        return Project.from_dict(row) if row else None

    async def exists(self, project_id: int) -> bool:
        found = await self.adapter.fetchval(
            self._query(f"SELECT 1 FROM {self._table_name()} WHERE id = $1"),
            project_id,
        )
        return found is not None


class ProjectPermissionService(BaseService):
    """Service for project membership checks."""

    TABLE = "project_has_users"

    async def add_user(self, project_id: int, user_id: int, role: str = "project-member") -> bool:
        """Grant a user access to a project."""
        if role not in PROJECT_ROLES:
            raise ValueError(f"Invalid role. Must be one of: {', '.join(PROJECT_ROLES)}")

        await self.adapter.execute(
            self._query(f"""
                INSERT INTO {self._table_name()} (project_id, user_id, role)
                VALUES ($1, $2, $3)
            """),
            project_id, user_id, role,
        )
        logger.info(f"Added user {user_id} to project {project_id} as {role}")
        return True

    async def is_member(self, project_id: int, user_id: int) -> bool:
        found = await self.adapter.fetchval(
            self._query(f"SELECT 1 FROM {self._table_name()} WHERE project_id = $1 AND user_id = $2"),
            project_id, user_id,
        )
        return found is not None

    async def is_user_allowed(self, project_id: int, user_id: int) -> bool:
        """Can this user be assigned tasks in the project?"""
        project = await ProjectService(self.adapter).get_by_id(project_id)
        if project is None:
            return False

        if project.is_everybody_allowed:
            return True

        return await self.is_member(project_id, user_id)
