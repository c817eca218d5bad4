"""
Tests for project, column, swimlane, category, permission and subtask services.
"""

import pytest


@pytest.fixture
async def project_id(adapter):
    from kanban.services import ProjectService

    return await ProjectService(adapter).create("Roadmap", description="Q3 plans")


class TestProjectService:
    """Tests for ProjectService."""

    @pytest.mark.asyncio
    async def test_create_project_layout(self, adapter, project_id):
        """Test that a project starts with the default columns and swimlane."""
        from kanban.models.board import DEFAULT_COLUMNS, DEFAULT_SWIMLANE
        from kanban.services import ColumnService, ProjectService, SwimlaneService

        project = await ProjectService(adapter).get_by_id(project_id)
        columns = await ColumnService(adapter).get_all(project_id)
        swimlane_id = await SwimlaneService(adapter).get_first_active_swimlane_id(project_id)

        assert project.name == "Roadmap"
        assert project.description == "Q3 plans"
        assert tuple(c.title for c in columns) == DEFAULT_COLUMNS
        assert [c.position for c in columns] == [1, 2, 3, 4]
        assert await SwimlaneService(adapter).get_name_by_id(swimlane_id) == DEFAULT_SWIMLANE

    @pytest.mark.asyncio
    async def test_exists(self, adapter, project_id):
        """Test project existence check."""
        from kanban.services import ProjectService

        service = ProjectService(adapter)

        assert await service.exists(project_id) is True
        assert await service.exists(project_id + 100) is False
        assert await service.get_by_id(project_id + 100) is None


class TestProjectPermissionService:
    """Tests for ProjectPermissionService."""

    @pytest.mark.asyncio
    async def test_member_allowed(self, adapter, project_id):
        """Test that members are allowed and others are not."""
        from kanban.services import ProjectPermissionService

        permissions = ProjectPermissionService(adapter)
        await permissions.add_user(project_id, 7, role="project-manager")

        assert await permissions.is_user_allowed(project_id, 7) is True
        assert await permissions.is_user_allowed(project_id, 8) is False

    @pytest.mark.asyncio
    async def test_unknown_project(self, adapter):
        """Test that nobody is allowed on a missing project."""
        from kanban.services import ProjectPermissionService

        assert await ProjectPermissionService(adapter).is_user_allowed(77, 1) is False

    @pytest.mark.asyncio
    async def test_invalid_role(self, adapter, project_id):
        """Test that an unknown role raises."""
        from kanban.services import ProjectPermissionService

        with pytest.raises(ValueError) as exc:
            await ProjectPermissionService(adapter).add_user(project_id, 7, role="owner")

        assert "Invalid role" in str(exc.value)


class TestColumnService:
    """Tests for ColumnService."""

    @pytest.mark.asyncio
    async def test_create_appends(self, adapter, project_id):
        """Test that new columns go to the right end of the board."""
        from kanban.services import ColumnService

        columns = ColumnService(adapter)
        column_id = await columns.create(project_id, "Review", task_limit=3)

        column = await columns.get_by_id(column_id)
        assert column.position == 5
        assert column.task_limit == 3

    @pytest.mark.asyncio
    async def test_title_lookups(self, adapter, project_id):
        """Test resolution in both directions."""
        from kanban.services import ColumnService

        columns = ColumnService(adapter)
        ready = await columns.get_id_by_title(project_id, "Ready")

        assert ready > 0
        assert await columns.get_title_by_id(ready) == "Ready"
        assert await columns.get_id_by_title(project_id, "Nope") == 0
        assert await columns.get_id_by_title(project_id, None) == 0
        assert await columns.get_title_by_id(999) is None

    @pytest.mark.asyncio
    async def test_first_column(self, adapter, project_id):
        """Test that the first column is the lowest position."""
        from kanban.services import ColumnService

        columns = ColumnService(adapter)

        assert await columns.get_first_column_id(project_id) == await columns.get_id_by_title(project_id, "Backlog")
        assert await columns.get_first_column_id(999) == 0


class TestSwimlaneService:
    """Tests for SwimlaneService."""

    @pytest.mark.asyncio
    async def test_name_lookups(self, adapter, project_id):
        """Test resolution in both directions."""
        from kanban.services import SwimlaneService

        swimlanes = SwimlaneService(adapter)
        lane_id = await swimlanes.create(project_id, "Urgent")

        assert await swimlanes.get_id_by_name(project_id, "Urgent") == lane_id
        assert await swimlanes.get_name_by_id(lane_id) == "Urgent"
        assert await swimlanes.get_id_by_name(project_id, "Missing") == 0
        assert (await swimlanes.get_by_id(lane_id)).position == 2

    @pytest.mark.asyncio
    async def test_first_active_skips_disabled(self, adapter, project_id):
        """Test that disabled swimlanes are not picked as default."""
        from kanban.services import SwimlaneService

        swimlanes = SwimlaneService(adapter)
        default_id = await swimlanes.get_first_active_swimlane_id(project_id)
        other_id = await swimlanes.create(project_id, "Other")

        assert await swimlanes.disable(project_id, default_id) is True
        assert await swimlanes.get_first_active_swimlane_id(project_id) == other_id


class TestCategoryService:
    """Tests for CategoryService."""

    @pytest.mark.asyncio
    async def test_name_lookups(self, adapter, project_id):
        """Test resolution in both directions."""
        from kanban.services import CategoryService

        categories = CategoryService(adapter)
        bug = await categories.create(project_id, "Bug", color_id="red")

        assert await categories.get_id_by_name(project_id, "Bug") == bug
        assert await categories.get_name_by_id(bug) == "Bug"
        assert await categories.get_id_by_name(project_id, "bug") == 0
        assert await categories.get_name_by_id(999) is None
        assert (await categories.get_by_id(bug)).color_id == "red"

    @pytest.mark.asyncio
    async def test_scoped_to_project(self, adapter, project_id):
        """Test that a category name is only found in its own project."""
        from kanban.services import CategoryService, ProjectService

        other = await ProjectService(adapter).create("Other")
        categories = CategoryService(adapter)
        await categories.create(project_id, "Design")

        assert await categories.get_id_by_name(other, "Design") == 0
        assert [c.name for c in await categories.get_all(project_id)] == ["Design"]


class TestSubtaskService:
    """Tests for SubtaskService."""

    @pytest.fixture
    async def task_id(self, adapter, project_id):
        from kanban.events import EventDispatcher
        from kanban.services import TaskService

        tasks = TaskService(adapter, dispatcher=EventDispatcher(), default_color="yellow")
        return await tasks.create({"title": "Parent", "project_id": project_id})

    @pytest.mark.asyncio
    async def test_create_positions(self, adapter, task_id):
        """Test that subtasks are numbered in creation order."""
        from kanban.services import SubtaskService

        subtasks = SubtaskService(adapter)
        await subtasks.create(task_id, "One")
        await subtasks.create(task_id, "Two")

        assert [(s.title, s.position) for s in await subtasks.get_all(task_id)] == [("One", 1), ("Two", 2)]

    @pytest.mark.asyncio
    async def test_duplicate_resets_progress(self, adapter, project_id, task_id):
        """Test that copies keep title, assignee and estimate but restart status."""
        from kanban.events import EventDispatcher
        from kanban.services import SubtaskService, TaskService

        subtasks = SubtaskService(adapter)
        await subtasks.create(task_id, "Design doc", user_id=4, time_estimated=1.5, status=2)
        target = await TaskService(adapter, dispatcher=EventDispatcher(), default_color="yellow").create(
            {"title": "Copy", "project_id": project_id}
        )

        assert await subtasks.duplicate(task_id, target) is True

        copied = (await subtasks.get_all(target))[0]
        assert copied.title == "Design doc"
        assert copied.user_id == 4
        assert copied.time_estimated == 1.5
        assert copied.is_done is False

    @pytest.mark.asyncio
    async def test_duplicate_nothing(self, adapter, task_id):
        """Test that a task without subtasks copies cleanly."""
        from kanban.services import SubtaskService

        assert await SubtaskService(adapter).duplicate(task_id, task_id) is True
