"""
Tests for Task Service.
"""

import pytest


@pytest.fixture
async def task_service(adapter, dispatcher):
    """A TaskService on a fresh board with one project."""
    from kanban.services import ProjectService, TaskService

    service = TaskService(adapter=adapter, dispatcher=dispatcher, default_color="yellow")
    service.project_id = await ProjectService(adapter).create("Website")
    return service


class TestTaskServiceCreate:
    """Tests for TaskService.create()."""

    @pytest.mark.asyncio
    async def test_create_task_minimal(self, task_service):
        """Test creating a task with only title and project."""
        task_id = await task_service.create({"title": "Test task", "project_id": task_service.project_id})

        task = await task_service.get(task_id)

        assert task_id > 0
        assert task.title == "Test task"
        assert task.is_active == 1
        assert task.color_id == "yellow"
        assert task.position == 1
        assert task.date_creation > 0
        assert task.date_due == 0

    @pytest.mark.asyncio
    async def test_create_task_defaults_board_position(self, task_service, adapter):
        """Test that new tasks land in the first column and default swimlane."""
        from kanban.services import ColumnService, SwimlaneService

        task_id = await task_service.create({"title": "Test", "project_id": task_service.project_id})
        task = await task_service.get(task_id)

        assert task.column_id == await ColumnService(adapter).get_first_column_id(task_service.project_id)
        assert task.swimlane_id == await SwimlaneService(adapter).get_first_active_swimlane_id(task_service.project_id)

    @pytest.mark.asyncio
    async def test_create_task_full(self, task_service, sample_task_data):
        """Test creating a task with explicit fields."""
        task_id = await task_service.create({**sample_task_data, "project_id": task_service.project_id})

        task = await task_service.get(task_id)

        assert task.description == "A test task description"
        assert task.color_id == "blue"
        assert task.score == 3
        assert task.time_estimated == 2.5

    @pytest.mark.asyncio
    async def test_create_appends_to_column(self, task_service):
        """Test that positions grow within a column."""
        first = await task_service.create({"title": "One", "project_id": task_service.project_id})
        second = await task_service.create({"title": "Two", "project_id": task_service.project_id})

        assert (await task_service.get(first)).position == 1
        assert (await task_service.get(second)).position == 2

    @pytest.mark.asyncio
    async def test_create_without_title(self, task_service):
        """Test that an empty title is rejected."""
        assert await task_service.create({"title": "", "project_id": task_service.project_id}) == 0
        assert await task_service.create({"title": None, "project_id": task_service.project_id}) == 0

    @pytest.mark.asyncio
    async def test_create_unknown_project(self, task_service):
        """Test that a missing project is rejected."""
        assert await task_service.create({"title": "Orphan", "project_id": 404}) == 0

    @pytest.mark.asyncio
    async def test_create_ignores_unknown_keys(self, task_service):
        """Test that non-column keys are dropped."""
        task_id = await task_service.create({
            "title": "Test",
            "project_id": task_service.project_id,
            "tags": ["x"],
        })

        assert task_id > 0

    @pytest.mark.asyncio
    async def test_create_dispatches_event(self, task_service, dispatcher):
        """Test that task.create is announced with the new id."""
        from kanban.events import EVENT_CREATE

        received = []
        dispatcher.add_listener(EVENT_CREATE, received.append)

        task_id = await task_service.create({"title": "Announce", "project_id": task_service.project_id})

        assert len(received) == 1
        assert received[0].task_id == task_id
        assert received[0]["title"] == "Announce"


class TestTaskServiceGet:
    """Tests for TaskService.get() and get_by_id()."""

    @pytest.mark.asyncio
    async def test_get_nonexistent_task(self, task_service):
        """Test getting a task that doesn't exist."""
        assert await task_service.get(999) is None
        assert await task_service.get_by_id(999) is None

    @pytest.mark.asyncio
    async def test_get_by_id_returns_row(self, task_service):
        """Test that the raw row carries every column."""
        task_id = await task_service.create({"title": "Raw", "project_id": task_service.project_id})

        row = await task_service.get_by_id(task_id)

        assert row["id"] == task_id
        assert row["recurrence_parent"] is None
        assert "recurrence_basedate" in row


class TestTaskServiceUpdate:
    """Tests for TaskService.update()."""

    @pytest.mark.asyncio
    async def test_update_fields(self, task_service):
        """Test updating columns of a task."""
        task_id = await task_service.create({"title": "Original", "project_id": task_service.project_id})

        assert await task_service.update(task_id, {"title": "Updated", "score": 8}) is True

        task = await task_service.get(task_id)
        assert task.title == "Updated"
        assert task.score == 8

    @pytest.mark.asyncio
    async def test_update_missing_task(self, task_service):
        """Test that updating nothing reports False."""
        assert await task_service.update(999, {"title": "Ghost"}) is False

    @pytest.mark.asyncio
    async def test_update_without_known_columns(self, task_service):
        """Test that unknown keys alone do not issue a query."""
        task_id = await task_service.create({"title": "Test", "project_id": task_service.project_id})

        assert await task_service.update(task_id, {"tags": ["x"]}) is False


class TestTaskServiceColumns:
    """Tests for column counting and listing."""

    @pytest.mark.asyncio
    async def test_count_by_column_skips_closed(self, task_service):
        """Test that closed tasks are not counted."""
        project_id = task_service.project_id
        open_id = await task_service.create({"title": "Open", "project_id": project_id})
        closed_id = await task_service.create({"title": "Closed", "project_id": project_id})
        await task_service.update(closed_id, {"is_active": 0})

        column_id = (await task_service.get(open_id)).column_id

        assert await task_service.count_by_column(project_id, column_id) == 1

    @pytest.mark.asyncio
    async def test_list_by_column_ordered(self, task_service):
        """Test that tasks come back in position order."""
        project_id = task_service.project_id
        first = await task_service.create({"title": "First", "project_id": project_id})
        await task_service.create({"title": "Second", "project_id": project_id})
        column_id = (await task_service.get(first)).column_id

        tasks = await task_service.list_by_column(project_id, column_id)

        assert [t.title for t in tasks] == ["First", "Second"]
