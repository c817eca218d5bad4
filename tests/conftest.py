"""
Pytest configuration and fixtures for kanban tests.
"""

import pytest
import sys
import tempfile
from pathlib import Path

# Add packages to path for testing
packages_dir = Path(__file__).parent.parent / "packages"
sys.path.insert(0, str(packages_dir / "kanban-core"))


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create a temporary config directory."""
    config_dir = tmp_path / ".kanban"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
async def adapter():
    """A connected SQLite adapter with the board schema in a temp directory."""
    from kanban.db.schema import create_schema
    from kanban.db.sqlite import SQLiteAdapter

    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        adapter = SQLiteAdapter(str(db_path))
        await adapter.connect()
        await create_schema(adapter)

        yield adapter

        await adapter.close()


@pytest.fixture
def dispatcher():
    """A fresh event dispatcher, isolated from the process-wide one."""
    from kanban.events import EventDispatcher

    return EventDispatcher()


@pytest.fixture
def sample_task_data():
    """Sample task data for testing."""
    return {
        "title": "Test Task",
        "description": "A test task description",
        "color_id": "blue",
        "score": 3,
        "time_estimated": 2.5,
    }
