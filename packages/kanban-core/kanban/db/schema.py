"""
Board schema shared by the SQLite and PostgreSQL adapters.

Timestamps are stored as integer epoch seconds, 0 meaning "not set".
"""

import logging

from kanban.db.interface import DatabaseAdapter

logger = logging.getLogger(__name__)

TABLES = (
    "projects",
    "project_has_users",
    "columns",
    "swimlanes",
    "project_has_categories",
    "tasks",
    "subtasks",
)

_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS {projects} (
        id {pk},
        name TEXT NOT NULL,
        description TEXT DEFAULT '',
        is_active INTEGER DEFAULT 1,
        is_everybody_allowed INTEGER DEFAULT 0,
        last_modified BIGINT DEFAULT 0
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS {project_has_users} (
        project_id INTEGER NOT NULL REFERENCES {projects}(id) ON DELETE CASCADE,
        user_id INTEGER NOT NULL,
        role TEXT NOT NULL DEFAULT 'project-member',
        PRIMARY KEY (project_id, user_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS {columns} (
        id {pk},
        title TEXT NOT NULL,
        position INTEGER NOT NULL,
        project_id INTEGER NOT NULL REFERENCES {projects}(id) ON DELETE CASCADE,
        task_limit INTEGER DEFAULT 0,
        description TEXT DEFAULT '',
        UNIQUE (title, project_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS {swimlanes} (
        id {pk},
        name TEXT NOT NULL,
        position INTEGER DEFAULT 1,
        is_active INTEGER DEFAULT 1,
        project_id INTEGER NOT NULL REFERENCES {projects}(id) ON DELETE CASCADE,
        description TEXT DEFAULT '',
        UNIQUE (name, project_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS {project_has_categories} (
        id {pk},
        name TEXT NOT NULL,
        project_id INTEGER NOT NULL REFERENCES {projects}(id) ON DELETE CASCADE,
        description TEXT DEFAULT '',
        color_id TEXT DEFAULT '',
        UNIQUE (project_id, name)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS {tasks} (
        id {pk},
        title TEXT NOT NULL,
        description TEXT DEFAULT '',
        reference TEXT DEFAULT '',
        date_creation BIGINT DEFAULT 0,
        date_modification BIGINT DEFAULT 0,
        date_completed BIGINT DEFAULT 0,
        date_moved BIGINT DEFAULT 0,
        date_due BIGINT DEFAULT 0,
        color_id TEXT DEFAULT '',
        project_id INTEGER NOT NULL REFERENCES {projects}(id) ON DELETE CASCADE,
        column_id INTEGER NOT NULL,
        swimlane_id INTEGER DEFAULT 0,
        category_id INTEGER DEFAULT 0,
        owner_id INTEGER DEFAULT 0,
        creator_id INTEGER DEFAULT 0,
        position INTEGER DEFAULT 0,
        is_active INTEGER DEFAULT 1,
        score INTEGER DEFAULT 0,
        priority INTEGER DEFAULT 0,
        time_estimated REAL DEFAULT 0,
        time_spent REAL DEFAULT 0,
        recurrence_status INTEGER NOT NULL DEFAULT 0,
        recurrence_trigger INTEGER NOT NULL DEFAULT 0,
        recurrence_factor INTEGER NOT NULL DEFAULT 0,
        recurrence_timeframe INTEGER NOT NULL DEFAULT 0,
        recurrence_basedate INTEGER NOT NULL DEFAULT 0,
        recurrence_parent INTEGER,
        recurrence_child INTEGER
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS {subtasks} (
        id {pk},
        title TEXT NOT NULL,
        status INTEGER DEFAULT 0,
        time_estimated REAL DEFAULT 0,
        time_spent REAL DEFAULT 0,
        task_id INTEGER NOT NULL REFERENCES {tasks}(id) ON DELETE CASCADE,
        user_id INTEGER DEFAULT 0,
        position INTEGER DEFAULT 1
    )
    """,
)


def table_name(adapter: DatabaseAdapter, name: str) -> str:
    """Qualify a table name for the given adapter."""
    if adapter.uses_schema:  # PostgreSQL
        return f"kanban.{name}"
    return name


async def create_schema(adapter: DatabaseAdapter) -> None:
    """
    Create every board table if it does not exist yet.

    Args:
        adapter: Connected DatabaseAdapter
    """
    await adapter.ensure_schema()

    names = {name: table_name(adapter, name) for name in TABLES}
    pk = "SERIAL PRIMARY KEY" if adapter.uses_schema else "INTEGER PRIMARY KEY AUTOINCREMENT"

    for statement in _STATEMENTS:
        await adapter.execute(statement.format(pk=pk, **names))

    logger.info(f"Board schema ready ({len(TABLES)} tables)")
