"""
Adapter selection and the process-wide board database.

``database.type`` picks the backend. The driver module is only imported
once the configuration for that backend is known to be complete, so a
SQLite install never needs asyncpg.
"""

import logging

from kanban.db.interface import DatabaseAdapter

logger = logging.getLogger(__name__)

_BACKENDS = {
    "sqlite": "sqlite",
    "postgres": "postgres",
    "postgresql": "postgres",
}

_adapter: DatabaseAdapter | None = None
_schema_ready = False


def create_adapter(database) -> DatabaseAdapter:
    """
    Build a new, unconnected adapter for a database section.

    Args:
        database: DatabaseConfig

    Returns:
        SQLiteAdapter or PostgresAdapter

    Raises:
        ValueError: Unknown backend, or PostgreSQL without a URL
        RuntimeError: The backend's driver is not installed
    """
    backend = _BACKENDS.get((database.type or "").lower())

    if backend is None:
        raise ValueError(
            f"Unknown database type: {database.type}. Use 'postgres' or 'sqlite'."
        )

    if backend == "postgres":
        if not database.postgres_url:
            raise ValueError(
                "PostgreSQL URL not configured. "
                "Set database.postgres.url in config or KANBAN_DATABASE_URL env var."
            )
        from kanban.db.postgres import PostgresAdapter

        logger.info("Board database: PostgreSQL")
        return PostgresAdapter(database.postgres_url)

    from kanban.db.sqlite import SQLiteAdapter

    logger.info(f"Board database: SQLite at {database.sqlite_path}")
    return SQLiteAdapter(database.sqlite_path)


def get_adapter(config=None) -> DatabaseAdapter:
    """
    Get the shared adapter, creating it from config on first use.

    Args:
        config: Optional KanbanConfig. Defaults to the cached global config.
    """
    global _adapter

    if _adapter is None:
        if config is None:
            from kanban.config import get_config
            config = get_config()
        _adapter = create_adapter(config.database)

    return _adapter


async def init_adapter(config=None) -> DatabaseAdapter:
    """
    Connect the shared adapter and make sure the board tables exist.

    The schema is only created once per adapter.
    """
    global _schema_ready

    from kanban.db.schema import create_schema

    adapter = get_adapter(config)
    await adapter.connect()

    if not _schema_ready:
        await create_schema(adapter)
        _schema_ready = True

    return adapter


async def close_adapter() -> None:
    """Close and forget the shared adapter."""
    global _adapter

    adapter = _adapter
    reset_adapter()
    if adapter is not None:
        await adapter.close()


def reset_adapter() -> None:
    """Forget the shared adapter without closing it, e.g. after a config change."""
    global _adapter, _schema_ready
    _adapter = None
    _schema_ready = False
