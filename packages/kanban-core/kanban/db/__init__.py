"""
Database abstraction layer supporting PostgreSQL and SQLite.
"""

from kanban.db.factory import close_adapter, create_adapter, get_adapter, init_adapter, reset_adapter
from kanban.db.interface import DatabaseAdapter
from kanban.db.schema import create_schema, table_name

__all__ = [
    "DatabaseAdapter",
    "create_adapter",
    "get_adapter",
    "init_adapter",
    "close_adapter",
    "reset_adapter",
    "create_schema",
    "table_name",
]
