"""
Kanban Core Library

Task duplication and cross-project migration for kanban boards, on
PostgreSQL or SQLite.
"""

__version__ = "0.1.0"

from kanban.config import KanbanConfig, load_config
from kanban.db import DatabaseAdapter, get_adapter

__all__ = [
    "load_config",
    "KanbanConfig",
    "get_adapter",
    "DatabaseAdapter",
]
