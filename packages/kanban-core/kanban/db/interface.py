"""
Abstract database adapter interface.

Supports both PostgreSQL and SQLite behind one async API.
"""

import re
from abc import ABC, abstractmethod
from typing import Any


class DatabaseAdapter(ABC):
    """
    Abstract base class for database adapters.

    Implementations must support:
    - Basic operations (execute, fetch, fetchrow, fetchval)
    - Inserts that hand back the generated integer id
    - Placeholder style detection
    """

    @abstractmethod
    async def connect(self) -> None:
        """Initialize connection/pool."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close connection/pool."""
        pass

    @abstractmethod
    async def execute(self, query: str, *args) -> str:
        """
        Execute a query and return status.

        Args:
            query: SQL query with placeholders ($1, $2 for PG; ? for SQLite)
            *args: Query parameters

        Returns:
            Status string (e.g., "UPDATE 1")
        """
        pass

    @abstractmethod
    async def insert(self, query: str, *args) -> int:
        """
        Execute an INSERT and return the id of the new row.

        Args:
            query: INSERT statement without a RETURNING clause
            *args: Query parameters

        Returns:
            Generated primary key
        """
        pass

    @abstractmethod
    async def fetch(self, query: str, *args) -> list[dict]:
        """
        Fetch multiple rows as list of dicts.

        Args:
            query: SQL SELECT query
            *args: Query parameters

        Returns:
            List of row dicts
        """
        pass

    @abstractmethod
    async def fetchrow(self, query: str, *args) -> dict | None:
        """
        Fetch single row as dict.

        Args:
            query: SQL SELECT query
            *args: Query parameters

        Returns:
            Row dict or None if no results
        """
        pass

    @abstractmethod
    async def fetchval(self, query: str, *args) -> Any:
        """
        Fetch single value.

        Args:
            query: SQL SELECT query returning one column
            *args: Query parameters

        Returns:
            The value or None
        """
        pass

    @property
    @abstractmethod
    def uses_schema(self) -> bool:
        """Are tables namespaced under the kanban schema?"""
        pass

    @property
    @abstractmethod
    def placeholder_style(self) -> str:
        """
        Return the placeholder style for this adapter.

        Returns:
            "dollar" for PostgreSQL ($1, $2, ...)
            "qmark" for SQLite (?, ?, ...)
        """
        pass

    def format_query(self, query: str) -> str:
        """
        Convert query placeholders to the adapter's style.

        Input uses $1, $2 style (PostgreSQL).
        For SQLite, converts to ? style.
        """
        if self.placeholder_style == "dollar":
            return query

        return re.sub(r'\$\d+', '?', query)

    async def ensure_schema(self) -> None:
        """
        Create schema if needed (PostgreSQL only).
        Default implementation does nothing.
        """
        pass


def rows_affected(status: str) -> int:
    """Parse the row count out of a status string like "UPDATE 3"."""
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (ValueError, AttributeError):
        return 0
