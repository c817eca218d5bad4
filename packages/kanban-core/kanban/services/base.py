"""
Shared plumbing for board services.
"""

from kanban.db import get_adapter, table_name


class BaseService:
    """
    Holds the database adapter and resolves table names.

    Subclasses set TABLE to their primary table.
    """

    TABLE = ""

    def __init__(self, adapter=None):
        """
        Initialize the service.

        Args:
            adapter: Optional DatabaseAdapter. If not provided, uses global adapter.
        """
        self._adapter = adapter

    @property
    def adapter(self):
        """Get the database adapter."""
        if self._adapter is None:
            self._adapter = get_adapter()
        return self._adapter

    def _table_name(self, name: str | None = None) -> str:
        """Get the full table name."""
        return table_name(self.adapter, name or self.TABLE)

    def _query(self, sql: str) -> str:
        """Render a $n-style query for the adapter."""
        return self.adapter.format_query(sql)
