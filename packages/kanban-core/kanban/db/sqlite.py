"""
SQLite database adapter using aiosqlite.

Used for local boards and for the test suite. Every statement is committed
immediately; there is no multi-statement transaction support.
"""

import logging
from pathlib import Path
from typing import Optional, List, Any

from kanban.db.interface import DatabaseAdapter

logger = logging.getLogger(__name__)

try:
    import aiosqlite
    HAS_AIOSQLITE = True
except ImportError:
    HAS_AIOSQLITE = False
    aiosqlite = None


class SQLiteAdapter(DatabaseAdapter):
    """
    SQLite adapter.

    Uses aiosqlite for async database operations.
    Automatically creates the database file and parent directories.
    """

    def __init__(self, db_path: str = "~/.kanban/kanban.db"):
        """
        Initialize SQLite adapter.

        Args:
            db_path: Path to SQLite database file.
                    Supports ~ expansion for home directory.
        """
        if not HAS_AIOSQLITE:
            raise RuntimeError(
                "aiosqlite not installed. Run: pip install kanban-core"
            )

        self.db_path = Path(db_path).expanduser()
        self._conn: Optional[aiosqlite.Connection] = None

    async def connect(self) -> None:
        """Initialize database connection and create file if needed."""
        if self._conn is not None:
            return

        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._conn = await aiosqlite.connect(str(self.db_path))
        await self._conn.execute("PRAGMA foreign_keys = ON")
        await self._conn.execute("PRAGMA journal_mode = WAL")
        self._conn.row_factory = aiosqlite.Row

        logger.info(f"SQLite database connected: {self.db_path}")

    async def close(self) -> None:
        """Close database connection."""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.info("SQLite connection closed")

    async def _get_conn(self) -> aiosqlite.Connection:
        """Get or create connection."""
        if self._conn is None:
            await self.connect()
        return self._conn

    async def execute(self, query: str, *args) -> str:
        """Execute query and return status."""
        conn = await self._get_conn()
        query = self.format_query(query)

        cursor = await conn.execute(query, args)
        await conn.commit()

        # Mimic PostgreSQL status strings
        verb = query.strip().split(None, 1)[0].upper() if query.strip() else ""
        if verb == "INSERT":
            return f"INSERT 0 {cursor.rowcount}"
        elif verb in ("UPDATE", "DELETE"):
            return f"{verb} {cursor.rowcount}"
        return "OK"

    async def insert(self, query: str, *args) -> int:
        """Execute an INSERT and return the last row id."""
        conn = await self._get_conn()
        cursor = await conn.execute(self.format_query(query), args)
        await conn.commit()
        return cursor.lastrowid

    async def fetch(self, query: str, *args) -> List[dict]:
        """Fetch rows as list of dicts."""
        conn = await self._get_conn()
        cursor = await conn.execute(self.format_query(query), args)
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    async def fetchrow(self, query: str, *args) -> Optional[dict]:
        """Fetch single row as dict."""
        conn = await self._get_conn()
        cursor = await conn.execute(self.format_query(query), args)
        row = await cursor.fetchone()
        return dict(row) if row else None

    async def fetchval(self, query: str, *args) -> Any:
        """Fetch single value."""
        conn = await self._get_conn()
        cursor = await conn.execute(self.format_query(query), args)
        row = await cursor.fetchone()

        if row:
            return row[0]
        return None

    @property
    def uses_schema(self) -> bool:
        """SQLite has no schemas; tables live at the top level."""
        return False

    @property
    def placeholder_style(self) -> str:
        """SQLite uses ? style placeholders."""
        return "qmark"
