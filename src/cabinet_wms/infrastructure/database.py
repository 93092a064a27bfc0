"""SQLite access for saved templates, configurations, projects and API users.

Every operation opens its own connection, so the database can be shared by
concurrent requests without a lock. A Database without a path, or whose file
cannot be opened, reports itself as not connected and callers fall back to
mock data.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator, Sequence
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL UNIQUE,
    email TEXT,
    role TEXT NOT NULL DEFAULT 'user',
    permissions TEXT NOT NULL DEFAULT '[]',
    token_hash TEXT NOT NULL UNIQUE,
    created_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS cabinet_configurations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    template_id TEXT,
    dimensions TEXT NOT NULL DEFAULT '{}',
    materials TEXT NOT NULL DEFAULT '[]',
    cutting_list TEXT NOT NULL DEFAULT '[]',
    created_by INTEGER,
    created_at TEXT NOT NULL DEFAULT (datetime('now')),
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS cabinet_templates (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    description TEXT,
    category TEXT,
    default_dimensions TEXT NOT NULL DEFAULT '{}',
    min_dimensions TEXT NOT NULL DEFAULT '{}',
    max_dimensions TEXT NOT NULL DEFAULT '{}',
    panels TEXT NOT NULL DEFAULT '[]',
    hardware TEXT NOT NULL DEFAULT '[]',
    materials TEXT NOT NULL DEFAULT '[]',
    construction TEXT NOT NULL DEFAULT '{}',
    created_by INTEGER,
    created_at TEXT NOT NULL DEFAULT (datetime('now')),
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS cabinet_projects (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    description TEXT,
    configurations TEXT NOT NULL DEFAULT '[]',
    created_by INTEGER,
    created_at TEXT NOT NULL DEFAULT (datetime('now')),
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""


class StoreUnavailableError(Exception):
    """Raised when a write is attempted while the database is unavailable."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Database unavailable, cannot {operation}")


class Database:
    """Thin wrapper over a SQLite file with parameterized queries.

    Attributes:
        path: Database file, or None for a store that is never connected.
    """

    def __init__(self, path: Path | str | None) -> None:
        self.path = Path(path) if path is not None else None

    def is_connected(self) -> bool:
        """Check that the database file can be opened and queried."""
        if self.path is None:
            return False
        try:
            with closing(self._connect()) as conn:
                conn.execute("SELECT 1").fetchone()
        except sqlite3.Error as e:
            logger.warning("Database %s unavailable: %s", self.path, e)
            return False
        return True

    def init_schema(self) -> None:
        """Create tables if they do not exist.

        Raises:
            StoreUnavailableError: If no database path is configured.
        """
        if self.path is None:
            raise StoreUnavailableError("initialize schema")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with closing(self._connect(create=True)) as conn:
            with conn:
                conn.executescript(SCHEMA)
        logger.info("Initialized database schema at %s", self.path)

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection that commits on success and rolls back on error."""
        if self.path is None:
            raise StoreUnavailableError("open a connection")
        with closing(self._connect()) as conn:
            with conn:
                yield conn

    def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        with self.connection() as conn:
            return [dict(row) for row in conn.execute(sql, params).fetchall()]

    def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> dict[str, Any] | None:
        with self.connection() as conn:
            row = conn.execute(sql, params).fetchone()
        return dict(row) if row is not None else None

    def execute(self, sql: str, params: Sequence[Any] = ()) -> tuple[int, int]:
        """Run a write statement.

        Returns:
            (lastrowid, rowcount) of the statement.
        """
        with self.connection() as conn:
            cursor = conn.execute(sql, params)
            return cursor.lastrowid or 0, cursor.rowcount

    def _connect(self, create: bool = False) -> sqlite3.Connection:
        # mode=rw keeps a missing file from being created as an empty database
        mode = "rwc" if create else "rw"
        uri = f"{Path(self.path).resolve().as_uri()}?mode={mode}"
        conn = sqlite3.connect(uri, uri=True)
        conn.row_factory = sqlite3.Row
        return conn
