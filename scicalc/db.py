"""SQLite storage for calculation history and currency rates."""

from __future__ import annotations

import sqlite3
from os import PathLike
from typing import Optional, Union

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS calculations (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        expression TEXT NOT NULL,
        result TEXT NOT NULL,
        timestamp DATETIME DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_calculations_timestamp
    ON calculations(timestamp DESC)
    """,
    """
    CREATE TABLE IF NOT EXISTS currency_rates (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        code TEXT NOT NULL UNIQUE,
        name TEXT NOT NULL,
        nominal INTEGER NOT NULL,
        rate REAL NOT NULL,
        last_update DATETIME NOT NULL
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_currency_code
    ON currency_rates(code)
    """,
)


class DatabaseError(RuntimeError):
    """Raised when the database cannot be opened or a query fails."""


class Database:
    """An SQLite connection holding the calculator's tables."""

    def __init__(self) -> None:
        self._connection: Optional[sqlite3.Connection] = None

    def initialize(self, path: Union[str, "PathLike[str]"]) -> None:
        """Open the database at ``path`` and create missing tables.

        Does nothing if the database is already open.
        """
        if self._connection is not None:
            return
        try:
            connection = sqlite3.connect(path)
        except sqlite3.Error as exc:
            raise DatabaseError(f"cannot open database: {exc}") from exc
        connection.row_factory = sqlite3.Row
        try:
            with connection:
                for statement in _SCHEMA:
                    connection.execute(statement)
        except sqlite3.Error as exc:
            connection.close()
            raise DatabaseError(f"cannot create tables: {exc}") from exc
        self._connection = connection

    def close(self) -> None:
        """Close the connection, if open."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def is_initialized(self) -> bool:
        return self._connection is not None

    def connection(self) -> sqlite3.Connection:
        """The open connection; raises DatabaseError if not initialized."""
        if self._connection is None:
            raise DatabaseError("database is not initialized")
        return self._connection

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()