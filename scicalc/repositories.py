"""Data access for calculations and currency rates."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Iterable, Optional

from scicalc.db import Database, DatabaseError
from scicalc.models import CalculationEntity, CurrencyEntity


def _to_text(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat(timespec="microseconds")


def _to_datetime(value: object) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None


class CalculationRepository:
    """Stores and retrieves calculation history entries."""

    def __init__(self, database: Database) -> None:
        self._database = database

    @staticmethod
    def _from_row(row: sqlite3.Row) -> CalculationEntity:
        return CalculationEntity(
            id=int(row["id"]),
            expression=str(row["expression"]),
            result=str(row["result"]),
            timestamp=_to_datetime(row["timestamp"]),
        )

    def save(self, calculation: CalculationEntity) -> CalculationEntity:
        """Insert the calculation and set its id; returns the same object."""
        connection = self._database.connection()
        try:
            with connection:
                cursor = connection.execute(
                    "INSERT INTO calculations (expression, result, timestamp) "
                    "VALUES (?, ?, ?)",
                    (
                        calculation.expression,
                        calculation.result,
                        _to_text(calculation.timestamp),
                    ),
                )
        except sqlite3.Error as exc:
            raise DatabaseError(f"cannot save calculation: {exc}") from exc
        calculation.id = int(cursor.lastrowid)
        return calculation

    def find_by_id(self, calculation_id: int) -> Optional[CalculationEntity]:
        connection = self._database.connection()
        try:
            row = connection.execute(
                "SELECT id, expression, result, timestamp FROM calculations WHERE id = ?",
                (calculation_id,),
            ).fetchone()
        except sqlite3.Error as exc:
            raise DatabaseError(f"cannot find calculation: {exc}") from exc
        return self._from_row(row) if row is not None else None

    def find_all(self) -> list[CalculationEntity]:
        """All calculations, newest first."""
        connection = self._database.connection()
        try:
            rows = connection.execute(
                "SELECT id, expression, result, timestamp FROM calculations "
                "ORDER BY timestamp DESC"
            ).fetchall()
        except sqlite3.Error as exc:
            raise DatabaseError(f"cannot list calculations: {exc}") from exc
        return [self._from_row(row) for row in rows]

    def delete_by_id(self, calculation_id: int) -> bool:
        """Delete one calculation; True if a row was removed."""
        connection = self._database.connection()
        try:
            with connection:
                cursor = connection.execute(
                    "DELETE FROM calculations WHERE id = ?", (calculation_id,)
                )
        except sqlite3.Error as exc:
            raise DatabaseError(f"cannot delete calculation: {exc}") from exc
        return cursor.rowcount > 0

    def delete_all(self) -> None:
        connection = self._database.connection()
        try:
            with connection:
                connection.execute("DELETE FROM calculations")
        except sqlite3.Error as exc:
            raise DatabaseError(f"cannot clear calculations: {exc}") from exc


class CurrencyRepository:
    """Stores and retrieves currency exchange rates."""

    def __init__(self, database: Database) -> None:
        self._database = database

    @staticmethod
    def _from_row(row: sqlite3.Row) -> CurrencyEntity:
        return CurrencyEntity(
            id=int(row["id"]),
            code=str(row["code"]),
            name=str(row["name"]),
            nominal=int(row["nominal"]),
            rate=float(row["rate"]),
            last_update=_to_datetime(row["last_update"]),
        )

    def save_all(self, currencies: Iterable[CurrencyEntity]) -> None:
        """Replace all stored rates with ``currencies`` in one transaction."""
        connection = self._database.connection()
        try:
            with connection:
                connection.execute("DELETE FROM currency_rates")
                connection.executemany(
                    "INSERT INTO currency_rates "
                    "(code, name, nominal, rate, last_update) VALUES (?, ?, ?, ?, ?)",
                    [
                        (c.code, c.name, c.nominal, c.rate, _to_text(c.last_update))
                        for c in currencies
                    ],
                )
        except sqlite3.Error as exc:
            raise DatabaseError(f"cannot save currency rates: {exc}") from exc

    def find_all(self) -> list[CurrencyEntity]:
        """All rates, ordered by currency code."""
        connection = self._database.connection()
        try:
            rows = connection.execute(
                "SELECT id, code, name, nominal, rate, last_update "
                "FROM currency_rates ORDER BY code"
            ).fetchall()
        except sqlite3.Error as exc:
            raise DatabaseError(f"cannot list currency rates: {exc}") from exc
        return [self._from_row(row) for row in rows]

    def last_update_time(self) -> Optional[datetime]:
        """Most recent update time among stored rates, or None."""
        connection = self._database.connection()
        try:
            row = connection.execute(
                "SELECT MAX(last_update) FROM currency_rates"
            ).fetchone()
        except sqlite3.Error as exc:
            raise DatabaseError(f"cannot read update time: {exc}") from exc
        return _to_datetime(row[0]) if row is not None else None