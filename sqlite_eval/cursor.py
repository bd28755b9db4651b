"""Forward-only cursor interface and its sqlite3 implementation."""

import logging
import sqlite3
from typing import Any, Protocol

from sqlite_eval.errors import PrepareError, StepError
from sqlite_eval.values import SqlType, sql_type_of

log = logging.getLogger(__name__)


class Cursor(Protocol):
    """What the accumulator needs from a prepared statement."""

    def advance(self) -> bool:
        """Move to the next row. False once exhausted; raises StepError on engine failure."""
        ...

    def column_count(self) -> int: ...

    def column_name(self, index: int) -> str: ...

    def column_type(self, index: int) -> SqlType | None: ...

    def column_value(self, index: int) -> Any: ...

    def finalize(self) -> None: ...


class SqliteCursor:
    """A `Cursor` over one statement executed on a sqlite3 connection.

    The sqlite3 module compiles the statement and runs its first step inside
    `execute()`, so any failure there is reported as a PrepareError. Failures
    on later rows come out of `advance()` as StepError.
    """

    def __init__(self, conn: sqlite3.Connection, sql: str) -> None:
        self._cursor = conn.cursor()
        try:
            self._cursor.execute(sql)
        except (sqlite3.Error, sqlite3.Warning) as e:
            self._cursor.close()
            raise PrepareError(str(e)) from e
        # Schema is fixed once the statement is prepared
        self._names = tuple(d[0] for d in self._cursor.description or ())
        self._row: tuple[Any, ...] | None = None
        self._finalized = False

    def advance(self) -> bool:
        try:
            self._row = self._cursor.fetchone()
        except sqlite3.Error as e:
            self._row = None
            raise StepError(str(e)) from e
        return self._row is not None

    def column_count(self) -> int:
        return len(self._names)

    def column_name(self, index: int) -> str:
        return self._names[index]

    def column_type(self, index: int) -> SqlType | None:
        return sql_type_of(self._current()[index])

    def column_value(self, index: int) -> Any:
        return self._current()[index]

    def finalize(self) -> None:
        if self._finalized:
            return
        self._finalized = True
        self._cursor.close()

    def _current(self) -> tuple[Any, ...]:
        if self._row is None:
            msg = "cursor is not positioned on a row"
            raise RuntimeError(msg)
        return self._row
