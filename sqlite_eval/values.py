"""Cell type tags and their coercion into host values.

SQLite types values, not columns: the same column can hold an integer in one
row and NULL or text in the next. Each cell is therefore classified on its own
and converted into a tagged `HostValue`.

Blobs have no host mapping here and degrade to NULL.
"""

import enum
from dataclasses import dataclass
from typing import Any


class SqlType(enum.IntEnum):
    """Dynamic storage class of one cell (values match SQLite's type codes)."""

    INTEGER = 1
    FLOAT = 2
    TEXT = 3
    BLOB = 4
    NULL = 5


class ValueKind(enum.Enum):
    """Closed set of host value kinds a cell can become."""

    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    NULL = "null"


@dataclass(frozen=True)
class HostValue:
    """One coerced cell: a kind tag plus the native Python value."""

    kind: ValueKind
    value: int | float | str | None = None

    @property
    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    def __repr__(self) -> str:
        if self.kind is ValueKind.NULL:
            return "Null"
        return f"{self.kind.name.capitalize()}({self.value!r})"


NULL = HostValue(ValueKind.NULL)


def integer(value: int) -> HostValue:
    return HostValue(ValueKind.INTEGER, value)


def real(value: float) -> HostValue:
    return HostValue(ValueKind.FLOAT, value)


def text(value: str) -> HostValue:
    return HostValue(ValueKind.TEXT, value)


def sql_type_of(value: Any) -> SqlType | None:
    """Classify a raw value as delivered by the sqlite3 module.

    Returns None for anything the engine would never produce.
    """
    if value is None:
        return SqlType.NULL
    # bool is an int subclass but never comes out of the engine
    if isinstance(value, int) and not isinstance(value, bool):
        return SqlType.INTEGER
    if isinstance(value, float):
        return SqlType.FLOAT
    if isinstance(value, str):
        return SqlType.TEXT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return SqlType.BLOB
    return None


def coerce(sql_type: SqlType | int | None, raw: Any) -> HostValue:
    """Map one cell to exactly one HostValue.

    `sql_type` may be a SqlType or SQLite's plain integer type code. Integer,
    float and text cells keep their value. NULL, BLOB and any unrecognized
    tag become `NULL`.
    """
    try:
        sql_type = SqlType(sql_type)
    except (ValueError, TypeError):
        return NULL
    if sql_type is SqlType.INTEGER:
        return integer(int(raw))
    if sql_type is SqlType.FLOAT:
        return real(float(raw))
    if sql_type is SqlType.TEXT:
        if isinstance(raw, (bytes, bytearray, memoryview)):
            raw = bytes(raw).decode("utf-8", errors="replace")
        return text(str(raw))
    return NULL
