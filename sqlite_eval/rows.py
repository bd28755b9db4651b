"""Named, ordered result rows."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from sqlite_eval.cursor import Cursor
from sqlite_eval.values import HostValue, coerce


@dataclass(frozen=True)
class Row:
    """One result row as ordered (column name, HostValue) pairs.

    Each row carries its own column names, so a row stays meaningful once it
    has been separated from the result set it came from.
    """

    fields: tuple[tuple[str, HostValue], ...]

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[tuple[str, HostValue]]:
        return iter(self.fields)

    def __getitem__(self, key: int | str) -> HostValue:
        """Look up a value by position, or by name (first match wins)."""
        if isinstance(key, str):
            for name, value in self.fields:
                if name == key:
                    return value
            raise KeyError(key)
        return self.fields[key][1]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.fields)

    @property
    def values(self) -> tuple[HostValue, ...]:
        return tuple(value for _, value in self.fields)

    def as_dict(self) -> dict[str, Any]:
        """Native Python values keyed by column name.

        Later duplicates of a column name are dropped.
        """
        out: dict[str, Any] = {}
        for name, value in self.fields:
            out.setdefault(name, value.value)
        return out


def assemble_row(cursor: Cursor, column_count: int) -> Row:
    """Build a Row from the cursor's current position, in SELECT column order."""
    fields = []
    for i in range(column_count):
        value = coerce(cursor.column_type(i), cursor.column_value(i))
        fields.append((cursor.column_name(i), value))
    return Row(tuple(fields))
