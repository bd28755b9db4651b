"""The finalized, caller-owned result collection."""

from collections.abc import Sequence
from typing import Any, overload

import numpy as np

from sqlite_eval.rows import Row
from sqlite_eval.values import ValueKind


class ResultSet(Sequence[Row]):
    """Immutable, ordered, randomly indexable rows of one query.

    An empty result carries no schema: `columns` is `()` when there are no
    rows, whatever the statement selected.
    """

    __slots__ = ("_rows",)

    def __init__(self, rows: list[Row]) -> None:
        self._rows = rows

    @overload
    def __getitem__(self, index: int) -> Row: ...

    @overload
    def __getitem__(self, index: slice) -> list[Row]: ...

    def __getitem__(self, index):
        return self._rows[index]

    def __len__(self) -> int:
        return len(self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResultSet):
            return NotImplemented
        return self._rows == other._rows

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ResultSet(rows={len(self._rows)}, columns={list(self.columns)})"

    @property
    def columns(self) -> tuple[str, ...]:
        if not self._rows:
            return ()
        return self._rows[0].names

    def to_dicts(self) -> list[dict[str, Any]]:
        """One dict of native values per row."""
        return [row.as_dict() for row in self._rows]

    def to_columns(self) -> dict[str, list[Any]]:
        """Column-oriented native values, keyed by column name."""
        cols: dict[str, list[Any]] = {name: [] for name in self.columns}
        for row in self._rows:
            for name, value in row.as_dict().items():
                cols[name].append(value)
        return cols

    def to_numpy(self) -> dict[str, np.ndarray]:
        """Column-oriented numpy arrays.

        Integer columns become int64 and float columns float64. A numeric
        column with NULLs becomes float64 with NaN in their place. Anything
        else (text, mixed kinds, all-NULL) is an object array with None for NULL.
        """
        arrays: dict[str, np.ndarray] = {}
        for pos, name in enumerate(self.columns):
            if name in arrays:
                continue
            cells = [row[pos] for row in self._rows]
            arrays[name] = _column_array(cells)
        return arrays


def _column_array(cells: list) -> np.ndarray:
    kinds = {cell.kind for cell in cells}
    numeric = kinds - {ValueKind.NULL}
    if numeric == {ValueKind.INTEGER} and ValueKind.NULL not in kinds:
        return np.array([cell.value for cell in cells], dtype=np.int64)
    if numeric and numeric <= {ValueKind.INTEGER, ValueKind.FLOAT}:
        return np.array([np.nan if cell.is_null else cell.value for cell in cells], dtype=np.float64)
    out = np.empty(len(cells), dtype=object)
    out[:] = [cell.value for cell in cells]
    return out
