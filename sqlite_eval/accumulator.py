"""Chunked accumulation of cursor rows and their one-shot flattening.

The number of rows a statement produces is unknown until its cursor is
exhausted. Rows are collected into fixed-capacity chunks, and a new chunk is
started only when a row arrives and the current one is full. Once the cursor
is done the chunks are copied, in order, into a single exactly-sized list.

    acc = ChunkedAccumulator(capacity=5000)
    acc.run(cursor)
    result = acc.finalize()

If the engine fails mid-stream the chunks are discarded and the error is
re-raised; a partial result is never produced.
"""

import enum
import logging

from sqlite_eval.cursor import Cursor
from sqlite_eval.errors import StepError
from sqlite_eval.results import ResultSet
from sqlite_eval.rows import Row, assemble_row

log = logging.getLogger(__name__)


class AccumulatorState(enum.Enum):
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"


class ChunkedAccumulator:
    """Collects Rows into a chain of fixed-capacity chunks."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            msg = f"chunk capacity must be >= 1, got {capacity}"
            raise ValueError(msg)
        self.capacity = capacity
        self.state = AccumulatorState.RUNNING
        self.chunks: list[list[Row | None]] = [self._new_chunk()]
        self.fill = 0
        self.row_count = 0

    def _new_chunk(self) -> list[Row | None]:
        return [None] * self.capacity

    def append(self, row: Row) -> None:
        if self.fill == self.capacity:
            self.chunks.append(self._new_chunk())
            self.fill = 0
        self.chunks[-1][self.fill] = row
        self.fill += 1
        self.row_count += 1

    def run(self, cursor: Cursor) -> int:
        """Drive `cursor` to exhaustion. Returns the number of rows collected."""
        column_count = cursor.column_count()
        while self.state is AccumulatorState.RUNNING:
            try:
                has_row = cursor.advance()
            except StepError:
                self.state = AccumulatorState.FAILED
                log.debug("step failed after %d rows, discarding %d chunks", self.row_count, len(self.chunks))
                self.chunks = []
                self.fill = 0
                self.row_count = 0
                raise
            if has_row:
                self.append(assemble_row(cursor, column_count))
            else:
                self.state = AccumulatorState.DONE
        return self.row_count

    def finalize(self) -> ResultSet:
        if self.state is not AccumulatorState.DONE:
            msg = f"cannot finalize an accumulator in state {self.state.value}"
            raise RuntimeError(msg)
        return finalize_chunks(self.chunks, self.capacity, self.fill, self.row_count)


def finalize_chunks(chunks: list[list[Row | None]], capacity: int, fill: int, row_count: int) -> ResultSet:
    """Flatten a chunk chain into one ResultSet of exactly `row_count` rows.

    Every chunk but the last is full; only the first `fill` slots of the last
    chunk are used.
    """
    rows: list[Row | None] = [None] * row_count
    end = 0
    last = len(chunks) - 1
    for i, chunk in enumerate(chunks):
        size = fill if i == last else capacity
        rows[end : end + size] = chunk[:size]
        end += size
    return ResultSet(rows)  # type: ignore[arg-type]
