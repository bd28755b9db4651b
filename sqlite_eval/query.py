"""Evaluate SQL text on a connection into a fully materialized ResultSet."""

import logging
from typing import TYPE_CHECKING

from sqlite_eval.accumulator import ChunkedAccumulator
from sqlite_eval.results import ResultSet

if TYPE_CHECKING:
    from sqlite_eval.connection import Connection

log = logging.getLogger(__name__)


def evaluate(connection: "Connection", sql: str, chunk_capacity: int | None = None) -> ResultSet:
    """Run `sql` to completion and return every row it produces.

    `chunk_capacity` defaults to the connection's buffer size. Raises
    ConnectionClosedError, PrepareError or StepError; on failure no rows are
    returned at all.
    """
    capacity = connection.buffer_size if chunk_capacity is None else chunk_capacity
    accumulator = ChunkedAccumulator(capacity)
    with connection.prepare(sql) as cursor:
        accumulator.run(cursor)
    result = accumulator.finalize()
    log.debug("Evaluated %d rows in %d chunks of %d", len(result), len(accumulator.chunks), capacity)
    return result
