"""sqlite-eval: run SQL on a read-only SQLite database, get every row back typed.

    import sqlite_eval

    with sqlite_eval.connect("data.db", buffer_size=1000) as conn:
        result = conn.evaluate("SELECT id, name FROM users")
        result[0]["name"]  # Text('alice')
"""

import importlib.metadata

from sqlite_eval.accumulator import AccumulatorState, ChunkedAccumulator, finalize_chunks
from sqlite_eval.connection import Connection, connect
from sqlite_eval.cursor import Cursor, SqliteCursor
from sqlite_eval.errors import (
    ConnectError,
    ConnectionClosedError,
    EvalError,
    ExtensionError,
    PrepareError,
    StepError,
)
from sqlite_eval.query import evaluate
from sqlite_eval.results import ResultSet
from sqlite_eval.rows import Row, assemble_row
from sqlite_eval.values import NULL, HostValue, SqlType, ValueKind, coerce

__version__ = importlib.metadata.version("sqlite-eval")

__all__ = [
    "connect",
    "evaluate",
    "Connection",
    "ResultSet",
    "Row",
    "HostValue",
    "ValueKind",
    "SqlType",
    "NULL",
    "coerce",
    "assemble_row",
    "Cursor",
    "SqliteCursor",
    "ChunkedAccumulator",
    "AccumulatorState",
    "finalize_chunks",
    "EvalError",
    "ConnectError",
    "ConnectionClosedError",
    "PrepareError",
    "StepError",
    "ExtensionError",
]
