"""Read-only SQLite connections."""

import logging
import sqlite3
from collections.abc import Generator, Iterable
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from sqlite_eval import config as _config
from sqlite_eval.cursor import SqliteCursor
from sqlite_eval.errors import ConnectError, ConnectionClosedError, EvalError, ExtensionError
from sqlite_eval.query import evaluate
from sqlite_eval.results import ResultSet

log = logging.getLogger(__name__)

MEMORY = ":memory:"


def _decode_text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _open_readonly(path: str, check_same_thread: bool) -> sqlite3.Connection:
    if path == MEMORY:
        uri = "file::memory:?mode=ro"
    else:
        uri = Path(path).resolve().as_uri() + "?mode=ro"
    return sqlite3.connect(uri, uri=True, check_same_thread=check_same_thread)


class Connection:
    """A read-only database connection with a configurable row buffer.

    Use as a context manager, or call `close()` when done. After closing, every
    operation except `close()` raises ConnectionClosedError.

    `enable_extensions` turns on the SQL-level `load_extension()` function.
    Extensions given in `extensions` or passed to `load_extension()` load
    either way.

    `check_same_thread=False` lets other threads use the connection; callers
    must then serialize queries themselves.
    """

    def __init__(
        self,
        path: str | Path,
        buffer_size: int | None = None,
        *,
        extensions: Iterable[str | Path] = (),
        enable_extensions: bool = True,
        check_same_thread: bool = True,
    ) -> None:
        self.name = str(path)
        self._buffer_size = _config.DEFAULT_BUFFER_SIZE
        if buffer_size is not None:
            self.buffer_size = buffer_size
        self.last_error: str | None = None
        self._sql_extensions = False

        log.info("Opening database read-only: %s", self.name)
        try:
            self._db: sqlite3.Connection | None = _open_readonly(self.name, check_same_thread)
        except sqlite3.Error as e:
            msg = f"{e}: {self.name}"
            raise ConnectError(msg) from e
        self._db.text_factory = _decode_text

        try:
            if enable_extensions:
                self._enable_load_extension()
            for ext in extensions:
                self.load_extension(ext)
        except ExtensionError:
            self.close()
            raise

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<Connection {self.name!r} buffer_size={self._buffer_size} {state}>"

    @property
    def closed(self) -> bool:
        return self._db is None

    def _handle(self) -> sqlite3.Connection:
        if self._db is None:
            raise ConnectionClosedError()
        return self._db

    def _enable_load_extension(self) -> None:
        enable = getattr(self._handle(), "enable_load_extension", None)
        if enable is None:
            log.warning("This sqlite3 build does not support loadable extensions")
            return
        enable(True)
        self._sql_extensions = True

    def close(self) -> None:
        """Close the underlying handle. Safe to call more than once."""
        if self._db is None:
            return
        self._db.close()
        self._db = None
        log.info("Closed database: %s", self.name)

    @property
    def buffer_size(self) -> int:
        return self._buffer_size

    @buffer_size.setter
    def buffer_size(self, size: int) -> None:
        if isinstance(size, bool) or not isinstance(size, int):
            msg = f"buffer size must be an int, got {type(size).__name__}"
            raise TypeError(msg)
        if size < 1:
            msg = f"buffer size must be >= 1, got {size}"
            raise ValueError(msg)
        self._buffer_size = size

    def set_buffer_size(self, size: int) -> None:
        """Change the number of rows per accumulation chunk."""
        self._handle()
        self.buffer_size = size

    def info(self) -> dict[str, Any]:
        """Database file name and current buffer size."""
        self._handle()
        return {"database_file": self.name, "buffer_size": self._buffer_size}

    def load_extension(self, path: str | Path) -> None:
        """Load a SQLite extension (SQLite appends the platform suffix itself)."""
        db = self._handle()
        enable = getattr(db, "enable_load_extension", None)
        load = getattr(db, "load_extension", None)
        if enable is None or load is None:
            msg = "This sqlite3 build does not support loadable extensions"
            raise ExtensionError(msg)
        enable(True)
        try:
            load(str(path))
        except sqlite3.Error as e:
            msg = f"Could not load extension {path}: {e}"
            raise ExtensionError(msg) from e
        finally:
            # SQL statements keep their own setting
            if not self._sql_extensions:
                enable(False)
        log.info("Loaded extension from: %s", path)

    @contextmanager
    def prepare(self, sql: str) -> Generator[SqliteCursor, None, None]:
        """Compile `sql` and yield its cursor, finalizing it on every exit path."""
        db = self._handle()
        try:
            cursor = SqliteCursor(db, sql)
        except EvalError as e:
            self.last_error = str(e)
            raise
        try:
            yield cursor
        except EvalError as e:
            self.last_error = str(e)
            raise
        finally:
            cursor.finalize()

    def evaluate(self, sql: str) -> ResultSet:
        """Run `sql` and return its full ResultSet."""
        return evaluate(self, sql)


def connect(
    path: str | Path,
    buffer_size: int | None = None,
    *,
    extensions: Iterable[str | Path] = (),
    enable_extensions: bool = True,
) -> Connection:
    """Open `path` read-only. See `Connection`."""
    return Connection(path, buffer_size, extensions=extensions, enable_extensions=enable_extensions)
