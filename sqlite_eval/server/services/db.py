"""Shared connection for the HTTP server."""

import logging
import threading
from collections.abc import Generator
from pathlib import Path

from sqlite_eval import config as _config
from sqlite_eval.connection import Connection
from sqlite_eval.errors import ExtensionError

log = logging.getLogger(__name__)

# Module-level connection singleton
_connection: Connection | None = None

# One query at a time per connection; FastAPI runs sync routes in a thread pool.
_db_lock = threading.Lock()

# Guards creation of the singleton; health checks call get_connection outside _db_lock.
_init_lock = threading.Lock()


def get_connection(db_path: str | None = None) -> Connection:
    """Get or create the singleton read-only connection."""
    global _connection
    if _connection is not None:
        return _connection

    with _init_lock:
        if _connection is not None:
            return _connection

        path = db_path or _config.DB_PATH
        if not path or not Path(path).exists():
            msg = f"Database not found: {path}"
            raise FileNotFoundError(msg)

        # Request SQL must not be able to call load_extension()
        conn = Connection(path, enable_extensions=False, check_same_thread=False)
        for ext in _config.EXTENSIONS:
            try:
                conn.load_extension(ext)
            except ExtensionError:
                log.warning("Could not load extension from: %s", ext)

        _connection = conn
        return conn


def close_connection() -> None:
    """Close the singleton connection."""
    global _connection
    if _connection is not None:
        _connection.close()
        _connection = None


def reset_connection() -> None:
    """Reset singleton for testing."""
    global _connection
    _connection = None


def db_session() -> Generator[Connection, None, None]:
    """FastAPI dependency that serializes database access."""
    with _db_lock:
        yield get_connection()
