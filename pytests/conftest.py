"""Fixtures for sqlite-eval tests.

Builds a small on-disk database (the library only opens databases read-only)
and provides an open connection to it.
"""

import pathlib
import sqlite3
from collections.abc import Generator

import pytest

import sqlite_eval

ITEMS = [
    (1, "apple", 0.5),
    (2, "banana", 0.25),
    (3, "cherry", 3.0),
    (4, "date", 2.75),
    (5, "elderberry", 4.0),
    (6, "fig", 1.5),
    (7, "grape", 2.0),
]


def create_test_db(path: pathlib.Path) -> str:
    """Create a test database with fixed contents and return its path."""
    db_path = str(path / "test.db")
    conn = sqlite3.connect(db_path)

    conn.execute("CREATE TABLE items (id INTEGER PRIMARY KEY, name TEXT, price REAL)")
    conn.executemany("INSERT INTO items VALUES (?, ?, ?)", ITEMS)

    # One column, a different storage class per row
    conn.execute("CREATE TABLE mixed (id INTEGER PRIMARY KEY, v)")
    conn.executemany(
        "INSERT INTO mixed VALUES (?, ?)",
        [
            (1, 10),
            (2, "two"),
            (3, None),
            (4, 4.5),
            (5, 5),
            (6, b"\x00\xff"),
        ],
    )

    # abs() of the smallest int64 overflows at step time, on row 4
    conn.execute("CREATE TABLE overflow (id INTEGER PRIMARY KEY, v INTEGER)")
    conn.executemany(
        "INSERT INTO overflow VALUES (?, ?)",
        [(1, -1), (2, -2), (3, -3), (4, -(2**63)), (5, -5)],
    )

    conn.execute("CREATE TABLE empty (a INTEGER, b TEXT)")
    conn.commit()
    conn.close()
    return db_path


@pytest.fixture
def db_path(tmp_path: pathlib.Path) -> str:
    """Create a test database and return its path."""
    return create_test_db(tmp_path)


@pytest.fixture
def conn(db_path: str) -> Generator[sqlite_eval.Connection, None, None]:
    """Provide an open read-only connection to the test database."""
    db = sqlite_eval.connect(db_path)
    yield db
    db.close()


@pytest.fixture
def items() -> list[tuple[int, str, float]]:
    """Rows of the `items` table, in id order."""
    return list(ITEMS)
