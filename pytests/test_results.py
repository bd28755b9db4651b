"""Tests for ResultSet host conversions."""

import math

import numpy as np
import pytest


def test_sequence_behaviour(conn):
    result = conn.evaluate("SELECT id FROM items ORDER BY id")
    assert result[2]["id"].value == 3
    assert [r["id"].value for r in result[1:3]] == [2, 3]
    assert result.columns == ("id",)
    assert "rows=7" in repr(result)
    with pytest.raises(IndexError):
        result[7]


def test_result_is_unhashable(conn):
    with pytest.raises(TypeError):
        hash(conn.evaluate("SELECT 1"))


def test_to_dicts(conn):
    result = conn.evaluate("SELECT id, name FROM items WHERE id <= 2 ORDER BY id")
    assert result.to_dicts() == [{"id": 1, "name": "apple"}, {"id": 2, "name": "banana"}]


def test_to_columns(conn):
    result = conn.evaluate("SELECT id, price FROM items WHERE id <= 3 ORDER BY id")
    assert result.to_columns() == {"id": [1, 2, 3], "price": [0.5, 0.25, 3.0]}


def test_to_numpy_typed_columns(conn):
    arrays = conn.evaluate("SELECT id, name, price FROM items ORDER BY id").to_numpy()
    assert arrays["id"].dtype == np.int64
    assert arrays["price"].dtype == np.float64
    assert arrays["name"].dtype == object
    assert arrays["id"].tolist() == list(range(1, 8))
    assert arrays["name"][0] == "apple"


def test_to_numpy_nulls_in_numeric_column(conn):
    arrays = conn.evaluate("SELECT v FROM mixed WHERE id IN (1, 3, 4) ORDER BY id").to_numpy()
    v = arrays["v"]
    assert v.dtype == np.float64
    assert v[0] == 10.0
    assert math.isnan(v[1])
    assert v[2] == 4.5


def test_to_numpy_mixed_column_is_object(conn):
    arrays = conn.evaluate("SELECT v FROM mixed ORDER BY id").to_numpy()
    assert arrays["v"].dtype == object
    assert arrays["v"].tolist() == [10, "two", None, 4.5, 5, None]


def test_to_numpy_empty(conn):
    assert conn.evaluate("SELECT a FROM empty").to_numpy() == {}
