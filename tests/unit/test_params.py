"""Unit tests for positional placeholder translation."""

from __future__ import annotations

import pytest

from row_crud.core.params import coerce_params, to_format_style, to_numbered_qmark


class TestNumberedQmark:
    def test_basic_conversion(self) -> None:
        sql = "SELECT * FROM t WHERE a = $1 AND b = $2"
        assert to_numbered_qmark(sql) == "SELECT * FROM t WHERE a = ?1 AND b = ?2"

    def test_multi_digit(self) -> None:
        assert to_numbered_qmark("VALUES ($10, $11)") == "VALUES (?10, ?11)"

    def test_string_literal_exclusion(self) -> None:
        sql = "SELECT * FROM t WHERE col = 'costs $1' AND id = $1"
        assert to_numbered_qmark(sql) == "SELECT * FROM t WHERE col = 'costs $1' AND id = ?1"

    def test_dollar_quoting_untouched(self) -> None:
        sql = "SELECT $$body$$"
        assert to_numbered_qmark(sql) == sql

    def test_no_params(self) -> None:
        assert to_numbered_qmark("SELECT 1") == "SELECT 1"


class TestFormatStyle:
    def test_in_order(self) -> None:
        sql, args = to_format_style("SELECT * FROM t WHERE a = $1 AND b = $2", ["x", "y"])
        assert sql == "SELECT * FROM t WHERE a = %s AND b = %s"
        assert args == ("x", "y")

    def test_reordered(self) -> None:
        sql, args = to_format_style("UPDATE t SET a = $2 WHERE id = $1", [7, "new"])
        assert sql == "UPDATE t SET a = %s WHERE id = %s"
        assert args == ("new", 7)

    def test_repeated_placeholder(self) -> None:
        _, args = to_format_style("SELECT * FROM t WHERE a = $1 OR b = $1", [5])
        assert args == (5, 5)

    def test_percent_doubled(self) -> None:
        sql, args = to_format_style("SELECT * FROM t WHERE name LIKE 'a%' AND id = $1", [1])
        assert sql == "SELECT * FROM t WHERE name LIKE 'a%%' AND id = %s"
        assert args == (1,)

    def test_no_params_passthrough(self) -> None:
        sql, args = to_format_style("SELECT 100 % 7", [])
        assert sql == "SELECT 100 % 7"
        assert args is None

    def test_missing_param(self) -> None:
        with pytest.raises(ValueError, match=r"\$2"):
            to_format_style("SELECT * FROM t WHERE a = $2", [1])


class TestCoerceParams:
    def test_none(self) -> None:
        assert coerce_params(None) == ()

    def test_list_converted_to_tuple(self) -> None:
        assert coerce_params([1, 2]) == (1, 2)

    def test_tuple_passthrough(self) -> None:
        assert coerce_params((1, 2)) == (1, 2)

    def test_scalar_wrapped(self) -> None:
        assert coerce_params(42) == (42,)
