"""Contract tests for client protocol compliance."""

from __future__ import annotations

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from row_crud.adapters.protocol import Client
from row_crud.adapters.sqlite import SqliteClient


class TestSqliteClientProtocol:
    async def test_implements_protocol(self, sqlite_conn) -> None:
        assert isinstance(SqliteClient(sqlite_conn), Client)

    async def test_lifecycle(self, sqlite_conn) -> None:
        client = SqliteClient(sqlite_conn)
        uid = uuid.uuid4()

        affected = await client.execute(
            "INSERT INTO widgets (id, name) VALUES ($1, $2)", [uid, "foo"]
        )
        assert affected == 1

        rows = await client.query("SELECT id, name FROM widgets WHERE name = $1", ["foo"])
        assert rows == [{"id": str(uid), "name": "foo"}]

        row = await client.query_one_optional("SELECT name FROM widgets WHERE id = $1", [uid])
        assert row == {"name": "foo"}

        missing = await client.query_one_optional(
            "SELECT name FROM widgets WHERE id = $1", ["nope"]
        )
        assert missing is None

    async def test_reused_placeholder(self, sqlite_conn) -> None:
        client = SqliteClient(sqlite_conn)
        await client.execute("INSERT INTO widgets (id, name) VALUES ($1, $1)", ["same"])
        rows = await client.query("SELECT * FROM widgets WHERE id = $1 AND name = $1", ["same"])
        assert len(rows) == 1

    async def test_no_rows_returns_empty_list(self, sqlite_conn) -> None:
        client = SqliteClient(sqlite_conn)
        assert await client.query("SELECT * FROM widgets") == []


class TestPostgresqlClientProtocol:
    def test_implements_protocol(self) -> None:
        from row_crud.adapters.postgresql import PostgresqlClient

        client = PostgresqlClient(connection=object())
        assert isinstance(client, Client)

    def test_exposes_connection(self) -> None:
        from row_crud.adapters.postgresql import PostgresqlClient

        conn = object()
        assert PostgresqlClient(conn).connection is conn


def _pg_connection(
    *, rows: list | None = None, row: dict | None = None, rowcount: int = 0, description: object = ()
) -> tuple[MagicMock, AsyncMock]:
    """Fake psycopg AsyncConnection whose cursor() yields an AsyncMock cursor."""
    cursor = AsyncMock()
    cursor.description = description
    cursor.rowcount = rowcount
    cursor.fetchall.return_value = rows or []
    cursor.fetchone.return_value = row
    cursor.__aenter__.return_value = cursor
    cursor.__aexit__.return_value = None
    conn = MagicMock()
    conn.cursor.return_value = cursor
    return conn, cursor


class TestPostgresqlClientExecution:
    @pytest.fixture(autouse=True)
    def _psycopg(self) -> None:
        pytest.importorskip("psycopg")

    async def test_query_converts_placeholders(self) -> None:
        from row_crud.adapters.postgresql import PostgresqlClient

        row = {"id": 1, "name": "foo"}
        conn, cursor = _pg_connection(rows=[row])
        result = await PostgresqlClient(conn).query(
            "SELECT * FROM t WHERE a = $2 AND b = $1", [7, "x"]
        )
        assert result == [row]
        cursor.execute.assert_awaited_once_with(
            "SELECT * FROM t WHERE a = %s AND b = %s", ("x", 7)
        )

    async def test_uses_dict_row_factory(self) -> None:
        import psycopg.rows

        from row_crud.adapters.postgresql import PostgresqlClient

        conn, _ = _pg_connection()
        await PostgresqlClient(conn).query("SELECT 1")
        conn.cursor.assert_called_once_with(row_factory=psycopg.rows.dict_row)

    async def test_query_without_params_passes_none(self) -> None:
        from row_crud.adapters.postgresql import PostgresqlClient

        conn, cursor = _pg_connection()
        await PostgresqlClient(conn).query("SELECT * FROM t")
        cursor.execute.assert_awaited_once_with("SELECT * FROM t", None)

    async def test_doubles_percent_signs(self) -> None:
        from row_crud.adapters.postgresql import PostgresqlClient

        conn, cursor = _pg_connection()
        await PostgresqlClient(conn).query("SELECT * FROM t WHERE a = $1 AND b LIKE 'x%'", [5])
        cursor.execute.assert_awaited_once_with(
            "SELECT * FROM t WHERE a = %s AND b LIKE 'x%%'", (5,)
        )

    async def test_query_one_optional_returns_row(self) -> None:
        from row_crud.adapters.postgresql import PostgresqlClient

        row = {"id": 1}
        conn, cursor = _pg_connection(row=row)
        result = await PostgresqlClient(conn).query_one_optional(
            "SELECT * FROM t WHERE id = $1", [1]
        )
        assert result == row
        cursor.execute.assert_awaited_once_with("SELECT * FROM t WHERE id = %s", (1,))

    async def test_query_one_optional_returns_none_when_absent(self) -> None:
        from row_crud.adapters.postgresql import PostgresqlClient

        conn, _ = _pg_connection(row=None)
        assert await PostgresqlClient(conn).query_one_optional("SELECT * FROM t") is None

    async def test_execute_returns_rowcount(self) -> None:
        from row_crud.adapters.postgresql import PostgresqlClient

        conn, cursor = _pg_connection(rowcount=3, description=None)
        count = await PostgresqlClient(conn).execute("DELETE FROM t WHERE a = $1", ["x"])
        assert count == 3
        cursor.execute.assert_awaited_once_with("DELETE FROM t WHERE a = %s", ("x",))

    async def test_no_result_set_yields_empty(self) -> None:
        from row_crud.adapters.postgresql import PostgresqlClient

        conn, cursor = _pg_connection(description=None)
        client = PostgresqlClient(conn)
        assert await client.query("UPDATE t SET a = $1", [1]) == []
        assert await client.query_one_optional("UPDATE t SET a = $1", [1]) is None
        cursor.fetchall.assert_not_awaited()
        cursor.fetchone.assert_not_awaited()
