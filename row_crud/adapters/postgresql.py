"""PostgreSQL client using psycopg (v3+) async support."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from row_crud.core.params import coerce_params, to_format_style


class PostgresqlClient:
    """Client over a psycopg ``AsyncConnection``.

    The connection may be inside ``connection.transaction()``; this client
    never commits or rolls back.
    """

    def __init__(self, connection: Any) -> None:
        self._connection = connection

    @property
    def connection(self) -> Any:
        return self._connection

    def _cursor(self) -> Any:
        import psycopg.rows

        return self._connection.cursor(row_factory=psycopg.rows.dict_row)

    async def query(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        sql, args = to_format_style(sql, coerce_params(params))
        async with self._cursor() as cursor:
            await cursor.execute(sql, args)
            if cursor.description is None:
                return []
            return list(await cursor.fetchall())

    async def query_one_optional(
        self, sql: str, params: Sequence[Any] = ()
    ) -> dict[str, Any] | None:
        sql, args = to_format_style(sql, coerce_params(params))
        async with self._cursor() as cursor:
            await cursor.execute(sql, args)
            if cursor.description is None:
                return None
            return await cursor.fetchone()  # type: ignore[no-any-return]

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        sql, args = to_format_style(sql, coerce_params(params))
        async with self._cursor() as cursor:
            await cursor.execute(sql, args)
            return int(cursor.rowcount)
