"""SQLite client using aiosqlite."""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from typing import Any

from row_crud.core.params import coerce_params, to_numbered_qmark


def _adapt_params(params: Sequence[Any]) -> tuple[Any, ...]:
    """SQLite has no UUID type; bind UUIDs as their text form."""
    return tuple(str(p) if isinstance(p, uuid.UUID) else p for p in coerce_params(params))


def _rows_to_dicts(description: Any, rows: Sequence[Any]) -> list[dict[str, Any]]:
    """Convert cursor rows (tuples or aiosqlite.Row) to dicts."""
    if description is None:
        return []
    columns = [desc[0] for desc in description]
    return [dict(zip(columns, row, strict=True)) for row in rows]


class SqliteClient:
    """Client over an aiosqlite ``Connection``.

    This client never commits; call ``connection.commit()`` when writes
    should persist beyond the connection.
    """

    def __init__(self, connection: Any) -> None:
        self._connection = connection

    @property
    def connection(self) -> Any:
        return self._connection

    async def query(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        async with self._connection.execute(
            to_numbered_qmark(sql), _adapt_params(params)
        ) as cursor:
            rows = await cursor.fetchall()
            return _rows_to_dicts(cursor.description, rows)

    async def query_one_optional(
        self, sql: str, params: Sequence[Any] = ()
    ) -> dict[str, Any] | None:
        async with self._connection.execute(
            to_numbered_qmark(sql), _adapt_params(params)
        ) as cursor:
            row = await cursor.fetchone()
            if row is None:
                return None
            return _rows_to_dicts(cursor.description, [row])[0]

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        async with self._connection.execute(
            to_numbered_qmark(sql), _adapt_params(params)
        ) as cursor:
            return int(cursor.rowcount)
