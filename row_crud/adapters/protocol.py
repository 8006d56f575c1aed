"""Client protocol.

A client is whatever QueryHelper sends SQL to: a bare connection or one
inside an open transaction. SQL arrives with ``$1, $2, ...`` positional
placeholders and a matching sequence of values.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from row_crud.mapping.protocol import Row


@runtime_checkable
class Client(Protocol):
    """Asynchronous query-capable client protocol."""

    async def query(self, sql: str, params: Sequence[Any] = ()) -> Sequence[Row]:
        """Run a statement and return every row."""
        ...

    async def query_one_optional(self, sql: str, params: Sequence[Any] = ()) -> Row | None:
        """Run a statement and return its first row, or None."""
        ...

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a write statement and return the affected row count."""
        ...
