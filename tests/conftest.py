"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

WIDGETS_DDL = (
    "CREATE TABLE widgets (id TEXT PRIMARY KEY, name TEXT NOT NULL, color TEXT)"
)


@pytest.fixture
def client() -> MagicMock:
    """Fake client recording the SQL and params it receives.

    Defaults: no rows, nothing found, zero rows affected.
    """
    fake = MagicMock()
    fake.query = AsyncMock(return_value=[])
    fake.query_one_optional = AsyncMock(return_value=None)
    fake.execute = AsyncMock(return_value=0)
    return fake


@pytest.fixture
async def sqlite_conn():
    """In-memory aiosqlite connection with an empty ``widgets`` table."""
    import aiosqlite

    conn = await aiosqlite.connect(":memory:")
    await conn.execute(WIDGETS_DDL)
    try:
        yield conn
    finally:
        await conn.close()
