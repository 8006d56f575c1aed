"""
Example 01: CRUD with QueryHelper

This example runs the basic read and write operations against an
in-memory SQLite database through SqliteClient.
"""

import asyncio
import uuid
from typing import Optional

import aiosqlite

from row_crud import NoRowsAffectedError, NotFoundError, QueryHelper, TableModel
from row_crud.adapters.sqlite import SqliteClient


class Widget(TableModel):
    """Widget entity"""

    __table_name__ = "widgets"

    id: uuid.UUID
    name: str
    color: Optional[str] = None


async def main():
    conn = await aiosqlite.connect(":memory:")
    await conn.execute("CREATE TABLE widgets (id TEXT PRIMARY KEY, name TEXT NOT NULL, color TEXT)")

    client = SqliteClient(conn)
    # SQLite's default schema is "main"; PostgreSQL callers keep QueryHelper()
    helper = QueryHelper.with_schema("main")

    first, second = uuid.uuid4(), uuid.uuid4()
    insert = "INSERT INTO widgets (id, name, color) VALUES ($1, $2, $3)"
    await helper.execute(client, insert, [first, "foo", "red"])
    await helper.execute(client, insert, [second, "bar", "blue"])

    print("=== QueryHelper ===\n")

    print("1. All widgets, ordered:")
    for widget in await helper.get_all_ordered(client, Widget, "name"):
        print(f"   - {widget.name} ({widget.color})")
    print()

    print("2. Lookup by field:")
    print(f"   name=foo -> {await helper.get_by(client, Widget, 'name', 'foo')}")
    print(f"   name=qux -> {await helper.get_by(client, Widget, 'name', 'qux')}\n")

    print("3. Update and re-fetch:")
    update = 'UPDATE "main".widgets SET color = $1 WHERE id = $2'
    updated = await helper.execute_for_id(client, Widget, first, update, ["green", first])
    print(f"   {updated.name} is now {updated.color}\n")

    print("4. Delete:")
    print(f"   rows deleted: {await helper.delete(client, Widget, second)}")
    try:
        await helper.get_one(client, Widget, second)
    except NotFoundError as e:
        print(f"   {e}")
    try:
        await helper.execute_for_id(client, Widget, second, update, ["red", second])
    except NoRowsAffectedError as e:
        print(f"   {e}")
    print()

    await conn.close()


if __name__ == "__main__":
    asyncio.run(main())
