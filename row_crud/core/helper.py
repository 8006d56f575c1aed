"""Generic CRUD helper.

QueryHelper builds single-table SQL from a schema name, an entity's table
name and equality predicates, runs it through an injected client and maps
the resulting rows onto the entity class.

Schema, table and field names, column lists and ORDER BY clauses are
interpolated into the SQL text; only values are bound as ``$n`` parameters.
Those fragments must come from trusted code (type-level constants, string
literals), never from user input. Build the helper with
``validate_identifiers=True`` to reject anything that is not a plain
identifier.
"""

from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from row_crud.adapters.protocol import Client
from row_crud.core import sql as sqlgen
from row_crud.core.config import DEFAULT_SCHEMA, HelperConfig
from row_crud.core.exceptions import (
    CrudError,
    DriverError,
    MalformedIdentifierError,
    NoRowsAffectedError,
    NotFoundError,
)
from row_crud.core.sanitizer import check_column_list, check_identifier, check_order_by
from row_crud.mapping.model import map_row
from row_crud.mapping.model import map_rows as _map_rows

logger = logging.getLogger(__name__)

_HEX = "[0-9a-fA-F]"

# Simple (32 hex), hyphenated 8-4-4-4-12, braced hyphenated, urn:uuid: hyphenated
_HYPHENATED = rf"{_HEX}{{8}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{12}}"
_UUID_PATTERN = re.compile(
    rf"{_HEX}{{32}}|{_HYPHENATED}|\{{{_HYPHENATED}\}}|urn:uuid:{_HYPHENATED}"
)

T = TypeVar("T")


@dataclass(frozen=True)
class QueryHelper:
    """Reusable CRUD operations over any Entity class and Client.

    Instances hold no connection and no mutable state, so one helper can be
    shared by concurrent callers. Every operation takes the client to run on
    and the entity class to map rows into.

    Attributes:
        schema: Schema the entity tables live in.
        validate_identifiers: Check interpolated fragments against an
            identifier allow-list before building SQL.
    """

    schema: str = DEFAULT_SCHEMA
    validate_identifiers: bool = False

    @classmethod
    def with_schema(cls, schema: str) -> QueryHelper:
        return cls(schema=schema)

    @classmethod
    def from_config(cls, config: HelperConfig) -> QueryHelper:
        return cls(
            schema=config.schema_name,
            validate_identifiers=config.validate_identifiers,
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_all(self, client: Client, entity: type[T]) -> list[T]:
        """Fetch every row of the entity's table in store order."""
        return await self._select_many(client, entity)

    async def get_all_ordered(self, client: Client, entity: type[T], order_by: str) -> list[T]:
        return await self._select_many(client, entity, order_by=order_by)

    async def get_first(self, client: Client, entity: type[T]) -> T | None:
        table = self._table(entity)
        query = sqlgen.select(self.schema, table, limit=1)
        return await self.query_opt(client, entity, query)

    async def get_many_by(
        self,
        client: Client,
        entity: type[T],
        field: str,
        value: Any,
        order_by: str | None = None,
    ) -> list[T]:
        return await self._select_many(client, entity, [(field, value)], order_by=order_by)

    async def get_many_by_2(
        self,
        client: Client,
        entity: type[T],
        field_1: str,
        value_1: Any,
        field_2: str,
        value_2: Any,
        order_by: str | None = None,
    ) -> list[T]:
        return await self._select_many(
            client, entity, [(field_1, value_1), (field_2, value_2)], order_by=order_by
        )

    async def get_by_str_id(self, client: Client, entity: type[T], id: str) -> T | None:  # noqa: A002
        """Parse *id* as a UUID, then fetch by ``id``.

        Raises:
            MalformedIdentifierError: If *id* is not a UUID. No query is sent.
        """
        parsed = parse_uuid(id)
        return await self.get_by(client, entity, "id", parsed)

    async def get(self, client: Client, entity: type[T], id: Any) -> T | None:  # noqa: A002
        return await self.get_by(client, entity, "id", id)

    async def get_one(self, client: Client, entity: type[T], id: Any) -> T:  # noqa: A002
        """Fetch by ``id``, raising NotFoundError when absent."""
        item = await self.get(client, entity, id)
        if item is None:
            raise NotFoundError(entity.table_name(), id)  # type: ignore[attr-defined]
        return item

    async def get_specific_fields(
        self, client: Client, entity: type[T], id: Any, fields: str  # noqa: A002
    ) -> T | None:
        return await self.get_specific_fields_by(client, entity, "id", id, fields)

    async def get_by(self, client: Client, entity: type[T], field: str, value: Any) -> T | None:
        """Fetch the first row where ``field = value``.

        Uniqueness is the caller's concern: when several rows match, the
        first one the store returns is used.
        """
        return await self._select_one(client, entity, [(field, value)])

    async def get_by_2(
        self,
        client: Client,
        entity: type[T],
        field_1: str,
        value_1: Any,
        field_2: str,
        value_2: Any,
    ) -> T | None:
        return await self._select_one(client, entity, [(field_1, value_1), (field_2, value_2)])

    async def get_by_3(
        self,
        client: Client,
        entity: type[T],
        field_1: str,
        value_1: Any,
        field_2: str,
        value_2: Any,
        field_3: str,
        value_3: Any,
    ) -> T | None:
        return await self._select_one(
            client,
            entity,
            [(field_1, value_1), (field_2, value_2), (field_3, value_3)],
        )

    async def get_specific_fields_by(
        self,
        client: Client,
        entity: type[T],
        field: str,
        value: Any,
        fields: str,
    ) -> T | None:
        """Like get_by, selecting only *fields* (a trusted column list)."""
        return await self._select_one(client, entity, [(field, value)], fields=fields)

    # ------------------------------------------------------------------
    # Raw SQL
    # ------------------------------------------------------------------

    async def query(
        self,
        client: Client,
        entity: type[T],
        sql: str,
        params: Sequence[Any] = (),
    ) -> list[T]:
        """Run custom SQL and map every returned row."""
        rows = await self._run(client.query, sql, params)
        return self.map_rows(entity, rows)

    async def query_opt(
        self,
        client: Client,
        entity: type[T],
        sql: str,
        params: Sequence[Any] = (),
    ) -> T | None:
        """Run custom SQL and map the first returned row, if any."""
        row = await self._run(client.query_one_optional, sql, params)
        if row is None:
            return None
        return map_row(entity, row)  # type: ignore[no-any-return]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def delete(self, client: Client, entity: type[T], id: Any) -> int:  # noqa: A002
        """Delete by ``id``. Returns the affected row count (0 when absent)."""
        table = self._table(entity)
        return await self.execute(client, sqlgen.delete(self.schema, table), [id])

    async def execute(self, client: Client, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a write statement and return the affected row count."""
        return int(await self._run(client.execute, sql, params))

    async def execute_for_id(
        self,
        client: Client,
        entity: type[T],
        id: Any,  # noqa: A002
        sql: str,
        params: Sequence[Any] = (),
    ) -> T:
        """Run a write statement, then fetch the row identified by *id*.

        Raises:
            NoRowsAffectedError: If the write affected no rows.
            NotFoundError: If the row cannot be fetched afterwards.
        """
        table = entity.table_name()  # type: ignore[attr-defined]
        affected = await self.execute(client, sql, params)
        if affected == 0:
            raise NoRowsAffectedError(table, id)

        item = await self.get(client, entity, id)
        if item is None:
            raise NotFoundError(table, id)
        return item

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    @staticmethod
    def map_rows(entity: type[T], rows: Iterable[Mapping[str, Any]]) -> list[T]:
        """Map rows onto *entity*; the first unmappable row fails the batch."""
        return _map_rows(entity, rows)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _table(self, entity: Any) -> str:
        table: str = entity.table_name()
        if self.validate_identifiers:
            check_identifier(self.schema, "schema")
            check_identifier(table, "table")
        return table

    def _check_fragments(
        self,
        fields: str,
        by_fields: Sequence[str],
        order_by: str | None,
    ) -> None:
        if not self.validate_identifiers:
            return
        check_column_list(fields)
        for field in by_fields:
            check_identifier(field, "field")
        if order_by is not None:
            check_order_by(order_by)

    async def _select_one(
        self,
        client: Client,
        entity: type[T],
        predicates: Sequence[tuple[str, Any]],
        *,
        fields: str = "*",
    ) -> T | None:
        table = self._table(entity)
        by_fields = [field for field, _ in predicates]
        self._check_fragments(fields, by_fields, None)
        query = sqlgen.select(self.schema, table, fields=fields, by_fields=by_fields)
        return await self.query_opt(client, entity, query, [value for _, value in predicates])

    async def _select_many(
        self,
        client: Client,
        entity: type[T],
        predicates: Sequence[tuple[str, Any]] = (),
        *,
        fields: str = "*",
        order_by: str | None = None,
    ) -> list[T]:
        table = self._table(entity)
        by_fields = [field for field, _ in predicates]
        self._check_fragments(fields, by_fields, order_by)
        query = sqlgen.select(
            self.schema, table, fields=fields, by_fields=by_fields, order_by=order_by
        )
        return await self.query(client, entity, query, [value for _, value in predicates])

    async def _run(self, call: Any, sql: str, params: Sequence[Any]) -> Any:
        """Send *sql* through *call*, wrapping driver failures in DriverError."""
        params = list(params)
        logger.debug("Executing %s with %d param(s)", sql, len(params))
        try:
            return await call(sql, params)
        except CrudError:
            raise
        except Exception as e:
            logger.debug("Driver error for %s: %s", sql, e)
            raise DriverError(sql, e) from e


def parse_uuid(value: str) -> uuid.UUID:
    """Parse *value* in simple, hyphenated, braced or ``urn:uuid:`` form.

    Raises:
        MalformedIdentifierError: For any other input, including hyphens in
            the wrong places.
    """
    if not isinstance(value, str) or not _UUID_PATTERN.fullmatch(value):
        raise MalformedIdentifierError(str(value), "not a UUID")
    return uuid.UUID(value)
