"""SQL text builders for single-table statements.

Schema, table, column and ORDER BY fragments are interpolated as-is. Only
predicate values become ``$n`` placeholders.
"""

from __future__ import annotations

from collections.abc import Sequence


def qualified_table(schema: str, table: str) -> str:
    """Return ``"<schema>".<table>``."""
    return f'"{schema}".{table}'


def where_clause(by_fields: Sequence[str]) -> str:
    """Build ``WHERE a = $1 AND b = $2`` for *by_fields*, or ``""`` when empty."""
    if not by_fields:
        return ""
    predicates = [f"{field} = ${i}" for i, field in enumerate(by_fields, start=1)]
    return "WHERE " + " AND ".join(predicates)


def order_by_clause(order_by: str | None) -> str:
    if order_by is None:
        return ""
    return f"ORDER BY {order_by}"


def select(
    schema: str,
    table: str,
    *,
    fields: str = "*",
    by_fields: Sequence[str] = (),
    order_by: str | None = None,
    limit: int | None = None,
) -> str:
    """Build a SELECT over one table.

    Args:
        schema: Schema name, double-quoted in the output.
        table: Table name, emitted unquoted.
        fields: Column list substituted for ``*``.
        by_fields: Equality predicate columns, bound to ``$1..$n`` in order.
        order_by: Optional ORDER BY body.
        limit: Optional LIMIT.
    """
    parts = [f"SELECT {fields} FROM {qualified_table(schema, table)}"]
    where = where_clause(by_fields)
    if where:
        parts.append(where)
    order = order_by_clause(order_by)
    if order:
        parts.append(order)
    if limit is not None:
        parts.append(f"LIMIT {int(limit)}")
    return " ".join(parts)


def delete(schema: str, table: str, by_field: str = "id") -> str:
    """Build ``DELETE FROM "<schema>".<table> WHERE <by_field> = $1``."""
    return f"DELETE FROM {qualified_table(schema, table)} {where_clause([by_field])}"
