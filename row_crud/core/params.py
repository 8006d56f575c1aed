"""Positional placeholder translation.

QueryHelper emits PostgreSQL-style ``$1, $2, ...`` placeholders. Drivers
that use a different positional syntax get the SQL rewritten here.
String literals are left untouched.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from functools import lru_cache
from typing import Any

# Matches $1, $12 but not $$ dollar quoting or names like col$1
_POSITIONAL_PATTERN = re.compile(r"(?<![\w$])\$(\d+)(?![\w$])")

# Matches single-quoted string literals (with '' escapes handled)
_STRING_LITERAL_PATTERN = re.compile(r"'(?:[^']|'')*'")


def _split_literals(sql: str) -> list[tuple[bool, str]]:
    """Split *sql* into ``(is_literal, text)`` segments."""
    segments: list[tuple[bool, str]] = []
    last_end = 0
    for match in _STRING_LITERAL_PATTERN.finditer(sql):
        start, end = match.span()
        if start > last_end:
            segments.append((False, sql[last_end:start]))
        segments.append((True, match.group()))
        last_end = end
    if last_end < len(sql):
        segments.append((False, sql[last_end:]))
    return segments


def coerce_params(params: Sequence[Any] | Any | None) -> tuple[Any, ...]:
    """Normalize *params* to a tuple.

    * ``None`` -> empty tuple.
    * ``tuple`` / ``list`` -> tuple.
    * Any other scalar -> single-element tuple.
    """
    if params is None:
        return ()
    if isinstance(params, (tuple, list)):
        return tuple(params)
    return (params,)


@lru_cache(maxsize=256)
def to_numbered_qmark(sql: str) -> str:
    """Convert ``$n`` to SQLite's numbered ``?n``."""
    parts: list[str] = []
    for is_literal, text in _split_literals(sql):
        if is_literal:
            parts.append(text)
        else:
            parts.append(_POSITIONAL_PATTERN.sub(r"?\1", text))
    return "".join(parts)


@lru_cache(maxsize=256)
def _format_style_template(sql: str) -> tuple[str, tuple[int, ...]]:
    """Return ``(sql_with_%s, placeholder_order)`` for *sql*.

    Literal ``%`` characters are doubled, as psycopg requires once
    parameters are supplied. *placeholder_order* lists the zero-based
    parameter index for each ``%s`` in order of appearance.
    """
    order: list[int] = []

    def _replace(match: re.Match[str]) -> str:
        order.append(int(match.group(1)) - 1)
        return "%s"

    parts: list[str] = []
    for is_literal, text in _split_literals(sql):
        text = text.replace("%", "%%")
        if is_literal:
            parts.append(text)
        else:
            parts.append(_POSITIONAL_PATTERN.sub(_replace, text))
    return "".join(parts), tuple(order)


def to_format_style(sql: str, params: Sequence[Any]) -> tuple[str, tuple[Any, ...] | None]:
    """Convert ``$n`` SQL and positional *params* to psycopg ``%s`` form.

    Values are reordered and repeated to follow placeholder occurrence, so
    ``$2 ... $1 ... $2`` works as it does in PostgreSQL.

    Returns:
        ``(sql, args)``; *args* is ``None`` (and *sql* unchanged) when no
        parameters are given.

    Raises:
        ValueError: If a placeholder refers to a parameter that was not given.
    """
    if not params:
        return sql, None
    converted, order = _format_style_template(sql)
    for index in order:
        if index < 0 or index >= len(params):
            raise ValueError(
                f"Placeholder ${index + 1} has no matching parameter ({len(params)} given)"
            )
    return converted, tuple(params[index] for index in order)
