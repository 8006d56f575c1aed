"""Identifier allow-list checks.

QueryHelper interpolates schema, table, field names, column lists and
ORDER BY clauses straight into SQL text. These checks are only applied when
the helper is built with ``validate_identifiers=True``; otherwise those
fragments are trusted as given.

**IMPORTANT SECURITY WARNING:**
    Passing these checks does not make user input safe to use as an
    identifier. They reject anything that is not a plain (optionally dotted)
    identifier, which stops statement stacking and comment injection, but the
    caller still decides *which* column or table is touched. Identifiers
    should come from type-level constants or string literals.
"""

from __future__ import annotations

import re

from row_crud.core.exceptions import UnsafeIdentifierError

_IDENT = r"[A-Za-z_][A-Za-z0-9_$]*"

# Plain or dotted identifier: name, alias.name
_IDENTIFIER_PATTERN = re.compile(rf"{_IDENT}(?:\.{_IDENT})?")

# Single ORDER BY term: col [ASC|DESC] [NULLS FIRST|LAST]
_ORDER_TERM_PATTERN = re.compile(
    rf"{_IDENT}(?:\.{_IDENT})?(?:\s+(?:ASC|DESC))?(?:\s+NULLS\s+(?:FIRST|LAST))?",
    re.IGNORECASE,
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _split_terms(fragment: str) -> list[str]:
    return [term.strip() for term in fragment.split(",")]


# ---------------------------------------------------------------------------
# Public checks
# ---------------------------------------------------------------------------


def check_identifier(name: str, what: str = "identifier") -> str:
    """Return *name* if it is a plain or dotted identifier.

    Raises:
        UnsafeIdentifierError: Otherwise.
    """
    if not isinstance(name, str) or not _IDENTIFIER_PATTERN.fullmatch(name):
        raise UnsafeIdentifierError(what, str(name))
    return name


def check_column_list(fields: str) -> str:
    """Return *fields* if it is ``*`` or a comma-separated list of identifiers."""
    if fields.strip() == "*":
        return fields
    for term in _split_terms(fields):
        if not _IDENTIFIER_PATTERN.fullmatch(term):
            raise UnsafeIdentifierError("column list", fields)
    return fields


def check_order_by(order_by: str) -> str:
    """Return *order_by* if every comma-separated term is a simple sort key."""
    for term in _split_terms(order_by):
        if not _ORDER_TERM_PATTERN.fullmatch(term):
            raise UnsafeIdentifierError("order by clause", order_by)
    return order_by
