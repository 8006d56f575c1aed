"""RowCrud exception hierarchy.

Every failure surfaced by QueryHelper is a CrudError carrying one of the
ErrorKind values. Raw driver exceptions are wrapped in DriverError and kept
as ``__cause__``.
"""

from __future__ import annotations

from typing import Any, ClassVar

from row_crud.core.enums import ErrorKind


class CrudError(Exception):
    """Base exception for all RowCrud errors."""

    kind: ClassVar[ErrorKind]


# --- Driver ---


class DriverError(CrudError):
    """Raised when the underlying client fails (connectivity, syntax, constraints)."""

    kind = ErrorKind.DRIVER

    def __init__(self, sql: str, error: BaseException) -> None:
        self.sql = sql
        self.error = error
        super().__init__(str(error) or type(error).__name__)


# --- Mapping ---


class MappingError(CrudError):
    """Raised when a fetched row cannot be converted into the target entity."""

    kind = ErrorKind.MAPPING


class ColumnMismatchError(MappingError):
    """Raised when required fields cannot be mapped from row columns."""

    def __init__(self, target_class: str, missing_fields: list[str]) -> None:
        self.target_class = target_class
        self.missing_fields = missing_fields
        super().__init__(f"Cannot map to {target_class}: missing fields {missing_fields}")


# --- Identifiers ---


class MalformedIdentifierError(CrudError):
    """Raised when a string identifier does not parse as the expected type."""

    kind = ErrorKind.MALFORMED_IDENTIFIER

    def __init__(self, value: str, detail: str) -> None:
        self.value = value
        super().__init__(f"Malformed identifier '{value}': {detail}")


class MissingIdentifierError(CrudError):
    """Raised when an operation requires an identifier that was not given."""

    kind = ErrorKind.MISSING_IDENTIFIER

    def __init__(self) -> None:
        super().__init__("Missing id")


class UnsafeIdentifierError(CrudError, ValueError):
    """Raised by the identifier validator for fragments that are not plain identifiers."""

    kind = ErrorKind.MALFORMED_IDENTIFIER

    def __init__(self, what: str, value: str) -> None:
        self.what = what
        self.value = value
        super().__init__(f"Unsafe {what} for SQL interpolation: {value!r}")


# --- Lookup / write ---


class NotFoundError(CrudError):
    """Raised when a fetch that requires a row finds none."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, reference: str, *ids: Any) -> None:
        self.reference = reference
        self.ids = ids
        joined = " ".join(str(i) for i in ids)
        super().__init__(f"No data found for {reference} - {joined}")


class NoRowsAffectedError(CrudError):
    """Raised when the write step of a write-then-fetch affected zero rows."""

    kind = ErrorKind.NO_ROWS_AFFECTED

    def __init__(self, reference: str, id: Any) -> None:  # noqa: A002
        self.reference = reference
        self.id = id
        super().__init__(f"No rows affected for {reference} - {id}")
