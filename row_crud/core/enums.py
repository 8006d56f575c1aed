"""Error kind enumeration."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Closed set of failure kinds raised by QueryHelper."""

    DRIVER = "driver"
    MAPPING = "mapping"
    MALFORMED_IDENTIFIER = "malformed_identifier"
    NOT_FOUND = "not_found"
    NO_ROWS_AFFECTED = "no_rows_affected"
    MISSING_IDENTIFIER = "missing_identifier"
