"""Entity protocol.

QueryHelper only needs two things from an entity class: the table it lives
in and a way to build an instance from a fetched row.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

Row = Mapping[str, Any]


@runtime_checkable
class Entity(Protocol):
    """Row-mappable entity with a known table name."""

    @classmethod
    def table_name(cls) -> str:
        """Table name, interpolated unquoted after the schema."""
        ...

    @classmethod
    def from_row(cls, row: Row) -> Any:
        """Build an instance from a row mapping."""
        ...
