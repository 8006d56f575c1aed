"""RowCrud - generic CRUD query helper over row-mappable entities."""

from __future__ import annotations

from row_crud.adapters.protocol import Client
from row_crud.core.config import DEFAULT_SCHEMA, HelperConfig
from row_crud.core.enums import ErrorKind
from row_crud.core.exceptions import (
    ColumnMismatchError,
    CrudError,
    DriverError,
    MalformedIdentifierError,
    MappingError,
    MissingIdentifierError,
    NoRowsAffectedError,
    NotFoundError,
    UnsafeIdentifierError,
)
from row_crud.core.helper import QueryHelper
from row_crud.mapping.model import ModelMapper, TableModel, table
from row_crud.mapping.protocol import Entity, Row

__all__ = [
    # Helper
    "QueryHelper",
    # Config
    "HelperConfig",
    "DEFAULT_SCHEMA",
    # Protocols
    "Client",
    "Entity",
    "Row",
    # Mapping
    "ModelMapper",
    "TableModel",
    "table",
    # Enums
    "ErrorKind",
    # Exceptions
    "CrudError",
    "DriverError",
    "MappingError",
    "ColumnMismatchError",
    "MalformedIdentifierError",
    "MissingIdentifierError",
    "UnsafeIdentifierError",
    "NotFoundError",
    "NoRowsAffectedError",
]
