"""Mapping layer - turn row mappings into entities."""

from __future__ import annotations

from row_crud.mapping.model import ModelMapper, TableModel, map_row, map_rows, table
from row_crud.mapping.protocol import Entity, Row

__all__ = [
    "Entity",
    "Row",
    "ModelMapper",
    "TableModel",
    "table",
    "map_row",
    "map_rows",
]
