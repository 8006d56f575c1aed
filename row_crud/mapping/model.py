"""Row-to-entity mapping.

Supports Pydantic models, dataclasses, and plain classes. ``TableModel``
and ``table()`` give those classes the Entity contract QueryHelper needs.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from row_crud.core.exceptions import ColumnMismatchError, MappingError

T = TypeVar("T")
C = TypeVar("C", bound=type)


def _is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    return isinstance(cls, type) and issubclass(cls, BaseModel)


def _validation_fields(error: ValidationError) -> list[str]:
    return [".".join(str(part) for part in err["loc"]) or err["msg"] for err in error.errors()]


class ModelMapper(Generic[T]):
    """Simple row-to-model mapper.

    Detection order:
    1. Pydantic BaseModel -> model_validate(row)
    2. dataclass -> target_class(**row)
    3. Plain class -> target_class(**row)

    Args:
        target_class: The class to construct from row data.
        aliases: Optional column-name to field-name mapping.
    """

    def __init__(
        self,
        target_class: type[T],
        aliases: dict[str, str] | None = None,
    ) -> None:
        self._target_class = target_class
        self._aliases = aliases
        self._is_pydantic = _is_pydantic_model(target_class)

    def _apply_aliases(self, row: Mapping[str, Any]) -> dict[str, Any]:
        """Apply column aliases to the row."""
        if not self._aliases:
            return dict(row)
        return {self._aliases.get(key, key): value for key, value in row.items()}

    def map_one(self, row: Mapping[str, Any]) -> T:
        """Map a single row to target_class instance."""
        values = self._apply_aliases(row)

        if self._is_pydantic:
            try:
                return self._target_class.model_validate(values)  # type: ignore[attr-defined, no-any-return]
            except ValidationError as e:
                raise ColumnMismatchError(
                    self._target_class.__name__,
                    _validation_fields(e),
                ) from e

        try:
            return self._target_class(**values)
        except TypeError as e:
            raise ColumnMismatchError(
                self._target_class.__name__,
                [str(e)],
            ) from e

    def map_many(self, rows: Iterable[Mapping[str, Any]]) -> list[T]:
        """Map all rows via map_one."""
        return [self.map_one(row) for row in rows]


class TableModel(BaseModel):
    """Pydantic base for entities.

    Subclasses set ``__table_name__``::

        class Widget(TableModel):
            __table_name__ = "widgets"

            id: UUID
            name: str
    """

    __table_name__: ClassVar[str]

    @classmethod
    def table_name(cls) -> str:
        try:
            return cls.__table_name__
        except AttributeError:
            raise TypeError(f"{cls.__name__} does not define __table_name__") from None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Any:
        try:
            return cls.model_validate(dict(row))
        except ValidationError as e:
            raise ColumnMismatchError(cls.__name__, _validation_fields(e)) from e


def table(name: str, aliases: dict[str, str] | None = None) -> Callable[[C], C]:
    """Class decorator giving a dataclass or plain class the Entity contract.

    ``from_row`` is only added when the class does not define its own.

    Usage:
        @table("widgets")
        @dataclass
        class Widget:
            id: UUID
            name: str
    """

    def decorate(cls: C) -> C:
        mapper: ModelMapper[Any] = ModelMapper(cls, aliases=aliases)

        def table_name(klass: type) -> str:
            return name

        def from_row(klass: type, row: Mapping[str, Any]) -> Any:
            return mapper.map_one(row)

        cls.table_name = classmethod(table_name)  # type: ignore[attr-defined]
        if not hasattr(cls, "from_row"):
            cls.from_row = classmethod(from_row)  # type: ignore[attr-defined]
        return cls

    return decorate


def map_row(entity: Any, row: Mapping[str, Any]) -> Any:
    """Build one entity from *row*, converting any failure into MappingError."""
    try:
        return entity.from_row(row)
    except MappingError:
        raise
    except Exception as e:
        name = getattr(entity, "__name__", repr(entity))
        raise MappingError(f"Cannot map row to {name}: {e}") from e


def map_rows(entity: Any, rows: Iterable[Mapping[str, Any]]) -> list[Any]:
    """Map every row; the first failing row aborts the whole batch."""
    return [map_row(entity, row) for row in rows]
