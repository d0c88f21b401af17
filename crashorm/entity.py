"""Base classes for database entities and the structures that create them."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import Field, fields, is_dataclass
from typing import Any, ClassVar

from crashorm.query import DeleteQuery, SelectQuery
from crashorm.sql import BoxedSql, SqlExpression


def _snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def _dataclass_fields(cls: type) -> tuple[Field, ...]:
    if not is_dataclass(cls):
        raise TypeError(f"{cls.__name__} must be a dataclass")
    return fields(cls)


class Entity:
    """Base for a dataclass stored as a row of a table.

    The table name is given with ``class Person(Entity, table_name="person")``
    or defaults to the class name in snake case. The primary key field is
    ``id`` unless ``primary_key_name`` says otherwise.
    """

    table_name: ClassVar[str]
    primary_key_name: ClassVar[str] = "id"

    def __init_subclass__(cls, *, table_name: str | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if table_name is not None:
            cls.table_name = table_name
        elif "table_name" not in cls.__dict__:
            cls.table_name = _snake_case(cls.__name__)

    @classmethod
    def _from_row(cls, row: Any) -> Entity:
        """Build an entity from a row given by column name or by position."""
        if isinstance(row, Mapping):
            return cls(**{f.name: row[f.name] for f in _dataclass_fields(cls) if f.init})
        return cls(*row)

    @classmethod
    def query(cls) -> SelectQuery:
        """A SELECT query returning whole entities."""
        return SelectQuery(BoxedSql(f"SELECT * FROM {cls.table_name}"), mapping=cls._from_row)

    @classmethod
    def delete(cls) -> DeleteQuery:
        """A DELETE query on this entity's table."""
        return DeleteQuery(BoxedSql(f"DELETE FROM {cls.table_name}"))

    @classmethod
    def select_query(
        cls, columns: Iterable[SqlExpression], mapping: Any = None
    ) -> SelectQuery:
        """A SELECT of the given columns, rows mapped with ``mapping``."""
        parts = [column.to_sql() for column in columns]
        values = [value for part in parts for value in part.values]
        sql = f"SELECT {','.join(part.sql for part in parts)} FROM {cls.table_name}"
        return SelectQuery(BoxedSql(sql, values), mapping=mapping)

    def values(self) -> dict[str, Any]:
        """Column values to insert, by column name, without the primary key."""
        return {
            f.name: getattr(self, f.name)
            for f in _dataclass_fields(type(self))
            if f.name != self.primary_key_name
        }

    def primary_key(self) -> Any:
        """The value of the primary key."""
        return getattr(self, self.primary_key_name)


class CreateEntity:
    """Base for a dataclass holding a new entity's values without its key.

    The target is given with ``class PersonCreate(CreateEntity, entity=Person)``.
    """

    entity: ClassVar[type[Entity]]

    def __init_subclass__(cls, *, entity: type[Entity] | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if entity is not None:
            cls.entity = entity

    def into_entity(self) -> Entity:
        """Build the entity; its primary key is None until it is inserted."""
        target = getattr(type(self), "entity", None)
        if target is None:
            raise TypeError(f"{type(self).__name__} names no entity")
        data = {f.name: getattr(self, f.name) for f in _dataclass_fields(type(self))}
        data.setdefault(target.primary_key_name, None)
        return target(**data)