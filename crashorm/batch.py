"""Batch operations on lists of entities and of create structures."""

from __future__ import annotations

from collections.abc import Iterable
from itertools import count
from typing import Any, Protocol

from crashorm.entity import CreateEntity, Entity
from crashorm.errors import OrmError


class _Connection(Protocol):
    async def execute_query(self, sql: str, params: list[Any]) -> Any: ...


def _common_type(entities: list[Entity]) -> type[Entity]:
    kinds = {type(entity) for entity in entities}
    if len(kinds) > 1:
        names = ", ".join(sorted(kind.__name__ for kind in kinds))
        raise TypeError(f"entities of different types cannot be batched: {names}")
    return kinds.pop()


def build_remove_all(entities: Iterable[Entity]) -> tuple[str, list[Any]] | None:
    """Build the DELETE removing every entity by primary key.

    Returns the SQL and its values, or None when there is nothing to remove.
    """
    entities = list(entities)
    if not entities:
        return None
    kind = _common_type(entities)
    ids = [entity.primary_key() for entity in entities]
    placeholders = ",".join(f"${position}" for position in range(1, len(ids) + 1))
    sql = f"DELETE FROM {kind.table_name} WHERE {kind.primary_key_name} IN ({placeholders})"
    return sql, ids


def build_insert_all(creates: Iterable[CreateEntity]) -> tuple[str, list[Any]] | None:
    """Build one INSERT adding the entities of every create structure.

    Returns the SQL and its values, or None when there is nothing to insert.
    """
    entities = [create.into_entity() for create in creates]
    if not entities:
        return None
    kind = _common_type(entities)
    rows = [entity.values() for entity in entities]
    names = list(rows[0])

    positions = count(1)
    groups = [
        "(" + ",".join(f"${next(positions)}" for _ in names) + ")" for _ in rows
    ]
    values = [row[name] for row in rows for name in names]
    sql = f"INSERT INTO {kind.table_name}({','.join(names)}) VALUES {','.join(groups)}"
    return sql, values


async def _execute(connection: _Connection, statement: tuple[str, list[Any]] | None) -> None:
    if statement is None:
        return
    sql, values = statement
    try:
        await connection.execute_query(sql, values)
    except OrmError:
        raise
    except Exception as exc:
        raise OrmError(exc) from exc


async def remove_all(entities: Iterable[Entity], connection: _Connection) -> None:
    """Remove every entity from the database in one statement."""
    await _execute(connection, build_remove_all(entities))


async def insert_all(creates: Iterable[CreateEntity], connection: _Connection) -> None:
    """Insert every create structure in one statement.

    The primary keys of the created entities are not read back.
    """
    await _execute(connection, build_insert_all(creates))