"""Queries built for an entity and run against a database connection."""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol

from crashorm.conditions import QueryCondition
from crashorm.errors import OrmError
from crashorm.sql import BoxedSql, SqlExpression


class _Connection(Protocol):
    async def query_many(self, sql: str, params: list[Any]) -> list[Any]: ...

    async def query_single(self, sql: str, params: list[Any]) -> Any: ...

    async def execute_query(self, sql: str, params: list[Any]) -> Any: ...


class OrderDirection(str, Enum):
    """Direction of an ORDER BY entry."""

    ASC = "ASC"
    DESC = "DESC"

    def __str__(self) -> str:
        return self.value


def _map_row(mapping: Any, row: Any) -> Any:
    """Turn a result row into an object using ``mapping``.

    ``None`` keeps the row as it is; a class with ``from_row`` uses that;
    any other callable is called with the row.
    """
    if mapping is None:
        return row
    from_row = getattr(mapping, "from_row", None)
    if from_row is not None:
        return from_row(row)
    return mapping(row)


async def _run(call: Any, sql: str, values: list[Any]) -> Any:
    try:
        return await call(sql, values)
    except OrmError:
        raise
    except Exception as exc:
        raise OrmError(exc) from exc


class Query:
    """A query on an entity's table, built step by step."""

    def __init__(self, base_query: BoxedSql, mapping: Any = None) -> None:
        self._base_query = base_query
        self._mapping = mapping
        self._condition: QueryCondition | None = None
        self._group_by: list[BoxedSql] = []
        self._order: list[tuple[BoxedSql, OrderDirection]] = []

    def condition(self, condition: QueryCondition) -> Query:
        """Set the WHERE condition, replacing any earlier one."""
        self._condition = condition
        return self

    def build(self) -> tuple[str, list[Any]]:
        """Return the complete SQL with numbered parameters and its values."""
        sql, values, index = self._base_query.resolve(1)
        clauses = [sql]

        if self._condition is not None:
            condition_sql, condition_values, index = self._condition.resolve(index)
            values.extend(condition_values)
            clauses.append(f"WHERE {condition_sql}")

        if self._group_by:
            clauses.append("GROUP BY " + ",".join(group.sql for group in self._group_by))

        if self._order:
            orders = []
            for boxed, direction in self._order:
                order_sql, order_values, index = boxed.resolve(index)
                values.extend(order_values)
                orders.append(f"{order_sql} {direction}")
            clauses.append("ORDER BY " + ",".join(orders))

        return " ".join(clauses), values


class SelectQuery(Query):
    """A SELECT query whose rows are mapped onto result objects."""

    def add_order(self, column: SqlExpression, direction: OrderDirection) -> SelectQuery:
        """Append an ORDER BY entry."""
        self._order.append((column.to_sql(), OrderDirection(direction)))
        return self

    def order(self, column: SqlExpression, direction: OrderDirection) -> SelectQuery:
        """Set the ORDER BY to this single entry, dropping earlier ones."""
        self._order = [(column.to_sql(), OrderDirection(direction))]
        return self

    def add_group_by(self, column: SqlExpression) -> SelectQuery:
        """Append a GROUP BY column."""
        self._group_by.append(column.to_sql())
        return self

    def group_by(self, column: SqlExpression) -> SelectQuery:
        """Set the GROUP BY to this single column, dropping earlier ones."""
        self._group_by = [column.to_sql()]
        return self

    async def fetch(self, connection: _Connection) -> list[Any]:
        """Run the query and return every row, mapped."""
        sql, values = self.build()
        rows = await _run(connection.query_many, sql, values)
        return [_map_row(self._mapping, row) for row in rows]

    async def fetch_single(self, connection: _Connection) -> Any:
        """Run the query and return its single row, mapped."""
        sql, values = self.build()
        row = await _run(connection.query_single, sql, values)
        return _map_row(self._mapping, row)


class DeleteQuery(Query):
    """A DELETE query, run without a result."""

    async def execute(self, connection: _Connection) -> None:
        """Run the query."""
        sql, values = self.build()
        await _run(connection.execute_query, sql, values)