"""Columns of an entity and the query conditions built from them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from crashorm.conditions import QueryCondition
from crashorm.sql import BoxedSql, into_sql


class Column(ABC):
    """Something that can stand for a column in a query.

    Subclasses only need to describe themselves as SQL; every condition
    operator is derived from that.
    """

    @abstractmethod
    def to_sql(self) -> BoxedSql:
        """Return the SQL fragment representing this column."""

    def _suffix(self, suffix: str) -> QueryCondition:
        boxed = self.to_sql()
        boxed.modify(lambda sql: f"{sql} {suffix}")
        return QueryCondition(boxed)

    def _binary(self, operator: str, other: Any) -> QueryCondition:
        boxed = self.to_sql()
        right = into_sql(other)
        boxed.modify(lambda sql: f"{sql} {operator} {right.sql}")
        boxed.values.extend(right.values)
        return QueryCondition(boxed)

    def _range(self, operator: str, low: Any, high: Any) -> QueryCondition:
        boxed = self.to_sql()
        low_sql = into_sql(low)
        high_sql = into_sql(high)
        boxed.modify(lambda sql: f"{sql} {operator} {low_sql.sql} AND {high_sql.sql}")
        boxed.values.extend(low_sql.values)
        boxed.values.extend(high_sql.values)
        return QueryCondition(boxed)

    def _membership(self, operator: str, values: Iterable[Any]) -> QueryCondition:
        boxed = self.to_sql()
        items = [into_sql(value) for value in values]
        joined = ",".join(item.sql for item in items)
        boxed.modify(lambda sql: f"{sql} {operator} ({joined})")
        for item in items:
            boxed.values.extend(item.values)
        return QueryCondition(boxed)

    def equals(self, other: Any) -> QueryCondition:
        """The column equals ``other``."""
        return self._binary("=", other)

    def not_equals(self, other: Any) -> QueryCondition:
        """The column differs from ``other``."""
        return self._binary("<>", other)

    def greater_than(self, other: Any) -> QueryCondition:
        """The column is greater than ``other``."""
        return self._binary(">", other)

    def greater_equal(self, other: Any) -> QueryCondition:
        """The column is greater than or equal to ``other``."""
        return self._binary(">=", other)

    def less_than(self, other: Any) -> QueryCondition:
        """The column is less than ``other``."""
        return self._binary("<", other)

    def less_equal(self, other: Any) -> QueryCondition:
        """The column is less than or equal to ``other``."""
        return self._binary("<=", other)

    def between(self, low: Any, high: Any) -> QueryCondition:
        """The column lies between ``low`` and ``high``, both inclusive."""
        return self._range("BETWEEN", low, high)

    def not_between(self, low: Any, high: Any) -> QueryCondition:
        """The column lies outside ``low`` to ``high``."""
        return self._range("NOT BETWEEN", low, high)

    def in_vec(self, values: Iterable[Any]) -> QueryCondition:
        """The column equals one of ``values``."""
        return self._membership("IN", values)

    def not_in_vec(self, values: Iterable[Any]) -> QueryCondition:
        """The column equals none of ``values``."""
        return self._membership("NOT IN", values)

    def like(self, pattern: Any) -> QueryCondition:
        """The column matches the LIKE ``pattern``."""
        return self._binary("LIKE", pattern)

    def not_like(self, pattern: Any) -> QueryCondition:
        """The column does not match the LIKE ``pattern``."""
        return self._binary("NOT LIKE", pattern)

    def is_null(self) -> QueryCondition:
        """The column is NULL."""
        return self._suffix("IS NULL")

    def is_not_null(self) -> QueryCondition:
        """The column is not NULL."""
        return self._suffix("IS NOT NULL")

    def is_true(self) -> QueryCondition:
        """The boolean column is TRUE."""
        return self._suffix("IS TRUE")

    def is_false(self) -> QueryCondition:
        """The boolean column is FALSE."""
        return self._suffix("IS FALSE")


@dataclass(frozen=True)
class EntityColumn(Column):
    """A column stored in an entity's table, referred to by its name."""

    name: str

    def to_sql(self) -> BoxedSql:
        """The column name as a fragment without bound values."""
        return BoxedSql(self.name, [])