"""Conditions used in the WHERE clause of a query."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from crashorm.sql import BoxedSql


@dataclass
class QueryCondition:
    """A boolean SQL expression together with its bound values."""

    boxed: BoxedSql

    def resolve(self, index: int) -> tuple[str, list[Any], int]:
        """Number the placeholders of this condition from ``index`` on."""
        return self.boxed.resolve(index)

    def _combine(self, other: QueryCondition, operator: str) -> QueryCondition:
        sql = f"({self.boxed.sql}) {operator} ({other.boxed.sql})"
        return QueryCondition(BoxedSql(sql, [*self.boxed.values, *other.boxed.values]))

    def and_(self, other: QueryCondition) -> QueryCondition:
        """Both this condition and ``other`` must hold."""
        return self._combine(other, "AND")

    def or_(self, other: QueryCondition) -> QueryCondition:
        """Either this condition or ``other`` must hold."""
        return self._combine(other, "OR")

    def not_(self) -> QueryCondition:
        """The negation of this condition."""
        return QueryCondition(BoxedSql(f"NOT({self.boxed.sql})", list(self.boxed.values)))

    def __and__(self, other: QueryCondition) -> QueryCondition:
        return self.and_(other)

    def __or__(self, other: QueryCondition) -> QueryCondition:
        return self.or_(other)

    def __invert__(self) -> QueryCondition:
        return self.not_()