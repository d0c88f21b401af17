"""Fragments of SQL with deferred parameter placeholders."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

PLACEHOLDER = "_$i"
"""Marker for a parameter whose position is fixed once the query is complete."""

NULL_SQL = "NULL"


@dataclass
class BoxedSql:
    """A piece of a query: raw SQL with placeholders and the values they bind."""

    sql: str
    values: list[Any] = field(default_factory=list)

    def resolve(self, index: int) -> tuple[str, list[Any], int]:
        """Number the placeholders from ``index`` on.

        Returns the SQL with ``$n`` parameters, a copy of the values and the
        next free parameter index.
        """
        parts = self.sql.split(PLACEHOLDER)
        pieces = [parts[0]]
        for part in parts[1:]:
            pieces.append(f"${index}")
            pieces.append(part)
            index += 1
        return "".join(pieces), list(self.values), index

    def modify(self, func: Callable[[str], str]) -> None:
        """Replace the raw SQL with ``func`` applied to it."""
        self.sql = func(self.sql)


@runtime_checkable
class SqlExpression(Protocol):
    """Anything that can describe itself as a SQL fragment, such as a column."""

    def to_sql(self) -> BoxedSql: ...


def into_sql(value: Any) -> BoxedSql:
    """Turn a column, a fragment or a plain value into a :class:`BoxedSql`.

    ``None`` becomes ``NULL``; any other plain value becomes a single bound
    parameter.
    """
    if isinstance(value, BoxedSql):
        return BoxedSql(value.sql, list(value.values))
    if isinstance(value, SqlExpression):
        return value.to_sql()
    if value is None:
        return BoxedSql(NULL_SQL, [])
    return BoxedSql(PLACEHOLDER, [value])