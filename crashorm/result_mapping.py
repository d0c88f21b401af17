"""Mapping of result rows onto Python objects."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass
class SingleResult(Generic[T]):
    """Holds the single column of a row returned by a select query."""

    value: T

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> SingleResult[Any]:
        """Take the first column of ``row``."""
        return cls(row[0])