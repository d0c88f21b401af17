"""Relations between entities.

``OneToOne`` and ``ManyToOne`` live on the owning side and hold the primary
key of the referenced entity. ``OneToOneRef`` and ``OneToMany`` mark the
other side, which stores nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from crashorm.sql import PLACEHOLDER, BoxedSql

T = TypeVar("T")
P = TypeVar("P")


@dataclass(frozen=True)
class _OwningRelation(Generic[T, P]):
    """A stored reference to another entity through its primary key."""

    target_id: P

    def to_sql(self) -> BoxedSql:
        """Bind the referenced primary key as a parameter."""
        return BoxedSql(PLACEHOLDER, [self.target_id])


@dataclass(frozen=True)
class ManyToOne(_OwningRelation[T, P]):
    """The many side of an n:1 relation; holds the referenced key."""

    @classmethod
    def from_entity(cls, entity: Any) -> ManyToOne[T, P]:
        """Reference ``entity`` by its primary key."""
        return cls(entity.primary_key())


@dataclass(frozen=True)
class OneToOne(_OwningRelation[T, P]):
    """The owning side of a 1:1 relation; holds the referenced key."""

    @classmethod
    def from_entity(cls, entity: Any) -> OneToOne[T, P]:
        """Reference ``entity`` by its primary key."""
        return cls(entity.primary_key())


@dataclass(frozen=True)
class OneToMany(Generic[T, P]):
    """The one side of an n:1 relation; the key lives in ``ManyToOne``."""


@dataclass(frozen=True)
class OneToOneRef(Generic[T, P]):
    """The unowned side of a 1:1 relation; the key lives in ``OneToOne``."""