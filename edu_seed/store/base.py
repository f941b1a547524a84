"""Persistence port used by the seeding engine.

One ``Repository`` per entity kind, obtained from a ``Store``. Filters are
keyword equality filters; a list, tuple or set value means membership.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar


ModelT = TypeVar('ModelT')


class Repository(Protocol[ModelT]):
    def create(self, record: dict[str, Any]) -> ModelT:
        ...

    def find_many(self, **filters: Any) -> list[ModelT]:
        ...

    def find_one(self, **filters: Any) -> ModelT | None:
        ...

    def update(self, row_id: int, patch: dict[str, Any]) -> ModelT:
        ...

    def count(self, **filters: Any) -> int:
        ...


class Store(Protocol):
    commit_enabled: bool

    def repository(self, model: type[ModelT]) -> Repository[ModelT]:
        ...

    def commit(self) -> None:
        """Make every write issued so far durable."""

    def discard(self) -> None:
        """Drop writes that have not been committed."""


def is_membership_filter(value: Any) -> bool:
    return isinstance(value, (list, tuple, set, frozenset))
