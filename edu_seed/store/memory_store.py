"""In-process Store used by tests and dry experiments.

Rows are real model instances that never touch a session. Column defaults
and unique constraints declared on the models are honoured so the engine
behaves the same way it does against a database.
"""

from __future__ import annotations

import itertools
from collections import defaultdict
from typing import Any

from sqlalchemy import UniqueConstraint

from edu_seed.errors import StoreError
from edu_seed.store.base import is_membership_filter


def _matches(row, filters: dict[str, Any]) -> bool:
    for name, expected in filters.items():
        actual = getattr(row, name)
        if is_membership_filter(expected):
            if actual not in expected:
                return False
        elif actual != expected:
            return False
    return True


def _unique_column_sets(model) -> list[tuple[str, ...]]:
    column_sets = []
    for constraint in model.__table__.constraints:
        if isinstance(constraint, UniqueConstraint):
            column_sets.append(tuple(column.key for column in constraint.columns))
    for column in model.__table__.columns:
        if column.unique and (column.key,) not in column_sets:
            column_sets.append((column.key,))
    return column_sets


class InMemoryRepository:
    def __init__(self, store: 'InMemoryStore', model):
        self._store = store
        self.model = model
        self._rows: list = store.tables[model]
        self._ids = itertools.count(1)
        self._unique_sets = _unique_column_sets(model)
        self._attr_by_column = {column.key: attr.key for attr in model.__mapper__.column_attrs for column in attr.columns}

    def _apply_defaults(self, row) -> None:
        for column in self.model.__table__.columns:
            attr_name = self._attr_by_column.get(column.key, column.key)
            if getattr(row, attr_name) is not None or column.default is None:
                continue
            default = column.default
            if default.is_scalar:
                setattr(row, attr_name, default.arg)
            elif default.is_callable:
                setattr(row, attr_name, default.arg(None))

    def _check_unique(self, row) -> None:
        for column_keys in self._unique_sets:
            attr_names = [self._attr_by_column.get(key, key) for key in column_keys]
            values = tuple(getattr(row, name) for name in attr_names)
            if any(value is None for value in values):
                continue
            for existing in self._rows:
                if existing is row:
                    continue
                if tuple(getattr(existing, name) for name in attr_names) == values:
                    raise StoreError(
                        f'unique constraint violated on {self.model.__tablename__}({", ".join(column_keys)})'
                    )

    def create(self, record: dict[str, Any]):
        self._store.before_write(self.model, record)
        row = self.model(**record)
        self._apply_defaults(row)
        self._check_unique(row)
        row.id = next(self._ids)
        self._rows.append(row)
        self._store._pending.append((self.model, row))
        return row

    def find_many(self, **filters: Any) -> list:
        return [row for row in self._rows if _matches(row, filters)]

    def find_one(self, **filters: Any):
        for row in self._rows:
            if _matches(row, filters):
                return row
        return None

    def count(self, **filters: Any) -> int:
        return len(self.find_many(**filters))

    def update(self, row_id: int, patch: dict[str, Any]):
        row = self.find_one(id=row_id)
        if row is None:
            raise StoreError(f'{self.model.__name__} id={row_id} not found')
        self._store.before_write(self.model, patch)
        for name, value in patch.items():
            setattr(row, name, value)
        self._check_unique(row)
        return row


class InMemoryStore:
    """Mirrors ``SqlAlchemyStore``: rows created since the last durable commit
    are pending and ``discard`` drops them. Updates are not reverted.
    """

    def __init__(self, *, commit: bool = True):
        self.tables: dict[type, list] = defaultdict(list)
        self.commits = 0
        self.commit_enabled = commit
        self._pending: list[tuple[type, Any]] = []
        self._repositories: dict[type, InMemoryRepository] = {}

    def repository(self, model) -> InMemoryRepository:
        repo = self._repositories.get(model)
        if repo is None:
            repo = InMemoryRepository(self, model)
            self._repositories[model] = repo
        return repo

    def before_write(self, model, record: dict[str, Any]) -> None:
        """Hook for tests that need to inject write failures."""

    def commit(self) -> None:
        self.commits += 1
        if self.commit_enabled:
            self._pending.clear()

    def discard(self) -> None:
        for model, row in reversed(self._pending):
            self.tables[model].remove(row)
        self._pending.clear()
