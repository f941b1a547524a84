from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from edu_seed.errors import StoreError
from edu_seed.store.base import is_membership_filter


logger = logging.getLogger(__name__)


class SqlAlchemyRepository:
    def __init__(self, store: 'SqlAlchemyStore', model):
        self._store = store
        self.model = model

    @property
    def _db(self) -> Session:
        return self._store.db

    def _query(self, filters: dict[str, Any]):
        query = self._db.query(self.model)
        for name, value in filters.items():
            column = getattr(self.model, name)
            if is_membership_filter(value):
                query = query.filter(column.in_(list(value)))
            elif value is None:
                query = query.filter(column.is_(None))
            else:
                query = query.filter(column == value)
        return query

    def create(self, record: dict[str, Any]):
        row = self.model(**record)
        try:
            self._db.add(row)
            self._db.flush()
        except SQLAlchemyError as exc:
            self._db.rollback()
            raise StoreError(f'create {self.model.__name__} failed: {exc}') from exc
        return row

    def find_many(self, **filters: Any) -> list:
        try:
            return self._query(filters).order_by(self.model.id.asc()).all()
        except SQLAlchemyError as exc:
            raise StoreError(f'query {self.model.__name__} failed: {exc}') from exc

    def find_one(self, **filters: Any):
        try:
            return self._query(filters).order_by(self.model.id.asc()).first()
        except SQLAlchemyError as exc:
            raise StoreError(f'query {self.model.__name__} failed: {exc}') from exc

    def count(self, **filters: Any) -> int:
        try:
            return self._query(filters).count()
        except SQLAlchemyError as exc:
            raise StoreError(f'count {self.model.__name__} failed: {exc}') from exc

    def update(self, row_id: int, patch: dict[str, Any]):
        row = self._db.get(self.model, row_id)
        if row is None:
            raise StoreError(f'{self.model.__name__} id={row_id} not found')
        for name, value in patch.items():
            setattr(row, name, value)
        try:
            self._db.flush()
        except SQLAlchemyError as exc:
            self._db.rollback()
            raise StoreError(f'update {self.model.__name__} id={row_id} failed: {exc}') from exc
        return row


class SqlAlchemyStore:
    """Store backed by one SQLAlchemy session.

    Writes are flushed immediately so identifiers are available to the next
    synthesizer; ``commit`` is the durability point. With ``commit=False``
    nothing is ever committed and ``discard`` rolls the whole run back.
    """

    def __init__(self, db: Session, *, commit: bool = True):
        self.db = db
        self.commit_enabled = commit
        self._repositories: dict[type, SqlAlchemyRepository] = {}

    def repository(self, model) -> SqlAlchemyRepository:
        repo = self._repositories.get(model)
        if repo is None:
            repo = SqlAlchemyRepository(self, model)
            self._repositories[model] = repo
        return repo

    def commit(self) -> None:
        try:
            if self.commit_enabled:
                self.db.commit()
            else:
                self.db.flush()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(f'commit failed: {exc}') from exc

    def discard(self) -> None:
        self.db.rollback()
        logger.info('store_discarded commit_enabled=%s', self.commit_enabled)
