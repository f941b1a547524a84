from .base import Repository, Store
from .memory_store import InMemoryStore
from .sqlalchemy_store import SqlAlchemyStore

__all__ = ['Repository', 'Store', 'InMemoryStore', 'SqlAlchemyStore']
