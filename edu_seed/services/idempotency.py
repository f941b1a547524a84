"""Read-then-write guards that keep repeated runs from duplicating data.

Both patterns work on the in-memory snapshot loaded for the tenant, not on
store-level locking, so two runs against the same school at the same time
can still race between the check and the write. Runs are expected to be
serialized per school.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Hashable, Iterable, Sequence, TypeVar

from edu_seed.errors import ConfigurationError
from edu_seed.services.catalogs import TermSpec


T = TypeVar('T')


def missing_by_key(
    catalog: Sequence[T],
    existing: Iterable[Any],
    *,
    catalog_key: Callable[[T], Hashable],
    existing_key: Callable[[Any], Hashable],
) -> list[T]:
    """Catalog entries whose natural key is not present yet, in catalog order."""
    present = {existing_key(row) for row in existing}
    missing = []
    for item in catalog:
        key = catalog_key(item)
        if key in present:
            continue
        present.add(key)
        missing.append(item)
    return missing


def gap_to_target(
    catalog: Sequence[T],
    existing: Sequence[Any],
    target: int,
    *,
    catalog_key: Callable[[T], Hashable],
    existing_key: Callable[[Any], Hashable],
) -> list[T]:
    """Missing catalog entries, capped so the total does not exceed ``target``."""
    room = max(0, int(target) - len(existing))
    if room == 0:
        return []
    return missing_by_key(catalog, existing, catalog_key=catalog_key, existing_key=existing_key)[:room]


class MembershipIndex:
    """Composite keys of join records that already exist."""

    def __init__(self, rows: Iterable[Any] = (), *, key: Callable[[Any], Hashable]):
        self._key = key
        self._keys: set[Hashable] = {key(row) for row in rows}

    def __contains__(self, item: Hashable) -> bool:
        return item in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def add_row(self, row: Any) -> None:
        self._keys.add(self._key(row))

    def add(self, item: Hashable) -> None:
        self._keys.add(item)


def ensure_unique(index: MembershipIndex, key: Hashable, create: Callable[[], T]) -> T | None:
    """Create a join record unless ``key`` is already present."""
    if key in index:
        return None
    row = create()
    index.add(key)
    return row


@dataclass(frozen=True)
class TermDecision:
    action: str
    term: Any = None


def decide_active_term(terms: Sequence[Any], spec: TermSpec) -> TermDecision:
    """Work out how to end up with exactly one active term.

    ``reuse`` keeps the active term, ``activate`` flips an inactive term with
    the catalog name, ``create`` inserts the catalog term as active.
    """
    active = [term for term in terms if term.is_active]
    if len(active) > 1:
        names = ', '.join(sorted(term.name for term in active))
        raise ConfigurationError(f'More than one active term exists: {names}')
    if active:
        return TermDecision('reuse', active[0])
    for term in terms:
        if term.name == spec.name:
            return TermDecision('activate', term)
    return TermDecision('create')
