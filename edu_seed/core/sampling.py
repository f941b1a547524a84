"""Sampling primitives shared by every synthesizer.

All randomness of a run flows through one ``Sampler`` so that a run is
reproducible from its seed. Free text (sentences, paragraphs, references)
comes from a Faker instance seeded from the same value.
"""

from __future__ import annotations

import random
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Mapping, Sequence, TypeVar

from faker import Faker


T = TypeVar('T')

WeightTable = Mapping[Any, float] | Sequence[tuple[Any, float]]


def _normalize_table(table: WeightTable) -> list[tuple[Any, float]]:
    pairs = list(table.items()) if isinstance(table, Mapping) else [tuple(pair) for pair in table]
    if not pairs:
        raise ValueError('Weighted table is empty')
    for _, weight in pairs:
        if weight < 0:
            raise ValueError('Weights must be non-negative')
    total = float(sum(weight for _, weight in pairs))
    if total <= 0:
        raise ValueError('Weights must not all be zero')
    return [(value, weight / total) for value, weight in pairs]


def weighted_choice(table: WeightTable, draw: float) -> Any:
    """Pick from ``table`` using a uniform ``draw`` in [0, 1).

    Weights are normalized first, so they need not sum to 1. The first value
    whose cumulative probability exceeds ``draw`` wins.
    """
    normalized = _normalize_table(table)
    cumulative = 0.0
    for value, probability in normalized:
        cumulative += probability
        if draw < cumulative:
            return value
    # Float rounding can leave the cumulative sum a hair under 1.0.
    for value, probability in reversed(normalized):
        if probability > 0:
            return value
    return normalized[-1][0]


def interpolate_instant(start: datetime, end: datetime, draw: float) -> datetime:
    if end < start:
        raise ValueError('end must not be before start')
    return start + (end - start) * draw


class Sampler:
    def __init__(self, seed: int | None = None):
        if seed is None:
            seed = random.SystemRandom().randrange(2**32)
        self.seed = int(seed)
        self.rng = random.Random(self.seed)
        self.fake = Faker()
        self.fake.seed_instance(self.seed)

    def pick(self, pool: Sequence[T]) -> T:
        if not pool:
            raise ValueError('Cannot pick from an empty pool')
        return self.rng.choice(pool)

    def sample(self, pool: Iterable[T], count: int) -> list[T]:
        items = list(pool)
        count = max(0, min(int(count), len(items)))
        return self.rng.sample(items, count)

    def sample_between(self, pool: Iterable[T], low: int, high: int) -> list[T]:
        items = list(pool)
        return self.sample(items, self.integer(low, high))

    def integer(self, low: int, high: int) -> int:
        return self.rng.randint(int(low), int(high))

    def decimal(self, low: float, high: float, digits: int | None = None) -> float:
        value = self.rng.uniform(float(low), float(high))
        if digits is None:
            return value
        return min(max(round(value, digits), float(low)), float(high))

    def chance(self, probability: float) -> bool:
        return self.rng.random() < probability

    def weighted(self, table: WeightTable) -> Any:
        return weighted_choice(table, self.rng.random())

    def instant_between(self, start: datetime, end: datetime) -> datetime:
        return interpolate_instant(start, end, self.rng.random())

    def date_between(self, start: date, end: date) -> date:
        if end < start:
            raise ValueError('end must not be before start')
        return start + timedelta(days=self.rng.randint(0, (end - start).days))

    def shuffled(self, pool: Iterable[T]) -> list[T]:
        items = list(pool)
        self.rng.shuffle(items)
        return items

    def sentence(self) -> str:
        return self.fake.sentence()

    def paragraph(self) -> str:
        return self.fake.paragraph()

    def paragraphs(self, count: int) -> str:
        return '\n\n'.join(self.fake.paragraphs(nb=count))

    def token(self, length: int = 8) -> str:
        return self.fake.bothify('?' * length, letters='ABCDEFGHJKLMNPQRSTUVWXYZ23456789')

    def uuid(self) -> str:
        return self.fake.uuid4()
