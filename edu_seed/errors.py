"""Error taxonomy for a seeding run.

``ConfigurationError`` and ``StoreError`` are fatal and unwind the whole run.
``ValidationError`` covers a single unit of work (one enrollment, one meeting)
and is recovered by the stage that raised it by skipping that unit.
"""


class SeedError(Exception):
    pass


class ConfigurationError(SeedError):
    """Tenant or another prerequisite is missing or inconsistent."""


class ValidationError(SeedError):
    """An upstream record needed for one unit of work is absent."""

    def __init__(self, kind: str, reason: str):
        super().__init__(f'{kind}: {reason}')
        self.kind = kind
        self.reason = reason


class StoreError(SeedError):
    """A write or read against the persistence layer failed."""


class RunCancelled(SeedError):
    pass
