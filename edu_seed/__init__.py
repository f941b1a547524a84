"""Contextual synthetic data seeding for multi-tenant school databases."""

__all__ = ['run_seed']


def __getattr__(name: str):
    if name == 'run_seed':
        from .services.seed_service import run_seed

        return run_seed
    raise AttributeError(name)
