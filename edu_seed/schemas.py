from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator

from edu_seed.config import Settings, settings as default_settings


class SeedOptions(BaseModel):
    tenant_id: int | None = None
    seed: int | None = None
    append: bool = False
    dry_run: bool = False
    stages: list[str] | None = None

    target_teachers: int = Field(default=8, ge=0)
    target_students: int = Field(default=60, ge=0)
    target_parents: int = Field(default=30, ge=0)
    target_rooms: int = Field(default=6, ge=0)
    target_periods: int = Field(default=8, ge=0)
    target_classes: int = Field(default=8, ge=0)
    subjects_per_class: int = Field(default=5, ge=0)
    attendance_days: int = Field(default=30, ge=0)
    attendance_day_rate: float = Field(default=0.8, ge=0, le=1)
    events_count: int = Field(default=20, ge=0)
    announcements_count: int = Field(default=10, ge=0)
    notifications_min_per_user: int = Field(default=5, ge=0)
    notifications_max_per_user: int = Field(default=15, ge=0)
    conversations_count: int = Field(default=12, ge=0)

    @model_validator(mode='after')
    def _check_ranges(self) -> 'SeedOptions':
        if self.notifications_min_per_user > self.notifications_max_per_user:
            raise ValueError('notifications_min_per_user must not exceed notifications_max_per_user')
        return self

    @property
    def mode(self) -> str:
        return 'append' if self.append else 'ensure-only'

    @classmethod
    def from_settings(cls, config: Settings | None = None, **overrides: Any) -> 'SeedOptions':
        config = config or default_settings
        values = {name: getattr(config, name) for name in cls.model_fields if hasattr(config, name)}
        values['seed'] = config.seed_default
        values.update({name: value for name, value in overrides.items() if value is not None})
        return cls(**values)
