from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', extra='ignore')

    app_name: str = 'School Data Seeder'
    app_env: str = 'local'
    app_timezone: str = 'UTC'
    database_url: str = 'sqlite:///./school.db'
    log_level: str = 'INFO'
    db_slow_query_ms: int = 100
    seed_default: int | None = None
    target_teachers: int = 8
    target_students: int = 60
    target_parents: int = 30
    target_rooms: int = 6
    target_periods: int = 8
    target_classes: int = 8
    subjects_per_class: int = 5
    attendance_days: int = 30
    attendance_day_rate: float = 0.8
    events_count: int = 20
    announcements_count: int = 10
    notifications_min_per_user: int = 5
    notifications_max_per_user: int = 15
    conversations_count: int = 12


settings = Settings()
