from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from edu_seed.config import settings


APP_TIMEZONE = settings.app_timezone or 'UTC'
APP_ZONEINFO = ZoneInfo(APP_TIMEZONE)


class TimeProvider:
    def now(self) -> datetime:
        return datetime.now(APP_ZONEINFO)

    def today(self) -> date:
        return self.now().date()

    def naive_now(self) -> datetime:
        # Columns are stored without timezone.
        return self.now().replace(tzinfo=None)


default_time_provider = TimeProvider()
