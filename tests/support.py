from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from edu_seed.core.time_provider import TimeProvider
from edu_seed.models import Role, School, StudentProfile, User
from edu_seed.schemas import SeedOptions


FROZEN_NOW = datetime(2026, 10, 19, 10, 0, tzinfo=ZoneInfo('UTC'))


class FixedTimeProvider(TimeProvider):
    def __init__(self, frozen_dt: datetime = FROZEN_NOW):
        self._frozen_dt = frozen_dt

    def now(self) -> datetime:
        return self._frozen_dt


def small_options(**overrides) -> SeedOptions:
    values = {
        'seed': 1234,
        'target_teachers': 6,
        'target_students': 24,
        'target_parents': 10,
        'target_rooms': 6,
        'target_periods': 8,
        'target_classes': 8,
        'subjects_per_class': 3,
        'attendance_days': 10,
        'attendance_day_rate': 0.8,
        'events_count': 4,
        'announcements_count': 3,
        'notifications_min_per_user': 1,
        'notifications_max_per_user': 2,
        'conversations_count': 4,
    }
    values.update(overrides)
    return SeedOptions(**values)


def add_school(store, name: str = 'Lincoln High School') -> School:
    return store.repository(School).create({'name': name, 'city': 'Springfield'})


def add_student(store, school: School, email: str, grade: str | None = '9', with_profile: bool = True) -> User:
    user = store.repository(User).create(
        {'email': email, 'first_name': 'Test', 'last_name': 'Student', 'role': Role.STUDENT.value, 'school_id': school.id}
    )
    if with_profile:
        store.repository(StudentProfile).create(
            {'student_id': user.id, 'grade': grade, 'student_id_number': f'STU9{user.id:04d}'}
        )
    return user
