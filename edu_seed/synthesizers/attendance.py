from __future__ import annotations

import logging
from datetime import date, timedelta

from edu_seed.errors import ValidationError
from edu_seed.models import AttendanceRecord, AttendanceSession, AttendanceStatus
from edu_seed.services.catalogs import ABSENCE_NOTES, ATTENDANCE_SESSION_NOTES, ATTENDANCE_STATUS_WEIGHTS
from edu_seed.services.idempotency import MembershipIndex
from edu_seed.services.scheduler import SeedContext


logger = logging.getLogger(__name__)


def recent_weekdays(today: date, days: int) -> list[date]:
    """Weekdays in the ``days`` days before ``today``, oldest first."""
    window = (today - timedelta(days=offset) for offset in range(days, 0, -1))
    return [day for day in window if day.weekday() < 5]


def build_attendance_record(ctx: SeedContext, session_id: int, student_id: int) -> dict:
    status = ctx.sampler.weighted(ATTENDANCE_STATUS_WEIGHTS)
    notes = ctx.sampler.pick(ABSENCE_NOTES) if status == AttendanceStatus.ABSENT.value else None
    return {'status': status, 'notes': notes, 'session_id': session_id, 'student_id': student_id}


def seed_attendance_sessions(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    offering_ids = [row.id for row in tenant.class_subjects]
    existing = ctx.store.repository(AttendanceSession).find_many(class_subject_id=offering_ids) if offering_ids else []
    held = MembershipIndex(existing, key=lambda row: (row.class_subject_id, row.session_date))
    calendar = recent_weekdays(ctx.today, ctx.options.attendance_days)

    created = []
    for offering in tenant.class_subjects:
        for day in calendar:
            if not ctx.sampler.chance(ctx.options.attendance_day_rate):
                continue
            if (offering.id, day) in held:
                continue
            session = ctx.create(
                AttendanceSession,
                {
                    'session_date': day,
                    'notes': ctx.sampler.pick(ATTENDANCE_SESSION_NOTES),
                    'class_subject_id': offering.id,
                    'created_by_id': offering.teacher_id,
                },
            )
            held.add((offering.id, day))
            created.append(session)
    ctx.produce('attendance_sessions', created)


def _sessions_without_records(ctx: SeedContext) -> list:
    offering_ids = [row.id for row in ctx.tenant.class_subjects]
    if not offering_ids:
        return []
    sessions = ctx.store.repository(AttendanceSession).find_many(class_subject_id=offering_ids)
    if not sessions:
        return []
    recorded = {
        row.session_id
        for row in ctx.store.repository(AttendanceRecord).find_many(session_id=[row.id for row in sessions])
    }
    return [row for row in sessions if row.id not in recorded]


def seed_attendance_records(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    offerings = {row.id: row for row in tenant.class_subjects}
    sessions = ctx.upstream('attendance_sessions', 'attendance_sessions', lambda: _sessions_without_records(ctx))
    for session in sessions:
        with ctx.skip_invalid():
            offering = offerings.get(session.class_subject_id)
            students = tenant.enrolled_student_ids(offering.class_id) if offering is not None else []
            if not students:
                raise ValidationError('attendance_record', f'session {session.id} has no enrolled students')
            for student_id in students:
                ctx.create(AttendanceRecord, build_attendance_record(ctx, session.id, student_id))
