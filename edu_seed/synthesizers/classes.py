from __future__ import annotations

import logging
from collections import Counter
from itertools import product

from edu_seed.errors import ValidationError
from edu_seed.models import ClassMeeting, ClassSubject, Enrollment, EnrollmentStatus, Role, SchoolClass
from edu_seed.services.catalogs import SUBJECT_CATALOG, class_catalog
from edu_seed.services.idempotency import MembershipIndex, ensure_unique, gap_to_target
from edu_seed.services.scheduler import SeedContext


logger = logging.getLogger(__name__)

SCHOOL_DAYS = (1, 2, 3, 4, 5)
SUBJECT_DEPARTMENTS = {spec.code: spec.department for spec in SUBJECT_CATALOG}


def build_class(grade: str, section: str, school_id: int) -> dict:
    return {'name': f'Grade {grade}{section}', 'grade': grade, 'section': section, 'school_id': school_id}


def seed_classes(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    missing = gap_to_target(
        class_catalog(),
        tenant.classes,
        ctx.options.target_classes,
        catalog_key=lambda pair: pair,
        existing_key=lambda row: (row.grade, row.section),
    )
    for grade, section in missing:
        tenant.classes.append(ctx.create(SchoolClass, build_class(grade, section, tenant.school.id)))


def _pick_teacher(ctx: SeedContext, subject, load: Counter) -> int:
    tenant = ctx.tenant
    teachers = tenant.users(Role.TEACHER)
    if not teachers:
        raise ValidationError('class_subject', 'school has no teachers')
    department = SUBJECT_DEPARTMENTS.get(subject.code)
    matching = [
        user for user in teachers
        if department and getattr(tenant.teacher_profiles.get(user.id), 'department', None) == department
    ]
    candidates = ctx.sampler.shuffled(matching or teachers)
    chosen = min(candidates, key=lambda user: load[user.id])
    return chosen.id


def seed_class_subjects(ctx: SeedContext) -> None:
    """Give every class up to ``subjects_per_class`` offerings, each with one teacher."""
    tenant = ctx.tenant
    index = MembershipIndex(tenant.class_subjects, key=lambda row: (row.class_id, row.subject_id))
    load = Counter(row.teacher_id for row in tenant.class_subjects)
    target = ctx.options.subjects_per_class

    for school_class in tenant.classes:
        offered = [row for row in tenant.class_subjects if row.class_id == school_class.id]
        gap = target - len(offered)
        if gap <= 0:
            continue
        candidates = [subject for subject in tenant.subjects if (school_class.id, subject.id) not in index]
        for subject in ctx.sampler.sample(candidates, gap):
            with ctx.skip_invalid():
                teacher_id = _pick_teacher(ctx, subject, load)
                row = ensure_unique(
                    index,
                    (school_class.id, subject.id),
                    lambda: ctx.create(
                        ClassSubject,
                        {'class_id': school_class.id, 'subject_id': subject.id, 'teacher_id': teacher_id},
                    ),
                )
                if row is not None:
                    load[teacher_id] += 1
                    tenant.class_subjects.append(row)


def seed_enrollments(ctx: SeedContext) -> None:
    """Enroll each student into one class of their grade level.

    A student without a grade level, or whose grade has no class, is
    skipped. A student already enrolled in a class of their grade is left
    alone.
    """
    tenant = ctx.tenant
    index = MembershipIndex(tenant.enrollments, key=lambda row: (row.student_id, row.class_id))
    class_size = Counter(row.class_id for row in tenant.enrollments)
    classes_by_grade: dict[str, list] = {}
    for school_class in tenant.classes:
        classes_by_grade.setdefault(school_class.grade, []).append(school_class)

    for student in tenant.users(Role.STUDENT):
        with ctx.skip_invalid():
            profile = tenant.student_profiles.get(student.id)
            if profile is None or not profile.grade:
                raise ValidationError('enrollment', f'student {student.id} has no grade level')
            options = classes_by_grade.get(profile.grade)
            if not options:
                raise ValidationError('enrollment', f'no class for grade {profile.grade}')
            if any((student.id, school_class.id) in index for school_class in options):
                continue
            target = min(options, key=lambda row: (class_size[row.id], row.id))
            row = ensure_unique(
                index,
                (student.id, target.id),
                lambda: ctx.create(
                    Enrollment,
                    {
                        'student_id': student.id,
                        'class_id': target.id,
                        'status': EnrollmentStatus.ACTIVE.value,
                        'enrolled_at': student.created_at or ctx.now,
                    },
                ),
            )
            if row is not None:
                class_size[target.id] += 1
                tenant.enrollments.append(row)


def teaching_periods(periods: list) -> list:
    """Periods usable for timetable meetings: no breaks and not the last period of the day."""
    if not periods:
        return []
    last_order = max(period.order for period in periods)
    return [period for period in periods if not period.is_break and period.order != last_order]


def seed_class_meetings(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    periods = teaching_periods(tenant.periods)
    rooms = list(tenant.rooms)
    offering_class = {row.id: row.class_id for row in tenant.class_subjects}

    booked = MembershipIndex(tenant.class_meetings, key=lambda row: (row.day_of_week, row.period_id, row.room_id))
    class_busy = MembershipIndex(
        (row for row in tenant.class_meetings if row.class_subject_id in offering_class),
        key=lambda row: (offering_class[row.class_subject_id], row.day_of_week, row.period_id),
    )
    scheduled = {row.class_subject_id for row in tenant.class_meetings}

    for offering in tenant.class_subjects:
        if offering.id in scheduled:
            continue
        with ctx.skip_invalid():
            if not periods or not rooms:
                raise ValidationError('class_meeting', 'no rooms or teaching periods available')
            created = 0
            days = sorted(ctx.sampler.sample(SCHOOL_DAYS, ctx.sampler.integer(2, 3)))
            for day in days:
                for period, room in ctx.sampler.shuffled(product(periods, rooms)):
                    slot = (day, period.id, room.id)
                    if slot in booked or (offering.class_id, day, period.id) in class_busy:
                        continue
                    meeting = ctx.create(
                        ClassMeeting,
                        {'day_of_week': day, 'class_subject_id': offering.id, 'period_id': period.id, 'room_id': room.id},
                    )
                    booked.add(slot)
                    class_busy.add((offering.class_id, day, period.id))
                    tenant.class_meetings.append(meeting)
                    created += 1
                    break
            if not created:
                raise ValidationError('class_meeting', f'no free slot for class subject {offering.id}')
