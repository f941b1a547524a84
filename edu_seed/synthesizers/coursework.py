from __future__ import annotations

import json
import logging
from datetime import datetime, time, timedelta

from edu_seed.errors import ConfigurationError, ValidationError
from edu_seed.models import Assignment, AssignmentSubmission, LessonPlan, LessonPlanAttachment
from edu_seed.services.catalogs import (
    ASSIGNMENT_TITLES,
    GRADE_FEEDBACK,
    LESSON_ACTIVITIES,
    LESSON_MATERIALS,
    LESSON_PLAN_STATUS_WEIGHTS,
    LESSON_PLAN_TITLES,
    SUBMISSION_ATTACHMENTS,
)
from edu_seed.services.scheduler import SeedContext
from edu_seed.synthesizers.people import tenant_domain


logger = logging.getLogger(__name__)

SUBMISSION_WINDOW_DAYS = 7


def require_active_term(ctx: SeedContext):
    term = ctx.tenant.active_term
    if term is None:
        raise ConfigurationError('No active term; run the terms stage first')
    return term


def build_assignment(ctx: SeedContext, offering, subject, term) -> dict:
    sampler = ctx.sampler
    due_date = sampler.instant_between(
        datetime.combine(term.start_date, time(9, 0)),
        datetime.combine(term.end_date, time(17, 0)),
    )
    return {
        'title': f'{subject.name}: {sampler.pick(ASSIGNMENT_TITLES)}',
        'description': sampler.paragraph(),
        'due_date': due_date,
        'max_points': sampler.decimal(50, 100, 1),
        'class_id': offering.class_id,
        'subject_id': offering.subject_id,
        'term_id': term.id,
        'created_at': due_date - timedelta(days=sampler.integer(7, 21)),
    }


def seed_assignments(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    term = require_active_term(ctx)
    subjects = tenant.subject_by_id()
    created = []
    for offering in tenant.class_subjects:
        subject = subjects.get(offering.subject_id)
        if subject is None:
            ctx.skip(ValidationError('assignment', f'class subject {offering.id} has no subject in this school'))
            continue
        for _ in range(ctx.sampler.integer(3, 5)):
            created.append(ctx.create(Assignment, build_assignment(ctx, offering, subject, term)))
    ctx.produce('assignments', created)


def _assignments_without_submissions(ctx: SeedContext) -> list:
    class_ids = [row.id for row in ctx.tenant.classes]
    if not class_ids:
        return []
    assignments = ctx.store.repository(Assignment).find_many(class_id=class_ids)
    if not assignments:
        return []
    submitted = {
        row.assignment_id
        for row in ctx.store.repository(AssignmentSubmission).find_many(assignment_id=[row.id for row in assignments])
    }
    return [row for row in assignments if row.id not in submitted]


def build_submission(ctx: SeedContext, assignment, student_id: int) -> dict:
    sampler = ctx.sampler
    return {
        'assignment_id': assignment.id,
        'student_id': student_id,
        'content': sampler.paragraph(),
        'attachments_json': json.dumps(sampler.sample_between(SUBMISSION_ATTACHMENTS, 0, 2)),
        'submitted_at': sampler.instant_between(assignment.due_date - timedelta(days=SUBMISSION_WINDOW_DAYS), assignment.due_date),
        'grade': sampler.decimal(60, 100, 1),
        'feedback': sampler.pick(GRADE_FEEDBACK),
    }


def seed_assignment_submissions(ctx: SeedContext) -> None:
    assignments = ctx.upstream('assignments', 'assignments', lambda: _assignments_without_submissions(ctx))
    for assignment in assignments:
        with ctx.skip_invalid():
            students = ctx.tenant.enrolled_student_ids(assignment.class_id)
            if not students:
                raise ValidationError('assignment_submission', f'class {assignment.class_id} has no enrolled students')
            share = ctx.sampler.decimal(0.7, 0.9)
            for student_id in ctx.sampler.sample(students, round(len(students) * share)):
                ctx.create(AssignmentSubmission, build_submission(ctx, assignment, student_id))


def build_lesson_plan(ctx: SeedContext, offering, subject_name: str) -> dict:
    sampler = ctx.sampler
    return {
        'title': f'{subject_name}: {sampler.pick(LESSON_PLAN_TITLES)}',
        'planned_for': sampler.date_between(ctx.today - timedelta(days=14), ctx.today + timedelta(days=14)),
        'objectives': '\n'.join(sampler.sentence() for _ in range(sampler.integer(2, 3))),
        'materials': sampler.pick(LESSON_MATERIALS),
        'activities': sampler.pick(LESSON_ACTIVITIES),
        'homework': sampler.sentence(),
        'status': sampler.weighted(LESSON_PLAN_STATUS_WEIGHTS),
        'class_subject_id': offering.id,
        'teacher_id': offering.teacher_id,
    }


def seed_lesson_plans(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    subjects = tenant.subject_by_id()
    domain = tenant_domain(tenant.school)
    for offering in tenant.class_subjects:
        subject = subjects.get(offering.subject_id)
        subject_name = subject.name if subject is not None else 'Lesson'
        for _ in range(ctx.sampler.integer(2, 4)):
            plan = ctx.create(LessonPlan, build_lesson_plan(ctx, offering, subject_name))
            if ctx.sampler.chance(0.3):
                file_name = f'lesson-plan-{plan.id}.pdf'
                ctx.create(
                    LessonPlanAttachment,
                    {'lesson_plan_id': plan.id, 'file_name': file_name, 'url': f'https://files.{domain}/lesson-plans/{file_name}'},
                )
