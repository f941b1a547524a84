from __future__ import annotations

import logging
import math
from datetime import datetime, time, timedelta

from edu_seed.errors import ValidationError
from edu_seed.models import Grade, GradeCategory, GradeItem
from edu_seed.services.catalogs import GRADE_CATEGORY_CATALOG, GRADE_FEEDBACK
from edu_seed.services.scheduler import SeedContext
from edu_seed.synthesizers.coursework import require_active_term


logger = logging.getLogger(__name__)

GRADE_ITEM_MAX_POINTS = (60.0, 75.0, 80.0, 100.0)
PASSING_FLOOR = 60.0


def catalog_weight_total(catalog=GRADE_CATEGORY_CATALOG) -> float:
    return math.fsum(weight for _, weight in catalog)


def seed_grade_categories(ctx: SeedContext) -> None:
    """Attach the default category catalog to offerings that have no categories yet."""
    tenant = ctx.tenant
    if not math.isclose(catalog_weight_total(), 1.0, abs_tol=1e-9):
        raise ValueError('Grade category weights must sum to 1.0')
    categorized = {row.class_subject_id for row in tenant.grade_categories}
    for offering in tenant.class_subjects:
        if offering.id in categorized:
            continue
        for name, weight in GRADE_CATEGORY_CATALOG:
            tenant.grade_categories.append(
                ctx.create(
                    GradeCategory,
                    {
                        'name': name,
                        'weight': weight,
                        'description': f'{name} ({weight:.0%} of the final grade)',
                        'class_subject_id': offering.id,
                    },
                )
            )


def _grading_window(ctx: SeedContext, term) -> tuple[datetime, datetime]:
    start = datetime.combine(term.start_date, time(8, 0))
    end = datetime.combine(term.end_date, time(16, 0))
    # Items are dated in the part of the term that has already happened.
    return start, max(start, min(end, ctx.now))


def seed_grade_items(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    term = require_active_term(ctx)
    start, end = _grading_window(ctx, term)
    created = []
    for category in tenant.grade_categories:
        for number in range(1, ctx.sampler.integer(2, 4) + 1):
            created.append(
                ctx.create(
                    GradeItem,
                    {
                        'name': f'{category.name} {number}',
                        'description': ctx.sampler.sentence(),
                        'max_points': ctx.sampler.pick(GRADE_ITEM_MAX_POINTS),
                        'date': ctx.sampler.instant_between(start, end),
                        'class_subject_id': category.class_subject_id,
                        'category_id': category.id,
                        'assignment_id': None,
                    },
                )
            )
    ctx.produce('grade_items', created)


def _items_without_grades(ctx: SeedContext) -> list:
    offering_ids = [row.id for row in ctx.tenant.class_subjects]
    if not offering_ids:
        return []
    items = ctx.store.repository(GradeItem).find_many(class_subject_id=offering_ids)
    if not items:
        return []
    graded = {row.grade_item_id for row in ctx.store.repository(Grade).find_many(grade_item_id=[row.id for row in items])}
    return [row for row in items if row.id not in graded]


def build_grade(ctx: SeedContext, item, student_id: int, teacher_id: int) -> dict:
    sampler = ctx.sampler
    graded_by = max(item.date, min(ctx.now, item.date + timedelta(days=7)))
    return {
        'points': sampler.decimal(PASSING_FLOOR, max(PASSING_FLOOR, item.max_points), 1),
        'feedback': sampler.pick(GRADE_FEEDBACK),
        'grade_item_id': item.id,
        'student_id': student_id,
        'teacher_id': teacher_id,
        'graded_at': sampler.instant_between(item.date, graded_by),
    }


def seed_grades(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    offerings = {row.id: row for row in tenant.class_subjects}
    items = ctx.upstream('grade_items', 'grade_items', lambda: _items_without_grades(ctx))
    for item in items:
        with ctx.skip_invalid():
            offering = offerings.get(item.class_subject_id)
            if offering is None:
                raise ValidationError('grade', f'grade item {item.id} has no class subject')
            students = tenant.enrolled_student_ids(offering.class_id)
            if not students:
                raise ValidationError('grade', f'class {offering.class_id} has no enrolled students')
            for student_id in students:
                ctx.create(Grade, build_grade(ctx, item, student_id, offering.teacher_id))
