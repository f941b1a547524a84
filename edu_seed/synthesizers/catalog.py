from __future__ import annotations

import json
import logging

from edu_seed.models import Period, Room, Subject, Term
from edu_seed.services.catalogs import (
    PERIOD_CATALOG,
    ROOM_CATALOG,
    SUBJECT_CATALOG,
    PeriodSpec,
    RoomSpec,
    SubjectSpec,
    TermSpec,
    term_for_day,
)
from edu_seed.services.idempotency import decide_active_term, gap_to_target, missing_by_key
from edu_seed.services.scheduler import SeedContext


logger = logging.getLogger(__name__)


def build_subject(spec: SubjectSpec, school_id: int) -> dict:
    return {'name': spec.name, 'code': spec.code, 'description': spec.description, 'school_id': school_id}


def build_room(spec: RoomSpec, school_id: int) -> dict:
    return {
        'name': spec.name,
        'building': spec.building,
        'floor': spec.floor,
        'capacity': spec.capacity,
        'facilities_json': json.dumps(list(spec.facilities)),
        'school_id': school_id,
    }


def build_period(spec: PeriodSpec, school_id: int) -> dict:
    return {
        'name': spec.name,
        'start_time': spec.start_time,
        'end_time': spec.end_time,
        'order': spec.order,
        'is_break': spec.is_break,
        'school_id': school_id,
    }


def build_term(spec: TermSpec, school_id: int) -> dict:
    return {
        'name': spec.name,
        'start_date': spec.start_date,
        'end_date': spec.end_date,
        'is_active': True,
        'school_id': school_id,
    }


def seed_subjects(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    missing = missing_by_key(
        SUBJECT_CATALOG,
        tenant.subjects,
        catalog_key=lambda spec: spec.code,
        existing_key=lambda row: row.code,
    )
    for spec in missing:
        tenant.subjects.append(ctx.create(Subject, build_subject(spec, tenant.school.id)))
    ctx.report.facts['Subjects in catalog'] = str(len(SUBJECT_CATALOG))


def seed_terms(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    spec = term_for_day(ctx.today)
    decision = decide_active_term(tenant.terms, spec)
    if decision.action == 'activate':
        ctx.update(Term, decision.term.id, {'is_active': True})
    elif decision.action == 'create':
        tenant.terms.append(ctx.create(Term, build_term(spec, tenant.school.id)))
    term = tenant.active_term
    logger.info('term_ensured action=%s term=%s', decision.action, term.name)
    ctx.report.facts['Active term'] = term.name


def seed_rooms(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    missing = gap_to_target(
        ROOM_CATALOG,
        tenant.rooms,
        ctx.options.target_rooms,
        catalog_key=lambda spec: spec.name,
        existing_key=lambda row: row.name,
    )
    for spec in missing:
        tenant.rooms.append(ctx.create(Room, build_room(spec, tenant.school.id)))


def seed_periods(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    missing = gap_to_target(
        PERIOD_CATALOG,
        tenant.periods,
        ctx.options.target_periods,
        catalog_key=lambda spec: spec.order,
        existing_key=lambda row: row.order,
    )
    for spec in missing:
        tenant.periods.append(ctx.create(Period, build_period(spec, tenant.school.id)))
    tenant.periods.sort(key=lambda row: row.order)
