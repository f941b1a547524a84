from __future__ import annotations

import json
import logging
from datetime import datetime, time, timedelta

from edu_seed.errors import ValidationError
from edu_seed.models import Announcement, Event, EventAttendee, EventAudience, Notification, Role
from edu_seed.services.catalogs import (
    ANNOUNCEMENT_PRIORITIES,
    ANNOUNCEMENT_TITLES,
    AUDIENCE_SCOPES,
    EVENT_LOCATIONS,
    EVENT_RSVP_WEIGHTS,
    EVENT_TITLES,
    EVENT_TYPES,
    NOTIFICATION_ENTITY_TYPES,
    NOTIFICATION_TITLES,
    NOTIFICATION_TYPES,
)
from edu_seed.services.scheduler import SeedContext


logger = logging.getLogger(__name__)

STAFF_ROLES = (Role.PRINCIPAL, Role.TEACHER, Role.CLERK)


def staff_users(ctx: SeedContext) -> list:
    return [user for role in STAFF_ROLES for user in ctx.tenant.users(role)]


def event_window(ctx: SeedContext, all_day: bool) -> tuple[datetime, datetime]:
    sampler = ctx.sampler
    start = sampler.instant_between(ctx.now - timedelta(days=30), ctx.now + timedelta(days=60))
    if all_day:
        start = datetime.combine(start.date(), time.min)
        return start, start + timedelta(days=1) - timedelta(minutes=1)
    start = start.replace(minute=0, second=0, microsecond=0)
    return start, start + timedelta(hours=sampler.integer(1, 8))


def build_audience(ctx: SeedContext, event_id: int) -> dict:
    tenant = ctx.tenant
    scope = ctx.sampler.pick(AUDIENCE_SCOPES)
    record = {'scope': scope, 'event_id': event_id, 'class_id': None, 'subject_id': None}
    if scope == 'CLASS' and tenant.classes:
        record['class_id'] = ctx.sampler.pick(tenant.classes).id
    elif scope == 'SUBJECT' and tenant.subjects:
        record['subject_id'] = ctx.sampler.pick(tenant.subjects).id
    else:
        record['scope'] = 'SCHOOL'
    return record


def seed_events(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    creators = staff_users(ctx)
    if not creators:
        ctx.skip(ValidationError('event', 'school has no staff to organise events'))
        return
    everyone = tenant.all_users
    created = []
    for _ in range(ctx.options.events_count):
        all_day = ctx.sampler.chance(0.3)
        start, end = event_window(ctx, all_day)
        event = ctx.create(
            Event,
            {
                'title': ctx.sampler.pick(EVENT_TITLES),
                'description': ctx.sampler.paragraph(),
                'start_date': start,
                'end_date': end,
                'location': ctx.sampler.pick(EVENT_LOCATIONS),
                'type': ctx.sampler.pick(EVENT_TYPES),
                'is_all_day': all_day,
                'school_id': tenant.school.id,
                'created_by_id': ctx.sampler.pick(creators).id,
            },
        )
        ctx.create(EventAudience, build_audience(ctx, event.id))
        for user in ctx.sampler.sample_between(everyone, 3, 15):
            ctx.create(
                EventAttendee,
                {'event_id': event.id, 'user_id': user.id, 'status': ctx.sampler.weighted(EVENT_RSVP_WEIGHTS)},
            )
        created.append(event)
    ctx.produce('events', created)


def seed_announcements(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    authors = [user for role in (Role.PRINCIPAL, Role.TEACHER) for user in tenant.users(role)]
    if not authors:
        ctx.skip(ValidationError('announcement', 'school has no principal or teacher to publish announcements'))
        return
    for _ in range(ctx.options.announcements_count):
        published_at = ctx.sampler.instant_between(ctx.now - timedelta(days=30), ctx.now)
        ctx.create(
            Announcement,
            {
                'title': ctx.sampler.pick(ANNOUNCEMENT_TITLES),
                'content': ctx.sampler.paragraphs(2),
                'scope': 'SCHOOL',
                'priority': ctx.sampler.pick(ANNOUNCEMENT_PRIORITIES),
                'school_id': tenant.school.id,
                'created_by_id': ctx.sampler.pick(authors).id,
                'published_at': published_at,
                'expires_at': published_at + timedelta(days=ctx.sampler.integer(7, 30)),
            },
        )


def build_notification(ctx: SeedContext, user_id: int) -> dict:
    sampler = ctx.sampler
    created_at = sampler.instant_between(ctx.now - timedelta(days=30), ctx.now)
    is_read = sampler.chance(0.7)
    payload = {'entityId': sampler.uuid(), 'entityType': sampler.pick(NOTIFICATION_ENTITY_TYPES)}
    return {
        'title': sampler.pick(NOTIFICATION_TITLES),
        'content': sampler.sentence(),
        'type': sampler.pick(NOTIFICATION_TYPES),
        'is_read': is_read,
        'data_json': json.dumps(payload),
        'user_id': user_id,
        'read_at': sampler.instant_between(created_at, ctx.now) if is_read else None,
        'created_at': created_at,
    }


def seed_notifications(ctx: SeedContext) -> None:
    low = ctx.options.notifications_min_per_user
    high = ctx.options.notifications_max_per_user
    for user in ctx.tenant.all_users:
        for _ in range(ctx.sampler.integer(low, high)):
            ctx.create(Notification, build_notification(ctx, user.id))
