from __future__ import annotations

import json
import logging

from edu_seed.models import AuditLog
from edu_seed.services.scheduler import SeedContext


logger = logging.getLogger(__name__)


def _assignment_actor(ctx: SeedContext):
    teachers = {(row.class_id, row.subject_id): row.teacher_id for row in ctx.tenant.class_subjects}
    return lambda row: teachers.get((row.class_id, row.subject_id))


def _invoice_actor(ctx: SeedContext):
    clerk = next(iter(ctx.tenant.clerk_profiles.values()), None)
    actor_id = clerk.clerk_id if clerk is not None else None
    return lambda row: actor_id


def audit_entries(ctx: SeedContext) -> list[tuple[str, object, dict, object]]:
    """(entity, row, changes, actor id) for every audited row created in this run."""
    entries = []
    actor = _assignment_actor(ctx)
    for row in ctx.produced.get('assignments', []):
        entries.append(('Assignment', row, {'title': row.title, 'maxPoints': row.max_points}, actor(row)))
    for row in ctx.produced.get('events', []):
        entries.append(('Event', row, {'title': row.title, 'type': row.type}, row.created_by_id))
    actor = _invoice_actor(ctx)
    for row in ctx.produced.get('invoices', []):
        entries.append(('Invoice', row, {'invoiceNumber': row.invoice_number, 'total': row.total}, actor(row)))
    return entries


def seed_audit_logs(ctx: SeedContext) -> None:
    entries = audit_entries(ctx)
    if not entries:
        logger.info('audit_nothing_to_log stage_outputs=%s', sorted(ctx.produced))
    for entity, row, changes, actor_id in entries:
        ctx.create(
            AuditLog,
            {
                'entity': entity,
                'entity_id': row.id,
                'action': 'CREATE',
                'changes_json': json.dumps(changes),
                'actor_id': actor_id,
                'ip_address': ctx.sampler.fake.ipv4_private(),
                'created_at': getattr(row, 'created_at', None) or ctx.now,
            },
        )
