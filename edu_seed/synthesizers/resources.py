from __future__ import annotations

import logging
from collections import defaultdict

from edu_seed.models import Resource, ResourceLink, ResourceTag, ResourceTagJoin
from edu_seed.services.catalogs import RESOURCE_TAGS, RESOURCE_TITLES, RESOURCE_TYPES, RESOURCE_VISIBILITY
from edu_seed.services.idempotency import MembershipIndex, ensure_unique, missing_by_key
from edu_seed.services.scheduler import SeedContext
from edu_seed.synthesizers.people import tenant_domain


logger = logging.getLogger(__name__)


def ensure_tags(ctx: SeedContext) -> list:
    """Tag names are global, so existing tags are reused rather than duplicated."""
    repository = ctx.store.repository(ResourceTag)
    tags = repository.find_many(name=list(RESOURCE_TAGS))
    for name in missing_by_key(RESOURCE_TAGS, tags, catalog_key=lambda name: name, existing_key=lambda row: row.name):
        tags.append(ctx.create(ResourceTag, {'name': name}))
    return tags


def seed_resources(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    sampler = ctx.sampler
    tags = ensure_tags(ctx)
    subjects = tenant.subject_by_id()
    domain = tenant_domain(tenant.school)

    offerings_by_teacher: dict[int, list] = defaultdict(list)
    for offering in tenant.class_subjects:
        offerings_by_teacher[offering.teacher_id].append(offering)

    for teacher_id, offerings in offerings_by_teacher.items():
        for _ in range(sampler.integer(1, 3)):
            subject = subjects.get(sampler.pick(offerings).subject_id)
            title = sampler.pick(RESOURCE_TITLES)
            if subject is not None:
                title = f'{subject.name} {title}'
            resource = ctx.create(
                Resource,
                {
                    'title': title,
                    'description': sampler.paragraph(),
                    'url': f'https://files.{domain}/resources/{sampler.uuid()}',
                    'type': sampler.pick(RESOURCE_TYPES),
                    'visibility': sampler.pick(RESOURCE_VISIBILITY),
                    'school_id': tenant.school.id,
                    'owner_id': teacher_id,
                    'created_at': ctx.now,
                },
            )
            joins = MembershipIndex(key=lambda row: (row.resource_id, row.tag_id))
            for tag in sampler.sample_between(tags, 1, 2):
                ensure_unique(
                    joins,
                    (resource.id, tag.id),
                    lambda: ctx.create(ResourceTagJoin, {'resource_id': resource.id, 'tag_id': tag.id}),
                )
            for offering in sampler.sample_between(offerings, 1, min(2, len(offerings))):
                ctx.create(ResourceLink, {'resource_id': resource.id, 'class_subject_id': offering.id})
