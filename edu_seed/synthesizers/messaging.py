from __future__ import annotations

import logging
from datetime import timedelta

from edu_seed.errors import ValidationError
from edu_seed.models import Conversation, ConversationParticipant, Message, MessageAttachment
from edu_seed.services.catalogs import CONVERSATION_TOPICS, MESSAGE_ATTACHMENTS, MESSAGE_STATUS_WEIGHTS
from edu_seed.services.scheduler import SeedContext
from edu_seed.synthesizers.people import tenant_domain


logger = logging.getLogger(__name__)


def counterparts_for(ctx: SeedContext, offering) -> list[int]:
    """Students of the offering's class and the parents linked to them."""
    students = ctx.tenant.enrolled_student_ids(offering.class_id)
    enrolled = set(students)
    parents = sorted({link.parent_id for link in ctx.tenant.parent_links if link.child_id in enrolled})
    return students + parents


def seed_conversations(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    sampler = ctx.sampler
    domain = tenant_domain(tenant.school)
    if not tenant.class_subjects:
        ctx.skip(ValidationError('conversation', 'school has no class subjects'))
        return

    for _ in range(ctx.options.conversations_count):
        with ctx.skip_invalid():
            offering = sampler.pick(tenant.class_subjects)
            counterparts = counterparts_for(ctx, offering)
            if not counterparts:
                raise ValidationError('conversation', f'class subject {offering.id} has no students or parents')
            teacher_id = offering.teacher_id
            other_id = sampler.pick(counterparts)
            started_at = sampler.instant_between(ctx.now - timedelta(days=14), ctx.now)

            conversation = ctx.create(
                Conversation,
                {'title': sampler.pick(CONVERSATION_TOPICS), 'is_group': False, 'school_id': tenant.school.id, 'created_at': started_at},
            )
            for user_id in (teacher_id, other_id):
                ctx.create(ConversationParticipant, {'conversation_id': conversation.id, 'user_id': user_id})

            sender, recipient = (teacher_id, other_id) if sampler.chance(0.5) else (other_id, teacher_id)
            sent_at = started_at
            for _ in range(sampler.integer(2, 6)):
                message = ctx.create(
                    Message,
                    {
                        'content': sampler.sentence(),
                        'status': sampler.weighted(MESSAGE_STATUS_WEIGHTS),
                        'conversation_id': conversation.id,
                        'sender_id': sender,
                        'recipient_id': recipient,
                        'sent_at': sent_at,
                    },
                )
                if sampler.chance(0.2):
                    file_name, mime_type = sampler.pick(MESSAGE_ATTACHMENTS)
                    ctx.create(
                        MessageAttachment,
                        {
                            'message_id': message.id,
                            'file_name': file_name,
                            'url': f'https://files.{domain}/messages/{sampler.uuid()}/{file_name}',
                            'mime_type': mime_type,
                            'size_bytes': sampler.integer(20_000, 2_000_000),
                        },
                    )
                sender, recipient = recipient, sender
                sent_at = sent_at + timedelta(minutes=sampler.integer(5, 600))
