"""Student accounts, invoices and payments.

Invoice totals are derived from their items in two explicit steps: the
invoice is created with a zero total, its items are created, and only then
is the invoice patched with the sum of the item totals.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import timedelta

from edu_seed.errors import ValidationError
from edu_seed.models import Invoice, InvoiceItem, InvoiceStatus, Payment, Role, StudentAccount
from edu_seed.services.catalogs import (
    INVOICE_ITEM_DESCRIPTIONS,
    INVOICE_NOTES,
    INVOICE_STATUS_WEIGHTS,
    PAYMENT_METHODS,
)
from edu_seed.services.scheduler import SeedContext


logger = logging.getLogger(__name__)

PAYMENT_TERMS_DAYS = 30
INVOICE_HISTORY_DAYS = 90


def money(value: float) -> float:
    return round(value, 2)


def invoice_total(items) -> float:
    return money(sum(item.total for item in items))


def build_invoice_item(ctx: SeedContext, invoice_id: int) -> dict:
    quantity = ctx.sampler.integer(1, 2)
    unit_price = ctx.sampler.decimal(50, 500, 2)
    return {
        'description': ctx.sampler.pick(INVOICE_ITEM_DESCRIPTIONS),
        'quantity': quantity,
        'unit_price': unit_price,
        'total': money(unit_price * quantity),
        'invoice_id': invoice_id,
    }


def seed_student_accounts(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    with_account = {row.student_id for row in tenant.student_accounts}
    for student in tenant.users(Role.STUDENT):
        if student.id in with_account:
            continue
        account = ctx.create(StudentAccount, {'student_id': student.id, 'balance': ctx.sampler.decimal(-500, 1000, 2)})
        with_account.add(student.id)
        tenant.student_accounts.append(account)


class InvoiceNumbers:
    """Issues ``INV-<studentIdNumber>-NN`` numbers that continue after existing invoices."""

    def __init__(self, ctx: SeedContext, accounts):
        self.repository = ctx.store.repository(Invoice)
        account_ids = [row.id for row in accounts]
        existing = self.repository.find_many(account_id=account_ids) if account_ids else []
        self.issued = Counter(row.account_id for row in existing)

    def next_for(self, account, student_number: str) -> str:
        while True:
            self.issued[account.id] += 1
            number = f'INV-{student_number}-{self.issued[account.id]:02d}'
            if self.repository.find_one(invoice_number=number) is None:
                return number


def create_invoice(ctx: SeedContext, account, number: str, clerk_profile_id: int | None):
    sampler = ctx.sampler
    created_at = sampler.instant_between(ctx.now - timedelta(days=INVOICE_HISTORY_DAYS), ctx.now)
    status = sampler.weighted(INVOICE_STATUS_WEIGHTS)
    invoice = ctx.create(
        Invoice,
        {
            'invoice_number': number,
            'status': status,
            'due_date': created_at + timedelta(days=PAYMENT_TERMS_DAYS),
            'total': 0.0,
            'notes': sampler.pick(INVOICE_NOTES),
            'account_id': account.id,
            'created_at': created_at,
        },
    )
    items = [ctx.create(InvoiceItem, build_invoice_item(ctx, invoice.id)) for _ in range(sampler.integer(1, 3))]
    invoice = ctx.update(Invoice, invoice.id, {'total': invoice_total(items)})

    if status == InvoiceStatus.PAID.value:
        ctx.create(
            Payment,
            {
                'amount': invoice.total,
                'method': sampler.pick(PAYMENT_METHODS),
                'reference': f'PAY-{sampler.token(10)}',
                'notes': f'Payment for {number}',
                'received_at': sampler.instant_between(created_at, min(invoice.due_date, ctx.now)),
                'account_id': account.id,
                'processed_by_id': clerk_profile_id,
            },
        )
    return invoice


def seed_invoices(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    accounts = list(tenant.student_accounts)
    numbers = InvoiceNumbers(ctx, accounts)
    clerk = next(iter(tenant.clerk_profiles.values()), None)
    clerk_profile_id = clerk.id if clerk is not None else None

    created = []
    for account in accounts:
        with ctx.skip_invalid():
            profile = tenant.student_profiles.get(account.student_id)
            if profile is None or not profile.student_id_number:
                raise ValidationError('invoice', f'student {account.student_id} has no student id number')
            for _ in range(ctx.sampler.integer(2, 4)):
                number = numbers.next_for(account, profile.student_id_number)
                created.append(create_invoice(ctx, account, number, clerk_profile_id))
    ctx.produce('invoices', created)
