import math
import re
import unittest
from collections import defaultdict

from edu_seed.models import ClerkProfile, Invoice, InvoiceItem, InvoiceStatus, Payment, StudentAccount
from edu_seed.services.seed_service import run_seed
from edu_seed.store import InMemoryStore

from support import FixedTimeProvider, add_school, small_options


FINANCE_STAGES = ['student_accounts', 'invoices']


class RecordingStore(InMemoryStore):
    def __init__(self):
        super().__init__()
        self.writes = []

    def before_write(self, model, record):
        self.writes.append((model.__name__, dict(record)))


class FinanceStageTests(unittest.TestCase):
    def setUp(self):
        self.store = RecordingStore()
        add_school(self.store)
        run_seed(self.store, small_options(), time_provider=FixedTimeProvider())

    def _append_finance(self, seed=1234):
        return run_seed(self.store, small_options(seed=seed, append=True, stages=FINANCE_STAGES), time_provider=FixedTimeProvider())

    def test_invoice_total_equals_sum_of_items(self):
        self._append_finance()
        items_by_invoice = defaultdict(list)
        for item in self.store.repository(InvoiceItem).find_many():
            items_by_invoice[item.invoice_id].append(item)
            self.assertTrue(math.isclose(item.total, item.unit_price * item.quantity, abs_tol=0.01))

        invoices = self.store.repository(Invoice).find_many()
        self.assertTrue(invoices)
        for invoice in invoices:
            self.assertIn(len(items_by_invoice[invoice.id]), (1, 2, 3))
            expected = sum(item.total for item in items_by_invoice[invoice.id])
            self.assertTrue(math.isclose(invoice.total, expected, abs_tol=0.005), invoice.invoice_number)

    def test_total_is_patched_after_items_exist(self):
        self.store.writes.clear()
        self._append_finance()

        kinds = [kind for kind, _ in self.store.writes]
        first_invoice = kinds.index('Invoice')
        self.assertEqual(self.store.writes[first_invoice][1]['total'], 0.0)
        patch_at = kinds.index('Invoice', first_invoice + 1)
        between = kinds[first_invoice + 1:patch_at]
        self.assertTrue(between)
        self.assertEqual(set(between), {'InvoiceItem'})
        self.assertEqual(set(self.store.writes[patch_at][1]), {'total'})

    def test_paid_invoices_have_a_payment_processed_by_the_clerk(self):
        self._append_finance()
        clerk = self.store.repository(ClerkProfile).find_one()
        payments = self.store.repository(Payment).find_many()
        paid = self.store.repository(Invoice).find_many(status=InvoiceStatus.PAID.value)

        self.assertEqual(len(payments), len(paid))
        for payment in payments:
            self.assertEqual(payment.processed_by_id, clerk.id)
        self.assertEqual(sorted(p.amount for p in payments), sorted(i.total for i in paid))

    def test_invoice_numbers_continue_after_existing_invoices(self):
        self._append_finance()
        first_batch = {row.invoice_number for row in self.store.repository(Invoice).find_many()}
        self._append_finance(seed=4321)
        numbers = [row.invoice_number for row in self.store.repository(Invoice).find_many()]

        self.assertEqual(len(numbers), len(set(numbers)))
        self.assertTrue(first_batch < set(numbers))
        for number in numbers:
            self.assertRegex(number, r'^INV-STU\d{5}-\d{2}$')

        per_account = defaultdict(list)
        for row in self.store.repository(Invoice).find_many():
            per_account[row.account_id].append(int(re.search(r'-(\d{2})$', row.invoice_number).group(1)))
        for sequence in per_account.values():
            self.assertEqual(sorted(sequence), list(range(1, len(sequence) + 1)))

    def test_one_account_per_student_with_bounded_balance(self):
        accounts = self.store.repository(StudentAccount).find_many()
        self.assertEqual(len(accounts), 24)
        self.assertEqual(len({row.student_id for row in accounts}), 24)
        for account in accounts:
            self.assertGreaterEqual(account.balance, -500)
            self.assertLessEqual(account.balance, 1000)


if __name__ == '__main__':
    unittest.main()
