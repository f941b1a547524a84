import unittest
from datetime import date
from types import SimpleNamespace

from edu_seed.errors import ConfigurationError
from edu_seed.services.catalogs import ROOM_CATALOG, SUBJECT_CATALOG, TermSpec, term_for_day
from edu_seed.services.idempotency import MembershipIndex, decide_active_term, ensure_unique, gap_to_target, missing_by_key


def _term(name, is_active):
    return SimpleNamespace(name=name, is_active=is_active)


class CatalogGapTests(unittest.TestCase):
    def test_missing_by_key_skips_existing_codes_and_keeps_order(self):
        existing = [SimpleNamespace(code='MATH301'), SimpleNamespace(code='CS101')]
        missing = missing_by_key(
            SUBJECT_CATALOG,
            existing,
            catalog_key=lambda spec: spec.code,
            existing_key=lambda row: row.code,
        )
        self.assertEqual(len(missing), len(SUBJECT_CATALOG) - 2)
        self.assertEqual(missing[0].code, 'MATH201')
        self.assertNotIn('CS101', [spec.code for spec in missing])

    def test_gap_to_target_is_bounded_by_target(self):
        keys = dict(catalog_key=lambda spec: spec.name, existing_key=lambda row: row.name)
        self.assertEqual(len(gap_to_target(ROOM_CATALOG, [], 6, **keys)), 6)
        self.assertEqual(len(gap_to_target(ROOM_CATALOG, [], 50, **keys)), len(ROOM_CATALOG))

        existing = [SimpleNamespace(name='Room 101'), SimpleNamespace(name='Gym')]
        gap = gap_to_target(ROOM_CATALOG, existing, 6, **keys)
        self.assertEqual(len(gap), 4)
        self.assertNotIn('Room 101', [spec.name for spec in gap])

    def test_gap_to_target_is_empty_once_target_is_met(self):
        existing = [SimpleNamespace(name=f'Room {n}') for n in range(7)]
        gap = gap_to_target(ROOM_CATALOG, existing, 6, catalog_key=lambda spec: spec.name, existing_key=lambda row: row.name)
        self.assertEqual(gap, [])


class MembershipTests(unittest.TestCase):
    def test_ensure_unique_creates_once_per_key(self):
        index = MembershipIndex([SimpleNamespace(student_id=1, class_id=1)], key=lambda row: (row.student_id, row.class_id))
        created = []

        def create():
            created.append('row')
            return 'row'

        self.assertIsNone(ensure_unique(index, (1, 1), create))
        self.assertEqual(ensure_unique(index, (2, 1), create), 'row')
        self.assertIsNone(ensure_unique(index, (2, 1), create))
        self.assertEqual(created, ['row'])
        self.assertEqual(len(index), 2)


class ActiveTermTests(unittest.TestCase):
    SPEC = TermSpec('Fall 2026', date(2026, 9, 1), date(2026, 12, 20))

    def test_reuses_the_active_term(self):
        active = _term('Spring 2020', True)
        decision = decide_active_term([_term('Fall 2026', False), active], self.SPEC)
        self.assertEqual(decision.action, 'reuse')
        self.assertIs(decision.term, active)

    def test_activates_an_inactive_term_with_the_catalog_name(self):
        inactive = _term('Fall 2026', False)
        decision = decide_active_term([inactive], self.SPEC)
        self.assertEqual(decision.action, 'activate')
        self.assertIs(decision.term, inactive)

    def test_creates_when_nothing_matches(self):
        self.assertEqual(decide_active_term([_term('Spring 2019', False)], self.SPEC).action, 'create')

    def test_two_active_terms_are_a_configuration_error(self):
        with self.assertRaises(ConfigurationError):
            decide_active_term([_term('A', True), _term('B', True)], self.SPEC)

    def test_term_for_day_switches_at_august(self):
        self.assertEqual(term_for_day(date(2026, 10, 19)).name, 'Fall 2026')
        self.assertEqual(term_for_day(date(2026, 3, 2)).name, 'Spring 2026')
        self.assertEqual(term_for_day(date(2026, 8, 1)).start_date, date(2026, 9, 1))


if __name__ == '__main__':
    unittest.main()
