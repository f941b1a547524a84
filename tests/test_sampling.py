import unittest
from collections import Counter
from datetime import date, datetime

from edu_seed.core.sampling import Sampler, interpolate_instant, weighted_choice
from edu_seed.services.catalogs import ATTENDANCE_STATUS_WEIGHTS, INVOICE_STATUS_WEIGHTS


class WeightedChoiceTests(unittest.TestCase):
    def test_weights_are_normalized_before_thresholding(self):
        table = {'a': 2, 'b': 2}
        self.assertEqual(weighted_choice(table, 0.0), 'a')
        self.assertEqual(weighted_choice(table, 0.49), 'a')
        self.assertEqual(weighted_choice(table, 0.5), 'b')
        self.assertEqual(weighted_choice(table, 0.999999), 'b')

    def test_accepts_value_weight_pairs(self):
        table = [('low', 1), ('high', 3)]
        self.assertEqual(weighted_choice(table, 0.2), 'low')
        self.assertEqual(weighted_choice(table, 0.3), 'high')

    def test_zero_weight_value_is_never_picked(self):
        table = {'never': 0, 'always': 5}
        for draw in (0.0, 0.25, 0.75, 0.9999999999):
            self.assertEqual(weighted_choice(table, draw), 'always')

    def test_invalid_tables_raise_value_error(self):
        with self.assertRaises(ValueError):
            weighted_choice({}, 0.5)
        with self.assertRaises(ValueError):
            weighted_choice({'a': -1, 'b': 2}, 0.5)
        with self.assertRaises(ValueError):
            weighted_choice({'a': 0, 'b': 0}, 0.5)

    def test_attendance_status_converges_to_configured_weights(self):
        sampler = Sampler(seed=7)
        draws = Counter(sampler.weighted(ATTENDANCE_STATUS_WEIGHTS) for _ in range(2000))
        for status, weight in ATTENDANCE_STATUS_WEIGHTS.items():
            self.assertAlmostEqual(draws[status] / 2000, weight, delta=0.03, msg=status)

    def test_invoice_status_converges_to_configured_weights(self):
        sampler = Sampler(seed=11)
        draws = Counter(sampler.weighted(INVOICE_STATUS_WEIGHTS) for _ in range(2000))
        self.assertAlmostEqual(draws['PAID'] / 2000, 0.6, delta=0.04)


class InterpolationTests(unittest.TestCase):
    def test_interpolates_linearly_between_bounds(self):
        start = datetime(2026, 1, 1, 0, 0)
        end = datetime(2026, 1, 3, 0, 0)
        self.assertEqual(interpolate_instant(start, end, 0.0), start)
        self.assertEqual(interpolate_instant(start, end, 0.5), datetime(2026, 1, 2, 0, 0))

    def test_rejects_inverted_bounds(self):
        with self.assertRaises(ValueError):
            interpolate_instant(datetime(2026, 1, 2), datetime(2026, 1, 1), 0.5)


class SamplerTests(unittest.TestCase):
    def test_same_seed_replays_the_same_values(self):
        first = Sampler(seed=42)
        second = Sampler(seed=42)
        self.assertEqual(
            [first.integer(1, 1000) for _ in range(10)],
            [second.integer(1, 1000) for _ in range(10)],
        )
        self.assertEqual(first.sentence(), second.sentence())
        self.assertEqual(first.uuid(), second.uuid())

    def test_missing_seed_is_drawn_and_exposed(self):
        sampler = Sampler()
        self.assertIsInstance(sampler.seed, int)
        replay = Sampler(seed=sampler.seed)
        self.assertEqual(sampler.integer(0, 10**6), replay.integer(0, 10**6))

    def test_decimal_stays_in_bounds_and_rounds(self):
        sampler = Sampler(seed=3)
        for _ in range(200):
            value = sampler.decimal(50, 100, 1)
            self.assertGreaterEqual(value, 50)
            self.assertLessEqual(value, 100)
            self.assertEqual(value, round(value, 1))

    def test_date_between_is_inclusive(self):
        sampler = Sampler(seed=5)
        start, end = date(2026, 3, 1), date(2026, 3, 3)
        seen = {sampler.date_between(start, end) for _ in range(200)}
        self.assertEqual(seen, {date(2026, 3, 1), date(2026, 3, 2), date(2026, 3, 3)})

    def test_pick_and_sample_guard_pool_size(self):
        sampler = Sampler(seed=9)
        with self.assertRaises(ValueError):
            sampler.pick([])
        self.assertEqual(sorted(sampler.sample([1, 2, 3], 10)), [1, 2, 3])
        self.assertEqual(sampler.sample([1, 2, 3], -1), [])


if __name__ == '__main__':
    unittest.main()
