import math
import unittest
from collections import defaultdict

from edu_seed.models import ClassSubject, Enrollment, Grade, GradeCategory, GradeItem
from edu_seed.services.catalogs import GRADE_CATEGORY_CATALOG
from edu_seed.services.seed_service import run_seed
from edu_seed.store import InMemoryStore
from edu_seed.synthesizers.grading import catalog_weight_total

from support import FixedTimeProvider, add_school, small_options


class GradingStageTests(unittest.TestCase):
    def setUp(self):
        self.store = InMemoryStore()
        add_school(self.store)
        run_seed(self.store, small_options(), time_provider=FixedTimeProvider())

    def test_default_catalog_weights_sum_to_one(self):
        self.assertTrue(math.isclose(catalog_weight_total(), 1.0))

    def test_every_offering_has_weights_summing_to_one(self):
        weights = defaultdict(float)
        for category in self.store.repository(GradeCategory).find_many():
            weights[category.class_subject_id] += category.weight
        offerings = self.store.repository(ClassSubject).find_many()
        self.assertEqual(set(weights), {row.id for row in offerings})
        for total in weights.values():
            self.assertTrue(math.isclose(total, 1.0, abs_tol=1e-9))

    def test_categories_are_not_added_twice(self):
        before = self.store.repository(GradeCategory).count()
        run_seed(self.store, small_options(seed=5), time_provider=FixedTimeProvider())
        self.assertEqual(self.store.repository(GradeCategory).count(), before)
        self.assertEqual(before, len(GRADE_CATEGORY_CATALOG) * self.store.repository(ClassSubject).count())

    def test_grades_cover_enrolled_students_within_point_range(self):
        run_seed(
            self.store,
            small_options(append=True, stages=['grade_items', 'grades']),
            time_provider=FixedTimeProvider(),
        )
        offerings = {row.id: row for row in self.store.repository(ClassSubject).find_many()}
        enrolled = defaultdict(set)
        for row in self.store.repository(Enrollment).find_many():
            enrolled[row.class_id].add(row.student_id)

        items = {row.id: row for row in self.store.repository(GradeItem).find_many()}
        self.assertTrue(items)
        grades = self.store.repository(Grade).find_many()
        graded_students = defaultdict(set)
        for grade in grades:
            item = items[grade.grade_item_id]
            offering = offerings[item.class_subject_id]
            self.assertGreaterEqual(grade.points, 60)
            self.assertLessEqual(grade.points, item.max_points)
            self.assertEqual(grade.teacher_id, offering.teacher_id)
            graded_students[item.id].add(grade.student_id)
        for item in items.values():
            self.assertEqual(graded_students[item.id], enrolled[offerings[item.class_subject_id].class_id])

    def test_grades_stage_alone_only_grades_items_without_grades(self):
        run_seed(self.store, small_options(append=True, stages=['grade_items']), time_provider=FixedTimeProvider())
        result = run_seed(self.store, small_options(append=True, stages=['grades']), time_provider=FixedTimeProvider())
        first = result.report.created['Grade']
        self.assertGreater(first, 0)

        again = run_seed(self.store, small_options(append=True, stages=['grades']), time_provider=FixedTimeProvider())
        self.assertEqual(again.report.created['Grade'], 0)


if __name__ == '__main__':
    unittest.main()
