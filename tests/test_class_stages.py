import unittest
from collections import Counter

from edu_seed.models import ClassMeeting, ClassSubject, Enrollment, Period, Role, SchoolClass, User
from edu_seed.services.seed_service import run_seed
from edu_seed.store import InMemoryStore
from edu_seed.synthesizers.classes import teaching_periods

from support import FixedTimeProvider, add_school, add_student, small_options


class EnrollmentStageTests(unittest.TestCase):
    def setUp(self):
        self.store = InMemoryStore()
        self.school = add_school(self.store)

    def _run(self, **overrides):
        return run_seed(self.store, small_options(**overrides), time_provider=FixedTimeProvider())

    def test_student_without_grade_level_is_skipped_quietly(self):
        ungraded = add_student(self.store, self.school, 'ungraded@lincoln.edu', grade=None)
        no_profile = add_student(self.store, self.school, 'noprofile@lincoln.edu', with_profile=False)

        result = self._run()

        enrollments = self.store.repository(Enrollment)
        self.assertEqual(enrollments.count(student_id=ungraded.id), 0)
        self.assertEqual(enrollments.count(student_id=no_profile.id), 0)
        self.assertEqual(result.report.skipped['enrollment'], 2)
        self.assertIn('enrollments', result.stages)

    def test_graded_students_get_exactly_one_class_of_their_grade(self):
        self._run()

        classes = {row.id: row for row in self.store.repository(SchoolClass).find_many()}
        students = self.store.repository(User).find_many(role=Role.STUDENT.value)
        per_student = Counter(row.student_id for row in self.store.repository(Enrollment).find_many())
        self.assertEqual(len(students), 24)
        self.assertEqual(set(per_student.values()), {1})
        for enrollment in self.store.repository(Enrollment).find_many():
            self.assertIn(classes[enrollment.class_id].grade, ('9', '10', '11', '12'))

    def test_repeated_runs_never_duplicate_enrollments(self):
        preexisting = add_student(self.store, self.school, 'early@lincoln.edu', grade='9')
        self._run()
        self._run(seed=99)

        pairs = Counter((row.student_id, row.class_id) for row in self.store.repository(Enrollment).find_many())
        self.assertTrue(pairs)
        self.assertEqual(max(pairs.values()), 1)
        self.assertEqual(self.store.repository(Enrollment).count(student_id=preexisting.id), 1)


class ClassMeetingStageTests(unittest.TestCase):
    def setUp(self):
        self.store = InMemoryStore()
        add_school(self.store)
        run_seed(self.store, small_options(), time_provider=FixedTimeProvider())
        self.meetings = self.store.repository(ClassMeeting).find_many()
        self.offerings = {row.id: row for row in self.store.repository(ClassSubject).find_many()}
        self.periods = {row.id: row for row in self.store.repository(Period).find_many()}

    def test_no_room_is_double_booked(self):
        slots = Counter((row.day_of_week, row.period_id, row.room_id) for row in self.meetings)
        self.assertTrue(slots)
        self.assertEqual(max(slots.values()), 1)

    def test_no_class_meets_twice_in_the_same_period(self):
        busy = Counter((self.offerings[row.class_subject_id].class_id, row.day_of_week, row.period_id) for row in self.meetings)
        self.assertEqual(max(busy.values()), 1)

    def test_meetings_avoid_breaks_and_the_last_period(self):
        usable = {period.id for period in teaching_periods(list(self.periods.values()))}
        self.assertEqual(len(usable), 6)
        for meeting in self.meetings:
            self.assertIn(meeting.period_id, usable)
            self.assertIn(meeting.day_of_week, range(1, 6))

    def test_each_offering_meets_two_or_three_days(self):
        per_offering = Counter(row.class_subject_id for row in self.meetings)
        self.assertEqual(set(per_offering), set(self.offerings))
        for count in per_offering.values():
            self.assertIn(count, (2, 3))

    def test_second_run_keeps_the_timetable(self):
        run_seed(self.store, small_options(seed=77), time_provider=FixedTimeProvider())
        self.assertEqual(len(self.store.repository(ClassMeeting).find_many()), len(self.meetings))


if __name__ == '__main__':
    unittest.main()
