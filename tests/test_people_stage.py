import unittest
from collections import Counter

from edu_seed.models import Role, StudentProfile, TeacherProfile, User
from edu_seed.services.seed_service import run_seed
from edu_seed.store import InMemoryStore
from edu_seed.synthesizers.people import next_number

from support import FixedTimeProvider, add_school, add_student, small_options


class NextNumberTests(unittest.TestCase):
    def test_continues_after_the_highest_code_and_ignores_foreign_ones(self):
        self.assertEqual(next_number(['TCH0001', 'TCH0007', 'X-12', None, 'TCHabc'], 'TCH'), 8)
        self.assertEqual(next_number([], 'STU'), 1)


class PeopleStageTests(unittest.TestCase):
    def setUp(self):
        self.store = InMemoryStore()
        self.school = add_school(self.store)

    def _teacher(self, email, employee_id=None):
        user = self.store.repository(User).create(
            {'email': email, 'first_name': 'Ada', 'last_name': 'Byron', 'role': Role.TEACHER.value, 'school_id': self.school.id}
        )
        if employee_id is not None:
            self.store.repository(TeacherProfile).create(
                {'teacher_id': user.id, 'employee_id': employee_id, 'department': 'Mathematics'}
            )
        return user

    def test_teacher_employee_ids_continue_after_gaps_and_missing_profiles(self):
        self._teacher('a@lincoln.edu', 'TCH0001')
        self._teacher('b@lincoln.edu', 'TCH0003')
        self._teacher('c@lincoln.edu')

        run_seed(self.store, small_options(target_teachers=5, stages=['people']), time_provider=FixedTimeProvider())

        ids = [row.employee_id for row in self.store.repository(TeacherProfile).find_many()]
        self.assertEqual(max(Counter(ids).values()), 1)
        self.assertEqual(sorted(ids), ['TCH0001', 'TCH0003', 'TCH0004', 'TCH0005'])

    def test_student_numbers_continue_from_the_highest_issued(self):
        add_student(self.store, self.school, 'kid@lincoln.edu')
        profile = self.store.repository(StudentProfile).find_one()
        self.store.repository(StudentProfile).update(profile.id, {'student_id_number': 'STU00040'})

        run_seed(self.store, small_options(target_students=3, stages=['people']), time_provider=FixedTimeProvider())

        numbers = sorted(row.student_id_number for row in self.store.repository(StudentProfile).find_many())
        self.assertEqual(numbers, ['STU00040', 'STU00041', 'STU00042'])

    def test_principal_and_clerk_are_ensured_once(self):
        options = small_options(stages=['people'])
        run_seed(self.store, options, time_provider=FixedTimeProvider())
        run_seed(self.store, options, time_provider=FixedTimeProvider())

        users = self.store.repository(User)
        self.assertEqual(users.count(role=Role.PRINCIPAL.value), 1)
        self.assertEqual(users.count(role=Role.CLERK.value), 1)


if __name__ == '__main__':
    unittest.main()
