import unittest
from datetime import date

from edu_seed.errors import ConfigurationError
from edu_seed.models import Role, Subject, Term, User
from edu_seed.services.context_loader import load_tenant_context
from edu_seed.services.seed_service import RunState, SeedRun
from edu_seed.store import InMemoryStore

from support import FixedTimeProvider, add_school, add_student, small_options


class ContextLoaderTests(unittest.TestCase):
    def setUp(self):
        self.store = InMemoryStore()

    def test_missing_tenant_fails_before_any_write(self):
        add_school(self.store)
        writes = []
        self.store.before_write = lambda model, record: writes.append(model.__name__)

        run = SeedRun(self.store, small_options(tenant_id=999), time_provider=FixedTimeProvider())
        with self.assertRaises(ConfigurationError):
            run.execute()

        self.assertEqual(writes, [])
        self.assertEqual(run.state, RunState.FAILED)
        self.assertEqual(run.history, [RunState.INITIALIZING, RunState.LOADING_CONTEXT, RunState.FAILED])
        self.assertEqual(self.store.repository(Subject).count(), 0)

    def test_two_active_terms_are_rejected_while_loading(self):
        school = add_school(self.store)
        terms = self.store.repository(Term)
        for name, month in (('Spring 2026', 1), ('Fall 2026', 9)):
            terms.create(
                {'name': name, 'start_date': date(2026, month, 1), 'end_date': date(2026, month + 3, 1), 'is_active': True, 'school_id': school.id}
            )
        writes = []
        self.store.before_write = lambda model, record: writes.append(model.__name__)

        run = SeedRun(self.store, small_options(), time_provider=FixedTimeProvider())
        with self.assertRaises(ConfigurationError):
            run.execute()

        self.assertEqual(writes, [])
        self.assertEqual(run.history, [RunState.INITIALIZING, RunState.LOADING_CONTEXT, RunState.FAILED])

    def test_store_without_any_school_is_a_configuration_error(self):
        with self.assertRaises(ConfigurationError):
            load_tenant_context(self.store, None)

    def test_first_school_is_used_when_no_tenant_is_given(self):
        first = add_school(self.store, 'First School')
        add_school(self.store, 'Second School')
        self.assertEqual(load_tenant_context(self.store, None).school.id, first.id)

    def test_users_and_profiles_are_partitioned_by_role_and_tenant(self):
        school = add_school(self.store)
        other = add_school(self.store, 'Other School')
        student = add_student(self.store, school, 'kid@lincoln.edu', grade='10')
        add_student(self.store, other, 'kid@other.edu', grade='11')
        self.store.repository(User).create(
            {'email': 't@lincoln.edu', 'first_name': 'T', 'last_name': 'Teacher', 'role': Role.TEACHER.value, 'school_id': school.id}
        )

        ctx = load_tenant_context(self.store, school.id)

        self.assertEqual([user.email for user in ctx.users(Role.STUDENT)], ['kid@lincoln.edu'])
        self.assertEqual(len(ctx.users(Role.TEACHER)), 1)
        self.assertEqual(ctx.users(Role.PARENT), [])
        self.assertEqual(ctx.student_profiles[student.id].grade, '10')
        self.assertEqual(len(ctx.student_profiles), 1)
        self.assertIsNone(ctx.active_term)


if __name__ == '__main__':
    unittest.main()
