import tempfile
import unittest
from datetime import date
from pathlib import Path

from sqlalchemy import create_engine

from edu_seed.db import Base, build_session_factory, ensure_schema
from edu_seed.errors import ConfigurationError
from edu_seed.models import (
    ClassSubject,
    Enrollment,
    GradeCategory,
    Period,
    Room,
    School,
    SchoolClass,
    StudentAccount,
    Subject,
    Term,
    User,
)
from edu_seed.services.catalogs import ROOM_CATALOG, SUBJECT_CATALOG
from edu_seed.services.seed_service import run_seed
from edu_seed.store import SqlAlchemyStore

from support import FixedTimeProvider, small_options


CATALOG_STAGES = ['subjects', 'terms', 'rooms', 'periods']
ENSURE_MODELS = (Subject, Term, Room, Period, User, SchoolClass, ClassSubject, Enrollment, GradeCategory, StudentAccount)


class CatalogStageTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls._tmpdir = tempfile.TemporaryDirectory()
        db_path = Path(cls._tmpdir.name) / 'test_catalog_stages.db'
        cls._engine = create_engine(f"sqlite:///{db_path}", connect_args={'check_same_thread': False})
        cls._session_factory = build_session_factory(cls._engine)
        ensure_schema(cls._engine)

    @classmethod
    def tearDownClass(cls):
        cls._engine.dispose()
        cls._tmpdir.cleanup()

    def setUp(self):
        db = self._session_factory()
        try:
            for table in reversed(Base.metadata.sorted_tables):
                db.execute(table.delete())
            school = School(name='Lincoln High School', city='Springfield')
            db.add(school)
            db.commit()
            self.school_id = school.id
        finally:
            db.close()

    def _run(self, **overrides):
        db = self._session_factory()
        try:
            store = SqlAlchemyStore(db)
            return run_seed(store, small_options(tenant_id=self.school_id, **overrides), time_provider=FixedTimeProvider())
        finally:
            db.close()

    def _count(self, model, **filters) -> int:
        db = self._session_factory()
        try:
            return db.query(model).filter_by(**filters).count()
        finally:
            db.close()

    def _add(self, *rows):
        db = self._session_factory()
        try:
            db.add_all(rows)
            db.commit()
        finally:
            db.close()

    def test_empty_school_gets_full_subject_catalog_and_bounded_rooms(self):
        result = self._run(stages=CATALOG_STAGES)

        self.assertEqual(self._count(Subject, school_id=self.school_id), len(SUBJECT_CATALOG))
        self.assertEqual(self._count(Room, school_id=self.school_id), min(6, len(ROOM_CATALOG)))
        self.assertEqual(self._count(Period, school_id=self.school_id), 8)
        self.assertEqual(self._count(Term, school_id=self.school_id, is_active=True), 1)
        self.assertEqual(result.report.facts['Active term'], 'Fall 2026')
        self.assertEqual(result.stages, CATALOG_STAGES)

    def test_existing_subject_catalog_is_not_duplicated(self):
        self._add(*[
            Subject(name=spec.name, code=spec.code, description=spec.description, school_id=self.school_id)
            for spec in SUBJECT_CATALOG
        ])

        result = self._run(stages=['subjects'])

        self.assertEqual(result.report.created['Subject'], 0)
        self.assertEqual(self._count(Subject, school_id=self.school_id), len(SUBJECT_CATALOG))

    def test_existing_active_term_is_reused(self):
        self._add(Term(name='Spring 2020', start_date=date(2020, 1, 8), end_date=date(2020, 5, 30), is_active=True, school_id=self.school_id))

        result = self._run(stages=['terms'])

        self.assertEqual(self._count(Term, school_id=self.school_id), 1)
        self.assertEqual(self._count(Term, school_id=self.school_id, is_active=True), 1)
        self.assertEqual(result.report.facts['Active term'], 'Spring 2020')

    def test_inactive_term_with_current_name_is_activated(self):
        self._add(Term(name='Fall 2026', start_date=date(2026, 9, 1), end_date=date(2026, 12, 20), is_active=False, school_id=self.school_id))

        result = self._run(stages=['terms'])

        self.assertEqual(self._count(Term, school_id=self.school_id), 1)
        self.assertEqual(self._count(Term, school_id=self.school_id, is_active=True), 1)
        self.assertEqual(result.report.updated['Term'], 1)

    def test_two_active_terms_abort_the_run(self):
        self._add(
            Term(name='A', start_date=date(2026, 1, 1), end_date=date(2026, 2, 1), is_active=True, school_id=self.school_id),
            Term(name='B', start_date=date(2026, 3, 1), end_date=date(2026, 4, 1), is_active=True, school_id=self.school_id),
        )
        with self.assertRaises(ConfigurationError):
            self._run(stages=['terms'])

    def test_two_active_terms_abort_before_any_stage_writes(self):
        self._add(
            Term(name='A', start_date=date(2026, 1, 1), end_date=date(2026, 2, 1), is_active=True, school_id=self.school_id),
            Term(name='B', start_date=date(2026, 3, 1), end_date=date(2026, 4, 1), is_active=True, school_id=self.school_id),
        )
        with self.assertRaises(ConfigurationError):
            self._run()

        self.assertEqual(self._count(Subject, school_id=self.school_id), 0)
        self.assertEqual(self._count(Room, school_id=self.school_id), 0)
        self.assertEqual(self._count(Term, school_id=self.school_id), 2)

    def test_second_ensure_only_run_does_not_grow_catalog_data(self):
        self._run()
        first = {model.__name__: self._count(model) for model in ENSURE_MODELS}

        second_result = self._run()
        second = {model.__name__: self._count(model) for model in ENSURE_MODELS}

        self.assertEqual(first, second)
        self.assertEqual(second['Subject'], len(SUBJECT_CATALOG))
        self.assertEqual(self._count(Term, is_active=True), 1)
        for model in ENSURE_MODELS:
            self.assertEqual(second_result.report.created[model.__name__], 0, model.__name__)


if __name__ == '__main__':
    unittest.main()
