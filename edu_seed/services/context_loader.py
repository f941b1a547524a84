from __future__ import annotations

import logging
from dataclasses import dataclass, field

from edu_seed.errors import ConfigurationError
from edu_seed.models import (
    ClassMeeting,
    ClassSubject,
    ClerkProfile,
    Enrollment,
    GradeCategory,
    ParentChildRelationship,
    ParentProfile,
    Period,
    PrincipalProfile,
    Role,
    Room,
    School,
    SchoolClass,
    StudentAccount,
    StudentProfile,
    Subject,
    TeacherProfile,
    Term,
    User,
)
from edu_seed.store.base import Store


logger = logging.getLogger(__name__)


@dataclass
class TenantContext:
    """Snapshot of everything already persisted for one school.

    Stages extend these collections with what they create, so later stages
    see one consistent view of existing plus newly created records.
    """

    school: School
    users_by_role: dict[str, list[User]] = field(default_factory=dict)
    student_profiles: dict[int, StudentProfile] = field(default_factory=dict)
    teacher_profiles: dict[int, TeacherProfile] = field(default_factory=dict)
    parent_profiles: dict[int, ParentProfile] = field(default_factory=dict)
    principal_profiles: dict[int, PrincipalProfile] = field(default_factory=dict)
    clerk_profiles: dict[int, ClerkProfile] = field(default_factory=dict)
    subjects: list[Subject] = field(default_factory=list)
    terms: list[Term] = field(default_factory=list)
    rooms: list[Room] = field(default_factory=list)
    periods: list[Period] = field(default_factory=list)
    classes: list[SchoolClass] = field(default_factory=list)
    class_subjects: list[ClassSubject] = field(default_factory=list)
    enrollments: list[Enrollment] = field(default_factory=list)
    class_meetings: list[ClassMeeting] = field(default_factory=list)
    parent_links: list[ParentChildRelationship] = field(default_factory=list)
    grade_categories: list[GradeCategory] = field(default_factory=list)
    student_accounts: list[StudentAccount] = field(default_factory=list)

    def users(self, role: Role) -> list[User]:
        return self.users_by_role.setdefault(role.value, [])

    @property
    def all_users(self) -> list[User]:
        return [user for rows in self.users_by_role.values() for user in rows]

    @property
    def active_term(self) -> Term | None:
        for term in self.terms:
            if term.is_active:
                return term
        return None

    def enrolled_student_ids(self, class_id: int) -> list[int]:
        return [row.student_id for row in self.enrollments if row.class_id == class_id]

    def class_by_id(self) -> dict[int, SchoolClass]:
        return {row.id: row for row in self.classes}

    def subject_by_id(self) -> dict[int, Subject]:
        return {row.id: row for row in self.subjects}


def _resolve_school(store: Store, tenant_id: int | None) -> School:
    schools = store.repository(School)
    if tenant_id is not None:
        school = schools.find_one(id=tenant_id)
        if school is None:
            raise ConfigurationError(f'School id={tenant_id} not found')
        return school
    school = schools.find_one()
    if school is None:
        raise ConfigurationError('No school exists; create a tenant before seeding')
    return school


def load_tenant_context(store: Store, tenant_id: int | None) -> TenantContext:
    school = _resolve_school(store, tenant_id)
    ctx = TenantContext(school=school)

    for role in Role:
        ctx.users_by_role[role.value] = []
    for user in store.repository(User).find_many(school_id=school.id):
        ctx.users_by_role.setdefault(user.role, []).append(user)

    def _profiles(model, owner_field: str, role: Role) -> dict:
        owner_ids = [user.id for user in ctx.users(role)]
        if not owner_ids:
            return {}
        rows = store.repository(model).find_many(**{owner_field: owner_ids})
        return {getattr(row, owner_field): row for row in rows}

    ctx.student_profiles = _profiles(StudentProfile, 'student_id', Role.STUDENT)
    ctx.teacher_profiles = _profiles(TeacherProfile, 'teacher_id', Role.TEACHER)
    ctx.parent_profiles = _profiles(ParentProfile, 'parent_id', Role.PARENT)
    ctx.principal_profiles = _profiles(PrincipalProfile, 'principal_id', Role.PRINCIPAL)
    ctx.clerk_profiles = _profiles(ClerkProfile, 'clerk_id', Role.CLERK)

    ctx.subjects = store.repository(Subject).find_many(school_id=school.id)
    ctx.terms = store.repository(Term).find_many(school_id=school.id)
    active_terms = sorted(term.name for term in ctx.terms if term.is_active)
    if len(active_terms) > 1:
        raise ConfigurationError(f'More than one active term exists: {", ".join(active_terms)}')
    ctx.rooms = store.repository(Room).find_many(school_id=school.id)
    ctx.periods = sorted(store.repository(Period).find_many(school_id=school.id), key=lambda row: row.order)
    ctx.classes = store.repository(SchoolClass).find_many(school_id=school.id)

    class_ids = [row.id for row in ctx.classes]
    if class_ids:
        ctx.class_subjects = store.repository(ClassSubject).find_many(class_id=class_ids)
        ctx.enrollments = store.repository(Enrollment).find_many(class_id=class_ids)
    class_subject_ids = [row.id for row in ctx.class_subjects]
    if class_subject_ids:
        ctx.grade_categories = store.repository(GradeCategory).find_many(class_subject_id=class_subject_ids)
    room_ids = [row.id for row in ctx.rooms]
    if room_ids:
        ctx.class_meetings = store.repository(ClassMeeting).find_many(room_id=room_ids)
    parent_ids = [user.id for user in ctx.users(Role.PARENT)]
    if parent_ids:
        ctx.parent_links = store.repository(ParentChildRelationship).find_many(parent_id=parent_ids)
    student_ids = [user.id for user in ctx.users(Role.STUDENT)]
    if student_ids:
        ctx.student_accounts = store.repository(StudentAccount).find_many(student_id=student_ids)

    logger.info(
        'context_loaded school_id=%s users=%s subjects=%s terms=%s rooms=%s periods=%s classes=%s class_subjects=%s',
        school.id,
        len(ctx.all_users),
        len(ctx.subjects),
        len(ctx.terms),
        len(ctx.rooms),
        len(ctx.periods),
        len(ctx.classes),
        len(ctx.class_subjects),
    )
    return ctx
