"""People of a school: users with their role profiles and family links.

People are topped up to a per-role target rather than appended, so running
the seeder twice against the same school does not grow the head count.
"""

from __future__ import annotations

import logging
import re
from datetime import date, timedelta

from edu_seed.models import (
    ClerkProfile,
    ParentChildRelationship,
    ParentProfile,
    PrincipalProfile,
    Role,
    School,
    StudentProfile,
    TeacherProfile,
    User,
)
from edu_seed.services.catalogs import (
    CLASS_GRADES,
    FIRST_NAMES,
    LAST_NAMES,
    PARENT_RELATIONSHIP_WEIGHTS,
    STREET_NAMES,
    SUBJECT_CATALOG,
    TEACHER_QUALIFICATIONS,
)
from edu_seed.services.idempotency import MembershipIndex, ensure_unique
from edu_seed.services.scheduler import SeedContext


logger = logging.getLogger(__name__)

SINGLE_ROLE_TARGETS = {Role.PRINCIPAL: 1, Role.CLERK: 1}
ENROLLMENT_GROWTH_DAYS = 180


def tenant_domain(school: School) -> str:
    slug = re.sub(r'[^a-z0-9]+', '-', (school.name or 'school').lower()).strip('-') or 'school'
    return f'{slug}-{school.id}.edu'


def departments() -> list[str]:
    seen: list[str] = []
    for spec in SUBJECT_CATALOG:
        if spec.department not in seen:
            seen.append(spec.department)
    return seen


def next_number(codes, prefix: str) -> int:
    """Next sequence number after the highest issued code such as ``STU00042``."""
    issued = [
        int(code[len(prefix):])
        for code in codes
        if (code or '').startswith(prefix) and code[len(prefix):].isdigit()
    ]
    return max(issued, default=0) + 1


def _phone(ctx: SeedContext) -> str:
    return ctx.sampler.fake.numerify('555-###-####')


def _address(ctx: SeedContext) -> str:
    return f'{ctx.sampler.integer(100, 9999)} {ctx.sampler.pick(STREET_NAMES)}'


def _birth_date(ctx: SeedContext, today: date) -> date:
    oldest = today - timedelta(days=int(365.25 * 18)) + timedelta(days=1)
    youngest = today - timedelta(days=int(365.25 * 14))
    return ctx.sampler.date_between(oldest, youngest)


class PeopleFactory:
    """Creates users for one school with unique emails and sequential ids."""

    def __init__(self, ctx: SeedContext):
        self.ctx = ctx
        self.domain = tenant_domain(ctx.tenant.school)
        self.taken_emails = {user.email for user in ctx.tenant.all_users}
        self.sequence = len(self.taken_emails)

    def email_for(self, first_name: str, last_name: str) -> str:
        while True:
            self.sequence += 1
            email = f'{first_name}.{last_name}{self.sequence}@{self.domain}'.lower()
            if email not in self.taken_emails:
                self.taken_emails.add(email)
                return email

    def create_user(self, role: Role, **extra) -> User:
        sampler = self.ctx.sampler
        first_name = sampler.pick(FIRST_NAMES)
        last_name = sampler.pick(LAST_NAMES)
        record = {
            'email': self.email_for(first_name, last_name),
            'first_name': first_name,
            'last_name': last_name,
            'role': role.value,
            'school_id': self.ctx.tenant.school.id,
            'is_active': True,
            'created_at': self.ctx.now,
        }
        record.update(extra)
        user = self.ctx.create(User, record)
        self.ctx.tenant.users(role).append(user)
        return user


def build_student_profile(ctx: SeedContext, user: User, number: int) -> dict:
    return {
        'student_id': user.id,
        'grade': ctx.sampler.pick(CLASS_GRADES),
        'student_id_number': f'STU{number:05d}',
        'date_of_birth': _birth_date(ctx, ctx.today),
        'address': _address(ctx),
        'emergency_contact': _phone(ctx),
    }


def build_teacher_profile(ctx: SeedContext, user: User, department: str, number: int) -> dict:
    qualifications = TEACHER_QUALIFICATIONS.get(department, ('BEd in Education',))
    return {
        'teacher_id': user.id,
        'employee_id': f'TCH{number:04d}',
        'department': department,
        'hire_date': ctx.sampler.date_between(ctx.today - timedelta(days=365 * 15), ctx.today - timedelta(days=30)),
        'qualifications': ctx.sampler.pick(qualifications),
    }


def _create_students(ctx: SeedContext, factory: PeopleFactory, count: int) -> None:
    tenant = ctx.tenant
    first = next_number((profile.student_id_number for profile in tenant.student_profiles.values()), 'STU')
    growth_start = ctx.now - timedelta(days=ENROLLMENT_GROWTH_DAYS)
    for offset in range(count):
        user = factory.create_user(Role.STUDENT, created_at=ctx.sampler.instant_between(growth_start, ctx.now))
        profile = ctx.create(StudentProfile, build_student_profile(ctx, user, first + offset))
        tenant.student_profiles[user.id] = profile


def _create_teachers(ctx: SeedContext, factory: PeopleFactory, count: int) -> None:
    tenant = ctx.tenant
    pool = departments()
    staffed = [profile.department for profile in tenant.teacher_profiles.values()]
    first = next_number((profile.employee_id for profile in tenant.teacher_profiles.values()), 'TCH')
    for offset in range(count):
        # Fill the department with the fewest teachers so every subject can be staffed.
        department = min(pool, key=lambda name: (staffed.count(name), pool.index(name)))
        staffed.append(department)
        user = factory.create_user(Role.TEACHER)
        profile = ctx.create(TeacherProfile, build_teacher_profile(ctx, user, department, first + offset))
        tenant.teacher_profiles[user.id] = profile


def _create_parents(ctx: SeedContext, factory: PeopleFactory, count: int) -> None:
    for _ in range(count):
        user = factory.create_user(Role.PARENT)
        profile = ctx.create(
            ParentProfile,
            {'parent_id': user.id, 'phone': _phone(ctx), 'address': _address(ctx), 'emergency_contact': _phone(ctx)},
        )
        ctx.tenant.parent_profiles[user.id] = profile


def _create_principals(ctx: SeedContext, factory: PeopleFactory, count: int) -> None:
    first = next_number((profile.employee_id for profile in ctx.tenant.principal_profiles.values()), 'PRN')
    for offset in range(count):
        user = factory.create_user(Role.PRINCIPAL)
        profile = ctx.create(
            PrincipalProfile,
            {
                'principal_id': user.id,
                'employee_id': f'PRN{first + offset:04d}',
                'hire_date': ctx.sampler.date_between(ctx.today - timedelta(days=365 * 10), ctx.today - timedelta(days=365)),
                'phone': _phone(ctx),
                'qualifications': 'PhD in Educational Leadership',
                'years_of_experience': ctx.sampler.integer(10, 25),
                'administrative_area': 'Academic Affairs',
            },
        )
        ctx.tenant.principal_profiles[user.id] = profile


def _create_clerks(ctx: SeedContext, factory: PeopleFactory, count: int) -> None:
    first = next_number((profile.employee_id for profile in ctx.tenant.clerk_profiles.values()), 'CLK')
    for offset in range(count):
        user = factory.create_user(Role.CLERK)
        profile = ctx.create(
            ClerkProfile,
            {
                'clerk_id': user.id,
                'employee_id': f'CLK{first + offset:04d}',
                'department': 'Finance',
                'hire_date': ctx.sampler.date_between(ctx.today - timedelta(days=365 * 8), ctx.today - timedelta(days=90)),
                'phone': _phone(ctx),
            },
        )
        ctx.tenant.clerk_profiles[user.id] = profile


def seed_people(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    options = ctx.options
    factory = PeopleFactory(ctx)
    targets = {
        Role.TEACHER: options.target_teachers,
        Role.STUDENT: options.target_students,
        Role.PARENT: options.target_parents,
        **SINGLE_ROLE_TARGETS,
    }
    creators = {
        Role.TEACHER: _create_teachers,
        Role.STUDENT: _create_students,
        Role.PARENT: _create_parents,
        Role.PRINCIPAL: _create_principals,
        Role.CLERK: _create_clerks,
    }
    for role, target in targets.items():
        gap = max(0, target - len(tenant.users(role)))
        if gap:
            creators[role](ctx, factory, gap)
        logger.info('people_ensured role=%s existing=%s created=%s', role.value, len(tenant.users(role)) - gap, gap)


def seed_parent_links(ctx: SeedContext) -> None:
    tenant = ctx.tenant
    index = MembershipIndex(tenant.parent_links, key=lambda row: (row.parent_id, row.child_id))
    linked_parents = {row.parent_id for row in tenant.parent_links}
    linked_children = {row.child_id for row in tenant.parent_links}
    available = ctx.sampler.shuffled(user.id for user in tenant.users(Role.STUDENT) if user.id not in linked_children)

    for parent in tenant.users(Role.PARENT):
        if parent.id in linked_parents:
            continue
        if not available:
            break
        for _ in range(min(ctx.sampler.integer(1, 2), len(available))):
            child_id = available.pop()
            link = ensure_unique(
                index,
                (parent.id, child_id),
                lambda: ctx.create(
                    ParentChildRelationship,
                    {
                        'parent_id': parent.id,
                        'child_id': child_id,
                        'relationship': ctx.sampler.weighted(PARENT_RELATIONSHIP_WEIGHTS),
                        'created_at': ctx.now,
                    },
                ),
            )
            if link is not None:
                tenant.parent_links.append(link)
