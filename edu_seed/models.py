from datetime import date, datetime
from enum import Enum

from sqlalchemy import Boolean, Date, DateTime, Float, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from edu_seed.db import Base


class Role(str, Enum):
    STUDENT = 'STUDENT'
    TEACHER = 'TEACHER'
    PARENT = 'PARENT'
    PRINCIPAL = 'PRINCIPAL'
    CLERK = 'CLERK'


class EnrollmentStatus(str, Enum):
    ACTIVE = 'ACTIVE'
    WITHDRAWN = 'WITHDRAWN'
    COMPLETED = 'COMPLETED'


class AttendanceStatus(str, Enum):
    PRESENT = 'PRESENT'
    ABSENT = 'ABSENT'
    LATE = 'LATE'
    EXCUSED = 'EXCUSED'


class InvoiceStatus(str, Enum):
    PAID = 'PAID'
    PENDING = 'PENDING'
    OVERDUE = 'OVERDUE'
    CANCELLED = 'CANCELLED'


class School(Base):
    __tablename__ = 'schools'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(180))
    address: Mapped[str] = mapped_column(String(255), default='')
    city: Mapped[str] = mapped_column(String(120), default='')
    country: Mapped[str] = mapped_column(String(60), default='US')
    email: Mapped[str] = mapped_column(String(180), default='')
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class User(Base):
    __tablename__ = 'users'
    __table_args__ = (
        Index('ix_users_school_role', 'school_id', 'role'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String(180), unique=True, index=True)
    first_name: Mapped[str] = mapped_column(String(80))
    last_name: Mapped[str] = mapped_column(String(80))
    role: Mapped[str] = mapped_column(String(20), index=True)
    school_id: Mapped[int] = mapped_column(ForeignKey('schools.id'), index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)


class StudentProfile(Base):
    __tablename__ = 'student_profiles'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    student_id: Mapped[int] = mapped_column(ForeignKey('users.id'), unique=True, index=True)
    grade: Mapped[str | None] = mapped_column(String(10), nullable=True)
    student_id_number: Mapped[str] = mapped_column(String(40), default='')
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    address: Mapped[str] = mapped_column(String(255), default='')
    emergency_contact: Mapped[str] = mapped_column(String(60), default='')


class TeacherProfile(Base):
    __tablename__ = 'teacher_profiles'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    teacher_id: Mapped[int] = mapped_column(ForeignKey('users.id'), unique=True, index=True)
    employee_id: Mapped[str] = mapped_column(String(40), default='')
    department: Mapped[str] = mapped_column(String(80), default='')
    hire_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    qualifications: Mapped[str] = mapped_column(String(255), default='')


class ParentProfile(Base):
    __tablename__ = 'parent_profiles'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    parent_id: Mapped[int] = mapped_column(ForeignKey('users.id'), unique=True, index=True)
    phone: Mapped[str] = mapped_column(String(40), default='')
    address: Mapped[str] = mapped_column(String(255), default='')
    emergency_contact: Mapped[str] = mapped_column(String(60), default='')


class PrincipalProfile(Base):
    __tablename__ = 'principal_profiles'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    principal_id: Mapped[int] = mapped_column(ForeignKey('users.id'), unique=True, index=True)
    employee_id: Mapped[str] = mapped_column(String(40), default='')
    hire_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    phone: Mapped[str] = mapped_column(String(40), default='')
    qualifications: Mapped[str] = mapped_column(String(255), default='')
    years_of_experience: Mapped[int] = mapped_column(Integer, default=0)
    administrative_area: Mapped[str] = mapped_column(String(120), default='')


class ClerkProfile(Base):
    __tablename__ = 'clerk_profiles'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    clerk_id: Mapped[int] = mapped_column(ForeignKey('users.id'), unique=True, index=True)
    employee_id: Mapped[str] = mapped_column(String(40), default='')
    department: Mapped[str] = mapped_column(String(80), default='')
    hire_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    phone: Mapped[str] = mapped_column(String(40), default='')


class ParentChildRelationship(Base):
    __tablename__ = 'parent_child_relationships'
    __table_args__ = (
        UniqueConstraint('parent_id', 'child_id', name='uq_parent_child_relationships_parent_child'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    parent_id: Mapped[int] = mapped_column(ForeignKey('users.id'), index=True)
    child_id: Mapped[int] = mapped_column(ForeignKey('users.id'), index=True)
    relationship: Mapped[str] = mapped_column(String(20), default='PARENT')
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class Subject(Base):
    __tablename__ = 'subjects'
    __table_args__ = (
        UniqueConstraint('school_id', 'code', name='uq_subjects_school_code'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(120))
    code: Mapped[str] = mapped_column(String(20), index=True)
    description: Mapped[str] = mapped_column(Text, default='')
    school_id: Mapped[int] = mapped_column(ForeignKey('schools.id'), index=True)


class Term(Base):
    __tablename__ = 'terms'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(80))
    start_date: Mapped[date] = mapped_column(Date)
    end_date: Mapped[date] = mapped_column(Date)
    is_active: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    school_id: Mapped[int] = mapped_column(ForeignKey('schools.id'), index=True)


class Room(Base):
    __tablename__ = 'rooms'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(80))
    building: Mapped[str] = mapped_column(String(120), default='')
    floor: Mapped[str] = mapped_column(String(10), default='')
    capacity: Mapped[int] = mapped_column(Integer, default=30)
    facilities_json: Mapped[str] = mapped_column(Text, default='[]')
    school_id: Mapped[int] = mapped_column(ForeignKey('schools.id'), index=True)


class Period(Base):
    __tablename__ = 'periods'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(40))
    start_time: Mapped[str] = mapped_column(String(10))
    end_time: Mapped[str] = mapped_column(String(10))
    order: Mapped[int] = mapped_column(Integer, index=True)
    is_break: Mapped[bool] = mapped_column(Boolean, default=False)
    school_id: Mapped[int] = mapped_column(ForeignKey('schools.id'), index=True)


class SchoolClass(Base):
    __tablename__ = 'classes'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(80))
    grade: Mapped[str] = mapped_column(String(10), index=True)
    section: Mapped[str] = mapped_column(String(10))
    school_id: Mapped[int] = mapped_column(ForeignKey('schools.id'), index=True)


class ClassSubject(Base):
    __tablename__ = 'class_subjects'
    __table_args__ = (
        UniqueConstraint('class_id', 'subject_id', name='uq_class_subjects_class_subject'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    class_id: Mapped[int] = mapped_column(ForeignKey('classes.id'), index=True)
    subject_id: Mapped[int] = mapped_column(ForeignKey('subjects.id'), index=True)
    teacher_id: Mapped[int] = mapped_column(ForeignKey('users.id'), index=True)


class Enrollment(Base):
    __tablename__ = 'enrollments'
    __table_args__ = (
        UniqueConstraint('student_id', 'class_id', name='uq_enrollments_student_class'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    student_id: Mapped[int] = mapped_column(ForeignKey('users.id'), index=True)
    class_id: Mapped[int] = mapped_column(ForeignKey('classes.id'), index=True)
    status: Mapped[str] = mapped_column(String(20), default=EnrollmentStatus.ACTIVE.value)
    enrolled_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class ClassMeeting(Base):
    __tablename__ = 'class_meetings'
    __table_args__ = (
        UniqueConstraint('day_of_week', 'period_id', 'room_id', name='uq_class_meetings_day_period_room'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    day_of_week: Mapped[int] = mapped_column(Integer)
    class_subject_id: Mapped[int] = mapped_column(ForeignKey('class_subjects.id'), index=True)
    period_id: Mapped[int] = mapped_column(ForeignKey('periods.id'), index=True)
    room_id: Mapped[int] = mapped_column(ForeignKey('rooms.id'), index=True)


class Assignment(Base):
    __tablename__ = 'assignments'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text, default='')
    due_date: Mapped[datetime] = mapped_column(DateTime, index=True)
    max_points: Mapped[float] = mapped_column(Float, default=100.0)
    class_id: Mapped[int] = mapped_column(ForeignKey('classes.id'), index=True)
    subject_id: Mapped[int] = mapped_column(ForeignKey('subjects.id'), index=True)
    term_id: Mapped[int] = mapped_column(ForeignKey('terms.id'), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class AssignmentSubmission(Base):
    __tablename__ = 'assignment_submissions'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    assignment_id: Mapped[int] = mapped_column(ForeignKey('assignments.id'), index=True)
    student_id: Mapped[int] = mapped_column(ForeignKey('users.id'), index=True)
    content: Mapped[str] = mapped_column(Text, default='')
    attachments_json: Mapped[str] = mapped_column(Text, default='[]')
    submitted_at: Mapped[datetime] = mapped_column(DateTime)
    grade: Mapped[float | None] = mapped_column(Float, nullable=True)
    feedback: Mapped[str | None] = mapped_column(Text, nullable=True)


class GradeCategory(Base):
    __tablename__ = 'grade_categories'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(80))
    weight: Mapped[float] = mapped_column(Float)
    description: Mapped[str] = mapped_column(Text, default='')
    class_subject_id: Mapped[int] = mapped_column(ForeignKey('class_subjects.id'), index=True)


class GradeItem(Base):
    __tablename__ = 'grade_items'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(120))
    description: Mapped[str] = mapped_column(Text, default='')
    max_points: Mapped[float] = mapped_column(Float, default=100.0)
    date: Mapped[datetime] = mapped_column(DateTime)
    class_subject_id: Mapped[int] = mapped_column(ForeignKey('class_subjects.id'), index=True)
    category_id: Mapped[int] = mapped_column(ForeignKey('grade_categories.id'), index=True)
    assignment_id: Mapped[int | None] = mapped_column(ForeignKey('assignments.id'), nullable=True)


class Grade(Base):
    __tablename__ = 'grades'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    points: Mapped[float] = mapped_column(Float)
    feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    grade_item_id: Mapped[int] = mapped_column(ForeignKey('grade_items.id'), index=True)
    student_id: Mapped[int] = mapped_column(ForeignKey('users.id'), index=True)
    teacher_id: Mapped[int] = mapped_column(ForeignKey('users.id'), index=True)
    graded_at: Mapped[datetime] = mapped_column(DateTime)


class AttendanceSession(Base):
    __tablename__ = 'attendance_sessions'
    __table_args__ = (
        UniqueConstraint('class_subject_id', 'date', name='uq_attendance_sessions_class_subject_date'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    session_date: Mapped[date] = mapped_column('date', Date)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    class_subject_id: Mapped[int] = mapped_column(ForeignKey('class_subjects.id'), index=True)
    created_by_id: Mapped[int] = mapped_column(ForeignKey('users.id'), index=True)


class AttendanceRecord(Base):
    __tablename__ = 'attendance_records'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    status: Mapped[str] = mapped_column(String(20), index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    session_id: Mapped[int] = mapped_column(ForeignKey('attendance_sessions.id'), index=True)
    student_id: Mapped[int] = mapped_column(ForeignKey('users.id'), index=True)


class StudentAccount(Base):
    __tablename__ = 'student_accounts'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    student_id: Mapped[int] = mapped_column(ForeignKey('users.id'), unique=True, index=True)
    balance: Mapped[float] = mapped_column(Float, default=0.0)


class Invoice(Base):
    __tablename__ = 'invoices'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    invoice_number: Mapped[str] = mapped_column(String(60), unique=True, index=True)
    status: Mapped[str] = mapped_column(String(20), default=InvoiceStatus.PENDING.value, index=True)
    due_date: Mapped[datetime] = mapped_column(DateTime)
    total: Mapped[float] = mapped_column(Float, default=0.0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    account_id: Mapped[int] = mapped_column(ForeignKey('student_accounts.id'), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class InvoiceItem(Base):
    __tablename__ = 'invoice_items'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    description: Mapped[str] = mapped_column(String(200))
    quantity: Mapped[int] = mapped_column(Integer, default=1)
    unit_price: Mapped[float] = mapped_column(Float)
    total: Mapped[float] = mapped_column(Float)
    invoice_id: Mapped[int] = mapped_column(ForeignKey('invoices.id'), index=True)


class Payment(Base):
    __tablename__ = 'payments'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    amount: Mapped[float] = mapped_column(Float)
    method: Mapped[str] = mapped_column(String(20))
    reference: Mapped[str] = mapped_column(String(60), default='')
    notes: Mapped[str] = mapped_column(Text, default='')
    received_at: Mapped[datetime] = mapped_column(DateTime)
    account_id: Mapped[int] = mapped_column(ForeignKey('student_accounts.id'), index=True)
    processed_by_id: Mapped[int | None] = mapped_column(ForeignKey('clerk_profiles.id'), nullable=True)


class Event(Base):
    __tablename__ = 'events'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text, default='')
    start_date: Mapped[datetime] = mapped_column(DateTime, index=True)
    end_date: Mapped[datetime] = mapped_column(DateTime)
    location: Mapped[str] = mapped_column(String(120), default='')
    type: Mapped[str] = mapped_column(String(30), default='OTHER')
    is_all_day: Mapped[bool] = mapped_column(Boolean, default=False)
    school_id: Mapped[int] = mapped_column(ForeignKey('schools.id'), index=True)
    created_by_id: Mapped[int] = mapped_column(ForeignKey('users.id'), index=True)


class EventAudience(Base):
    __tablename__ = 'event_audiences'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    scope: Mapped[str] = mapped_column(String(20))
    event_id: Mapped[int] = mapped_column(ForeignKey('events.id'), index=True)
    class_id: Mapped[int | None] = mapped_column(ForeignKey('classes.id'), nullable=True)
    subject_id: Mapped[int | None] = mapped_column(ForeignKey('subjects.id'), nullable=True)


class EventAttendee(Base):
    __tablename__ = 'event_attendees'
    __table_args__ = (
        UniqueConstraint('event_id', 'user_id', name='uq_event_attendees_event_user'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    event_id: Mapped[int] = mapped_column(ForeignKey('events.id'), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id'), index=True)
    status: Mapped[str] = mapped_column(String(20), default='GOING')


class Announcement(Base):
    __tablename__ = 'announcements'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(200))
    content: Mapped[str] = mapped_column(Text, default='')
    scope: Mapped[str] = mapped_column(String(20), default='SCHOOL')
    priority: Mapped[str] = mapped_column(String(20), default='normal')
    school_id: Mapped[int] = mapped_column(ForeignKey('schools.id'), index=True)
    created_by_id: Mapped[int] = mapped_column(ForeignKey('users.id'), index=True)
    published_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)


class Notification(Base):
    __tablename__ = 'notifications'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(200))
    content: Mapped[str] = mapped_column(Text, default='')
    type: Mapped[str] = mapped_column(String(30), default='SYSTEM')
    is_read: Mapped[bool] = mapped_column(Boolean, default=False)
    data_json: Mapped[str] = mapped_column(Text, default='{}')
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id'), index=True)
    read_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class Conversation(Base):
    __tablename__ = 'conversations'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(200), default='')
    is_group: Mapped[bool] = mapped_column(Boolean, default=False)
    school_id: Mapped[int] = mapped_column(ForeignKey('schools.id'), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class ConversationParticipant(Base):
    __tablename__ = 'conversation_participants'
    __table_args__ = (
        UniqueConstraint('conversation_id', 'user_id', name='uq_conversation_participants_conversation_user'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    conversation_id: Mapped[int] = mapped_column(ForeignKey('conversations.id'), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id'), index=True)


class Message(Base):
    __tablename__ = 'messages'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    content: Mapped[str] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(20), default='SENT')
    conversation_id: Mapped[int] = mapped_column(ForeignKey('conversations.id'), index=True)
    sender_id: Mapped[int] = mapped_column(ForeignKey('users.id'), index=True)
    recipient_id: Mapped[int | None] = mapped_column(ForeignKey('users.id'), nullable=True)
    sent_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class MessageAttachment(Base):
    __tablename__ = 'message_attachments'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    message_id: Mapped[int] = mapped_column(ForeignKey('messages.id'), index=True)
    file_name: Mapped[str] = mapped_column(String(200))
    url: Mapped[str] = mapped_column(String(500))
    mime_type: Mapped[str] = mapped_column(String(100), default='application/octet-stream')
    size_bytes: Mapped[int] = mapped_column(Integer, default=0)


class Resource(Base):
    __tablename__ = 'resources'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text, default='')
    url: Mapped[str] = mapped_column(String(500))
    type: Mapped[str] = mapped_column(String(20), default='DOCUMENT')
    visibility: Mapped[str] = mapped_column(String(20), default='CLASS')
    school_id: Mapped[int] = mapped_column(ForeignKey('schools.id'), index=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey('users.id'), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class ResourceTag(Base):
    __tablename__ = 'resource_tags'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(80), unique=True, index=True)


class ResourceTagJoin(Base):
    __tablename__ = 'resource_tag_joins'
    __table_args__ = (
        UniqueConstraint('resource_id', 'tag_id', name='uq_resource_tag_joins_resource_tag'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    resource_id: Mapped[int] = mapped_column(ForeignKey('resources.id'), index=True)
    tag_id: Mapped[int] = mapped_column(ForeignKey('resource_tags.id'), index=True)


class ResourceLink(Base):
    __tablename__ = 'resource_links'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    resource_id: Mapped[int] = mapped_column(ForeignKey('resources.id'), index=True)
    class_subject_id: Mapped[int] = mapped_column(ForeignKey('class_subjects.id'), index=True)


class LessonPlan(Base):
    __tablename__ = 'lesson_plans'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(200))
    planned_for: Mapped[date] = mapped_column('date', Date)
    objectives: Mapped[str] = mapped_column(Text, default='')
    materials: Mapped[str] = mapped_column(Text, default='')
    activities: Mapped[str] = mapped_column(Text, default='')
    homework: Mapped[str] = mapped_column(Text, default='')
    status: Mapped[str] = mapped_column(String(20), default='DRAFT')
    class_subject_id: Mapped[int] = mapped_column(ForeignKey('class_subjects.id'), index=True)
    teacher_id: Mapped[int] = mapped_column(ForeignKey('users.id'), index=True)


class LessonPlanAttachment(Base):
    __tablename__ = 'lesson_plan_attachments'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    lesson_plan_id: Mapped[int] = mapped_column(ForeignKey('lesson_plans.id'), index=True)
    file_name: Mapped[str] = mapped_column(String(200))
    url: Mapped[str] = mapped_column(String(500))


class AuditLog(Base):
    __tablename__ = 'audit_logs'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    entity: Mapped[str] = mapped_column(String(60), index=True)
    entity_id: Mapped[int] = mapped_column(Integer)
    action: Mapped[str] = mapped_column(String(20))
    changes_json: Mapped[str] = mapped_column(Text, default='{}')
    actor_id: Mapped[int | None] = mapped_column(ForeignKey('users.id'), nullable=True)
    ip_address: Mapped[str] = mapped_column(String(45), default='')
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
