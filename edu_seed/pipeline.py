"""Ordered registry of every seeding stage.

Ensure stages converge on a target and are safe to repeat; append stages
add new records on every run and only execute in append mode.
"""

from __future__ import annotations

from edu_seed.services.scheduler import PipelineStage, StageKind, validate_pipeline
from edu_seed.synthesizers import attendance, audit, catalog, classes, community, coursework, finance, grading, messaging, people, resources


ENSURE = StageKind.ENSURE
APPEND = StageKind.APPEND

STAGES: tuple[PipelineStage, ...] = (
    PipelineStage('subjects', catalog.seed_subjects, ENSURE, (), 'Subject catalog, keyed by code'),
    PipelineStage('terms', catalog.seed_terms, ENSURE, (), 'Exactly one active term'),
    PipelineStage('rooms', catalog.seed_rooms, ENSURE, (), 'Rooms up to target_rooms'),
    PipelineStage('periods', catalog.seed_periods, ENSURE, (), 'Daily periods up to target_periods'),
    PipelineStage('people', people.seed_people, ENSURE, ('subjects',), 'Users and role profiles topped up per role'),
    PipelineStage('parent_links', people.seed_parent_links, ENSURE, ('people',), 'Parents linked to students'),
    PipelineStage('classes', classes.seed_classes, ENSURE, (), 'Classes by grade and section'),
    PipelineStage(
        'class_subjects', classes.seed_class_subjects, ENSURE, ('classes', 'subjects', 'people'),
        'Subject offerings per class with a teacher',
    ),
    PipelineStage('enrollments', classes.seed_enrollments, ENSURE, ('classes', 'people'), 'One class per student'),
    PipelineStage(
        'class_meetings', classes.seed_class_meetings, ENSURE, ('class_subjects', 'rooms', 'periods'),
        'Weekly timetable without double booking',
    ),
    PipelineStage('assignments', coursework.seed_assignments, APPEND, ('class_subjects', 'terms'), 'Assignments per offering'),
    PipelineStage(
        'assignment_submissions', coursework.seed_assignment_submissions, APPEND, ('assignments', 'enrollments'),
        'Graded submissions from enrolled students',
    ),
    PipelineStage(
        'grade_categories', grading.seed_grade_categories, ENSURE, ('class_subjects',),
        'Default weighted categories per offering',
    ),
    PipelineStage('grade_items', grading.seed_grade_items, APPEND, ('grade_categories', 'terms'), 'Items per category'),
    PipelineStage('grades', grading.seed_grades, APPEND, ('grade_items', 'enrollments'), 'Grades per enrolled student'),
    PipelineStage(
        'attendance_sessions', attendance.seed_attendance_sessions, APPEND, ('class_subjects',),
        'Sessions on recent weekdays',
    ),
    PipelineStage(
        'attendance_records', attendance.seed_attendance_records, APPEND, ('attendance_sessions', 'enrollments'),
        'Weighted attendance status per student',
    ),
    PipelineStage('student_accounts', finance.seed_student_accounts, ENSURE, ('people',), 'One account per student'),
    PipelineStage(
        'invoices', finance.seed_invoices, APPEND, ('student_accounts',),
        'Invoices with items, derived totals and payments',
    ),
    PipelineStage('events', community.seed_events, APPEND, ('people', 'classes', 'subjects'), 'Events with audience and RSVPs'),
    PipelineStage('announcements', community.seed_announcements, APPEND, ('people',), 'School announcements'),
    PipelineStage('notifications', community.seed_notifications, APPEND, ('people',), 'Notifications per user'),
    PipelineStage(
        'conversations', messaging.seed_conversations, APPEND, ('people', 'class_subjects'),
        'Teacher conversations with messages and attachments',
    ),
    PipelineStage('resources', resources.seed_resources, APPEND, ('class_subjects',), 'Teacher resources with tags and links'),
    PipelineStage('lesson_plans', coursework.seed_lesson_plans, APPEND, ('class_subjects',), 'Lesson plans per offering'),
    PipelineStage(
        'audit_logs', audit.seed_audit_logs, APPEND, ('assignments', 'events', 'invoices'),
        'CREATE entries for audited records of this run',
    ),
)

validate_pipeline(STAGES)


def stage_names() -> list[str]:
    return [stage.name for stage in STAGES]
