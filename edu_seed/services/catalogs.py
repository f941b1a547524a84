from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class SubjectSpec:
    code: str
    name: str
    description: str
    department: str


@dataclass(frozen=True)
class RoomSpec:
    name: str
    building: str
    floor: str
    capacity: int
    facilities: tuple[str, ...]


@dataclass(frozen=True)
class PeriodSpec:
    order: int
    name: str
    start_time: str
    end_time: str
    is_break: bool = False


@dataclass(frozen=True)
class TermSpec:
    name: str
    start_date: date
    end_date: date


SUBJECT_CATALOG: tuple[SubjectSpec, ...] = (
    SubjectSpec('MATH201', 'Algebra II', 'Advanced Algebra and Functions', 'Mathematics'),
    SubjectSpec('MATH301', 'Geometry', 'Euclidean and Coordinate Geometry', 'Mathematics'),
    SubjectSpec('ENG201', 'English Literature', 'American and British Literature', 'English'),
    SubjectSpec('ENG101', 'Composition', 'Academic Writing and Rhetoric', 'English'),
    SubjectSpec('SCI301', 'Physics', 'Introduction to Physics', 'Science'),
    SubjectSpec('SCI201', 'Chemistry', 'General Chemistry', 'Science'),
    SubjectSpec('SCI101', 'Biology', 'Cells, Genetics and Ecology', 'Science'),
    SubjectSpec('HIST201', 'World History', 'Modern World History', 'Humanities'),
    SubjectSpec('CS101', 'Computer Science', 'Programming Fundamentals', 'Technology'),
    SubjectSpec('ART101', 'Visual Arts', 'Drawing, Painting and Design', 'Arts'),
)

ROOM_CATALOG: tuple[RoomSpec, ...] = (
    RoomSpec('Room 101', 'Main Building', '1', 30, ('Projector', 'Whiteboard', 'Computer')),
    RoomSpec('Room 102', 'Main Building', '1', 30, ('Whiteboard',)),
    RoomSpec('Room 201', 'Main Building', '2', 32, ('Projector', 'Whiteboard')),
    RoomSpec('Lab 201', 'Science Wing', '2', 25, ('Lab Equipment', 'Safety Gear', 'Projector')),
    RoomSpec('Lab 202', 'Science Wing', '2', 25, ('Lab Equipment', 'Fume Hood')),
    RoomSpec('Computer Lab', 'Technology Center', '1', 28, ('Computers', 'Projector')),
    RoomSpec('Art Studio', 'Arts Building', '1', 20, ('Easels', 'Sink')),
    RoomSpec('Room 301', 'Main Building', '3', 35, ('Smart Board',)),
)

PERIOD_CATALOG: tuple[PeriodSpec, ...] = (
    PeriodSpec(1, 'Period 1', '08:00', '08:50'),
    PeriodSpec(2, 'Period 2', '09:00', '09:50'),
    PeriodSpec(3, 'Period 3', '10:00', '10:50'),
    PeriodSpec(4, 'Period 4', '11:00', '11:50'),
    PeriodSpec(5, 'Lunch', '12:00', '12:40', is_break=True),
    PeriodSpec(6, 'Period 5', '12:45', '13:35'),
    PeriodSpec(7, 'Period 6', '13:45', '14:35'),
    PeriodSpec(8, 'Period 7', '14:45', '15:35'),
)

CLASS_GRADES: tuple[str, ...] = ('9', '10', '11', '12')
CLASS_SECTIONS: tuple[str, ...] = ('A', 'B')

GRADE_CATEGORY_CATALOG: tuple[tuple[str, float], ...] = (
    ('Assignments', 0.4),
    ('Quizzes', 0.2),
    ('Exams', 0.3),
    ('Participation', 0.1),
)


def class_catalog() -> list[tuple[str, str]]:
    return [(grade, section) for grade in CLASS_GRADES for section in CLASS_SECTIONS]


def term_for_day(day: date) -> TermSpec:
    if day.month >= 8:
        return TermSpec(f'Fall {day.year}', date(day.year, 9, 1), date(day.year, 12, 20))
    return TermSpec(f'Spring {day.year}', date(day.year, 1, 8), date(day.year, 5, 30))


ATTENDANCE_STATUS_WEIGHTS = {'PRESENT': 0.85, 'ABSENT': 0.08, 'LATE': 0.05, 'EXCUSED': 0.02}
INVOICE_STATUS_WEIGHTS = {'PAID': 0.6, 'PENDING': 0.25, 'OVERDUE': 0.1, 'CANCELLED': 0.05}
EVENT_RSVP_WEIGHTS = {'GOING': 0.6, 'MAYBE': 0.25, 'DECLINED': 0.15}
MESSAGE_STATUS_WEIGHTS = {'READ': 0.6, 'DELIVERED': 0.3, 'SENT': 0.1}
LESSON_PLAN_STATUS_WEIGHTS = {'PUBLISHED': 0.6, 'DRAFT': 0.3, 'ARCHIVED': 0.1}
PARENT_RELATIONSHIP_WEIGHTS = {'PARENT': 0.85, 'GUARDIAN': 0.15}

FIRST_NAMES = (
    'James', 'Mary', 'John', 'Patricia', 'Robert', 'Jennifer', 'Michael', 'Linda',
    'William', 'Barbara', 'David', 'Elizabeth', 'Richard', 'Susan', 'Joseph', 'Jessica',
    'Thomas', 'Sarah', 'Charles', 'Karen', 'Christopher', 'Nancy', 'Daniel', 'Lisa',
    'Matthew', 'Betty', 'Anthony', 'Margaret', 'Mark', 'Sandra', 'Steven', 'Ashley',
    'Andrew', 'Emily', 'Joshua', 'Michelle', 'Kevin', 'Amanda', 'Brian', 'Melissa',
    'Ryan', 'Laura', 'Jacob', 'Amy', 'Nicholas', 'Angela', 'Eric', 'Anna',
)
LAST_NAMES = (
    'Smith', 'Johnson', 'Williams', 'Brown', 'Jones', 'Garcia', 'Miller', 'Davis',
    'Rodriguez', 'Martinez', 'Hernandez', 'Lopez', 'Gonzalez', 'Wilson', 'Anderson', 'Thomas',
    'Taylor', 'Moore', 'Jackson', 'Martin', 'Lee', 'Perez', 'Thompson', 'White',
    'Harris', 'Sanchez', 'Clark', 'Ramirez', 'Lewis', 'Robinson', 'Walker', 'Young',
    'Allen', 'King', 'Wright', 'Scott', 'Torres', 'Nguyen', 'Hill', 'Flores',
)
STREET_NAMES = ('Main St', 'Oak Avenue', 'Maple Drive', 'Cedar Lane', 'Elm Street', 'Pine Road')
TEACHER_QUALIFICATIONS = {
    'Mathematics': ('MSc in Mathematics', 'BSc in Applied Mathematics'),
    'English': ('MA in English Literature', 'BA in English'),
    'Science': ('MSc in Physics', 'MSc in Chemistry', 'BSc in Biology'),
    'Humanities': ('MA in History', 'BA in Political Science'),
    'Technology': ('BSc in Computer Science', 'MSc in Software Engineering'),
    'Arts': ('BFA in Fine Arts', 'MA in Art Education'),
}

ASSIGNMENT_TITLES = (
    'Chapter Review Questions', 'Research Project', 'Lab Report', 'Essay Assignment', 'Problem Set',
    'Group Presentation', 'Quiz Preparation', 'Creative Writing', 'Data Analysis', 'Case Study',
)
SUBMISSION_ATTACHMENTS = ('document.pdf', 'presentation.pptx', 'spreadsheet.xlsx', 'image.jpg')
GRADE_FEEDBACK = ('Excellent work!', 'Good effort', 'Needs improvement', 'Well done', 'Keep it up', None)

ATTENDANCE_SESSION_NOTES = ('Regular class session', 'Quiz day', 'Group work', 'Presentation day', None)
ABSENCE_NOTES = ('Sick', 'Family emergency', 'Medical appointment', None)

INVOICE_NOTES = ('Tuition fee for semester', 'Lab fee', 'Library fine', 'Sports equipment fee', None)
INVOICE_ITEM_DESCRIPTIONS = (
    'Tuition Fee', 'Lab Fee', 'Library Fee', 'Sports Fee', 'Technology Fee', 'Transportation Fee',
)
PAYMENT_METHODS = ('CASH', 'CARD', 'BANK_TRANSFER', 'ONLINE')

EVENT_TITLES = (
    'Parent-Teacher Conference', 'Science Fair', 'Sports Day', 'Cultural Festival', 'Final Examinations',
    'Winter Break', 'Graduation Ceremony', 'Open House', 'Staff Meeting', 'School Play',
)
EVENT_LOCATIONS = ('Main Auditorium', 'Gymnasium', 'Library', 'Cafeteria', 'Outdoor Field', 'Conference Room')
EVENT_TYPES = ('HOLIDAY', 'EXAM', 'MEETING', 'SPORTS', 'CULTURAL', 'PARENT_TEACHER', 'OTHER')
AUDIENCE_SCOPES = ('SCHOOL', 'CLASS', 'SUBJECT')

NOTIFICATION_TITLES = (
    'New Assignment Posted', 'Grade Updated', 'Attendance Alert', 'Fee Payment Due',
    'School Announcement', 'New Message Received', 'Event Reminder', 'System Update',
)
NOTIFICATION_TYPES = ('ASSIGNMENT', 'GRADE', 'ATTENDANCE', 'FEE', 'ANNOUNCEMENT', 'MESSAGE', 'EVENT', 'SYSTEM')
NOTIFICATION_ENTITY_TYPES = ('assignment', 'grade', 'event', 'message')

ANNOUNCEMENT_TITLES = (
    'School Closure Notice', 'New Academic Year Guidelines', 'Sports Team Tryouts',
    'Parent-Teacher Meeting Schedule', 'Library Hours Update', 'Cafeteria Menu Changes',
    'Exam Schedule Released', 'Holiday Calendar Update',
)
ANNOUNCEMENT_PRIORITIES = ('low', 'normal', 'high', 'urgent')

CONVERSATION_TOPICS = ('Progress Check-in', 'Homework Question', 'Attendance Follow-up', 'Upcoming Test', 'Class Project')
MESSAGE_ATTACHMENTS = (
    ('worksheet.pdf', 'application/pdf'),
    ('notes.docx', 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'),
    ('photo.jpg', 'image/jpeg'),
    ('report.pdf', 'application/pdf'),
)

RESOURCE_TITLES = ('Study Guide', 'Practice Worksheet', 'Lecture Slides', 'Reading List', 'Video Walkthrough', 'Reference Sheet')
RESOURCE_TYPES = ('DOCUMENT', 'VIDEO', 'LINK', 'PRESENTATION')
RESOURCE_VISIBILITY = ('CLASS', 'SCHOOL', 'PRIVATE')
RESOURCE_TAGS = ('Exam Prep', 'Homework Help', 'Lab', 'Reading', 'Revision', 'Enrichment')

LESSON_PLAN_TITLES = (
    'Introduction and Key Concepts', 'Guided Practice', 'Lab Investigation', 'Review Session',
    'Project Workshop', 'Assessment Preparation',
)
LESSON_MATERIALS = ('Textbook, whiteboard, calculator', 'Slides, handouts', 'Lab kit, safety goggles', 'Laptops, projector')
LESSON_ACTIVITIES = ('Lecture, practice problems, group work', 'Think-pair-share, exit ticket', 'Hands-on experiment', 'Peer review')
