from .connection import Base, engine, get_db_session, get_db
from .models import Student, Course, Instructor, Enrollment, course_instructors

__all__ = [
    'Base',
    'engine',
    'get_db_session',
    'get_db',
    'Student',
    'Course',
    'Instructor',
    'Enrollment',
    'course_instructors',
]
