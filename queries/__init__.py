"""
Query modules for university reports.

This package provides a clean interface for querying the university database
without coupling to any specific UI framework.
"""

from .university_queries import UniversityQueries
from .records import CourseWithStudents, StudentAgeGroup, StudentWithEnrollments, CourseStudentCount
from .formatting import ReportFormatter

__all__ = [
    'UniversityQueries',
    'CourseWithStudents',
    'StudentAgeGroup',
    'StudentWithEnrollments',
    'CourseStudentCount',
    'ReportFormatter',
]
