"""Result records built by the report queries. Never persisted."""

from dataclasses import dataclass, field
from typing import List
from database import Student, Course, Enrollment


@dataclass
class CourseWithStudents:
    course: Course
    students: List[Student] = field(default_factory=list)


@dataclass
class StudentAgeGroup:
    age: int
    count: int


@dataclass
class StudentWithEnrollments:
    student: Student
    enrollments: List[Enrollment] = field(default_factory=list)


@dataclass
class CourseStudentCount:
    course_id: int
    student_count: int
