"""
Report queries over students, courses, instructors and enrollments.

Every report is a single read against the session it was constructed with:
- Enrollment lookups (who is in a course, who is not, who is in both of two)
- Instructor lookups (courses taught, with their enrolled students)
- Age reports (older-than cutoff, average age, youngest, age buckets)
- Per-course and per-student counts

Results are materialized into lists before returning, so storage errors are
raised by the call itself rather than during iteration. Lookups by an id that
does not exist return an empty list or 0.
"""

import logging
from collections import Counter
from datetime import date
from typing import Callable, List, Optional
from sqlalchemy import select, func, distinct
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from database import Student, Course, Instructor, Enrollment
from .ages import age_in_years, years_before
from .records import (
    CourseWithStudents, StudentAgeGroup, StudentWithEnrollments, CourseStudentCount
)

logger = logging.getLogger(__name__)


class UniversityQueries:
    """Read-only report catalog over a database session."""

    def __init__(self, db: Session, today: Optional[Callable[[], date]] = None):
        """
        Args:
            db: Open SQLAlchemy session. The caller owns and closes it.
            today: Returns the date ages are measured against (defaults to date.today)
        """
        self.db = db
        self._today = today or date.today

    # =========================================================================
    # ENROLLMENT QUERIES
    # =========================================================================

    def get_students_enrolled_in_course(self, course_id: int) -> List[Student]:
        """
        Get the students enrolled in a course, in enrollment order.

        A student enrolled twice in the same course is returned twice.

        Example:
            >>> students = queries.get_students_enrolled_in_course(3)
            >>> print([s.full_name for s in students])
        """
        stmt = select(Student)\
            .join(Enrollment, Enrollment.student_id == Student.student_id)\
            .where(Enrollment.course_id == course_id)\
            .order_by(Enrollment.enrollment_id)
        return self._scalars(stmt)

    def get_students_not_enrolled_in_course(self, course_id: int) -> List[Student]:
        """Get every student with no enrollment in the given course."""
        stmt = select(Student)\
            .where(~Student.enrollments.any(Enrollment.course_id == course_id))\
            .order_by(Student.student_id)
        return self._scalars(stmt)

    def get_students_enrolled_in_both_courses(self, course_id_1: int, course_id_2: int) -> List[Student]:
        """
        Get the students enrolled in both of two courses.

        Each student appears once, even with repeated enrollments.
        """
        in_first = select(Enrollment.student_id).where(Enrollment.course_id == course_id_1)
        in_second = select(Enrollment.student_id).where(Enrollment.course_id == course_id_2)
        stmt = select(Student)\
            .where(Student.student_id.in_(in_first), Student.student_id.in_(in_second))\
            .order_by(Student.student_id)
        return self._scalars(stmt)

    def get_students_with_enrollments(self) -> List[StudentWithEnrollments]:
        """Get every student paired with a list of their enrollments."""
        stmt = select(Student)\
            .options(selectinload(Student.enrollments))\
            .order_by(Student.student_id)
        return [
            StudentWithEnrollments(student=student, enrollments=list(student.enrollments))
            for student in self._scalars(stmt)
        ]

    def get_course_count_for_student(self, student_id: int) -> int:
        """Number of distinct courses a student is enrolled in (0 if none)."""
        stmt = select(func.count(distinct(Enrollment.course_id)))\
            .where(Enrollment.student_id == student_id)
        return self._scalar(stmt) or 0

    # =========================================================================
    # COURSE QUERIES
    # =========================================================================

    def get_courses_taught_by_instructor(self, instructor_id: int) -> List[Course]:
        """Get the courses an instructor teaches."""
        stmt = select(Course)\
            .where(Course.instructors.any(Instructor.instructor_id == instructor_id))\
            .order_by(Course.course_id)
        return self._scalars(stmt)

    def get_courses_with_students_taught_by_instructor(self, instructor_id: int) -> List[CourseWithStudents]:
        """
        Get the courses an instructor teaches, each with its enrolled students.

        Students are loaded together with the courses, so the records stay
        usable after the session is closed.
        """
        stmt = select(Course)\
            .where(Course.instructors.any(Instructor.instructor_id == instructor_id))\
            .options(selectinload(Course.enrollments).selectinload(Enrollment.student))\
            .order_by(Course.course_id)
        return [
            CourseWithStudents(course=course, students=[e.student for e in course.enrollments])
            for course in self._scalars(stmt)
        ]

    def get_courses_with_more_students_than(self, threshold: int = 10) -> List[Course]:
        """
        Get the courses with strictly more than `threshold` enrollments.

        Example:
            >>> popular = queries.get_courses_with_more_students_than()  # > 10
        """
        enrollment_count = select(func.count(Enrollment.enrollment_id))\
            .where(Enrollment.course_id == Course.course_id)\
            .scalar_subquery()
        stmt = select(Course)\
            .where(enrollment_count > threshold)\
            .order_by(Course.course_id)
        return self._scalars(stmt)

    def get_course_student_counts(self) -> List[CourseStudentCount]:
        """
        Count enrollments per course.

        Courses without enrollments are absent, not reported as 0.
        """
        stmt = select(Enrollment.course_id, func.count(Enrollment.enrollment_id))\
            .group_by(Enrollment.course_id)\
            .order_by(Enrollment.course_id)
        return [
            CourseStudentCount(course_id=course_id, student_count=count)
            for course_id, count in self._rows(stmt)
        ]

    # =========================================================================
    # STUDENT QUERIES
    # =========================================================================

    def get_students_older_than(self, years: int = 25) -> List[Student]:
        """
        Get students born strictly before the date `years` years ago today.
        """
        cutoff = years_before(self._today(), years)
        stmt = select(Student)\
            .where(Student.date_of_birth < cutoff)\
            .order_by(Student.student_id)
        return self._scalars(stmt)

    def get_average_student_age(self) -> Optional[float]:
        """
        Average age of all students in fractional years.

        Returns:
            The average, or None when there are no students to average
        """
        birth_dates = self._scalars(select(Student.date_of_birth))
        if not birth_dates:
            logger.info("No students on record; average age unavailable")
            return None

        today = self._today()
        return sum(age_in_years(dob, today) for dob in birth_dates) / len(birth_dates)

    def get_youngest_student(self) -> Optional[Student]:
        """Student with the latest date of birth (lowest id wins a tie), or None."""
        stmt = select(Student)\
            .order_by(Student.date_of_birth.desc(), Student.student_id)\
            .limit(1)
        students = self._scalars(stmt)
        return students[0] if students else None

    def get_all_student_names(self) -> List[str]:
        """Get "First Last" display names for every student."""
        stmt = select(Student.first_name, Student.last_name).order_by(Student.student_id)
        return [f"{first_name} {last_name}" for first_name, last_name in self._rows(stmt)]

    def group_students_by_age(self) -> List[StudentAgeGroup]:
        """
        Count students per whole-year age, youngest bucket first.

        Fractional ages are truncated, so 25.9 lands in the 25 bucket.
        """
        today = self._today()
        buckets = Counter(
            int(age_in_years(dob, today))
            for dob in self._scalars(select(Student.date_of_birth))
        )
        return [StudentAgeGroup(age=age, count=count) for age, count in sorted(buckets.items())]

    def get_students_ordered_by_last_name(self) -> List[Student]:
        """Get all students sorted by last name."""
        stmt = select(Student).order_by(Student.last_name, Student.student_id)
        return self._scalars(stmt)

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _scalars(self, stmt) -> list:
        try:
            return list(self.db.scalars(stmt).all())
        except SQLAlchemyError as e:
            logger.error(f"Report query failed: {e}")
            raise

    def _rows(self, stmt) -> list:
        try:
            return list(self.db.execute(stmt).all())
        except SQLAlchemyError as e:
            logger.error(f"Report query failed: {e}")
            raise

    def _scalar(self, stmt):
        try:
            return self.db.scalar(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Report query failed: {e}")
            raise
