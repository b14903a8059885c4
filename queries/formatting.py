"""
Formatting utilities for displaying report results.

This module turns query results into readable text for console output.
"""

from typing import List, Optional
from database import Student, Course
from .records import CourseWithStudents, StudentAgeGroup, StudentWithEnrollments, CourseStudentCount


class ReportFormatter:
    """Utilities for formatting report results into readable text."""

    @staticmethod
    def format_student_list(students: List[Student], title: str = "STUDENTS") -> str:
        """
        Format a list of students in a table format.

        Args:
            students: Student rows as returned by the queries
            title: Heading shown above the table

        Returns:
            Formatted multi-line string suitable for display
        """
        if not students:
            return "No students found."

        lines = []
        lines.append(f"{title}: {len(students)} student(s)")
        lines.append("=" * 80)
        lines.append(f"{'ID':<8} {'Name':<40} {'Date of Birth':<15}")
        lines.append("=" * 80)

        for student in students:
            name = f"{student.last_name}, {student.first_name}"[:39]
            lines.append(f"{student.student_id:<8} {name:<40} {student.date_of_birth.isoformat():<15}")

        lines.append("=" * 80)
        return "\n".join(lines)

    @staticmethod
    def format_course_list(courses: List[Course], title: str = "COURSES") -> str:
        """Format a list of courses with their descriptions."""
        if not courses:
            return "No courses found."

        lines = []
        lines.append(f"{title}: {len(courses)} course(s)")
        lines.append("=" * 80)
        lines.append(f"{'ID':<8} {'Name':<30} {'Description':<40}")
        lines.append("=" * 80)

        for course in courses:
            description = (course.description or '')[:40]
            lines.append(f"{course.course_id:<8} {course.name[:29]:<30} {description:<40}")

        lines.append("=" * 80)
        return "\n".join(lines)

    @staticmethod
    def format_courses_with_students(records: List[CourseWithStudents]) -> str:
        """Format each course followed by the names of its enrolled students."""
        if not records:
            return "No courses found."

        lines = []
        for record in records:
            lines.append("=" * 80)
            lines.append(f"COURSE {record.course.course_id}: {record.course.name}")
            lines.append("-" * 80)
            if record.students:
                for student in record.students:
                    lines.append(f"  {student.full_name}")
            else:
                lines.append("  (no students enrolled)")
        lines.append("=" * 80)
        return "\n".join(lines)

    @staticmethod
    def format_students_with_enrollments(records: List[StudentWithEnrollments]) -> str:
        """Format each student followed by their enrollments."""
        if not records:
            return "No students found."

        lines = []
        for record in records:
            student = record.student
            lines.append("=" * 80)
            lines.append(f"{student.first_name} {student.last_name} (ID {student.student_id})")
            lines.append("-" * 80)
            if record.enrollments:
                for enrollment in record.enrollments:
                    lines.append(
                        f"  Course {enrollment.course_id:<6} "
                        f"enrolled {enrollment.enrollment_date.isoformat()}"
                    )
            else:
                lines.append("  (no enrollments)")
        lines.append("=" * 80)
        return "\n".join(lines)

    @staticmethod
    def format_age_groups(groups: List[StudentAgeGroup]) -> str:
        """Format age buckets as a two-column table with a total."""
        if not groups:
            return "No students found."

        lines = []
        lines.append("=" * 40)
        lines.append(f"{'Age':<10} {'Students':>10}")
        lines.append("=" * 40)
        for group in groups:
            lines.append(f"{group.age:<10} {group.count:>10}")
        lines.append("-" * 40)
        lines.append(f"{'Total':<10} {sum(g.count for g in groups):>10}")
        lines.append("=" * 40)
        return "\n".join(lines)

    @staticmethod
    def format_course_counts(counts: List[CourseStudentCount]) -> str:
        """Format per-course enrollment counts as a two-column table."""
        if not counts:
            return "No enrollments found."

        lines = []
        lines.append("=" * 40)
        lines.append(f"{'Course ID':<10} {'Students':>10}")
        lines.append("=" * 40)
        for count in counts:
            lines.append(f"{count.course_id:<10} {count.student_count:>10}")
        lines.append("=" * 40)
        return "\n".join(lines)

    @staticmethod
    def format_average_age(average: Optional[float]) -> str:
        if average is None:
            return "Average student age: No data (no students on record)"
        return f"Average student age: {average:.2f} years"

    @staticmethod
    def format_single_student(student: Optional[Student]) -> str:
        if not student:
            return "Student not found."

        lines = []
        lines.append("=" * 80)
        lines.append("STUDENT INFORMATION")
        lines.append("=" * 80)
        lines.append(f"Name:              {student.first_name} {student.last_name}")
        lines.append(f"Student ID:        {student.student_id}")
        lines.append(f"Date of Birth:     {student.date_of_birth.isoformat()}")
        lines.append("=" * 80)
        return "\n".join(lines)
