"""
Database diagnostic script - check what's actually stored.

Reports entity counts and enrollment rows that break the store-level
invariants the reports rely on (every enrollment points at an existing
student and course; one enrollment per student and course).
"""

from typing import List, Tuple
from sqlalchemy import select, func
from sqlalchemy.orm import Session
from database import get_db, Student, Course, Instructor, Enrollment


def find_orphaned_enrollments(db: Session) -> List[Enrollment]:
    """Enrollments whose student or course row does not exist."""
    missing_student = ~select(Student.student_id)\
        .where(Student.student_id == Enrollment.student_id)\
        .exists()
    missing_course = ~select(Course.course_id)\
        .where(Course.course_id == Enrollment.course_id)\
        .exists()
    stmt = select(Enrollment)\
        .where(missing_student | missing_course)\
        .order_by(Enrollment.enrollment_id)
    return list(db.scalars(stmt).all())


def find_duplicate_enrollments(db: Session) -> List[Tuple[int, int, int]]:
    """(student_id, course_id, count) for every pair enrolled more than once."""
    stmt = select(Enrollment.student_id, Enrollment.course_id, func.count(Enrollment.enrollment_id))\
        .group_by(Enrollment.student_id, Enrollment.course_id)\
        .having(func.count(Enrollment.enrollment_id) > 1)\
        .order_by(Enrollment.student_id, Enrollment.course_id)
    return [tuple(row) for row in db.execute(stmt).all()]


def check_database_contents(db: Session = None) -> bool:
    """
    Print a report of what's in the database.

    Returns:
        True if no invariant violations were found
    """
    owns_session = db is None
    if owns_session:
        db = get_db()

    try:
        print("\n" + "="*80)
        print("DATABASE DIAGNOSTIC REPORT")
        print("="*80)

        student_count = db.scalar(select(func.count(Student.student_id)))
        course_count = db.scalar(select(func.count(Course.course_id)))
        instructor_count = db.scalar(select(func.count(Instructor.instructor_id)))
        enrollment_count = db.scalar(select(func.count(Enrollment.enrollment_id)))

        print(f"\n📊 Students: {student_count} total")
        print(f"📚 Courses: {course_count} total")
        print(f"🎓 Instructors: {instructor_count} total")
        print(f"📝 Enrollments: {enrollment_count} total")

        unstaffed = db.scalar(
            select(func.count(Course.course_id)).where(~Course.instructors.any())
        )
        if unstaffed:
            print(f"  - Courses without an instructor: {unstaffed}")

        print("\n" + "="*80)
        print("POTENTIAL ISSUES")
        print("="*80)

        issues_found = False

        orphans = find_orphaned_enrollments(db)
        if orphans:
            print(f"\n❌ PROBLEM: {len(orphans)} enrollment(s) reference a missing student or course")
            for e in orphans[:5]:
                print(f"   - Enrollment {e.enrollment_id}: student {e.student_id}, course {e.course_id}")
            issues_found = True

        duplicates = find_duplicate_enrollments(db)
        if duplicates:
            print(f"\n⚠️  WARNING: {len(duplicates)} student/course pair(s) enrolled more than once")
            print("   These students are listed once per enrollment in course reports.")
            for student_id, course_id, count in duplicates[:5]:
                print(f"   - Student {student_id} in course {course_id}: {count} enrollments")
            issues_found = True

        if not issues_found:
            print("\n✅ No obvious problems detected!")

        print("\n" + "="*80)
        return not issues_found

    finally:
        if owns_session:
            db.close()


if __name__ == '__main__':
    check_database_contents()
