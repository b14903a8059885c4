"""
Tests for the report query layer.

Runs every report against an in-memory SQLite database seeded by the
`university` fixture in conftest.py, with "today" pinned to 2026-10-19.
"""

from datetime import date, timedelta
import pytest
from sqlalchemy.exc import OperationalError
from database import Base, Student, Course, Enrollment
from queries import UniversityQueries, StudentAgeGroup, CourseStudentCount
from queries.ages import age_in_years, years_before
from conftest import TODAY


def student_ids(students):
    return [s.student_id for s in students]


def course_ids(courses):
    return [c.course_id for c in courses]


# =============================================================================
# AGE HELPERS
# =============================================================================

def test_age_in_years_counts_365_day_years():
    assert age_in_years(TODAY - timedelta(days=365 * 20), TODAY) == 20.0
    assert age_in_years(TODAY - timedelta(days=365 * 20 + 182), TODAY) == pytest.approx(20.4986, abs=1e-4)


def test_years_before_keeps_calendar_day():
    assert years_before(date(2026, 10, 19), 25) == date(2001, 10, 19)


def test_years_before_clamps_leap_day():
    assert years_before(date(2024, 2, 29), 25) == date(1999, 2, 28)
    assert years_before(date(2024, 2, 29), 4) == date(2020, 2, 29)


# =============================================================================
# ENROLLMENT QUERIES
# =============================================================================

def test_students_enrolled_in_course(queries, university):
    students = queries.get_students_enrolled_in_course(university['algorithms'].course_id)
    assert [s.last_name for s in students] == ['Lovelace', 'Turing', 'Dijkstra']


def test_students_enrolled_in_course_without_enrollments(queries, university):
    assert queries.get_students_enrolled_in_course(university['compilers'].course_id) == []
    assert queries.get_students_enrolled_in_course(999) == []


def test_repeated_enrollment_is_not_deduplicated(db, queries, university):
    db.add(Enrollment(student=university['lovelace'], course=university['algorithms']))
    db.commit()

    students = queries.get_students_enrolled_in_course(university['algorithms'].course_id)
    assert [s.last_name for s in students] == ['Lovelace', 'Turing', 'Dijkstra', 'Lovelace']

    # Distinct-course count and intersection are unaffected
    assert queries.get_course_count_for_student(university['lovelace'].student_id) == 2
    both = queries.get_students_enrolled_in_both_courses(
        university['algorithms'].course_id, university['databases'].course_id
    )
    assert [s.last_name for s in both] == ['Lovelace', 'Dijkstra']


def test_students_not_enrolled_in_course(queries, university):
    students = queries.get_students_not_enrolled_in_course(university['algorithms'].course_id)
    assert [s.last_name for s in students] == ['Hopper', 'Liskov']


def test_enrolled_and_not_enrolled_partition_students(queries, university):
    all_ids = set(student_ids(queries.get_students_ordered_by_last_name()))
    for course_id in [*course_ids([university['algorithms'], university['databases'], university['compilers']]), 999]:
        enrolled = set(student_ids(queries.get_students_enrolled_in_course(course_id)))
        not_enrolled = set(student_ids(queries.get_students_not_enrolled_in_course(course_id)))
        assert enrolled.isdisjoint(not_enrolled)
        assert enrolled | not_enrolled == all_ids


def test_students_enrolled_in_both_courses(queries, university):
    first = university['algorithms'].course_id
    second = university['databases'].course_id

    both = queries.get_students_enrolled_in_both_courses(first, second)
    assert [s.last_name for s in both] == ['Lovelace', 'Dijkstra']

    expected = set(student_ids(queries.get_students_enrolled_in_course(first))) & \
        set(student_ids(queries.get_students_enrolled_in_course(second)))
    assert set(student_ids(both)) == expected


def test_students_enrolled_in_both_with_empty_course(queries, university):
    assert queries.get_students_enrolled_in_both_courses(
        university['algorithms'].course_id, university['compilers'].course_id
    ) == []


def test_students_with_enrollments(queries, university):
    records = queries.get_students_with_enrollments()
    assert [r.student.last_name for r in records] == ['Lovelace', 'Turing', 'Hopper', 'Dijkstra', 'Liskov']

    by_name = {r.student.last_name: r for r in records}
    assert [e.course_id for e in by_name['Lovelace'].enrollments] == [
        university['algorithms'].course_id, university['databases'].course_id
    ]
    assert by_name['Liskov'].enrollments == []


def test_course_count_for_student(db, queries, university):
    assert queries.get_course_count_for_student(university['lovelace'].student_id) == 2
    assert queries.get_course_count_for_student(university['turing'].student_id) == 1
    assert queries.get_course_count_for_student(university['liskov'].student_id) == 0
    assert queries.get_course_count_for_student(999) == 0

    for student in db.query(Student).all():
        distinct_courses = {e.course_id for e in student.enrollments}
        assert queries.get_course_count_for_student(student.student_id) == len(distinct_courses)


# =============================================================================
# COURSE QUERIES
# =============================================================================

def test_courses_taught_by_instructor(queries, university):
    courses = queries.get_courses_taught_by_instructor(university['knuth'].instructor_id)
    assert [c.name for c in courses] == ['Algorithms', 'Compilers']
    assert queries.get_courses_taught_by_instructor(999) == []


def test_courses_with_students_taught_by_instructor(queries, university):
    records = queries.get_courses_with_students_taught_by_instructor(university['knuth'].instructor_id)

    assert [r.course.name for r in records] == ['Algorithms', 'Compilers']
    assert [s.last_name for s in records[0].students] == ['Lovelace', 'Turing', 'Dijkstra']
    assert records[1].students == []


def test_courses_with_students_usable_after_session_closes(db, queries, university):
    instructor_id = university['codd'].instructor_id
    records = queries.get_courses_with_students_taught_by_instructor(instructor_id)
    db.close()

    assert [s.first_name for s in records[0].students] == ['Ada', 'Grace', 'Edsger']


def test_courses_with_more_than_10_students(db, queries):
    big = Course(name='Intro to Programming')
    small = Course(name='Topology')
    db.add_all([big, small])
    for n in range(12):
        student = Student(first_name=f'Big{n}', last_name='Student', date_of_birth=date(2000, 1, 1))
        db.add(Enrollment(student=student, course=big))
    for n in range(3):
        student = Student(first_name=f'Small{n}', last_name='Student', date_of_birth=date(2000, 1, 1))
        db.add(Enrollment(student=student, course=small))
    db.commit()

    assert course_ids(queries.get_courses_with_more_students_than()) == [big.course_id]
    assert course_ids(queries.get_courses_with_more_students_than(11)) == [big.course_id]
    assert queries.get_courses_with_more_students_than(12) == []
    assert course_ids(queries.get_courses_with_more_students_than(2)) == [big.course_id, small.course_id]


def test_course_student_counts(db, queries, university):
    counts = queries.get_course_student_counts()
    assert counts == [
        CourseStudentCount(course_id=university['algorithms'].course_id, student_count=3),
        CourseStudentCount(course_id=university['databases'].course_id, student_count=3),
    ]
    # Compilers has no enrollments and is left out rather than reported as 0
    assert university['compilers'].course_id not in [c.course_id for c in counts]
    assert sum(c.student_count for c in counts) == db.query(Enrollment).count()


# =============================================================================
# STUDENT QUERIES
# =============================================================================

def test_students_older_than_25(queries, university):
    students = queries.get_students_older_than()
    # Turing was born 25 years and 1 day ago; Hopper 25 years minus 1 day ago
    assert [s.last_name for s in students] == ['Lovelace', 'Turing', 'Liskov']


def test_students_born_exactly_on_cutoff_are_excluded(db, queries):
    db.add(Student(first_name='Exact', last_name='Cutoff', date_of_birth=date(2001, 10, 19)))
    db.commit()
    assert queries.get_students_older_than(25) == []


def test_average_student_age(db, queries):
    db.add_all([
        Student(first_name='A', last_name='Twenty', date_of_birth=TODAY - timedelta(days=365 * 20)),
        Student(first_name='B', last_name='Thirty', date_of_birth=TODAY - timedelta(days=365 * 30)),
    ])
    db.commit()
    assert queries.get_average_student_age() == pytest.approx(25.0)


def test_average_student_age_without_students_is_none(queries):
    assert queries.get_average_student_age() is None


def test_youngest_student(queries, university):
    assert queries.get_youngest_student().last_name == 'Dijkstra'


def test_youngest_student_tie_goes_to_first_inserted(db, queries):
    db.add_all([
        Student(first_name='First', last_name='Twin', date_of_birth=date(2006, 1, 1)),
        Student(first_name='Second', last_name='Twin', date_of_birth=date(2006, 1, 1)),
        Student(first_name='Older', last_name='Sibling', date_of_birth=date(2003, 1, 1)),
    ])
    db.commit()
    assert queries.get_youngest_student().first_name == 'First'


def test_youngest_student_without_students_is_none(queries):
    assert queries.get_youngest_student() is None


def test_all_student_names(queries, university):
    assert queries.get_all_student_names() == [
        'Ada Lovelace', 'Alan Turing', 'Grace Hopper', 'Edsger Dijkstra', 'Barbara Liskov'
    ]


def test_group_students_by_age(db, queries, university):
    groups = queries.group_students_by_age()
    # Hopper is 25 by the 365-day measure even though she is not "older than 25"
    assert groups == [
        StudentAgeGroup(age=21, count=1),
        StudentAgeGroup(age=25, count=2),
        StudentAgeGroup(age=28, count=1),
        StudentAgeGroup(age=36, count=1),
    ]
    assert sum(g.count for g in groups) == db.query(Student).count()


def test_group_students_by_age_truncates(db, queries):
    db.add_all([
        Student(first_name='A', last_name='Exact', date_of_birth=TODAY - timedelta(days=365 * 20)),
        Student(first_name='B', last_name='AlmostNext', date_of_birth=TODAY - timedelta(days=365 * 21 - 1)),
    ])
    db.commit()
    assert queries.group_students_by_age() == [StudentAgeGroup(age=20, count=2)]


def test_students_ordered_by_last_name(queries, university):
    students = queries.get_students_ordered_by_last_name()
    assert [s.last_name for s in students] == ['Dijkstra', 'Hopper', 'Liskov', 'Lovelace', 'Turing']


def test_empty_store_returns_empty_results(queries):
    assert queries.get_all_student_names() == []
    assert queries.group_students_by_age() == []
    assert queries.get_course_student_counts() == []
    assert queries.get_students_with_enrollments() == []
    assert queries.get_students_ordered_by_last_name() == []


def test_today_defaults_to_current_date(db):
    db.add(Student(first_name='Old', last_name='Timer', date_of_birth=date(1950, 1, 1)))
    db.commit()
    assert [s.last_name for s in UniversityQueries(db).get_students_older_than()] == ['Timer']


# =============================================================================
# FAILURES
# =============================================================================

def test_storage_errors_propagate(db, queries, caplog):
    Base.metadata.drop_all(bind=db.get_bind())

    with pytest.raises(OperationalError):
        queries.get_all_student_names()
    db.rollback()
    with pytest.raises(OperationalError):
        queries.get_average_student_age()

    assert any('Report query failed' in r.message for r in caplog.records)
