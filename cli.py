#!/usr/bin/env python3
"""
University Reports - Command Line Interface

A menu-driven CLI for running the canned student, course and enrollment
reports against the configured database.
"""

import traceback
from typing import Callable, List, Optional
from database import get_db_session
from queries import UniversityQueries, ReportFormatter


class MenuItem:
    """Represents a single menu item."""

    def __init__(self, key: str, label: str, action: Callable, description: str = ""):
        self.key = key
        self.label = label
        self.action = action
        self.description = description

    def display(self) -> str:
        """Return formatted menu item for display."""
        return f"  {self.key}. {self.label}"


class MenuSystem:
    """Handles menu display and navigation."""

    def __init__(self, title: str):
        self.title = title
        self.items: List[MenuItem] = []
        self.running = True

    def add_item(self, key: str, label: str, action: Callable, description: str = ""):
        """Add a menu item."""
        self.items.append(MenuItem(key, label, action, description))

    def add_separator(self):
        """Add a visual separator."""
        self.items.append(MenuItem("", "", lambda: None))

    def display(self):
        """Display the menu."""
        print("\n" + "="*80)
        print(self.title)
        print("="*80)
        print()

        for item in self.items:
            if item.key:
                print(item.display())
            else:
                print()

        print("\n  0. Exit")
        print("="*80)

    def get_choice(self) -> str:
        """Get user's menu choice."""
        while True:
            choice = input("\nEnter your choice: ").strip()
            if choice == "0":
                return "0"

            if any(item.key == choice for item in self.items if item.key):
                return choice

            print("✗ Invalid choice. Please try again.")

    def run(self):
        """Run the menu loop."""
        while self.running:
            self.display()
            choice = self.get_choice()

            if choice == "0":
                self.running = False
                print("\nGoodbye!")
                break

            for item in self.items:
                if item.key == choice:
                    print("\n" + "="*80)
                    try:
                        item.action()
                    except KeyboardInterrupt:
                        print("\n\n⚠️  Action cancelled by user.")
                    except Exception as e:
                        print(f"\n✗ Error: {str(e)}")
                        traceback.print_exc()
                    print("="*80)
                    input("\n[Press Enter to continue]")
                    break


class CLIActions:
    """All CLI actions organized by category."""

    def __init__(self, queries: UniversityQueries):
        self.queries = queries

    # =========================================================================
    # ENROLLMENT REPORTS
    # =========================================================================

    def students_in_course(self):
        """List students enrolled in a course."""
        print("STUDENTS ENROLLED IN COURSE")
        print("-" * 80)
        course_id = self._ask_id("Enter course ID: ")
        if course_id is None:
            return
        students = self.queries.get_students_enrolled_in_course(course_id)
        print(ReportFormatter.format_student_list(students, f"COURSE {course_id}"))

    def students_not_in_course(self):
        """List students not enrolled in a course."""
        print("STUDENTS NOT ENROLLED IN COURSE")
        print("-" * 80)
        course_id = self._ask_id("Enter course ID: ")
        if course_id is None:
            return
        students = self.queries.get_students_not_enrolled_in_course(course_id)
        print(ReportFormatter.format_student_list(students, f"NOT IN COURSE {course_id}"))

    def students_in_both_courses(self):
        """List students enrolled in two given courses."""
        print("STUDENTS ENROLLED IN BOTH COURSES")
        print("-" * 80)
        first = self._ask_id("Enter first course ID: ")
        if first is None:
            return
        second = self._ask_id("Enter second course ID: ")
        if second is None:
            return
        students = self.queries.get_students_enrolled_in_both_courses(first, second)
        print(ReportFormatter.format_student_list(students, f"IN COURSES {first} AND {second}"))

    def students_with_enrollments(self):
        print("STUDENTS WITH ENROLLMENTS")
        print("-" * 80)
        print(ReportFormatter.format_students_with_enrollments(self.queries.get_students_with_enrollments()))

    def course_count_for_student(self):
        print("COURSE COUNT FOR STUDENT")
        print("-" * 80)
        student_id = self._ask_id("Enter student ID: ")
        if student_id is None:
            return
        count = self.queries.get_course_count_for_student(student_id)
        print(f"\nStudent {student_id} is enrolled in {count} course(s)")

    # =========================================================================
    # COURSE REPORTS
    # =========================================================================

    def courses_by_instructor(self):
        """List courses taught by an instructor, with enrolled students."""
        print("COURSES BY INSTRUCTOR")
        print("-" * 80)
        instructor_id = self._ask_id("Enter instructor ID: ")
        if instructor_id is None:
            return

        show_students = input("Include enrolled students? (y/n): ").strip().lower() == 'y'
        if show_students:
            records = self.queries.get_courses_with_students_taught_by_instructor(instructor_id)
            print(ReportFormatter.format_courses_with_students(records))
        else:
            courses = self.queries.get_courses_taught_by_instructor(instructor_id)
            print(ReportFormatter.format_course_list(courses, f"INSTRUCTOR {instructor_id}"))

    def popular_courses(self):
        print("COURSES WITH MORE THAN 10 STUDENTS")
        print("-" * 80)
        courses = self.queries.get_courses_with_more_students_than(10)
        print(ReportFormatter.format_course_list(courses, "POPULAR COURSES"))

    def course_student_counts(self):
        print("STUDENTS PER COURSE")
        print("-" * 80)
        print(ReportFormatter.format_course_counts(self.queries.get_course_student_counts()))

    # =========================================================================
    # STUDENT REPORTS
    # =========================================================================

    def students_over_25(self):
        print("STUDENTS OLDER THAN 25")
        print("-" * 80)
        students = self.queries.get_students_older_than(25)
        print(ReportFormatter.format_student_list(students, "OLDER THAN 25"))

    def average_age(self):
        print("AVERAGE STUDENT AGE")
        print("-" * 80)
        print(ReportFormatter.format_average_age(self.queries.get_average_student_age()))

    def youngest_student(self):
        print("YOUNGEST STUDENT")
        print("-" * 80)
        print(ReportFormatter.format_single_student(self.queries.get_youngest_student()))

    def student_names(self):
        print("ALL STUDENT NAMES")
        print("-" * 80)
        names = self.queries.get_all_student_names()
        if not names:
            print("No students found.")
            return
        for name in names:
            print(f"  {name}")

    def age_groups(self):
        print("STUDENTS BY AGE")
        print("-" * 80)
        print(ReportFormatter.format_age_groups(self.queries.group_students_by_age()))

    def students_by_last_name(self):
        print("STUDENTS BY LAST NAME")
        print("-" * 80)
        students = self.queries.get_students_ordered_by_last_name()
        print(ReportFormatter.format_student_list(students, "ALL STUDENTS"))

    # =========================================================================
    # HELPER METHODS
    # =========================================================================

    def _ask_id(self, prompt: str) -> Optional[int]:
        """Prompt for a numeric ID. Returns None on invalid input."""
        raw = input(prompt).strip()
        try:
            return int(raw)
        except ValueError:
            print(f"✗ Invalid ID '{raw}'")
            return None


def build_menu(actions: CLIActions) -> MenuSystem:
    menu = MenuSystem("University Reports")

    menu.add_item("1", "Students enrolled in a course", actions.students_in_course)
    menu.add_item("2", "Students not enrolled in a course", actions.students_not_in_course)
    menu.add_item("3", "Students enrolled in both of two courses", actions.students_in_both_courses)
    menu.add_item("4", "Students with their enrollments", actions.students_with_enrollments)
    menu.add_item("5", "Course count for a student", actions.course_count_for_student)

    menu.add_separator()

    menu.add_item("6", "Courses taught by an instructor", actions.courses_by_instructor)
    menu.add_item("7", "Courses with more than 10 students", actions.popular_courses)
    menu.add_item("8", "Students per course", actions.course_student_counts)

    menu.add_separator()

    menu.add_item("9", "Students older than 25", actions.students_over_25)
    menu.add_item("10", "Average student age", actions.average_age)
    menu.add_item("11", "Youngest student", actions.youngest_student)
    menu.add_item("12", "All student names", actions.student_names)
    menu.add_item("13", "Students grouped by age", actions.age_groups)
    menu.add_item("14", "Students ordered by last name", actions.students_by_last_name)

    return menu


def main():
    """Main CLI entry point."""
    with get_db_session() as db:
        actions = CLIActions(UniversityQueries(db))
        build_menu(actions).run()


if __name__ == '__main__':
    main()
