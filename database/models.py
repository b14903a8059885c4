from sqlalchemy import (
    Column, Integer, String, Text, Date, ForeignKey, Table, Index
)
from sqlalchemy.orm import relationship
from datetime import date
from .connection import Base


# Many-to-many link between courses and the instructors who teach them
course_instructors = Table(
    'course_instructors',
    Base.metadata,
    Column('course_id', Integer, ForeignKey('courses.course_id'), primary_key=True),
    Column('instructor_id', Integer, ForeignKey('instructors.instructor_id'), primary_key=True),
)


class Student(Base):
    __tablename__ = 'students'

    student_id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False, index=True)
    date_of_birth = Column(Date, nullable=False, index=True)

    # Relationships
    enrollments = relationship('Enrollment', back_populates='student', order_by='Enrollment.enrollment_id')

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<Student {self.first_name} {self.last_name} ({self.student_id})>"


class Course(Base):
    __tablename__ = 'courses'

    course_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(Text)

    # Relationships
    enrollments = relationship('Enrollment', back_populates='course', order_by='Enrollment.enrollment_id')
    instructors = relationship('Instructor', secondary=course_instructors, back_populates='courses')

    def __repr__(self):
        return f"<Course {self.name} ({self.course_id})>"


class Instructor(Base):
    __tablename__ = 'instructors'

    instructor_id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)

    # Relationships
    courses = relationship('Course', secondary=course_instructors, back_populates='instructors')

    def __repr__(self):
        return f"<Instructor {self.first_name} {self.last_name} ({self.instructor_id})>"


class Enrollment(Base):
    __tablename__ = 'enrollments'

    enrollment_id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey('students.student_id'), nullable=False)
    course_id = Column(Integer, ForeignKey('courses.course_id'), nullable=False)
    enrollment_date = Column(Date, nullable=False, default=date.today)

    # Relationships
    student = relationship('Student', back_populates='enrollments')
    course = relationship('Course', back_populates='enrollments')

    # (student_id, course_id) is expected to be unique, but that is left to
    # whoever writes enrollments; diagnose_database.py reports violations.
    __table_args__ = (
        Index('idx_enrollment_student_course', 'student_id', 'course_id'),
        Index('idx_enrollment_course', 'course_id'),
    )

    def __repr__(self):
        return f"<Enrollment {self.student_id} -> {self.course_id} @ {self.enrollment_date}>"
