"""Shared pytest fixtures: an in-memory database and a small university."""

from datetime import date
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from database import Base, Student, Course, Instructor, Enrollment
from queries import UniversityQueries

TODAY = date(2026, 10, 19)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def queries(db):
    return UniversityQueries(db, today=lambda: TODAY)


@pytest.fixture
def university(db):
    """
    Five students, three courses, two instructors.

    Algorithms (Knuth):  Lovelace, Turing, Dijkstra
    Databases  (Codd):   Lovelace, Hopper, Dijkstra
    Compilers  (Knuth):  nobody
    Liskov is not enrolled anywhere.
    """
    lovelace = Student(first_name='Ada', last_name='Lovelace', date_of_birth=date(1990, 5, 1))
    turing = Student(first_name='Alan', last_name='Turing', date_of_birth=date(2001, 10, 18))
    hopper = Student(first_name='Grace', last_name='Hopper', date_of_birth=date(2001, 10, 20))
    dijkstra = Student(first_name='Edsger', last_name='Dijkstra', date_of_birth=date(2005, 3, 15))
    liskov = Student(first_name='Barbara', last_name='Liskov', date_of_birth=date(1998, 7, 7))

    algorithms = Course(name='Algorithms', description='Sorting, searching and graphs')
    databases = Course(name='Databases', description='Relational theory and SQL')
    compilers = Course(name='Compilers', description=None)

    knuth = Instructor(first_name='Donald', last_name='Knuth', courses=[algorithms, compilers])
    codd = Instructor(first_name='Edgar', last_name='Codd', courses=[databases])

    db.add_all([lovelace, turing, hopper, dijkstra, liskov])
    db.add_all([algorithms, databases, compilers, knuth, codd])
    db.flush()

    for student, course in [
        (lovelace, algorithms),
        (lovelace, databases),
        (turing, algorithms),
        (hopper, databases),
        (dijkstra, algorithms),
        (dijkstra, databases),
    ]:
        db.add(Enrollment(student=student, course=course, enrollment_date=date(2026, 9, 1)))
        db.flush()
    db.commit()

    return {
        'lovelace': lovelace,
        'turing': turing,
        'hopper': hopper,
        'dijkstra': dijkstra,
        'liskov': liskov,
        'algorithms': algorithms,
        'databases': databases,
        'compilers': compilers,
        'knuth': knuth,
        'codd': codd,
    }
