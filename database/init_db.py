#!/usr/bin/env python3
"""
Database initialization script.
Run this to create all tables.
"""

from sqlalchemy import inspect
from .connection import engine, Base, DATABASE_URL
from .models import Student, Course, Instructor, Enrollment, course_instructors
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

EXPECTED_TABLES = {'students', 'courses', 'instructors', 'enrollments', 'course_instructors'}


def init_database(drop_existing=False, bind=None):
    """
    Initialize the database by creating all tables.

    Args:
        drop_existing (bool): If True, drop all existing tables first (DANGER!)
        bind: Engine to use instead of the configured one
    """
    bind = bind if bind is not None else engine
    logger.info(f"Initializing database at: {bind.url}")

    if drop_existing:
        logger.warning("Dropping all existing tables...")
        Base.metadata.drop_all(bind=bind)
        logger.info("Tables dropped.")

    logger.info("Creating tables...")
    Base.metadata.create_all(bind=bind)
    logger.info("Tables created successfully!")

    for table in Base.metadata.sorted_tables:
        logger.info(f"  - {table.name}")


def verify_database(bind=None):
    """Verify database connection and tables exist"""
    inspector = inspect(bind if bind is not None else engine)
    tables = inspector.get_table_names()

    logger.info(f"Database contains {len(tables)} tables:")
    for table in tables:
        logger.info(f"  - {table}")

    missing_tables = EXPECTED_TABLES - set(tables)

    if missing_tables:
        logger.error(f"Missing tables: {sorted(missing_tables)}")
        return False

    logger.info("All expected tables exist!")
    return True


if __name__ == '__main__':
    import sys

    drop = '--drop' in sys.argv

    if drop:
        confirm = input(f"⚠️  This will DELETE ALL DATA in {DATABASE_URL}. Are you sure? (yes/no): ")
        if confirm.lower() != 'yes':
            print("Aborted.")
            sys.exit(0)

    init_database(drop_existing=drop)
    verify_database()
