from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
CURRENT_DIR = Path(os.path.dirname(os.path.abspath(__file__))).parent
load_dotenv((CURRENT_DIR / '.env').as_posix())

# Create base class for models
Base = declarative_base()

# Database configuration
DB_TYPE = os.getenv('DB_TYPE', 'sqlite')  # 'sqlite' or 'postgresql'
DB_ECHO = os.getenv('DB_ECHO', 'False') == 'True'  # Set to True for SQL logging

if DB_TYPE == 'postgresql':
    # PostgreSQL connection
    DB_USER = os.getenv('DB_USER', 'postgres')
    DB_PASSWORD = os.getenv('DB_PASSWORD', '')
    DB_HOST = os.getenv('DB_HOST', 'localhost')
    DB_PORT = os.getenv('DB_PORT', '5432')
    DB_NAME = os.getenv('DB_NAME', 'university_db')

    DATABASE_URL = f"postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"

    engine = create_engine(
        DATABASE_URL,
        echo=DB_ECHO,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20
    )
else:
    # SQLite connection (default)
    db_path = Path(os.getenv('DB_PATH', (CURRENT_DIR / 'university.db').as_posix()))
    DATABASE_URL = f"sqlite:///{db_path}"

    engine = create_engine(
        DATABASE_URL,
        echo=DB_ECHO,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )

# Create session factory. Report queries never write, so nothing needs autoflush.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def get_db_session():
    """
    Get a database session. Use as context manager:

    with get_db_session() as session:
        queries = UniversityQueries(session)
        students = queries.get_students_ordered_by_last_name()
    """
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def get_db():
    """Get a database session (for non-context manager usage)"""
    return SessionLocal()
