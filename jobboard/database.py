"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for job and company storage.
"""

from pathlib import Path

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


class Company(Base):
    """Company that owns job postings."""

    __tablename__ = "companies"
    __table_args__ = (
        CheckConstraint("num_employees >= 0", name="ck_companies_num_employees"),
    )

    handle = Column(String(25), primary_key=True)
    name = Column(Text, nullable=False, unique=True)
    num_employees = Column(Integer)
    description = Column(Text, nullable=False, default="")
    logo_url = Column(Text)


class Job(Base):
    """Job posting model."""

    __tablename__ = "jobs"
    __table_args__ = (
        CheckConstraint("salary >= 0", name="ck_jobs_salary"),
        CheckConstraint("equity <= 1.0", name="ck_jobs_equity"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    salary = Column(Integer)
    equity = Column(Numeric(asdecimal=True))
    company_handle = Column(
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
    )


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _configure_connection(dbapi_connection, connection_record) -> None:
    # SQLite ships with foreign key enforcement off
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    # Built-in lower() only folds ASCII letters
    dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


def get_engine(db_path: Path) -> Engine:
    """
    Create an engine for the SQLite database at db_path.

    Every connection checked out of the engine enforces foreign keys and
    lowercases non-ASCII text, so case-insensitive matching works beyond ASCII.
    """
    engine = create_engine(f"sqlite:///{db_path}")
    event.listen(engine, "connect", _configure_connection)
    return engine


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = get_engine(db_path)
    Base.metadata.create_all(engine)
    engine.dispose()


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    Session = sessionmaker(bind=get_engine(db_path))
    return Session()
