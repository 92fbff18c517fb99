"""
Tests for database.py - SQLite schema and connections.
"""

from decimal import Decimal

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from jobboard.database import Company, Job, init_database, get_session


class TestDatabaseInit:
    """Test database initialization."""

    def test_init_creates_database_file(self, tmp_path):
        """Test that init_database creates the database file."""
        db_path = tmp_path / "test.db"
        assert not db_path.exists()

        init_database(db_path)

        assert db_path.exists()

    def test_init_creates_tables(self, tmp_path):
        """Test that init_database creates the companies and jobs tables."""
        db_path = tmp_path / "test.db"
        init_database(db_path)

        session = get_session(db_path)
        assert session.query(Company).count() == 0
        assert session.query(Job).count() == 0
        session.close()

    def test_init_creates_parent_directories(self, tmp_path):
        """Test that init_database creates parent directories if missing."""
        db_path = tmp_path / "nested" / "dir" / "test.db"
        assert not db_path.parent.exists()

        init_database(db_path)

        assert db_path.exists()

    def test_init_is_idempotent(self, tmp_path):
        """Running init twice keeps existing rows."""
        db_path = tmp_path / "test.db"
        init_database(db_path)
        session = get_session(db_path)
        session.add(Company(handle="acme", name="Acme", description=""))
        session.commit()
        session.close()

        init_database(db_path)

        session = get_session(db_path)
        assert session.query(Company).count() == 1
        session.close()


class TestConstraints:
    """Test constraints the store enforces on jobs."""

    def test_foreign_keys_enabled(self, db_session):
        """Every session connection has foreign keys switched on."""
        assert db_session.execute(text("PRAGMA foreign_keys")).scalar() == 1

    def test_job_requires_existing_company(self, db_session):
        db_session.add(Job(title="engineer", company_handle="missing"))

        with pytest.raises(IntegrityError):
            db_session.commit()

    def test_job_requires_title(self, db_session):
        db_session.add(Job(company_handle="c1"))

        with pytest.raises(IntegrityError):
            db_session.commit()

    def test_deleting_company_deletes_its_jobs(self, db_session):
        db_session.add(Job(title="engineer", company_handle="c1"))
        db_session.add(Job(title="analyst", company_handle="c2"))
        db_session.commit()

        db_session.execute(text("DELETE FROM companies WHERE handle = 'c1'"))
        db_session.commit()

        assert [job.title for job in db_session.query(Job).all()] == ["analyst"]

    def test_equity_round_trips_as_decimal(self, db_session):
        db_session.add(Job(title="engineer", equity=Decimal("0.123"), company_handle="c1"))
        db_session.commit()

        equity = db_session.query(Job.equity).scalar()
        assert isinstance(equity, Decimal)
        assert equity == Decimal("0.123")
