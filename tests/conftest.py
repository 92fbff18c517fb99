"""
Pytest configuration and shared fixtures.
"""

from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List

import pytest

from jobboard.database import Company, init_database, get_session
from jobboard.logger import get_logger, reset_logger
from jobboard.repositories import JobRepository


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path_factory):
    """Route the global logger to a temp dir for every test."""
    reset_logger()
    logger = get_logger(level="DEBUG", log_dir=tmp_path_factory.mktemp("logs"), enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def db_path(tmp_path) -> Path:
    """Initialized, empty SQLite database."""
    path = tmp_path / "test.db"
    init_database(path)
    return path


@pytest.fixture
def sample_companies() -> List[Dict[str, Any]]:
    return [
        {
            "handle": "c1",
            "name": "C1",
            "num_employees": 1,
            "description": "Desc1",
            "logo_url": "http://c1.img",
        },
        {
            "handle": "c2",
            "name": "C2",
            "num_employees": 2,
            "description": "Desc2",
            "logo_url": "http://c2.img",
        },
        {
            "handle": "c3",
            "name": "C3",
            "num_employees": 3,
            "description": "Desc3",
            "logo_url": None,
        },
    ]


@pytest.fixture
def db_session(db_path, sample_companies):
    """Session on a database holding three companies and no jobs."""
    session = get_session(db_path)
    for company in sample_companies:
        session.add(Company(**company))
    session.commit()
    yield session
    session.close()


@pytest.fixture
def repo(db_session, quiet_logger) -> JobRepository:
    return JobRepository(db_session, logger=quiet_logger)


@pytest.fixture
def seeded_jobs(repo) -> List[Dict[str, Any]]:
    """Four jobs across two companies, created through the repository."""
    return [
        repo.create("Software Engineer", 150000, Decimal("0.05"), "c1"),
        repo.create("Data engineering lead", 120000, Decimal("0"), "c1"),
        repo.create("Accountant", 60000, None, "c2"),
        repo.create("Barista", None, Decimal("0.01"), "c2"),
    ]
