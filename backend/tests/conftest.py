"""
Pytest configuration for Jobly.

- Forces SQLite + test secrets so the app can start without external deps.
- Keeps import path stable for `jobly` package.
- Reseeds companies, users and jobs before every test.
"""

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Minimal environment for local tests (no external services required)
os.environ.setdefault("JOBLY_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite:///./jobly-test.db")
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("AUTH_RATE_LIMIT", "1000/minute")

import pytest
from sqlalchemy import delete

from jobly.db.database import SessionLocal, init_db
from jobly.db.models import Company, Job, User
from jobly.services.auth_service import create_token, hash_password
from jobly.services.job_service import JobService


@pytest.fixture(scope="session", autouse=True)
def _tables():
    init_db()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def job_ids(db):
    """Reset all tables and return the ids of the seeded jobs, in title order."""
    db.execute(delete(Job))
    db.execute(delete(User))
    db.execute(delete(Company))
    db.commit()

    db.add_all([
        Company(handle="c1", name="C1", num_employees=1, description="Desc1", logo_url="http://c1.img"),
        Company(handle="c2", name="C2", num_employees=2, description="Desc2", logo_url="http://c2.img"),
        Company(handle="c3", name="C3", num_employees=3, description="Desc3", logo_url="http://c3.img"),
    ])
    db.add_all([
        User(
            username="u1",
            password=hash_password("password1"),
            first_name="U1F",
            last_name="U1L",
            email="user1@user.com",
            is_admin=False,
        ),
        User(
            username="admin",
            password=hash_password("password2"),
            first_name="AdF",
            last_name="AdL",
            email="admin@user.com",
            is_admin=True,
        ),
    ])
    db.commit()

    jobs = JobService(db)
    return [
        jobs.create({"title": "Professor", "salary": 100, "equity": "0.1", "companyHandle": "c1"})["id"],
        jobs.create({"title": "Software Engineer", "salary": 200, "equity": "0", "companyHandle": "c1"})["id"],
        jobs.create({"title": "Unemployed", "salary": None, "equity": None, "companyHandle": "c1"})["id"],
    ]


@pytest.fixture
def u1_token():
    return create_token({"username": "u1", "isAdmin": False})


@pytest.fixture
def admin_token():
    return create_token({"username": "admin", "isAdmin": True})
