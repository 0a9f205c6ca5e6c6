"""
Database Configuration - Jobly
==============================

Engine, session factory and the raw-SQL helper used by the services.
"""

import re
from typing import Any, Dict, Generator, List, Optional, Sequence

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker, Session

from jobly.core.settings import settings

DATABASE_URL = settings.DATABASE_URL


# Create SQLAlchemy engine
if DATABASE_URL.startswith("sqlite"):
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        pool_pre_ping=True,
        echo=False,
    )

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
else:
    engine = create_engine(
        DATABASE_URL,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=10,
        max_overflow=20,
        echo=False,
    )

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()

# Ensure models are registered with Base.metadata before init_db()
from jobly.db import models  # noqa: E402,F401


_PLACEHOLDER = re.compile(r"\$(\d+)")


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @app.get("/jobs")
        def read_jobs(db: Session = Depends(get_db)):
            return JobService(db).find_all()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Initialize database - create all tables.

    Call this on application startup.
    """
    Base.metadata.create_all(bind=engine)


def run_query(
    db: Session,
    sql: str,
    values: Optional[Sequence[Any]] = None,
    commit: bool = False,
) -> List[Dict[str, Any]]:
    """
    Execute SQL written with ``$1, $2, ...`` placeholders.

    Args:
        db: SQLAlchemy database session
        sql: Statement using positional ``$n`` placeholders
        values: Bound values, ``values[0]`` binds ``$1``
        commit: Commit the session after reading the rows

    Returns:
        Result rows as plain dicts (empty for statements without rows)
    """
    params = {f"p{i}": value for i, value in enumerate(values or [], start=1)}
    statement = _PLACEHOLDER.sub(r":p\1", sql)

    # SQLite LIKE is already case-insensitive for ASCII
    if db.get_bind().dialect.name == "sqlite":
        statement = statement.replace(" ILIKE ", " LIKE ")

    result = db.execute(text(statement), params)
    rows = [dict(row) for row in result.mappings().all()] if result.returns_rows else []

    if commit:
        db.commit()

    return rows
