"""
Database Models - Jobly
=======================

SQLAlchemy table definitions. Queries are written as parameterized SQL in the
services; these models own the schema and are handy for seeding.
"""

from sqlalchemy import Column, String, Integer, Numeric, Boolean, Text, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from jobly.db.database import Base


class Company(Base):
    """
    Company that posts jobs, identified by its handle.
    """
    __tablename__ = "companies"

    handle = Column(String(25), primary_key=True)
    name = Column(Text, unique=True, nullable=False)
    num_employees = Column(Integer, CheckConstraint("num_employees >= 0"))
    description = Column(Text, nullable=False)
    logo_url = Column(Text)

    jobs = relationship("Job", back_populates="company", passive_deletes=True)


class Job(Base):
    """
    Job posting belonging to a company.
    """
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    salary = Column(Integer, CheckConstraint("salary >= 0"))
    equity = Column(Numeric, CheckConstraint("equity <= 1.0"))
    company_handle = Column(
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
    )

    company = relationship("Company", back_populates="jobs")


class User(Base):
    """
    User account for authentication.
    """
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)
    password = Column(Text, nullable=False)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)
