"""
Jobs API Endpoints
==================

Public search and detail; admin-only create, update and delete.
"""

from typing import Optional
import logging

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.errors import BadRequestError, format_validation_errors
from jobly.db.database import get_db
from jobly.services.auth_service import ensure_admin
from jobly.services.job_service import MAX_INT, JobFilters, JobService

logger = logging.getLogger(__name__)
router = APIRouter()

EQUITY_PATTERN = r"^(0(\.\d+)?|1(\.0+)?)$"


# ============================================================================
# Request Models
# ============================================================================

class JobNewRequest(BaseModel):
    """Job creation request."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(default=None, ge=0, le=MAX_INT)
    equity: Optional[str] = Field(default=None, pattern=EQUITY_PATTERN)
    company_handle: str = Field(..., alias="companyHandle", min_length=1, max_length=25)


class JobUpdateRequest(BaseModel):
    """Job partial update request. companyHandle is not accepted."""
    model_config = ConfigDict(extra="forbid")
    title: Optional[str] = Field(default=None, min_length=1)
    salary: Optional[int] = Field(default=None, ge=0, le=MAX_INT)
    equity: Optional[str] = Field(default=None, pattern=EQUITY_PATTERN)

    # salary and equity may be cleared; title may only be omitted
    @field_validator("title")
    @classmethod
    def title_not_null(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("title may not be null")
        return value


class JobSearchQuery(BaseModel):
    """Query string filters for job search."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    title: Optional[str] = Field(default=None, min_length=1)
    min_salary: Optional[int] = Field(default=None, alias="minSalary", ge=0, le=MAX_INT)
    has_equity: Optional[bool] = Field(default=None, alias="hasEquity")


def job_search_filters(request: Request) -> JobFilters:
    """Validate the query string into JobFilters."""
    try:
        query = JobSearchQuery.model_validate(dict(request.query_params))
    except ValidationError as e:
        raise BadRequestError(format_validation_errors(e.errors()))

    return JobFilters(
        title=query.title,
        min_salary=query.min_salary,
        has_equity=query.has_equity,
    )


# ============================================================================
# Endpoints
# ============================================================================

@router.post("/jobs", status_code=status.HTTP_201_CREATED, dependencies=[Depends(ensure_admin)])
def create_job(request: JobNewRequest, db: Session = Depends(get_db)):
    """
    Create a job.

    Returns { job: { id, title, salary, equity, companyHandle } }
    """
    try:
        job = JobService(db).create(request.model_dump(by_alias=True))
    except IntegrityError:
        db.rollback()
        logger.warning(f"Job rejected, unknown company: {request.company_handle}")
        raise BadRequestError(f"No company: {request.company_handle}")

    return {"job": job}


@router.get("/jobs")
def list_jobs(
    filters: JobFilters = Depends(job_search_filters),
    db: Session = Depends(get_db),
):
    """
    List jobs ordered by title.

    Filters:
    - title: case-insensitive substring
    - minSalary: salary at least this much
    - hasEquity: if true, only jobs with non-zero equity; if false, all jobs
    """
    return {"jobs": JobService(db).find_all(filters)}


@router.get("/jobs/{job_id}")
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Get a job.

    Returns { job: { id, title, salary, equity, company } }
    where company is { handle, name, description, numEmployees, logoUrl }
    """
    return {"job": JobService(db).get(job_id)}


@router.patch("/jobs/{job_id}", dependencies=[Depends(ensure_admin)])
def update_job(job_id: int, request: JobUpdateRequest, db: Session = Depends(get_db)):
    """
    Patch a job. Fields can be: { title, salary, equity }

    Returns { job: { id, title, salary, equity, companyHandle } }
    """
    job = JobService(db).update(job_id, request.model_dump(exclude_unset=True))
    return {"job": job}


@router.delete("/jobs/{job_id}", dependencies=[Depends(ensure_admin)])
def delete_job(job_id: int, db: Session = Depends(get_db)):
    """
    Delete a job.

    Returns { deleted: id }
    """
    JobService(db).remove(job_id)
    return {"deleted": job_id}
