"""
Job Service - Job Repository
============================

CRUD over the ``jobs`` table, joined against ``companies``.

Responsibilities:
- Job creation, partial update and deletion
- Job search with optional filters
- Job detail with its company nested

NOT responsible for:
- Input validation (see the pydantic schemas in ``jobly.api.jobs``)
- Access control (see ``ensure_admin`` in ``jobly.services.auth_service``)
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Tuple
import logging

from sqlalchemy.orm import Session

from jobly.core.errors import BadRequestError, NotFoundError
from jobly.db.database import run_query
from jobly.db.sql import sql_for_partial_update
from jobly.instrumentation.metrics import observe_job_write

logger = logging.getLogger(__name__)

JOB_RETURNING = 'id, title, salary, equity, company_handle AS "companyHandle"'

# companyHandle is fixed once a job exists
UPDATABLE_FIELDS = ("title", "salary", "equity")

# Largest value an INTEGER column (id, salary) can hold
MAX_INT = 2**31 - 1


@dataclass
class JobFilters:
    """Optional search filters for listing jobs."""
    title: Optional[str] = None
    min_salary: Optional[int] = None
    has_equity: Optional[bool] = None


def _escape_like(value: str) -> str:
    """Make LIKE wildcards in ``value`` match literally (escape char is backslash)."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _ensure_storable_id(job_id: int) -> None:
    # Ids outside the INTEGER range can't exist, and the driver rejects them
    if not -MAX_INT - 1 <= job_id <= MAX_INT:
        raise NotFoundError(f"No job: {job_id}")


def build_job_filter(filters: Optional[JobFilters]) -> Tuple[List[str], List[Any]]:
    """
    Turn search filters into WHERE expressions and their bound values.

    Only filters that bind a value consume a placeholder number, so
    ``has_equity`` never shifts the numbering of the others.

    Returns:
        (where_expressions, query_values)
    """
    where_exps: List[str] = []
    query_values: List[Any] = []

    if filters is None:
        return where_exps, query_values

    if filters.title is not None:
        query_values.append(f"%{_escape_like(filters.title)}%")
        where_exps.append(f"j.title ILIKE ${len(query_values)} ESCAPE '\\'")

    if filters.min_salary is not None:
        query_values.append(filters.min_salary)
        where_exps.append(f"j.salary >= ${len(query_values)}")

    if filters.has_equity is True:
        where_exps.append("j.equity > 0")

    return where_exps, query_values


def _equity_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(Decimal(str(value)))


def _format_job(row: Dict[str, Any]) -> Dict[str, Any]:
    row["equity"] = _equity_str(row.get("equity"))
    return row


class JobService:
    """Job repository over a single database session."""

    def __init__(self, db: Session):
        """
        Initialize service with database session.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a job.

        Args:
            data: {title, salary, equity, companyHandle}

        Returns:
            {id, title, salary, equity, companyHandle}

        Raises:
            sqlalchemy.exc.IntegrityError: If companyHandle names no company
        """
        rows = run_query(
            self.db,
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {JOB_RETURNING}""",
            [
                data["title"],
                data.get("salary"),
                data.get("equity"),
                data["companyHandle"],
            ],
            commit=True,
        )
        job = _format_job(rows[0])

        observe_job_write("create")
        logger.info(f"Job created: {job['id']} ({job['title']}) at {job['companyHandle']}")
        return job

    def find_all(self, filters: Optional[JobFilters] = None) -> List[Dict[str, Any]]:
        """
        List jobs ordered by title.

        Returns:
            [{id, title, salary, equity, companyHandle, companyName}, ...]
        """
        query = """SELECT j.id,
                          j.title,
                          j.salary,
                          j.equity,
                          j.company_handle AS "companyHandle",
                          c.name AS "companyName"
                   FROM jobs j
                     LEFT JOIN companies AS c ON c.handle = j.company_handle"""

        where_exps, query_values = build_job_filter(filters)
        if where_exps:
            query += " WHERE " + " AND ".join(where_exps)

        query += " ORDER BY j.title"

        return [_format_job(row) for row in run_query(self.db, query, query_values)]

    def get(self, job_id: int) -> Dict[str, Any]:
        """
        Get a job with its company.

        Returns:
            {id, title, salary, equity, company}
            where company is {handle, name, description, numEmployees, logoUrl}

        Raises:
            NotFoundError: If no job has this id
        """
        _ensure_storable_id(job_id)

        rows = run_query(
            self.db,
            f"""SELECT {JOB_RETURNING}
                FROM jobs
                WHERE id = $1""",
            [job_id],
        )
        if not rows:
            raise NotFoundError(f"No job: {job_id}")

        job = _format_job(rows[0])

        company_rows = run_query(
            self.db,
            """SELECT handle,
                      name,
                      description,
                      num_employees AS "numEmployees",
                      logo_url AS "logoUrl"
               FROM companies
               WHERE handle = $1""",
            [job.pop("companyHandle")],
        )
        job["company"] = company_rows[0] if company_rows else None

        return job

    def update(self, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partially update a job.

        Only the fields present in ``data`` change. Data can include
        {title, salary, equity}.

        Returns:
            {id, title, salary, equity, companyHandle}

        Raises:
            BadRequestError: If data is empty or names a field that can't change
            NotFoundError: If no job has this id
        """
        rejected = sorted(set(data) - set(UPDATABLE_FIELDS))
        if rejected:
            raise BadRequestError(f"Cannot update job fields: {', '.join(rejected)}")

        update = sql_for_partial_update(data, {})
        _ensure_storable_id(job_id)
        id_var_idx = f"${len(update.values) + 1}"

        rows = run_query(
            self.db,
            f"""UPDATE jobs
                SET {update.set_cols}
                WHERE id = {id_var_idx}
                RETURNING {JOB_RETURNING}""",
            [*update.values, job_id],
            commit=True,
        )
        if not rows:
            raise NotFoundError(f"No job: {job_id}")

        observe_job_write("update")
        logger.info(f"Job updated: {job_id} ({', '.join(data)})")
        return _format_job(rows[0])

    def remove(self, job_id: int) -> None:
        """
        Delete a job.

        Raises:
            NotFoundError: If no job has this id
        """
        _ensure_storable_id(job_id)

        rows = run_query(
            self.db,
            """DELETE
               FROM jobs
               WHERE id = $1
               RETURNING id""",
            [job_id],
            commit=True,
        )
        if not rows:
            raise NotFoundError(f"No job: {job_id}")

        observe_job_write("delete")
        logger.info(f"Job deleted: {job_id}")
