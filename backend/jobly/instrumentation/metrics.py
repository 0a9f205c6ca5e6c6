from fastapi import APIRouter, Response
from prometheus_client import Counter, CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()

# Counters
JOB_WRITES = Counter("jobly_job_writes_total", "Job writes", ["operation"])
LOGIN_FAILURES = Counter("jobly_login_failures_total", "Rejected credential checks")
REGISTRATIONS = Counter("jobly_registrations_total", "New user registrations")


@router.get("/metrics")
def metrics() -> Response:
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


def observe_job_write(operation: str) -> None:
    JOB_WRITES.labels(operation=operation).inc()


def observe_login_failure() -> None:
    LOGIN_FAILURES.inc()


def observe_registration() -> None:
    REGISTRATIONS.inc()
