"""
API Router - Jobly
==================

Central router for all API endpoints.
"""

from fastapi import APIRouter
from jobly.api import auth, jobs

api_router = APIRouter()

# Token issuance and registration (public)
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"]
)

# Job board
api_router.include_router(
    jobs.router,
    tags=["Jobs"]
)
