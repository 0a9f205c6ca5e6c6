"""
Authentication API Endpoints
=============================

Token issuance and registration.
"""

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from sqlalchemy.orm import Session
import logging

from jobly.core.limiter import limiter
from jobly.core.settings import settings
from jobly.db.database import get_db
from jobly.services.auth_service import create_token
from jobly.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================

class TokenRequest(BaseModel):
    """Username/password login request."""
    model_config = ConfigDict(extra="forbid")
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    """User registration request."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=20)
    first_name: str = Field(..., alias="firstName", min_length=1, max_length=25)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=25)
    email: EmailStr


class TokenResponse(BaseModel):
    """Signed token for the authenticated user."""
    token: str


# ============================================================================
# Endpoints
# ============================================================================

@router.post("/token", response_model=TokenResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
def get_token(
    request: Request,
    payload: TokenRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return a token.

    Unknown users and wrong passwords get the same 401.
    """
    user = UserService(db).authenticate(payload.username, payload.password)
    logger.info(f"User logged in: {user['username']}")

    return TokenResponse(token=create_token(user))


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.AUTH_RATE_LIMIT)
def register(
    request: Request,
    payload: RegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new, non-admin user and return a token for it.
    """
    user = UserService(db).register(
        username=payload.username,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
    )

    return TokenResponse(token=create_token(user))
