"""
Authentication Service - JWT & Password Hashing
================================================

Handles password hashing, token signing and the bearer-token dependencies.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

from passlib.context import CryptContext
from jose import JWTError, jwt
from pydantic import BaseModel
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from jobly.core.errors import UnauthorizedError
from jobly.core.settings import settings

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_WORK_FACTOR,
)

# JWT configuration
SECRET_KEY = settings.SECRET_KEY
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES


# ============================================================================
# Models
# ============================================================================

class TokenData(BaseModel):
    """Data stored in JWT token."""
    username: str
    is_admin: bool = False


# ============================================================================
# Password Functions
# ============================================================================

def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Hashed password
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password from database

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


# ============================================================================
# JWT Token Functions
# ============================================================================

def create_token(
    user: dict,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed token for a user.

    Args:
        user: User data with ``username`` and ``isAdmin``
        expires_delta: Token expiration time (default: ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Encoded JWT token
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))

    payload = {
        "username": user["username"],
        "isAdmin": bool(user.get("isAdmin", False)),
        "iat": now,
        "exp": expire,
    }

    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> Optional[TokenData]:
    """
    Decode and validate a JWT token.

    Args:
        token: JWT token string

    Returns:
        TokenData if valid, None otherwise
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None

    username = payload.get("username")
    if not username:
        return None

    return TokenData(username=username, is_admin=bool(payload.get("isAdmin", False)))


# ============================================================================
# Dependencies
# ============================================================================

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[TokenData]:
    """
    FastAPI dependency returning the token's user, or None when anonymous.

    A missing or invalid token is not an error here; routes that need a
    user depend on ``ensure_admin`` instead.
    """
    if credentials is None:
        return None

    return decode_token(credentials.credentials)


async def ensure_admin(
    current_user: Optional[TokenData] = Depends(get_current_user)
) -> TokenData:
    """
    Require a token whose user is an admin.

    Usage:
        @router.post("/jobs", dependencies=[Depends(ensure_admin)])
    """
    if current_user is None or not current_user.is_admin:
        raise UnauthorizedError()

    return current_user
