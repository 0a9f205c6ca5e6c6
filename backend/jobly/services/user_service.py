"""
User Service - credential checks and registration.
"""

from typing import Any, Dict
import logging

from sqlalchemy.orm import Session

from jobly.core.errors import BadRequestError, UnauthorizedError
from jobly.db.database import run_query
from jobly.instrumentation.metrics import observe_login_failure, observe_registration
from jobly.services.auth_service import hash_password, verify_password

logger = logging.getLogger(__name__)

USER_RETURNING = (
    'username, first_name AS "firstName", last_name AS "lastName", '
    'email, is_admin AS "isAdmin"'
)


def _format_user(row: Dict[str, Any]) -> Dict[str, Any]:
    row["isAdmin"] = bool(row["isAdmin"])
    return row


class UserService:
    """User repository over a single database session."""

    def __init__(self, db: Session):
        self.db = db

    def authenticate(self, username: str, password: str) -> Dict[str, Any]:
        """
        Check a username/password pair.

        Returns:
            {username, firstName, lastName, email, isAdmin}

        Raises:
            UnauthorizedError: If the user is unknown or the password is wrong
        """
        rows = run_query(
            self.db,
            f"""SELECT {USER_RETURNING}, password
                FROM users
                WHERE username = $1""",
            [username],
        )

        if rows:
            user = rows[0]
            hashed_password = user.pop("password")
            if verify_password(password, hashed_password):
                return _format_user(user)

        observe_login_failure()
        logger.warning(f"Failed login for username: {username}")
        raise UnauthorizedError("Invalid username/password")

    def register(
        self,
        username: str,
        password: str,
        first_name: str,
        last_name: str,
        email: str,
        is_admin: bool = False,
    ) -> Dict[str, Any]:
        """
        Register a user with a hashed password.

        Returns:
            {username, firstName, lastName, email, isAdmin}

        Raises:
            BadRequestError: On duplicate username
        """
        duplicate = run_query(
            self.db,
            """SELECT username
               FROM users
               WHERE username = $1""",
            [username],
        )
        if duplicate:
            raise BadRequestError(f"Duplicate username: {username}")

        rows = run_query(
            self.db,
            f"""INSERT INTO users (username, password, first_name, last_name, email, is_admin)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING {USER_RETURNING}""",
            [username, hash_password(password), first_name, last_name, email, is_admin],
            commit=True,
        )

        observe_registration()
        logger.info(f"New user registered: {username} ({email})")
        return _format_user(rows[0])
