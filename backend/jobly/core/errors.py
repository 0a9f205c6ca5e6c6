"""
Application Errors
==================

Services raise these; ``jobly.main`` maps each kind to an HTTP status once.
"""

import enum
from typing import Any


class ErrorKind(str, enum.Enum):
    """Error kinds surfaced by services."""
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"


class JoblyError(Exception):
    """Base error carrying a kind and a client-facing message."""

    kind: ErrorKind = ErrorKind.BAD_REQUEST
    default_message = "Bad Request"

    def __init__(self, message: Any = None):
        self.message = message if message is not None else self.default_message
        super().__init__(str(self.message))


class BadRequestError(JoblyError):
    kind = ErrorKind.BAD_REQUEST
    default_message = "Bad Request"


class UnauthorizedError(JoblyError):
    kind = ErrorKind.UNAUTHORIZED
    default_message = "Unauthorized"


class NotFoundError(JoblyError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not Found"


def format_validation_errors(errors: Any) -> list:
    """
    Flatten pydantic error dicts into ``"field: message"`` strings.

    Args:
        errors: Output of ``ValidationError.errors()`` or ``RequestValidationError.errors()``
    """
    messages = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc)
        messages.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return messages
