"""Typed failures raised by the relationship services.

Routers never translate these by hand; ``backend.main`` registers a single
exception handler that maps each kind onto its HTTP status.
"""

from __future__ import annotations

from fastapi import status
from sqlalchemy.exc import IntegrityError


class RelationshipError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal Server Error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class InvalidIdentifier(RelationshipError):
    """Malformed or self-referential identifier, rejected before any query."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid user"


class NotAuthorized(RelationshipError):
    """Caller is not a legitimate party to the relation being queried."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not authorized"


class NotFound(RelationshipError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class StorageUnavailable(RelationshipError):
    """Transient storage failure. Read-only operations may be retried."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Storage temporarily unavailable"


def is_unique_violation(error: IntegrityError) -> bool:
    """Return True when the IntegrityError indicates a unique-constraint conflict."""
    original = getattr(error, "orig", None)
    sqlstate = getattr(original, "sqlstate", None) or getattr(original, "pgcode", None)
    if sqlstate == "23505":
        return True
    message = str(original or error).lower()
    return "duplicate key" in message or "unique constraint" in message


__all__ = [
    "RelationshipError",
    "InvalidIdentifier",
    "NotAuthorized",
    "NotFound",
    "StorageUnavailable",
    "is_unique_violation",
]
