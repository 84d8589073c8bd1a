"""
Application-level exceptions.

Every error the API knows how to describe to a client derives from ApplicationError.
The class carries everything the HTTP layer needs (status via http_status(), body via
to_payload()), so the exception handlers stay tiny and the mapping lives in one table.

Anything that is *not* an ApplicationError (driver errors, bugs) is answered with a
generic 500 by the recoverer middleware.
"""

from typing import Any, Iterable


class ApplicationError(Exception):
    """
    Base exception for request, service and repository errors.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of field names related to the error (e.g., ['title'])
    - constraint: optional DB constraint name or identifier (for logs only)
    - error_code: canonical short code (e.g., 'duplicate', 'not_found')
    """

    # Map canonical error_code -> HTTP status.
    ERROR_CODE_TO_STATUS = {
        "invalid_body": 400,
        "validation_failed": 400,
        "invalid_uuid": 400,
        "invalid_author_id": 400,
        "not_found": 404,
        "duplicate": 409,
        "conflict": 409,
    }

    default_message = "Internal server error"

    def __init__(self, message: str | None = None, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message  # user-friendly message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict[str, Any]:
        """
        Return the JSON error envelope:
            {"status": "error", "message": "Book not found"}

        `fields` and `constraint` are deliberately left out: they are for logs.
        """
        return {"status": "error", "message": self.message}

    def http_status(self) -> int:
        """
        HTTP status for this error, looked up by error_code.
        Errors without a known code are server-side failures (500).
        """
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 500)
        return 500


# =================================================================================================================
# Request errors (raised while decoding the HTTP request)
# =================================================================================================================

class InvalidBodyError(ApplicationError):
    """Request body absent, not JSON, or not a JSON object."""

    default_message = "Invalid request body"

    def __init__(self, message: str | None = None):
        super().__init__(message, error_code="invalid_body")


class InvalidUUIDError(ApplicationError):
    """Path identifier is not a UUID."""

    default_message = "Invalid uuid"

    def __init__(self, message: str | None = None):
        super().__init__(message, error_code="invalid_uuid")


class ValidationFailedError(ApplicationError):
    """
    One or more field rules failed. `errors` holds every failure, not just the first:
        [{"field": "Title", "message": "Title is required"}, ...]
    """

    default_message = "Validation failed"

    def __init__(self, errors: list[dict[str, str]], message: str | None = None):
        super().__init__(message, fields=[e["field"] for e in errors], error_code="validation_failed")
        self.errors = errors

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["errors"] = [dict(e) for e in self.errors]
        return payload


# =================================================================================================================
# Service errors
# =================================================================================================================

class InvalidAuthorIDError(ApplicationError):
    """The author reference of a book cannot be parsed as a UUID."""

    default_message = "invalid author ID"

    def __init__(self, message: str | None = None):
        super().__init__(message, error_code="invalid_author_id")


# =================================================================================================================
# Repository errors
# =================================================================================================================

class RepositoryError(ApplicationError):
    """Base for errors the repository layer classifies out of storage results."""


class NotFoundError(RepositoryError):
    default_message = "Not found"

    def __init__(self, message: str | None = None, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None):
        # canonical error code makes the HTTP mapping automatic
        super().__init__(message, fields=fields, constraint=constraint, error_code="not_found")


class AuthorNotFoundError(NotFoundError):
    default_message = "Author not found"


class BookNotFoundError(NotFoundError):
    default_message = "Book not found"


class DuplicateError(RepositoryError):
    default_message = "Resource already exists"

    def __init__(self, message: str | None = None, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code="duplicate")


class DuplicateBookError(DuplicateError):
    default_message = "Book with this name already exists"


class AuthorHasBooksError(RepositoryError):
    """Deleting the author would orphan books that still reference it."""

    default_message = "Author still has books"

    def __init__(self, message: str | None = None, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code="conflict")


__all__ = [
    "ApplicationError",
    "InvalidBodyError",
    "InvalidUUIDError",
    "ValidationFailedError",
    "InvalidAuthorIDError",
    "RepositoryError",
    "NotFoundError",
    "AuthorNotFoundError",
    "BookNotFoundError",
    "DuplicateError",
    "DuplicateBookError",
    "AuthorHasBooksError",
]
