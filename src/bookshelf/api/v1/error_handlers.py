"""
FastAPI exception handlers that turn errors into the JSON error envelope.

- ApplicationError (and subclasses): status from .http_status(), body from .to_payload().
- RequestValidationError: classified into InvalidUUIDError, InvalidBodyError or a
  ValidationFailedError that lists every failing field.
- Starlette HTTPException (unknown route, wrong method): same envelope, original status.

Unhandled exceptions are not registered here; RecovererMiddleware answers those.
"""
import logging
from typing import Any, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookshelf.exceptions.base import (
    ApplicationError,
    InvalidBodyError,
    InvalidUUIDError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

# error types that mean "no usable value was sent" rather than "wrong value"
_REQUIRED_ERROR_TYPES = {"missing", "string_too_short"}

# detail of the HTTPException FastAPI raises when the request body cannot be read as JSON
BODY_PARSE_ERROR_DETAIL = "There was an error parsing the body"


def field_label(name: str) -> str:
    """`author_id` -> `AuthorID`, `title` -> `Title`."""
    return "".join("ID" if part == "id" else part.capitalize() for part in name.split("_") if part)


def _field_error(error: dict[str, Any]) -> dict[str, str]:
    label = field_label(str(error["loc"][-1]))
    if error.get("type") in _REQUIRED_ERROR_TYPES or ("input" in error and error["input"] is None):
        return {"field": label, "message": f"{label} is required"}
    return {"field": label, "message": f"{label} is invalid"}


def classify_validation_errors(errors: Sequence[dict[str, Any]]) -> ApplicationError:
    """
    Map FastAPI/pydantic request errors to the application taxonomy:
      - any path parameter failure   -> InvalidUUIDError (path params are all ids)
      - undecodable or non-object body -> InvalidBodyError
      - otherwise                    -> ValidationFailedError with one entry per field
    """
    if any(e.get("loc", ())[:1] == ("path",) for e in errors):
        return InvalidUUIDError()

    field_errors: list[dict[str, str]] = []
    for error in errors:
        loc = tuple(error.get("loc", ()))
        if error.get("type") == "json_invalid" or loc[:1] != ("body",) or len(loc) < 2:
            return InvalidBodyError()
        field_errors.append(_field_error(error))

    return ValidationFailedError(field_errors)


async def application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    status = exc.http_status()
    if status >= 500:
        logger.error("ApplicationError for %s %s: %s", request.method, request.url.path, str(exc))
    else:
        logger.info("ApplicationError for %s %s: %s", request.method, request.url.path, str(exc))
    return JSONResponse(status_code=status, content=exc.to_payload())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = classify_validation_errors(exc.errors())
    logger.info(
        "request.validation_failed",
        extra={"method": request.method, "path": request.url.path, "kind": type(error).__name__,
               "fields": error.fields},
    )
    return JSONResponse(status_code=error.http_status(), content=error.to_payload())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 400 and exc.detail == BODY_PARSE_ERROR_DETAIL:
        # body bytes FastAPI could not decode at all (e.g. not UTF-8)
        error = InvalidBodyError()
        logger.info(
            "request.validation_failed",
            extra={"method": request.method, "path": request.url.path, "kind": type(error).__name__},
        )
        return JSONResponse(status_code=error.http_status(), content=error.to_payload())

    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
