"""
Storage error mapping for repositories.

    async with db_error_handler(self.model.__name__, duplicate_error=DuplicateBookError):
        ... DB ops that may raise IntegrityError ...

Only violations this layer understands are reclassified:
  - unique constraint      -> `duplicate_error`
  - foreign key constraint -> `reference_error` (when the repository declares one)
Every other failure is logged and re-raised unchanged so the root cause survives up to
the HTTP layer. Rollback is left to the request transaction that owns the session.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import IntegrityError

from .integrity_classifier import ConstraintKind, classify_integrity_error
from .base import ApplicationError, DuplicateError, RepositoryError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def db_error_handler(
    model_name: str | None = None,
    *,
    duplicate_error: type[DuplicateError] = DuplicateError,
    reference_error: type[RepositoryError] | None = None,
) -> AsyncIterator[None]:
    model_part = model_name or "Record"
    try:
        yield
    except ApplicationError:
        # already classified further down (e.g. NotFoundError)
        raise
    except IntegrityError as exc:
        violation = classify_integrity_error(exc)
        context = {"model": model_part, "fields": violation.columns, "constraint": violation.constraint}

        if violation.kind is ConstraintKind.UNIQUE:
            # duplicates are expected client-level scenarios (409)
            logger.info("mapper.duplicate_detected", extra=context)
            raise duplicate_error(fields=violation.columns, constraint=violation.constraint) from exc

        if violation.kind is ConstraintKind.FOREIGN_KEY and reference_error is not None:
            logger.info("mapper.foreign_key_violation", extra=context)
            raise reference_error(fields=violation.columns, constraint=violation.constraint) from exc

        logger.warning("mapper.unclassified_integrity_error", extra={**context, "kind": violation.kind.value})
        raise
    except Exception:
        logger.exception("mapper.unexpected_db_error", extra={"model": model_part})
        raise
