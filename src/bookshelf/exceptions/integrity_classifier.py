r"""
Integrity error classification.

SQLAlchemy wraps every constraint violation in the same IntegrityError. `classify_integrity_error`
reads the driver error underneath and returns a `ConstraintViolation` describing *what* failed.
The mapper decides what the application sees:

| ConstraintKind | → | App-level (external)                         |
| -------------- | - | -------------------------------------------- |
| `UNIQUE`       | → | repository's duplicate error (409)           |
| `FOREIGN_KEY`  | → | repository's reference error, if it has one  |
| anything else  | → | original IntegrityError, unchanged (500)     |

Postgres drivers expose a SQLSTATE; SQLite only gives a message, so that is parsed instead.
"""
import re
import logging
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class ConstraintKind(str, Enum):
    UNIQUE = "unique"
    NOT_NULL = "not_null"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ConstraintViolation:
    kind: ConstraintKind
    constraint: str | None = None
    columns: list[str] | None = None


# https://www.postgresql.org/docs/current/errcodes-appendix.html
SQLSTATE_KINDS = {
    "23505": ConstraintKind.UNIQUE,
    "23502": ConstraintKind.NOT_NULL,
    "23503": ConstraintKind.FOREIGN_KEY,
    "23514": ConstraintKind.CHECK,
}

# checked in order; the first kind with a matching keyword wins
_MESSAGE_KEYWORDS: tuple[tuple[ConstraintKind, tuple[str, ...]], ...] = (
    (ConstraintKind.UNIQUE, ("unique constraint", "unique failed", "unique violation", "duplicate")),
    (ConstraintKind.NOT_NULL, ("not null constraint", "not null", "null value in column")),
    (ConstraintKind.FOREIGN_KEY, ("foreign key constraint", "foreign key", "is not present in table")),
    (ConstraintKind.CHECK, ("check constraint", "check failed")),
)

# Postgres: 'null value in column "title" ...' / 'DETAIL:  Key (title)=(Dune) already exists.'
_PG_NULL_COLUMN = re.compile(r'null value in column "(?P<col>[^"]+)"', re.IGNORECASE)
_PG_KEY_COLUMNS = re.compile(r'key \((?P<cols>[^)]+)\)=', re.IGNORECASE)
# SQLite: 'UNIQUE constraint failed: books.title' / 'NOT NULL constraint failed: books.title'
_SQLITE_COLUMNS = re.compile(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$', re.IGNORECASE)


def _driver_errors(orig):
    # SQLAlchemy's asyncpg adapter keeps the asyncpg exception as __cause__
    yield orig
    cause = getattr(orig, "__cause__", None)
    if cause is not None:
        yield cause


def _sqlstate(orig) -> str | None:
    for err in _driver_errors(orig):
        code = getattr(err, "sqlstate", None) or getattr(err, "pgcode", None)
        if code:
            return str(code)
    return None


def _constraint_name(orig) -> str | None:
    diag = getattr(orig, "diag", None)  # psycopg
    if diag is not None and getattr(diag, "constraint_name", None):
        return diag.constraint_name
    for err in _driver_errors(orig):
        name = getattr(err, "constraint_name", None)
        if name:
            return name
    return None


def _kind_from_message(msg: str) -> ConstraintKind:
    normalized = msg.lower()
    for kind, keywords in _MESSAGE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return kind

    logger.warning("integrity.unknown_message", extra={"message_snippet": msg[:200]})
    return ConstraintKind.UNKNOWN


def extract_columns(msg: str) -> list[str] | None:
    """Best-effort column names from a Postgres or SQLite constraint message."""
    if not msg:
        return None

    m = _PG_NULL_COLUMN.search(msg)
    if m:
        return [m.group("col")]

    m = _PG_KEY_COLUMNS.search(msg)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    m = _SQLITE_COLUMNS.search(msg)
    if m:
        return [c.split(".")[-1].strip() for c in re.split(r",\s*", m.group("cols"))]

    return None


def classify_integrity_error(exc: IntegrityError) -> ConstraintViolation:
    orig = exc.orig
    msg = str(orig) if orig is not None else str(exc)

    sqlstate = _sqlstate(orig)
    if sqlstate:
        kind = SQLSTATE_KINDS.get(sqlstate, ConstraintKind.UNKNOWN)
        if kind is ConstraintKind.UNKNOWN:
            logger.warning("integrity.unknown_sqlstate", extra={"sqlstate": sqlstate})
        constraint = _constraint_name(orig)
    else:
        kind = _kind_from_message(msg)
        constraint = None

    return ConstraintViolation(kind=kind, constraint=constraint, columns=extract_columns(msg))
