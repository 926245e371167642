"""
Sort an IntegrityError into the kind of constraint that rejected the row.

The label classes below never reach callers: `raas.exceptions.mapper` turns
each label into the public error (DuplicateValueError, MissingFieldError,
ReferenceNotFoundError, ...). Postgres drivers report a SQLSTATE and usually the
constraint name; SQLite only gives a message, so it is matched on keywords.
"""

import logging
from typing import Type

from sqlalchemy.exc import IntegrityError

from .base import RepositoryError

logger = logging.getLogger(__name__)


class ConstraintViolationError(RepositoryError):
    """Label for a row refused by a table constraint."""


class UniqueConstraintError(ConstraintViolationError):
    pass


class NotNullConstraintError(ConstraintViolationError):
    pass


class ForeignKeyConstraintError(ConstraintViolationError):
    pass


class CheckConstraintError(ConstraintViolationError):
    pass


class UnknownIntegrityError(ConstraintViolationError):
    pass


Label = Type[ConstraintViolationError]

# SQLSTATE class 23 (integrity constraint violation)
SQLSTATE_LABELS: dict[str, Label] = {
    "23505": UniqueConstraintError,
    "23502": NotNullConstraintError,
    "23503": ForeignKeyConstraintError,
    "23514": CheckConstraintError,
}

# first match wins; "not null" must be tested before the broader "null value"
MESSAGE_LABELS: tuple[tuple[Label, tuple[str, ...]], ...] = (
    (UniqueConstraintError, ("unique constraint", "duplicate key")),
    (NotNullConstraintError, ("not null constraint", "null value in column")),
    (ForeignKeyConstraintError, ("foreign key constraint",)),
    (CheckConstraintError, ("check constraint",)),
)


def _sqlstate(orig) -> str | None:
    # psycopg: pgcode; asyncpg through the SQLAlchemy adapter: sqlstate
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _constraint_name(orig) -> str | None:
    diag = getattr(orig, "diag", None)
    name = getattr(diag, "constraint_name", None) if diag is not None else None
    if name:
        return name
    # asyncpg keeps its own exception as the cause of the adapted one
    return getattr(getattr(orig, "__cause__", None), "constraint_name", None)


def label_from_message(message: str) -> Label:
    lowered = message.lower()
    for label, keywords in MESSAGE_LABELS:
        if any(keyword in lowered for keyword in keywords):
            return label
    logger.warning("integrity.unrecognized_message", extra={"message_snippet": message[:200]})
    return UnknownIntegrityError


def classify_integrity_error(exc: IntegrityError) -> tuple[Label, str | None]:
    """Return (label class, constraint name or None)."""
    orig = exc.orig
    sqlstate = _sqlstate(orig)
    if sqlstate:
        constraint = _constraint_name(orig)
        label = SQLSTATE_LABELS.get(sqlstate)
        if label is None:
            logger.warning("integrity.unrecognized_sqlstate", extra={"sqlstate": sqlstate, "constraint": constraint})
            return UnknownIntegrityError, constraint
        logger.debug("integrity.classified", extra={"sqlstate": sqlstate, "constraint": constraint})
        return label, constraint

    return label_from_message(str(orig)), None
