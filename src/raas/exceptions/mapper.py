import re
import logging
from contextlib import asynccontextmanager

from sqlalchemy import UniqueConstraint
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import (
    classify_integrity_error,
    UniqueConstraintError,
    NotNullConstraintError,
    ForeignKeyConstraintError,
    CheckConstraintError,
)
from .base import (
    DuplicateValueError,
    MissingFieldError,
    ReferenceNotFoundError,
    RepositoryError,
)

logger = logging.getLogger(__name__)

# -----------------------
# Column extraction helpers
# -----------------------

_POSTGRES_NOT_NULL = re.compile(r'null value in column "(?P<col>[^"]+)"', re.IGNORECASE)
_POSTGRES_KEY = re.compile(r'key \((?P<cols>[^)]+)\)=\((?P<vals>[^)]*)\)', re.IGNORECASE)
_SQLITE_FAILED = re.compile(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$', re.IGNORECASE)


def extract_columns_from_integrity(exc: IntegrityError) -> tuple[list[str] | None, str | None]:
    """
    Best-effort extraction of (column names, offending value) from the driver message.

    Handles Postgres ('null value in column "F_03"', 'Key ("F_03")=(x) already exists')
    and SQLite ('UNIQUE constraint failed: T_02_02_04.F_03').
    """
    msg = str(exc.orig) if exc.orig is not None else str(exc)

    m = _POSTGRES_NOT_NULL.search(msg)
    if m:
        return [m.group("col")], None

    m = _POSTGRES_KEY.search(msg)
    if m:
        cols = [c.strip().strip('"') for c in m.group("cols").split(",")]
        return cols, m.group("vals") or None

    m = _SQLITE_FAILED.search(msg)
    if m:
        cols = [c.split(".")[-1].strip() for c in re.split(r",\s*", m.group("cols").strip())]
        return cols, None

    return None, None


def _attribute_names(model, columns: list[str] | None, constraint_name: str | None) -> list[str] | None:
    """
    Translate physical column names (F_01...) to mapped attribute names.

    When only a constraint name is known (Postgres), its columns are read from the table metadata.
    """
    if model is None:
        return columns

    table = model.__table__
    if not columns and constraint_name:
        for constraint in table.constraints:
            if isinstance(constraint, UniqueConstraint) and constraint.name == constraint_name:
                columns = [c.name for c in constraint.columns]
                break
    if not columns:
        return None

    mapper = model.__mapper__
    names = []
    for col_name in columns:
        column = table.columns.get(col_name)
        if column is None:
            names.append(col_name)
            continue
        names.append(mapper.get_property_by_column(column).key)
    return names


# -----------------------
# Mapper
# -----------------------

def raise_mapped_integrity_error(exc: IntegrityError, model=None) -> None:
    """
    Map an IntegrityError raised at flush time to an application-level exception and raise it.
    """
    exc_cls, constraint_name = classify_integrity_error(exc)
    columns, value = extract_columns_from_integrity(exc)
    fields = _attribute_names(model, columns, constraint_name)

    model_part = model.__name__ if model is not None else "Record"

    if exc_cls is UniqueConstraintError:
        # expected client-level scenario (409), INFO is enough
        logger.info(
            "mapper.duplicate_detected",
            extra={"model": model_part, "fields": fields, "constraint": constraint_name},
        )
        if fields:
            raise DuplicateValueError(
                f"{model_part} already exists for field(s): {', '.join(fields)}",
                fields=fields, value=value, constraint=constraint_name,
            ) from exc
        raise DuplicateValueError(
            f"{model_part} already exists (unique constraint)", fields=[], constraint=constraint_name
        ) from exc

    if exc_cls is NotNullConstraintError:
        logger.info(
            "mapper.not_null_violation",
            extra={"model": model_part, "fields": fields, "constraint": constraint_name},
        )
        field = fields[0] if fields else "unknown"
        raise MissingFieldError(f"{field} is required for {model_part}", field=field) from exc

    if exc_cls is ForeignKeyConstraintError:
        logger.info(
            "mapper.foreign_key_violation",
            extra={"model": model_part, "fields": fields, "constraint": constraint_name},
        )
        field = fields[0] if fields else None
        raise ReferenceNotFoundError(
            f"{model_part} references a record that does not exist"
            + (f" (field: {field})" if field else ""),
            field=field,
        ) from exc

    if exc_cls is CheckConstraintError:
        raw = str(exc.orig) if exc.orig is not None else str(exc)
        logger.debug(
            "mapper.check_constraint_failure",
            extra={"model": model_part, "raw": raw, "constraint": constraint_name},
        )
        raise RepositoryError(
            f"{model_part} business rule violated (check constraint).", constraint=constraint_name
        ) from exc

    raw = str(exc.orig) if exc.orig is not None else str(exc)
    logger.warning("mapper.unknown_integrity_error", extra={"model": model_part, "constraint": constraint_name})
    logger.debug("mapper.unknown_integrity_raw", extra={"model": model_part, "raw": raw})
    raise RepositoryError(f"{model_part} database integrity error.") from exc


# -----------------------
# Async context manager used by every repository write
# -----------------------
@asynccontextmanager
async def db_error_handler(db: AsyncSession, model=None):
    """
    Run a block of writes inside a SAVEPOINT and translate database failures.

    Usage:
        async with db_error_handler(self.db, self.model):
            self.db.add(entity)
            await self.db.flush()

    A failing flush only rolls back the savepoint, so the surrounding request
    transaction stays usable. IntegrityErrors are mapped by
    `raise_mapped_integrity_error`; other SQLAlchemy errors become a generic
    RepositoryError without leaking driver text.
    """
    model_name = model.__name__ if model is not None else None
    try:
        async with db.begin_nested():
            yield
    except IntegrityError as exc:
        raise_mapped_integrity_error(exc, model)
    except SQLAlchemyError as exc:
        logger.exception("Unexpected DB error for %s", model_name, extra={"model": model_name})
        raise RepositoryError(f"Failed to operate on {model_name or 'database'}") from exc
