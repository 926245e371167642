# raas/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # App-level errors (RepositoryError, DuplicateValueError, ...)
# │   ├── integrity_classifier.py    # SQL-level / DB-specific error labels
# │   └── mapper.py                  # IntegrityError -> app-level error, db_error_handler()

from .base import (
    RepositoryError,
    NotFoundError,
    DuplicateError,
    InvalidFieldError,
    ValidationFailure,
    MissingFieldError,
    FieldTooLongError,
    InvalidFormatError,
    DuplicateValueError,
    ReferenceNotFoundError,
    InvariantViolationError,
)

__all__ = [
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "InvalidFieldError",
    "ValidationFailure",
    "MissingFieldError",
    "FieldTooLongError",
    "InvalidFormatError",
    "DuplicateValueError",
    "ReferenceNotFoundError",
    "InvariantViolationError",
]
