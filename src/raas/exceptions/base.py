"""
Application-level exceptions raised by repositories, validators and services.
"""

from typing import Any, Iterable


class RepositoryError(Exception):
    """
    Base exception for repository/service errors.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of field names related to the error (e.g., ['designation_fr'])
    - constraint: optional DB constraint name (for logs only, never sent to clients)
    - error_code: canonical short code (e.g., 'duplicate', 'missing_field') used by clients
    """

    # canonical error_code -> HTTP status
    ERROR_CODE_TO_STATUS = {
        "not_found": 404,
        "invalid_field": 422,
        "invalid_input": 422,
        "missing_field": 422,
        "field_too_long": 422,
        "invalid_format": 422,
        "reference_not_found": 422,
        "duplicate": 409,
        "invariant_violation": 409,
    }

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
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

    def to_payload(self) -> dict:
        """
        JSON-serializable body for HTTP responses:
            {"detail": "...", "code": "duplicate", "fields": ["designation_fr"]}
        The constraint name is left out on purpose.
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        """Status looked up from ERROR_CODE_TO_STATUS; 400 when the code is unknown or unset."""
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 400)
        return 400


class NotFoundError(RepositoryError):
    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="not_found")


class DuplicateError(RepositoryError):
    def __init__(self, message: str, *, fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code="duplicate")


class InvalidFieldError(RepositoryError):
    """Raised when the caller passes unexpected/unknown fields to repository methods."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_field")


# -----------------------------------------------------------------------------
# Write-validation errors
# -----------------------------------------------------------------------------

class ValidationFailure(RepositoryError):
    """Common parent of the errors raised by the write-validation pipeline."""


class MissingFieldError(ValidationFailure):
    """A required field is absent, empty or whitespace-only."""

    def __init__(self, message: str, *, field: str):
        super().__init__(message, fields=[field], error_code="missing_field")
        self.field = field


class FieldTooLongError(ValidationFailure):
    def __init__(self, message: str, *, field: str, max_length: int):
        super().__init__(message, fields=[field], error_code="field_too_long")
        self.field = field
        self.max_length = max_length


class InvalidFormatError(ValidationFailure):
    """Format or range rule violated (e.g. budget year)."""

    def __init__(self, message: str, *, field: str):
        super().__init__(message, fields=[field], error_code="invalid_format")
        self.field = field


class DuplicateValueError(DuplicateError):
    """
    Uniqueness violation carrying the conflicting field(s) and value(s).

    Subclasses DuplicateError so existing `except DuplicateError` sites keep working.
    """

    def __init__(self, message: str, *, fields: Iterable[str], value: Any = None,
                 constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint)
        self.value = value

    def to_payload(self) -> dict:
        payload = super().to_payload()
        if self.value is not None:
            payload["value"] = self.value if isinstance(self.value, (str, int, float)) else str(self.value)
        return payload


class ReferenceNotFoundError(ValidationFailure):
    """A foreign-key field points at a record that does not exist."""

    def __init__(self, message: str, *, field: str | None = None, target: str | None = None,
                 target_id: Any = None):
        super().__init__(message, fields=[field] if field else None, error_code="reference_not_found")
        self.target = target
        self.target_id = target_id


class InvariantViolationError(ValidationFailure):
    """A domain rule spanning several records would be broken (quantity conservation, delete guards)."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invariant_violation")


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
