"""
Logging filters.

`RequestIdFilter` stamps every record with the id of the HTTP request that
produced it. The id lives in a ContextVar so it follows the request across
awaits; the middleware sets and resets it.

`RedactFilter` masks credentials that end up in structured extras, most notably
the user password on the security endpoints.
"""

import contextvars
import logging
from logging import LogRecord

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar("request_id", default=None)

REDACTED = "***REDACTED***"


def set_request_id(request_id: str | None) -> contextvars.Token:
    """Bind `request_id` to the current context. Keep the token to restore the previous value."""
    return _request_id_ctx.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Ensure `record.request_id` is always set.

    An explicit `extra={"request_id": ...}` wins over the context value; "-" is
    the sentinel when neither exists, so `%(request_id)s` never fails.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = getattr(record, "request_id", None) or get_request_id() or "-"
        return True


class RedactFilter(logging.Filter):
    """Replace the value of sensitive extras (and sensitive keys inside dict extras)."""

    SENSITIVE = frozenset({
        "password",
        "new_password",
        "secret",
        "token",
        "access_token",
        "refresh_token",
        "authorization",
    })

    def _scrub(self, value):
        if isinstance(value, dict):
            return {
                k: REDACTED if str(k).lower() in self.SENSITIVE else self._scrub(v)
                for k, v in value.items()
            }
        return value

    def filter(self, record: LogRecord) -> bool:
        for key, value in list(record.__dict__.items()):
            if key.lower() in self.SENSITIVE:
                setattr(record, key, REDACTED)
            elif isinstance(value, dict) and key != "__dict__":
                setattr(record, key, self._scrub(value))
        return True


__all__ = [
    "REDACTED",
    "set_request_id",
    "reset_request_id",
    "get_request_id",
    "RequestIdFilter",
    "RedactFilter",
]
