"""
Password hashing collaborator.

Services depend on the `PasswordHasher` protocol only; `BcryptPasswordHasher`
is the default implementation. Plain-text passwords never reach the database
or the logs.
"""

from typing import Protocol

import bcrypt

from raas.exceptions.base import FieldTooLongError

# bcrypt only looks at the first 72 bytes; longer secrets are refused instead of silently truncated
BCRYPT_MAX_BYTES = 72


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, hashed: str) -> bool: ...


class BcryptPasswordHasher:
    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        raw = password.encode("utf-8")
        if len(raw) > BCRYPT_MAX_BYTES:
            raise FieldTooLongError(
                f"Password cannot exceed {BCRYPT_MAX_BYTES} bytes", field="password", max_length=BCRYPT_MAX_BYTES
            )
        return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=self.rounds)).decode("ascii")

    def verify(self, password: str, hashed: str) -> bool:
        raw = password.encode("utf-8")
        if len(raw) > BCRYPT_MAX_BYTES:
            return False
        return bcrypt.checkpw(raw, hashed.encode("ascii"))
