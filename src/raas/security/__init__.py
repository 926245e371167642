from .hashing import BcryptPasswordHasher, PasswordHasher

__all__ = ["BcryptPasswordHasher", "PasswordHasher"]
