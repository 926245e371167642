"""
Small string helpers shared by settings normalization and write validation.
"""


def to_uppercase(value: str | None) -> str | None:
    """
    Converts a string to uppercase if it's not None.
    """
    if value is None:
        return None
    return value.upper()


def to_lowercase(value: str | None) -> str | None:
    """
    Converts a string to lowercase if it's not None.
    """
    if value is None:
        return None
    return value.lower()


def is_blank(value) -> bool:
    """True for None, and for strings that are empty once trimmed."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False

