import math
import re
from datetime import date

from raas.exceptions.base import InvalidFormatError

_YEAR_PATTERN = re.compile(r"^[0-9]{4}$")


def check_budget_year(value: str, *, operation: str, minimum: int = 2000, horizon: int = 10,
                      today: date | None = None) -> int:
    """
    Validate a budget year: exactly four digits, within [minimum, current year + horizon].

    Returns the year as an int.
    """
    if len(value) != 4:
        raise InvalidFormatError(
            f"Budget year must be exactly 4 characters for {operation}", field="budget_year"
        )
    if not _YEAR_PATTERN.match(value):
        raise InvalidFormatError(
            f"Budget year must be a valid 4-digit year for {operation}", field="budget_year"
        )

    year = int(value)
    maximum = (today or date.today()).year + horizon
    if year < minimum or year > maximum:
        raise InvalidFormatError(
            f"Budget year must be between {minimum} and {maximum} for {operation}", field="budget_year"
        )
    return year


def check_positive(value: float | None, *, field: str, label: str, operation: str,
                   allow_zero: bool = False) -> None:
    """Numeric sign rule; None is left to the required-field check."""
    if value is None:
        return
    # NaN compares false against everything and would slip past the sign and headroom checks
    if not math.isfinite(value):
        raise InvalidFormatError(f"{label} must be a finite number for {operation}", field=field)
    if value < 0 or (value == 0 and not allow_zero):
        qualifier = "non-negative" if allow_zero else "positive"
        raise InvalidFormatError(f"{label} must be {qualifier} for {operation}", field=field)
