from datetime import date

import pytest

from raas.exceptions.base import InvalidFormatError
from raas.validators.engine import CREATE, UPDATE
from raas.validators.formats import check_budget_year, check_positive
from raas.validators.text import is_blank

TODAY = date(2025, 6, 1)


class TestBudgetYear:

    def test_valid_year(self):
        assert check_budget_year("2025", operation=CREATE, today=TODAY) == 2025

    def test_bounds_are_inclusive(self):
        assert check_budget_year("2000", operation=CREATE, today=TODAY) == 2000
        assert check_budget_year("2035", operation=CREATE, today=TODAY) == 2035

    @pytest.mark.parametrize(
        "value, message",
        [
            ("25", "exactly 4 characters"),
            ("20255", "exactly 4 characters"),
            ("abcd", "valid 4-digit year"),
            ("20a5", "valid 4-digit year"),
            ("1999", "between 2000 and 2035"),
            ("2036", "between 2000 and 2035"),
        ],
    )
    def test_rejected_values(self, value, message):
        with pytest.raises(InvalidFormatError) as exc_info:
            check_budget_year(value, operation=CREATE, today=TODAY)

        assert message in exc_info.value.message
        assert exc_info.value.fields == ["budget_year"]
        assert exc_info.value.http_status() == 422

    def test_horizon_is_relative_to_current_year(self):
        far = str(date.today().year + 11)
        with pytest.raises(InvalidFormatError):
            check_budget_year(far, operation=UPDATE)

    def test_operation_is_named_in_message(self):
        with pytest.raises(InvalidFormatError) as exc_info:
            check_budget_year("25", operation=UPDATE, today=TODAY)
        assert exc_info.value.message.endswith("for update")


class TestCheckPositive:

    def test_none_is_left_to_required_check(self):
        check_positive(None, field="quantity", label="Quantity", operation=CREATE)

    def test_zero_rejected_unless_allowed(self):
        with pytest.raises(InvalidFormatError, match="must be positive"):
            check_positive(0, field="quantity", label="Quantity", operation=CREATE)
        check_positive(0, field="allocated_amount", label="Allocated amount", operation=CREATE, allow_zero=True)

    def test_negative_rejected(self):
        with pytest.raises(InvalidFormatError, match="must be non-negative"):
            check_positive(-1, field="allocated_amount", label="Allocated amount", operation=CREATE,
                           allow_zero=True)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_rejected(self, value):
        with pytest.raises(InvalidFormatError, match="must be a finite number") as exc_info:
            check_positive(value, field="quantity", label="Quantity", operation=CREATE, allow_zero=True)
        assert exc_info.value.fields == ["quantity"]


class TestTextHelpers:

    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_blank_values(self, value):
        assert is_blank(value)

    def test_non_blank_values(self):
        assert not is_blank(" x ")
        assert not is_blank(0)
