from __future__ import annotations

from datetime import date

import pytest

from app.core.exceptions import SubscriptionValidationError
from app.core.periods import format_period, parse_period


def test_parse_period_anchors_to_first_of_month():
    assert parse_period("02-2024") == date(2024, 2, 1)
    assert parse_period("12-1999") == date(1999, 12, 1)


@pytest.mark.parametrize(
    "value",
    ["13-2024", "00-2024", "02-abcd", "2-2024", "02/2024", "2024-02", "02-2024 ", "", None],
)
def test_parse_period_rejects_bad_input(value):
    with pytest.raises(SubscriptionValidationError) as exc_info:
        parse_period(value, field="start_date")
    assert exc_info.value.kind == "InvalidDate"
    assert exc_info.value.field == "start_date"


def test_format_period_is_inverse_of_parse():
    assert format_period(date(2025, 7, 1)) == "07-2025"
    assert parse_period(format_period(date(2030, 1, 1))) == date(2030, 1, 1)
