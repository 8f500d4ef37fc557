"""Month-year ("MM-YYYY") period strings <-> month-anchored calendar dates."""
from __future__ import annotations

import re
from datetime import date
from typing import Optional

from app.core.exceptions import SubscriptionValidationError, ValidationKind

PERIOD_FORMAT = "MM-YYYY"
_PERIOD_RE = re.compile(r"^([0-9]{2})-([0-9]{4})$")


def parse_period(value: Optional[str], field: str = "date") -> date:
    """
    Parse "MM-YYYY" into the first day of that month.

    Raises SubscriptionValidationError(InvalidDate) on a format mismatch,
    a month outside 01..12 or a non-numeric year.
    """
    if not isinstance(value, str):
        raise SubscriptionValidationError(
            ValidationKind.INVALID_DATE,
            f"{field} is required in {PERIOD_FORMAT} format",
            field=field,
        )
    match = _PERIOD_RE.fullmatch(value)
    if not match:
        raise SubscriptionValidationError(
            ValidationKind.INVALID_DATE,
            f"{field} must be in {PERIOD_FORMAT} format, got '{value}'",
            field=field,
        )
    month, year = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or year < 1:
        raise SubscriptionValidationError(
            ValidationKind.INVALID_DATE,
            f"{field} has no such month: '{value}'",
            field=field,
        )
    return date(year, month, 1)


def format_period(value: date) -> str:
    return f"{value.month:02d}-{value.year:04d}"
