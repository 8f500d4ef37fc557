"""
Request validation for subscription operations.

Every check runs before any persistence call and raises
SubscriptionValidationError with a named kind; nothing here has side effects.
"""
from __future__ import annotations

import uuid
from typing import Any, Optional

from app.core.exceptions import SubscriptionValidationError, ValidationKind
from app.core.periods import parse_period

MAX_LIST_LIMIT = 100
DEFAULT_LIST_LIMIT = 20


def _check_service_name(service_name: Optional[str]) -> None:
    if not isinstance(service_name, str) or not service_name.strip():
        raise SubscriptionValidationError(
            ValidationKind.INVALID_SERVICE_NAME,
            "service_name must not be empty",
            field="service_name",
        )


def _check_price(price: Optional[int]) -> None:
    if price is None or price <= 0:
        raise SubscriptionValidationError(
            ValidationKind.INVALID_PRICE,
            "price must be a positive integer",
            field="price",
        )


def _check_user_id(user_id: Optional[uuid.UUID]) -> None:
    if user_id is None or user_id.int == 0:
        raise SubscriptionValidationError(
            ValidationKind.INVALID_USER_ID,
            "user_id is required",
            field="user_id",
        )


def validate_create(
    service_name: Optional[str],
    price: Optional[int],
    user_id: Optional[uuid.UUID],
    start_date: Optional[str],
    end_date: Optional[str] = None,
) -> None:
    _check_service_name(service_name)
    _check_price(price)
    _check_user_id(user_id)
    parse_period(start_date, field="start_date")
    if end_date is not None:
        parse_period(end_date, field="end_date")


def validate_update(changes: dict[str, Any]) -> None:
    """
    Check only the supplied fields.

    An empty ``changes`` dict is a valid no-op. ``end_date`` may be supplied
    as None (clears the end date); the other fields may not.
    """
    if "service_name" in changes:
        _check_service_name(changes["service_name"])
    if "price" in changes:
        _check_price(changes["price"])
    if "start_date" in changes:
        parse_period(changes["start_date"], field="start_date")
    if changes.get("end_date") is not None:
        parse_period(changes["end_date"], field="end_date")


def resolve_limit(limit: Optional[int], default: int = DEFAULT_LIST_LIMIT) -> int:
    return default if limit is None else limit


def validate_list(limit: int, offset: int, max_limit: int = MAX_LIST_LIMIT) -> None:
    if limit <= 0 or limit > max_limit:
        raise SubscriptionValidationError(
            ValidationKind.INVALID_LIMIT,
            f"limit must be between 1 and {max_limit}",
            field="limit",
        )
    if offset < 0:
        raise SubscriptionValidationError(
            ValidationKind.INVALID_OFFSET,
            "offset must not be negative",
            field="offset",
        )


def validate_period(period_start: Optional[str], period_end: Optional[str]) -> None:
    start = parse_period(period_start, field="start_date")
    end = parse_period(period_end, field="end_date")
    if start > end:
        raise SubscriptionValidationError(
            ValidationKind.INVALID_DATE_RANGE,
            "start_date cannot be later than end_date",
            field="start_date",
        )
