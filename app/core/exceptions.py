"""Custom exception types for domain and API layers."""
from __future__ import annotations

from enum import Enum
from typing import Optional


class ValidationKind(str, Enum):
    INVALID_SERVICE_NAME = "InvalidServiceName"
    INVALID_PRICE = "InvalidPrice"
    INVALID_USER_ID = "InvalidUserId"
    INVALID_DATE = "InvalidDate"
    INVALID_DATE_RANGE = "InvalidDateRange"
    INVALID_LIMIT = "InvalidLimit"
    INVALID_OFFSET = "InvalidOffset"


class AppError(Exception):
    """Base app exception."""

    kind = "Internal"

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict[str, Optional[str]]:
        return {"error": self.message, "kind": self.kind, "field": self.field}


class SubscriptionValidationError(AppError):
    """Validation failure for user input; raised before any storage call."""

    def __init__(self, kind: ValidationKind, message: str, field: Optional[str] = None) -> None:
        super().__init__(message, field=field)
        self.kind = kind.value
        self.validation_kind = kind


class SubscriptionNotFoundError(AppError):
    """Referenced subscription does not exist."""

    kind = "NotFound"


class NoMatchesFoundError(AppError):
    """Aggregate query matched no subscriptions."""

    kind = "NoMatchesFound"


class PersistenceError(AppError):
    """Storage failure that does not map to a known "no rows" condition."""

    kind = "Internal"
