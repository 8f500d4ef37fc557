"""Subscription domain entity and its in-place update rules."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Optional

from app.core.exceptions import SubscriptionValidationError, ValidationKind

UPDATABLE_FIELDS = ("service_name", "price", "start_date", "end_date")


@dataclass
class Subscription:
    service_name: str
    price: int
    user_id: uuid.UUID
    start_date: date
    end_date: Optional[date] = None
    id: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_indefinite(self) -> bool:
        return self.end_date is None

    def check_date_range(self) -> None:
        """Enforce end_date >= start_date; an indefinite subscription always passes."""
        if self.end_date is not None and self.end_date < self.start_date:
            raise SubscriptionValidationError(
                ValidationKind.INVALID_DATE_RANGE,
                "end_date cannot be earlier than start_date",
                field="end_date",
            )

    def apply_changes(self, changes: dict[str, Any]) -> "Subscription":
        """
        Return a copy with only the supplied fields replaced.

        Keys absent from ``changes`` keep their current value; an ``end_date``
        key mapped to None clears the end date. The merged pair is re-checked.
        """
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")
        merged = replace(self, **changes)
        merged.check_date_range()
        return merged
