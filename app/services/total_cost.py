"""
Total cost of subscriptions active during a month period.

A subscription counts when its active interval [start_date, end_date or forever)
intersects [period_start, period_end]. Each match contributes its full price;
nothing is prorated by the length of the overlap.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Optional

from sqlalchemy import and_, or_

from app.core.exceptions import NoMatchesFoundError
from app.core.periods import format_period
from app.models.subscription import Subscription


@dataclass(frozen=True)
class TotalCostQuery:
    period_start: date
    period_end: date
    user_id: Optional[uuid.UUID] = None
    service_name: str = ""

    def overlaps(self, start_date: date, end_date: Optional[date]) -> bool:
        return start_date <= self.period_end and (end_date is None or end_date >= self.period_start)

    def matches(self, subscription: Subscription) -> bool:
        if self.user_id is not None and subscription.user_id != self.user_id:
            return False
        if self.service_name and subscription.service_name != self.service_name:
            return False
        return self.overlaps(subscription.start_date, subscription.end_date)

    def sql_filters(self, model: Any) -> list[Any]:
        """The same rule as ``matches`` expressed over a mapped table."""
        filters = [
            model.start_date <= self.period_end,
            or_(model.end_date.is_(None), model.end_date >= self.period_start),
        ]
        if self.user_id is not None:
            filters.append(model.user_id == self.user_id)
        if self.service_name:
            filters.append(model.service_name == self.service_name)
        return [and_(*filters)]

    def describe(self) -> str:
        parts = [f"{format_period(self.period_start)}..{format_period(self.period_end)}"]
        if self.user_id is not None:
            parts.append(f"user_id={self.user_id}")
        if self.service_name:
            parts.append(f"service_name={self.service_name}")
        return " ".join(parts)


def sum_matching(subscriptions: Iterable[Subscription], query: TotalCostQuery) -> Optional[int]:
    """Sum prices of matching subscriptions; None when nothing matched."""
    total: Optional[int] = None
    for subscription in subscriptions:
        if query.matches(subscription):
            total = (total or 0) + subscription.price
    return total


def require_total(total: Optional[int], query: TotalCostQuery) -> int:
    """Turn a storage-level "no rows" result into NoMatchesFoundError."""
    if total is None:
        raise NoMatchesFoundError(f"no subscriptions found for {query.describe()}")
    return total
