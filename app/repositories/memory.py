"""In-process subscription store for local runs (STORAGE_BACKEND=memory)."""
from __future__ import annotations

import itertools
import logging
import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from app.models.subscription import Subscription
from app.services.total_cost import TotalCostQuery, sum_matching

logger = logging.getLogger(__name__)


class InMemorySubscriptionRepository:
    def __init__(self) -> None:
        self._rows: dict[uuid.UUID, Subscription] = {}
        self._order: dict[uuid.UUID, int] = {}
        self._sequence = itertools.count()
        self._lock = threading.Lock()

    def create(self, subscription: Subscription) -> Subscription:
        now = datetime.now(timezone.utc)
        stored = replace(subscription, id=uuid.uuid4(), created_at=now, updated_at=now)
        with self._lock:
            self._rows[stored.id] = stored
            self._order[stored.id] = next(self._sequence)
        return replace(stored)

    def get(self, subscription_id: uuid.UUID) -> Optional[Subscription]:
        with self._lock:
            stored = self._rows.get(subscription_id)
        return replace(stored) if stored else None

    def update(self, subscription: Subscription) -> Optional[Subscription]:
        with self._lock:
            current = self._rows.get(subscription.id)
            if current is None:
                return None
            stored = replace(
                current,
                service_name=subscription.service_name,
                price=subscription.price,
                start_date=subscription.start_date,
                end_date=subscription.end_date,
                updated_at=datetime.now(timezone.utc),
            )
            self._rows[stored.id] = stored
        return replace(stored)

    def delete(self, subscription_id: uuid.UUID) -> bool:
        with self._lock:
            self._order.pop(subscription_id, None)
            return self._rows.pop(subscription_id, None) is not None

    def list(
        self,
        user_id: Optional[uuid.UUID],
        limit: int,
        offset: int,
    ) -> tuple[list[Subscription], int]:
        with self._lock:
            matching = [
                row for row in self._rows.values() if user_id is None or row.user_id == user_id
            ]
            matching.sort(key=lambda row: self._order[row.id], reverse=True)
        page = matching[offset:offset + limit]
        return [replace(row) for row in page], len(matching)

    def total_cost(self, query: TotalCostQuery) -> Optional[int]:
        with self._lock:
            rows = list(self._rows.values())
        return sum_matching(rows, query)
