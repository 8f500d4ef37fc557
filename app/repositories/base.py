"""
Subscription persistence contract.

The service depends on this interface only; storage engines plug in behind it.
No I/O imports here - safe to import anywhere.
"""
from __future__ import annotations

import uuid
from typing import Optional, Protocol, runtime_checkable

from app.models.subscription import Subscription
from app.services.total_cost import TotalCostQuery


@runtime_checkable
class SubscriptionRepository(Protocol):
    def create(self, subscription: Subscription) -> Subscription:
        """Persist a new subscription; the result carries id and timestamps."""
        ...

    def get(self, subscription_id: uuid.UUID) -> Optional[Subscription]:
        """Return the subscription or None when absent."""
        ...

    def update(self, subscription: Subscription) -> Optional[Subscription]:
        """Overwrite mutable fields; None when the row no longer exists."""
        ...

    def delete(self, subscription_id: uuid.UUID) -> bool:
        """Hard delete; False when nothing was removed."""
        ...

    def list(
        self,
        user_id: Optional[uuid.UUID],
        limit: int,
        offset: int,
    ) -> tuple[list[Subscription], int]:
        """Newest first page plus the un-sliced match count."""
        ...

    def total_cost(self, query: TotalCostQuery) -> Optional[int]:
        """Sum of matching prices; None when no row matched."""
        ...
