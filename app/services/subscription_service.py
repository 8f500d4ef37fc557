"""
Subscription Service

Business logic for the subscription lifecycle and billing totals.
"""
from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Optional

from app.config import Settings
from app.core.exceptions import SubscriptionNotFoundError
from app.core.periods import parse_period
from app.models.subscription import Subscription
from app.repositories.base import SubscriptionRepository
from app.schemas.subscription import CreateSubscriptionRequest, UpdateSubscriptionRequest
from app.services.pagination import ListPage, build_page
from app.services.total_cost import TotalCostQuery, require_total
from app.services.validation import (
    resolve_limit,
    validate_create,
    validate_list,
    validate_period,
    validate_update,
)

logger = logging.getLogger(__name__)


class SubscriptionService:
    """
    Subscription operations over an injected repository.

    Repository calls run in worker threads so blocking storage I/O stays
    off the event loop.

    Updates are read-modify-write without a version token: two concurrent
    updates of one subscription resolve as last-write-wins.
    """

    def __init__(self, repository: SubscriptionRepository, settings: Settings):
        self.repository = repository
        self.settings = settings

    async def create_subscription(self, request: CreateSubscriptionRequest) -> Subscription:
        validate_create(
            request.service_name,
            request.price,
            request.user_id,
            request.start_date,
            request.end_date,
        )
        subscription = Subscription(
            service_name=request.service_name,
            price=request.price,
            user_id=request.user_id,
            start_date=parse_period(request.start_date, field="start_date"),
            end_date=parse_period(request.end_date, field="end_date") if request.end_date is not None else None,
        )
        subscription.check_date_range()

        created = await asyncio.to_thread(self.repository.create, subscription)
        logger.info(
            f"Created subscription {created.id} for user {created.user_id} ({created.service_name})"
        )
        return created

    async def get_subscription(self, subscription_id: uuid.UUID) -> Subscription:
        subscription = await asyncio.to_thread(self.repository.get, subscription_id)
        if subscription is None:
            raise SubscriptionNotFoundError(f"subscription {subscription_id} not found")
        return subscription

    async def update_subscription(
        self,
        subscription_id: uuid.UUID,
        request: UpdateSubscriptionRequest,
    ) -> Subscription:
        supplied = request.supplied_fields()
        validate_update(supplied)

        current = await self.get_subscription(subscription_id)
        if not supplied:
            return current

        merged = current.apply_changes(self._parse_changes(supplied))
        updated = await asyncio.to_thread(self.repository.update, merged)
        if updated is None:
            raise SubscriptionNotFoundError(f"subscription {subscription_id} not found")
        logger.info(f"Updated subscription {subscription_id}: {sorted(supplied)}")
        return updated

    async def delete_subscription(self, subscription_id: uuid.UUID) -> None:
        if not await asyncio.to_thread(self.repository.delete, subscription_id):
            raise SubscriptionNotFoundError(f"subscription {subscription_id} not found")
        logger.info(f"Deleted subscription {subscription_id}")

    async def list_subscriptions(
        self,
        user_id: Optional[uuid.UUID] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> ListPage[Subscription]:
        limit = resolve_limit(limit, default=self.settings.default_page_limit)
        validate_list(limit, offset, max_limit=self.settings.max_page_limit)

        items, total = await asyncio.to_thread(self.repository.list, user_id, limit, offset)
        return build_page(items, total, limit, offset)

    async def calculate_total(
        self,
        user_id: Optional[uuid.UUID],
        service_name: Optional[str],
        period_start: Optional[str],
        period_end: Optional[str],
    ) -> int:
        validate_period(period_start, period_end)
        query = TotalCostQuery(
            period_start=parse_period(period_start, field="start_date"),
            period_end=parse_period(period_end, field="end_date"),
            user_id=user_id,
            service_name=service_name or "",
        )
        total = require_total(await asyncio.to_thread(self.repository.total_cost, query), query)
        logger.info(f"Total cost {total} for {query.describe()}")
        return total

    @staticmethod
    def _parse_changes(supplied: dict[str, Any]) -> dict[str, Any]:
        changes = dict(supplied)
        if "start_date" in changes:
            changes["start_date"] = parse_period(changes["start_date"], field="start_date")
        if changes.get("end_date") is not None:
            changes["end_date"] = parse_period(changes["end_date"], field="end_date")
        return changes
