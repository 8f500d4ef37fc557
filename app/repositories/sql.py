"""SQLAlchemy-backed subscription store (PostgreSQL in production)."""
from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import PersistenceError
from app.models import SubscriptionRecord
from app.models.subscription import Subscription
from app.services.total_cost import TotalCostQuery

logger = logging.getLogger(__name__)


class SqlSubscriptionRepository:
    def __init__(self, db: Session):
        self.db = db

    def _fail(self, action: str, exc: SQLAlchemyError) -> PersistenceError:
        self.db.rollback()
        logger.error(f"Failed to {action}: {str(exc)}")
        return PersistenceError(f"failed to {action}")

    def create(self, subscription: Subscription) -> Subscription:
        record = SubscriptionRecord(
            service_name=subscription.service_name,
            price=subscription.price,
            user_id=subscription.user_id,
            start_date=subscription.start_date,
            end_date=subscription.end_date,
        )
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as exc:
            raise self._fail("create subscription", exc) from exc
        return record.to_entity()

    def get(self, subscription_id: uuid.UUID) -> Optional[Subscription]:
        try:
            record = self.db.get(SubscriptionRecord, subscription_id)
        except SQLAlchemyError as exc:
            raise self._fail("get subscription", exc) from exc
        return record.to_entity() if record else None

    def update(self, subscription: Subscription) -> Optional[Subscription]:
        try:
            record = self.db.get(SubscriptionRecord, subscription.id)
            if record is None:
                return None
            record.service_name = subscription.service_name
            record.price = subscription.price
            record.start_date = subscription.start_date
            record.end_date = subscription.end_date
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as exc:
            raise self._fail("update subscription", exc) from exc
        return record.to_entity()

    def delete(self, subscription_id: uuid.UUID) -> bool:
        try:
            deleted = (
                self.db.query(SubscriptionRecord)
                .filter(SubscriptionRecord.id == subscription_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail("delete subscription", exc) from exc
        return deleted > 0

    def list(
        self,
        user_id: Optional[uuid.UUID],
        limit: int,
        offset: int,
    ) -> tuple[list[Subscription], int]:
        try:
            query = self.db.query(SubscriptionRecord)
            if user_id is not None:
                query = query.filter(SubscriptionRecord.user_id == user_id)
            total = query.count()
            rows = (
                query.order_by(SubscriptionRecord.created_at.desc(), SubscriptionRecord.id.desc())
                .offset(offset)
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as exc:
            raise self._fail("list subscriptions", exc) from exc
        return [row.to_entity() for row in rows], total

    def total_cost(self, query: TotalCostQuery) -> Optional[int]:
        try:
            total = (
                self.db.query(func.sum(SubscriptionRecord.price))
                .filter(*query.sql_filters(SubscriptionRecord))
                .scalar()
            )
        except SQLAlchemyError as exc:
            raise self._fail("get total cost", exc) from exc
        return int(total) if total is not None else None
