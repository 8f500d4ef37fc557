"""
SQLAlchemy models for the subscription tracker.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import CheckConstraint, Column, Date, DateTime, Index, Integer, Text, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

from app.models.subscription import Subscription

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes; stored values are UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SubscriptionRecord(Base):
    __tablename__ = "subscriptions"
    __table_args__ = (
        CheckConstraint("price > 0", name="ck_subscriptions_price_positive"),
        CheckConstraint(
            "end_date IS NULL OR end_date >= start_date",
            name="ck_subscriptions_date_range",
        ),
        Index("ix_subscriptions_user_id", "user_id"),
        Index("ix_subscriptions_period", "start_date", "end_date"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    service_name = Column(Text, nullable=False)
    price = Column(Integer, nullable=False)
    user_id = Column(Uuid(as_uuid=True), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=func.now(),
        onupdate=_utcnow,
        nullable=False,
    )

    def to_entity(self) -> Subscription:
        return Subscription(
            id=self.id,
            service_name=self.service_name,
            price=self.price,
            user_id=self.user_id,
            start_date=self.start_date,
            end_date=self.end_date,
            created_at=_as_utc(self.created_at),
            updated_at=_as_utc(self.updated_at),
        )


__all__ = ["Base", "Subscription", "SubscriptionRecord"]
