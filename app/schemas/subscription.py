from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class CreateSubscriptionRequest(BaseModel):
    """Missing fields stay None so the domain validator can name them."""

    service_name: Optional[str] = Field(default=None, examples=["Yandex Plus"])
    price: Optional[StrictInt] = Field(default=None, description="Monthly price in the smallest currency unit")
    user_id: Optional[uuid.UUID] = None
    start_date: Optional[str] = Field(default=None, examples=["07-2025"], description="MM-YYYY")
    end_date: Optional[str] = Field(
        default=None,
        examples=["12-2025"],
        description="MM-YYYY; omit for an indefinite subscription",
    )


class UpdateSubscriptionRequest(BaseModel):
    """All fields optional. ``end_date: null`` makes the subscription indefinite."""

    service_name: Optional[str] = None
    price: Optional[StrictInt] = None
    start_date: Optional[str] = Field(default=None, description="MM-YYYY")
    end_date: Optional[str] = Field(default=None, description="MM-YYYY")

    def supplied_fields(self) -> dict[str, Any]:
        """Fields present in the request body, explicit nulls included."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class SubscriptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    service_name: str
    price: int
    user_id: uuid.UUID
    start_date: date
    end_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SubscriptionListResponse(BaseModel):
    items: list[SubscriptionResponse]
    total: int
    limit: int
    offset: int
    has_more: bool


class TotalCostResponse(BaseModel):
    total_cost: int


class ErrorResponse(BaseModel):
    error: str
    kind: str
    field: Optional[str] = None
