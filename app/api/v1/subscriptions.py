from __future__ import annotations

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.api.dependencies import get_subscription_service
from app.schemas.subscription import (
    CreateSubscriptionRequest,
    ErrorResponse,
    SubscriptionListResponse,
    SubscriptionResponse,
    TotalCostResponse,
    UpdateSubscriptionRequest,
)
from app.services.subscription_service import SubscriptionService

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    404: {"model": ErrorResponse, "description": "Not found"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}


@router.post(
    "",
    response_model=SubscriptionResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def create_subscription(
    payload: CreateSubscriptionRequest,
    service: SubscriptionService = Depends(get_subscription_service),
):
    """Create a subscription. Omit `end_date` for an indefinite subscription."""
    logger.info(f"Creating subscription user_id={payload.user_id} service_name={payload.service_name}")
    return await service.create_subscription(payload)


@router.get("", response_model=SubscriptionListResponse, responses=ERROR_RESPONSES)
async def list_subscriptions(
    user_id: Optional[uuid.UUID] = Query(None, description="Only this user's subscriptions"),
    limit: Optional[int] = Query(None, description="Page size (default 20, max 100)"),
    offset: int = Query(0, description="Rows to skip"),
    service: SubscriptionService = Depends(get_subscription_service),
):
    logger.info(f"Listing subscriptions user_id={user_id} limit={limit} offset={offset}")
    page = await service.list_subscriptions(user_id=user_id, limit=limit, offset=offset)
    return SubscriptionListResponse(
        items=[SubscriptionResponse.model_validate(item) for item in page.items],
        total=page.total,
        limit=page.limit,
        offset=page.offset,
        has_more=page.has_more,
    )


@router.get("/total", response_model=TotalCostResponse, responses=ERROR_RESPONSES)
async def get_total_cost(
    start_date: Optional[str] = Query(None, description="Period start, MM-YYYY"),
    end_date: Optional[str] = Query(None, description="Period end, MM-YYYY"),
    user_id: Optional[uuid.UUID] = Query(None),
    service_name: Optional[str] = Query(None),
    service: SubscriptionService = Depends(get_subscription_service),
):
    """Sum of prices of subscriptions active at any point in the period."""
    logger.info(
        f"Calculating total cost user_id={user_id} service_name={service_name} "
        f"start_date={start_date} end_date={end_date}"
    )
    total = await service.calculate_total(user_id, service_name, start_date, end_date)
    return TotalCostResponse(total_cost=total)


@router.get("/{subscription_id}", response_model=SubscriptionResponse, responses=ERROR_RESPONSES)
async def get_subscription(
    subscription_id: uuid.UUID,
    service: SubscriptionService = Depends(get_subscription_service),
):
    return await service.get_subscription(subscription_id)


@router.put("/{subscription_id}", response_model=SubscriptionResponse, responses=ERROR_RESPONSES)
@router.patch("/{subscription_id}", response_model=SubscriptionResponse, responses=ERROR_RESPONSES)
async def update_subscription(
    subscription_id: uuid.UUID,
    payload: UpdateSubscriptionRequest,
    service: SubscriptionService = Depends(get_subscription_service),
):
    """Partial update: only fields present in the body change."""
    logger.info(f"Updating subscription {subscription_id}")
    return await service.update_subscription(subscription_id, payload)


@router.delete(
    "/{subscription_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES,
)
async def delete_subscription(
    subscription_id: uuid.UUID,
    service: SubscriptionService = Depends(get_subscription_service),
):
    logger.info(f"Deleting subscription {subscription_id}")
    await service.delete_subscription(subscription_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
