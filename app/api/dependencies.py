"""Shared API dependencies: request-scoped sessions and the subscription service."""
from __future__ import annotations

from typing import Generator, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.repositories.sql import SqlSubscriptionRepository
from app.services.subscription_service import SubscriptionService


def get_db(request: Request) -> Generator[Optional[Session], None, None]:
    """
    Dependency for getting a database session; None on the memory backend.
    """
    session_factory = request.app.state.session_factory
    if session_factory is None:
        yield None
        return
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


def get_subscription_service(
    request: Request,
    db: Optional[Session] = Depends(get_db),
) -> SubscriptionService:
    state = request.app.state
    repository = state.memory_repository if db is None else SqlSubscriptionRepository(db)
    return SubscriptionService(repository=repository, settings=state.settings)


__all__ = ["get_db", "get_subscription_service"]
