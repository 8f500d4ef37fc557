import os
import sys
import uuid
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault('APP_ENV', 'test')
os.environ.setdefault('STORAGE_BACKEND', 'memory')
os.environ.setdefault('DATABASE_URL', 'sqlite://')

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import Settings
from app.main import create_app
from app.models import Base
from app.repositories.memory import InMemorySubscriptionRepository
from app.repositories.sql import SqlSubscriptionRepository
from app.services.subscription_service import SubscriptionService


@pytest.fixture
def settings():
    return Settings(app_env='test', storage_backend='memory', database_url='sqlite://')


@pytest.fixture
def user_id():
    return uuid.uuid4()


@pytest.fixture
def memory_repository():
    return InMemorySubscriptionRepository()


@pytest.fixture
def service(memory_repository, settings):
    return SubscriptionService(repository=memory_repository, settings=settings)


@pytest.fixture
def sql_engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_session(sql_engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=sql_engine)()
    yield session
    session.close()


@pytest.fixture
def sql_repository(sql_session):
    return SqlSubscriptionRepository(sql_session)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def sql_client():
    app = create_app(Settings(app_env='test', storage_backend='sql', database_url='sqlite://'))
    with TestClient(app) as test_client:
        yield test_client
