"""
Shared test fixtures.

Redis is replaced by fakeredis so no server is needed. API tests share one
FakeServer per test and get a fresh client per request, created inside the
app's own event loop.
"""

import fakeredis
import pytest
from fastapi.testclient import TestClient

from src.app import create_app
from src.core.dependencies import get_redis_client
from src.core.service.auth.account_service import AccountService
from src.core.service.admin.reporting_service import AdminReportingService
from src.infra.repository.activity_log_repository import ActivityLogRepository
from src.infra.repository.user_repository import UserRepository
from src.infra.store.record_store import RecordStore
from src.infra.config.settings import settings

ADMIN_TOKEN = settings.ADMIN_PASSWORD


@pytest.fixture
def fake_server():
    return fakeredis.FakeServer()


@pytest.fixture
async def redis_client(fake_server):
    client = fakeredis.FakeAsyncRedis(server=fake_server, decode_responses=True)
    try:
        yield client
    finally:
        await client.aclose()


@pytest.fixture
def record_store(redis_client):
    return RecordStore(redis_client)


@pytest.fixture
def user_repository(record_store):
    return UserRepository(record_store)


@pytest.fixture
def activity_repository(record_store):
    return ActivityLogRepository(record_store, max_entries=0)


@pytest.fixture
def account_service(user_repository, activity_repository):
    return AccountService(user_repository, activity_repository)


@pytest.fixture
def reporting_service(user_repository, activity_repository):
    return AdminReportingService(user_repository, activity_repository, fetch_limit=100)


@pytest.fixture
def app(fake_server):
    """FastAPI app wired to an in-memory Redis."""
    app = create_app()

    async def fake_redis_client():
        return fakeredis.FakeAsyncRedis(server=fake_server, decode_responses=True)

    app.dependency_overrides[get_redis_client] = fake_redis_client
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}
