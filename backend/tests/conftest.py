# Shared pytest configuration and fixtures for all test types
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from slowapi import Limiter
from slowapi.util import get_remote_address
from unittest.mock import patch

# Create test limiter with no limits and in-memory storage
test_limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],
    storage_uri="memory://",
)

# Patch the limiter before importing the app so decorators use test limiter
with patch("common.providers.rate_limiter.limiter.limiter", test_limiter):
    from api.main import app

import common.db.models  # noqa: F401
from common.db.base import Base, enable_sqlite_foreign_keys
from common.db.scoped import transaction
from packages.auth.dependencies import get_current_active_user
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.billing.models.domain.enums import BillingCycle, OrderStatusName
from packages.billing.models.domain.plan import OrderStatusCreateModel, PlanCreateModel
from packages.billing.repositories.plan_repository import (
    OrderStatusRepository,
    PlanRepository,
)
from packages.billing.routes.billing import get_billing_service
from packages.billing.services.billing_service import BillingService
from packages.teams.services.team_service import TeamService
from packages.users.models.domain.user import UserCreateModel
from packages.users.services.user_service import UserService

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = T0):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine and initialize schema."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    enable_sqlite_foreign_keys(engine.sync_engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_connection(test_engine):
    """Create test connection with outer transaction for rollback isolation."""
    async with test_engine.connect() as connection:
        trans = await connection.begin()
        yield connection
        await trans.rollback()


@pytest_asyncio.fixture(scope="function")
async def test_session_factory(test_connection):
    """Create session factory bound to test connection.

    Using join_transaction_mode="create_savepoint" so transaction() commits
    and rollbacks become savepoint releases and rollbacks.
    """
    return async_sessionmaker(
        bind=test_connection,
        class_=AsyncSession,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )


@pytest_asyncio.fixture(scope="function")
async def test_db(test_session_factory):
    """Create a test database session."""
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function", autouse=True)
async def patch_lazy_sessions(test_session_factory, monkeypatch):
    """
    Patch session factories to use test database.

    This allows real transaction() and get_session() to run with proper
    commit/rollback/ContextVar semantics while using the test database.
    """
    monkeypatch.setattr("common.db.scoped.AsyncSessionLocal", test_session_factory)
    monkeypatch.setattr(
        "common.db.scoped.AsyncSessionLocalReadonly", test_session_factory
    )


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def billing_service(clock):
    return BillingService(clock=clock)


# ============================================================================
# Users and teams
# ============================================================================


@pytest_asyncio.fixture(scope="function")
async def test_user_record():
    return await UserService().create_user(
        UserCreateModel(email="owner@acme.io", name="Team Owner")
    )


@pytest_asyncio.fixture(scope="function")
async def other_user_record():
    return await UserService().create_user(
        UserCreateModel(email="other@acme.io", name="Someone Else")
    )


@pytest_asyncio.fixture(scope="function")
async def admin_user_record():
    return await UserService().create_user(
        UserCreateModel(email="admin@acme.io", name="Billing Admin", is_admin=True)
    )


@pytest_asyncio.fixture(scope="function")
async def test_user(test_user_record):
    """Create a test authenticated user."""
    return AuthenticatedUser(user_id=test_user_record.id)


@pytest_asyncio.fixture(scope="function")
async def other_user(other_user_record):
    return AuthenticatedUser(user_id=other_user_record.id)


@pytest_asyncio.fixture(scope="function")
async def admin_user(admin_user_record):
    return AuthenticatedUser(user_id=admin_user_record.id, is_admin=True)


@pytest_asyncio.fixture(scope="function")
async def sample_team(test_user):
    """Create a team owned by test_user."""
    return await TeamService().create_team(test_user, name="Platform")


# ============================================================================
# Catalog
# ============================================================================


@pytest_asyncio.fixture(scope="function")
async def order_statuses():
    """Seed the statuses the order lifecycle needs, COMPLETED first on purpose."""
    repo = OrderStatusRepository()
    async with transaction():
        completed = await repo.create(
            OrderStatusCreateModel(name=OrderStatusName.COMPLETED.value)
        )
        pending = await repo.create(
            OrderStatusCreateModel(name=OrderStatusName.PENDING.value)
        )
    return {OrderStatusName.PENDING: pending, OrderStatusName.COMPLETED: completed}


@pytest_asyncio.fixture(scope="function")
async def plans():
    """STARTER 30, PRO 60 and ENTERPRISE 120, in that creation order."""
    repo = PlanRepository()
    async with transaction():
        starter = await repo.create(PlanCreateModel(name="STARTER", price=30))
        pro = await repo.create(PlanCreateModel(name="PRO", price=60))
        enterprise = await repo.create(PlanCreateModel(name="ENTERPRISE", price=120))
    return {"starter": starter, "pro": pro, "enterprise": enterprise}


@pytest_asyncio.fixture(scope="function")
async def ordered_subscription(billing_service, test_user, sample_team, plans, order_statuses):
    """A STARTER subscription with its purchase order still PENDING."""
    result = await billing_service.order_subscription(
        test_user, team_id=sample_team.id, plan_id=plans["starter"].id
    )
    return result.subscription_id


@pytest_asyncio.fixture(scope="function")
async def active_subscription(billing_service, test_user, ordered_subscription):
    """A STARTER subscription paid and activated at T0."""
    await billing_service.confirm_order_payment(
        test_user, ordered_subscription, BillingCycle.MONTHLY
    )
    return ordered_subscription


# ============================================================================
# HTTP
# ============================================================================


@pytest_asyncio.fixture(scope="function")
async def client(test_user, billing_service):
    """Create a test client authenticated as test_user."""

    def override_get_current_active_user():
        return test_user

    app.dependency_overrides[get_current_active_user] = override_get_current_active_user
    app.dependency_overrides[get_billing_service] = lambda: billing_service

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def anonymous_client():
    """Create a test client without any dependency overrides."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
