import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "1")
os.environ.setdefault("ENFORCE_SERVICE_AREAS", "true")
os.environ.setdefault("ENFORCE_QUOTE_TRANSITIONS", "false")

from datetime import date, timedelta

import fakeredis
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import movingco.core.redis as redis_module
from movingco.core.enums import UserRole
from movingco.core.security import create_access_token, hash_password
from movingco.db.base import Base
from movingco.db.session import get_db
from movingco.main import app
from movingco.models.service import Service
from movingco.models.service_area import ServiceArea
from movingco.models.user import User

TEST_DATABASE_URL = "sqlite+aiosqlite://"

SERVICED_STATES = (
    ("CA", "California"),
    ("TX", "Texas"),
    ("NY", "New York"),
    ("FL", "Florida"),
    ("IL", "Illinois"),
)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def test_client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def fake_redis(monkeypatch):
    client = fakeredis.FakeAsyncRedis()
    monkeypatch.setattr(redis_module, "redis", client)
    return client


async def _create_user(session_factory, email, password, user_type, **fields):
    async with session_factory() as session:
        user = User(
            email=email,
            password_hash=hash_password(password),
            user_type=user_type,
            is_active=fields.pop("is_active", True),
            **fields,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user


@pytest.fixture
async def admin_user(session_factory):
    return await _create_user(
        session_factory, "admin@example.com", "admin-password", UserRole.ADMIN,
        first_name="Ada", last_name="Admin", phone="555-0100",
    )


@pytest.fixture
async def customer_user(session_factory):
    return await _create_user(
        session_factory, "customer@example.com", "customer-password", UserRole.CUSTOMER,
        first_name="Cory", last_name="Customer",
    )


@pytest.fixture
async def other_customer(session_factory):
    return await _create_user(
        session_factory, "other@example.com", "other-password", UserRole.CUSTOMER,
        first_name="Olive", last_name="Other",
    )


@pytest.fixture
async def inactive_customer(session_factory):
    return await _create_user(
        session_factory, "inactive@example.com", "inactive-password", UserRole.CUSTOMER,
        first_name="Ina", last_name="Active", is_active=False,
    )


def auth_headers(user) -> dict:
    token = create_access_token(user.id, user.email, user.user_type)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user):
    return auth_headers(admin_user)


@pytest.fixture
def customer_headers(customer_user):
    return auth_headers(customer_user)


@pytest.fixture
def other_customer_headers(other_customer):
    return auth_headers(other_customer)


@pytest.fixture
def expired_token(customer_user):
    return create_access_token(customer_user.id, customer_user.email, customer_user.user_type, expires_minutes=-5)


@pytest.fixture
async def seed_service_areas(session_factory):
    """Activate a handful of states; Wyoming exists but stays inactive."""
    async with session_factory() as session:
        for code, name in SERVICED_STATES:
            session.add(ServiceArea(state_code=code, state_name=name, is_active=True))
        session.add(ServiceArea(state_code="WY", state_name="Wyoming", is_active=False))
        await session.commit()
    return [code for code, _ in SERVICED_STATES]


@pytest.fixture
async def active_service(session_factory):
    async with session_factory() as session:
        service = Service(
            title="Local Moving",
            description="Moves within the same metro area",
            image_url="https://img.movingco.test/local.jpg",
            is_active=True,
        )
        session.add(service)
        await session.commit()
        await session.refresh(service)
        return service


@pytest.fixture
async def inactive_service(session_factory):
    async with session_factory() as session:
        service = Service(
            title="Piano Moving",
            description="Retired offering",
            image_url="https://img.movingco.test/piano.jpg",
            is_active=False,
        )
        session.add(service)
        await session.commit()
        await session.refresh(service)
        return service


@pytest.fixture
def future_date():
    return date.today() + timedelta(days=30)


@pytest.fixture
def quote_payload(active_service, future_date):
    return {
        "serviceId": active_service.id,
        "fromAddress": {"street": "1 Market St", "city": "San Francisco", "state": "CA", "zip": "94105"},
        "toAddress": {"street": "500 Congress Ave", "city": "Austin", "state": "TX", "zip": "78701"},
        "moveDate": future_date.isoformat(),
    }


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: end-to-end tests through the HTTP API")
    config.addinivalue_line("markers", "unit: tests of a single service or helper")
