import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

import smartretire.models  # noqa: F401
from smartretire.core import security
from smartretire.database import get_db
from smartretire.main import app
from smartretire.services.user_service import UserService


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def alice(db):
    return await UserService(db).upsert_user("alice-open-id", name="Alice", email="alice@example.com")


@pytest.fixture
async def bob(db):
    return await UserService(db).upsert_user("bob-open-id", name="Bob", email="bob@example.com")


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {security.create_access_token(subject=user.openId)}"}


@pytest.fixture
def alice_headers(alice):
    return auth_headers(alice)


@pytest.fixture
def bob_headers(bob):
    return auth_headers(bob)


@pytest.fixture
def scenario_payload():
    return {
        "name": "Retire at 67",
        "currentAge": 62,
        "retirementAge": 67,
        "lifeExpectancy": 90,
        "currentSavings": 500000,
        "monthlyExpenses": 5000,
        "socialSecurityAge": 67,
        "estimatedSocialSecurity": 2500,
    }
