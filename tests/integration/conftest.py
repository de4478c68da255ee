from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from credcore.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from credcore.app.services.reset_token_sender import IResetTokenSender
from credcore.depends import get_unit_of_work, get_unit_of_work_factory

CLIENT_IP = "203.0.113.5"


class IntegrationConfig(ApplicationConfig):
    DB_URI = "sqlite+aiosqlite:///./test.db"
    LOG_LEVEL = "WARNING"
    CORS_ORIGINS = []
    JWT_ACCESS_SECRET = "integration-access-secret-0123456789abcdef"
    JWT_REFRESH_SECRET = "integration-refresh-secret-0123456789abcdef"
    JWT_ISSUER = "iFi"
    JWT_AUDIENCE = "iFi-users"
    TOKEN_VERSION = 2
    ACCESS_TOKEN_TTL_MINUTES = 15
    REFRESH_TOKEN_TTL_DAYS = 7
    PASSWORD_RESET_TTL_MINUTES = 60
    ENCRYPTION_KEY = "0f1e2d3c4b5a69788796a5b4c3d2e1f00f1e2d3c4b5a69788796a5b4c3d2e1f0"
    WEBHOOK_SECRET = "integration-webhook-secret"
    RATE_LIMIT_BACKEND = "memory"
    STORE_TIMEOUT_SECONDS = 5.0
    HSTS_MAX_AGE_SECONDS = 31536000


class CapturingResetTokenSender(IResetTokenSender):
    """Keeps issued reset tokens so tests can play the user's inbox"""

    def __init__(self):
        self.sent = []

    async def send(self, account, reset_token: str) -> None:
        self.sent.append((account.email, reset_token))

    def last_token_for(self, email: str) -> str:
        return [token for to, token in self.sent if to == email][-1]


@pytest.fixture
def app_config():
    return IntegrationConfig


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def reset_sender():
    return CapturingResetTokenSender()


@pytest_asyncio.fixture
async def app(db_session, app_config, reset_sender):
    from credcore.api.app import create_app

    app = create_app(app_config)
    app.state.services.reset_sender = reset_sender

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    @asynccontextmanager
    async def open_test_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work_factory] = lambda: open_test_unit_of_work
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app, client=(CLIENT_IP, 123))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def register_account(client):
    async def _register(email="user@example.com", password="SecurePass123!"):
        response = await client.post(
            "/auth/register",
            json={
                "email": email,
                "password": password,
                "first_name": "Ada",
                "last_name": "Lovelace",
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register
