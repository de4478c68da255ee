from contextlib import asynccontextmanager
from typing import AsyncContextManager, Callable, Optional

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from credcore.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from credcore.api.bootstrap import Services
from credcore.api.error import ClientError
from credcore.app.repositories.session_repository import ClientMeta
from credcore.app.services.unit_of_work import UnitOfWork
from credcore.app.use_cases.auth import AuthContext, ValidateSessionUseCase
from credcore.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)

UNAUTHORIZED_HEADERS = {"WWW-Authenticate": "Bearer"}


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@asynccontextmanager
async def open_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_unit_of_work_factory() -> Callable[[], AsyncContextManager[UnitOfWork]]:
    """Unit of work opener for work that outlives the request"""
    return open_unit_of_work


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_client_meta(request: Request) -> ClientMeta:
    return ClientMeta(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


async def get_access_token(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> str:
    """Raw bearer token from the Authorization header"""
    if credentials is None or not credentials.credentials:
        raise ClientError(
            Error("INVALID_SESSION", "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers=UNAUTHORIZED_HEADERS,
        )
    return credentials.credentials


async def get_current_account(
    access_token: str = Depends(get_access_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: Services = Depends(get_services),
) -> AuthContext:
    """
    Dependency to verify the bearer token and its session.

    Runs before any handler logic. The token must verify as an access token
    and its session must exist and be unexpired; the session is touched.

    Returns:
        AuthContext with account_id, role and session_id only

    Raises:
        ClientError: 401 for any verification failure
    """
    use_case = ValidateSessionUseCase(uow, services.token_service, services.store_timeout)
    result = await use_case.execute(access_token)

    if result.is_err():
        raise ClientError(
            result.error,
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers=UNAUTHORIZED_HEADERS,
        )

    return result.value


async def get_optional_account(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: Services = Depends(get_services),
) -> Optional[AuthContext]:
    """
    Like get_current_account, but anonymous requests pass through.

    Returns None when no bearer token is sent or it does not verify.
    A StoreTimeout still propagates and is answered with 401.
    """
    if credentials is None or not credentials.credentials:
        return None

    use_case = ValidateSessionUseCase(uow, services.token_service, services.store_timeout)
    result = await use_case.execute(credentials.credentials)

    if result.is_err():
        return None

    return result.value
