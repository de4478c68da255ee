from uuid import UUID

from fastapi import APIRouter, Depends, status

from credcore.api.bootstrap import Services
from credcore.api.error import ClientError, ServerError
from credcore.app.services.unit_of_work import UnitOfWork
from credcore.app.use_cases.auth import AuthContext
from credcore.app.use_cases.sessions import (
    ListSessionsUseCase,
    RevokeSessionsResponse,
    RevokeSessionsUseCase,
    SessionListResponse,
)
from credcore.depends import get_current_account, get_services, get_unit_of_work

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get("", status_code=status.HTTP_200_OK, response_model=SessionListResponse)
async def list_sessions(
    current_account: AuthContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Active sessions of the authenticated account, most recently used first."""
    use_case = ListSessionsUseCase(uow)
    result = await use_case.execute(current_account.account_id, current_account.session_id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.post(
    "/revoke-all",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSessionsResponse,
)
async def revoke_all_sessions(
    current_account: AuthContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: Services = Depends(get_services),
):
    """
    Revoke All Sessions

    Logs the account out everywhere, including the current session.
    """
    use_case = RevokeSessionsUseCase(uow, services.store_timeout)
    result = await use_case.revoke_all(current_account.account_id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSessionsResponse,
)
async def revoke_session(
    session_id: UUID,
    current_account: AuthContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: Services = Depends(get_services),
):
    """
    Revoke Specific Session

    Raises:
        - 404 Not Found: Session not found or owned by another account
    """
    use_case = RevokeSessionsUseCase(uow, services.store_timeout)
    result = await use_case.revoke_session(current_account.account_id, session_id)

    if result.is_err():
        error = result.error
        if error.code == "SESSION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
