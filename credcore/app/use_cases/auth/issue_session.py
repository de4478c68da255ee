"""
Shared session issuance for register and login.
"""

from credcore.app.repositories.session_repository import ClientMeta
from credcore.app.services.token_service import TokenService
from credcore.app.services.unit_of_work import UnitOfWork
from credcore.domain.entities import Account
from .dtos import AuthTokensResponse, account_info


async def issue_session(
    uow: UnitOfWork,
    token_service: TokenService,
    account: Account,
    client_meta: ClientMeta,
) -> AuthTokensResponse:
    """
    Issue a token pair and persist it as a new session.

    The session lives as long as the refresh token. Must run inside an open
    unit of work; the caller commits.
    """
    pair = token_service.issue_pair(account.id, account.role)

    session = await uow.sessions.create_session(
        account_id=account.id,
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
        client_meta=client_meta,
        expires_at=pair.refresh_expires_at,
    )

    return AuthTokensResponse(
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
        expires_in=int(token_service.access_ttl.total_seconds()),
        session_id=str(session.id),
        account=account_info(account),
    )
