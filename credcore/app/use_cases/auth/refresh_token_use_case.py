"""
Refresh Token Use Case

Issues a new access token and rotates it into the existing session.
"""

import logging

from credcore.app.errors import AuthenticationError, DuplicateToken
from credcore.app.services.timeouts import DEFAULT_STORE_TIMEOUT, with_store_timeout
from credcore.app.services.token_service import TokenService
from credcore.app.services.unit_of_work import UnitOfWork
from credcore.domain.entities import TokenType
from credcore.libs.result import Error, Result, Return
from .dtos import RefreshTokenResponse

logger = logging.getLogger(__name__)

INVALID_SESSION = Error("INVALID_SESSION", "Invalid or expired session")


class RefreshTokenUseCase:
    """
    Use case for refreshing access tokens.

    Business Rules:
    - Refresh token must verify with type=refresh
    - Account must still exist and be active
    - The session row is updated in place (same session_id)
    - Rotation is a compare-and-swap; a concurrent refresh loses explicitly
    - Every failure cause returns the same INVALID_SESSION error
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_service: TokenService,
        store_timeout: float = DEFAULT_STORE_TIMEOUT,
    ):
        self.uow = uow
        self.token_service = token_service
        self.store_timeout = store_timeout

    async def execute(self, refresh_token: str) -> Result[RefreshTokenResponse]:
        try:
            claims = self.token_service.verify(refresh_token, TokenType.refresh)
        except AuthenticationError as exc:
            logger.warning(f"Refresh rejected: {exc.reason}")
            return Return.err(INVALID_SESSION)

        async with self.uow:
            try:
                account = await with_store_timeout(
                    self.uow.accounts.get_by_id(claims.account_id), self.store_timeout
                )
                if account is None or not account.is_active:
                    logger.warning(f"Refresh rejected: account {claims.account_id} unavailable")
                    return Return.err(INVALID_SESSION)

                new_access_token = self.token_service.issue_access(account.id, account.role)

                session = await with_store_timeout(
                    self.uow.sessions.rotate(
                        refresh_token, new_access_token, claims.expires_at
                    ),
                    self.store_timeout,
                )
            except AuthenticationError as exc:
                logger.warning(f"Refresh rejected: {exc.reason}")
                return Return.err(INVALID_SESSION)
            except DuplicateToken:
                logger.error(f"Token handle collision during refresh for {claims.account_id}")
                return Return.err(Error("SESSION_CONFLICT", "Could not rotate session"))

            await self.uow.commit()

            return Return.ok(
                RefreshTokenResponse(
                    access_token=new_access_token,
                    expires_in=int(self.token_service.access_ttl.total_seconds()),
                    session_id=str(session.id),
                )
            )
