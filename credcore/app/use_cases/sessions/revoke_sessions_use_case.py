"""
Revoke Sessions Use Case

Handles session revocation for security and session management.
"""

import logging
from uuid import UUID

from credcore.app.services.timeouts import DEFAULT_STORE_TIMEOUT, with_store_timeout
from credcore.app.services.unit_of_work import UnitOfWork
from credcore.libs.result import Error, Result, Return
from .dtos import RevokeSessionsResponse

logger = logging.getLogger(__name__)


class RevokeSessionsUseCase:
    """
    Use case for revoking an account's own sessions.

    Business Rules:
    - An account can only revoke its own sessions
    - Revoking all sessions includes the current one (logout everywhere)
    - Revoking a session that does not exist or belongs to another account
      reports SESSION_NOT_FOUND
    """

    def __init__(self, uow: UnitOfWork, store_timeout: float = DEFAULT_STORE_TIMEOUT):
        self.uow = uow
        self.store_timeout = store_timeout

    async def revoke_all(self, account_id: UUID) -> Result[RevokeSessionsResponse]:
        """
        Revoke every session of the account.

        Returns:
            Result with count of revoked sessions
        """
        async with self.uow:
            count = await with_store_timeout(
                self.uow.sessions.revoke_all(account_id), self.store_timeout
            )
            await self.uow.commit()

        logger.info(f"Revoked {count} session(s) for account {account_id}")
        return Return.ok(RevokeSessionsResponse(status="revoked", sessions_revoked=count))

    async def revoke_session(self, account_id: UUID, session_id: UUID) -> Result[RevokeSessionsResponse]:
        """
        Revoke one session owned by the account.

        Errors:
            - SESSION_NOT_FOUND: No such session for this account
        """
        async with self.uow:
            revoked = await with_store_timeout(
                self.uow.sessions.revoke_by_id(account_id, session_id), self.store_timeout
            )
            if not revoked:
                return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))
            await self.uow.commit()

        logger.info(f"Revoked session {session_id} for account {account_id}")
        return Return.ok(RevokeSessionsResponse(status="revoked", sessions_revoked=1))
