"""
Validate Session Use Case

Authenticates a bearer access token before any handler logic runs.
"""

import logging

from credcore.app.errors import AuthenticationError, StoreTimeout
from credcore.app.services.timeouts import DEFAULT_STORE_TIMEOUT, with_store_timeout
from credcore.app.services.token_service import TokenService
from credcore.app.services.unit_of_work import UnitOfWork
from credcore.domain.entities import TokenType
from credcore.libs.result import Error, Result, Return
from .dtos import AuthContext

logger = logging.getLogger(__name__)


class ValidateSessionUseCase:
    """
    Verify an access token and touch its session.

    Business Rules:
    - Token must verify with type=access
    - Session must exist for the token and be unexpired (checked and touched
      in one statement)
    - A store timeout propagates as StoreTimeout
    - Failures are logged with their cause and returned as INVALID_SESSION
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

    async def execute(self, access_token: str) -> Result[AuthContext]:
        try:
            claims = self.token_service.verify(access_token, TokenType.access)
        except AuthenticationError as exc:
            logger.warning(f"Access token rejected: {exc.reason}")
            return Return.err(Error("INVALID_SESSION", "Invalid or expired session"))

        async with self.uow:
            try:
                session = await with_store_timeout(
                    self.uow.sessions.validate_and_touch(access_token), self.store_timeout
                )
            except StoreTimeout:
                raise
            except AuthenticationError as exc:
                logger.warning(f"Session rejected for {claims.account_id}: {exc.reason}")
                return Return.err(Error("INVALID_SESSION", "Invalid or expired session"))

            if session.account_id != claims.account_id:
                logger.warning(f"Session {session.id} does not belong to {claims.account_id}")
                return Return.err(Error("INVALID_SESSION", "Invalid or expired session"))

            await self.uow.commit()

        return Return.ok(
            AuthContext(account_id=claims.account_id, role=claims.role, session_id=session.id)
        )
